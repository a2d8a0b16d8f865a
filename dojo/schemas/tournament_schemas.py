from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class TournamentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    participant_ids: List[int] = Field(default_factory=list)

class TournamentRead(BaseModel):
    id: int
    name: str
    created_at: datetime

    class Config:
        from_attributes = True

class TournamentCreated(TournamentRead):
    # Only returned once, at creation.
    code: str
    match_count: int

class AccessCodeCheck(BaseModel):
    code: str

class AccessCodeResult(BaseModel):
    can_edit: bool

class RosterRead(BaseModel):
    tournament_id: int
    participant_ids: List[int]

class BracketRequest(BaseModel):
    # None regenerates from the tournament roster
    participant_ids: Optional[List[int]] = None
