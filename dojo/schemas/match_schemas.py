from pydantic import BaseModel, Field
from typing import Dict, Optional, Literal

MatchStatus = Literal["pending", "done", "canceled"]
BracketType = Literal["winner", "loser"]

class MatchRead(BaseModel):
    id: int
    tournament_id: int
    round: int
    slot: int
    player1_id: Optional[int] = None
    player2_id: Optional[int] = None
    bracket_type: BracketType = "winner"
    status: MatchStatus
    winner_id: Optional[int] = None

    class Config:
        from_attributes = True

class MatchResultUpdate(BaseModel):
    winner_id: int

class ConfirmResults(BaseModel):
    # match id -> chosen winner id
    selections: Dict[int, int]

class SlotPlacement(BaseModel):
    round: int = Field(..., ge=1)
    slot: int = Field(..., ge=1)
    player1_id: Optional[int] = None
    player2_id: Optional[int] = None
    bracket_type: BracketType = "winner"
