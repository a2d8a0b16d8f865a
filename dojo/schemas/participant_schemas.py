from pydantic import BaseModel, Field, field_validator
from typing import Optional

from dojo.models.participant import BELTS

class ParticipantBase(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: Optional[str] = None
    belt: str = "blanche"
    age: Optional[int] = Field(None, ge=0)
    weight_kg: Optional[float] = Field(None, gt=0)

    @field_validator("belt")
    @classmethod
    def valid_belt(cls, v):
        if v not in BELTS:
            raise ValueError(f"Belt must be one of {BELTS}")
        return v

class ParticipantCreate(ParticipantBase):
    pass

class ParticipantUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1)
    last_name: Optional[str] = None
    belt: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    weight_kg: Optional[float] = Field(None, gt=0)

    @field_validator("belt")
    @classmethod
    def valid_belt(cls, v):
        if v is not None and v not in BELTS:
            raise ValueError(f"Belt must be one of {BELTS}")
        return v

class ParticipantRead(ParticipantBase):
    id: int
    wins: int = 0

    class Config:
        from_attributes = True

class ParticipantCreated(ParticipantRead):
    # Names already registered that look like this one; creation is not blocked.
    warning: Optional[str] = None

class HallOfFameEntry(BaseModel):
    id: int
    first_name: str
    last_name: Optional[str] = None
    wins: int = 0

    class Config:
        from_attributes = True
