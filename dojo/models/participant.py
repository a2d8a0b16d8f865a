from sqlalchemy import Column, Integer, String, Float
from sqlalchemy.orm import relationship
from dojo.core.database import Base

BELTS = ("blanche", "bleue", "violette", "marron", "noire")

class Participant(Base):
    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=True)
    belt = Column(String, default="blanche")
    age = Column(Integer, nullable=True)
    weight_kg = Column(Float, nullable=True)
    wins = Column(Integer, default=0, nullable=False)

    entries = relationship("TournamentEntry", back_populates="participant", cascade="all, delete-orphan")

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name or ''}".strip()
