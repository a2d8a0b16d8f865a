from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from dojo.core.database import Base
import datetime

class Tournament(Base):
    __tablename__ = "tournaments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    code = Column(String, nullable=False)  # set once at creation
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    entries = relationship("TournamentEntry", back_populates="tournament", cascade="all, delete-orphan")
    matches = relationship("Match", back_populates="tournament", cascade="all, delete-orphan")
