from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from dojo.core.database import Base

MATCH_STATUSES = ("pending", "done", "canceled")
BRACKET_TYPES = ("winner", "loser")

class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (UniqueConstraint("tournament_id", "bracket_type", "round", "slot"),)

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id"), nullable=False)
    round = Column(Integer, nullable=False)
    slot = Column(Integer, nullable=False)  # position within the round, from 1
    player1_id = Column(Integer, ForeignKey("participants.id"), nullable=True)
    player2_id = Column(Integer, ForeignKey("participants.id"), nullable=True)  # NULL means BYE
    bracket_type = Column(String, default="winner", nullable=False)
    status = Column(String, default="pending", nullable=False)
    winner_id = Column(Integer, ForeignKey("participants.id"), nullable=True)

    tournament = relationship("Tournament", back_populates="matches")
    player1 = relationship("Participant", foreign_keys=[player1_id])
    player2 = relationship("Participant", foreign_keys=[player2_id])
    winner = relationship("Participant", foreign_keys=[winner_id])

    @property
    def is_bye(self) -> bool:
        return self.player1_id is None or self.player2_id is None
