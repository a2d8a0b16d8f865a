import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from dojo.core.config import settings
from dojo.models import match as match_model
from dojo.models import participant as participant_model
from dojo.schemas import participant_schemas

logger = logging.getLogger(__name__)

Participant = participant_model.Participant

def get_participant(db: Session, participant_id: int) -> Optional[Participant]:
    return db.query(Participant).filter(Participant.id == participant_id).first()

def get_participant_or_404(db: Session, participant_id: int) -> Participant:
    participant = get_participant(db, participant_id)
    if not participant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Participant {participant_id} not found")
    return participant

def find_similar(db: Session, first_name: str, last_name: Optional[str] = None) -> List[Participant]:
    """
    Participants sharing the first name, or the last name when one is given.
    Comparison ignores case and surrounding whitespace.
    """
    fname = first_name.strip().lower()
    lname = (last_name or "").strip().lower()
    candidates = db.query(Participant).all()
    return [
        p for p in candidates
        if p.first_name.lower() == fname or (lname and (p.last_name or "").lower() == lname)
    ]

def similar_warning(similar: List[Participant]) -> Optional[str]:
    if not similar:
        return None
    return "Already registered: " + ", ".join(p.display_name for p in similar)

def create_participant(db: Session, participant_in: participant_schemas.ParticipantCreate) -> participant_schemas.ParticipantCreated:
    similar = find_similar(db, participant_in.first_name, participant_in.last_name)

    data = participant_in.model_dump()
    data["last_name"] = data["last_name"] or None
    db_participant = Participant(**data, wins=0)
    db.add(db_participant)
    db.commit()
    db.refresh(db_participant)
    logger.info("Registered participant %s (%s)", db_participant.id, db_participant.display_name)

    created = participant_schemas.ParticipantCreated.model_validate(db_participant)
    created.warning = similar_warning(similar)
    return created

def list_participants(db: Session, search: Optional[str] = None) -> List[Participant]:
    participants = db.query(Participant).all()
    needle = (search or "").strip().lower()
    if needle:
        participants = [
            p for p in participants
            if needle in f"{p.first_name} {p.last_name or ''} {p.belt}".lower()
        ]
    return sorted(participants, key=lambda p: ((p.last_name or "").lower(), p.first_name.lower()))

def update_participant(db: Session, participant_id: int, participant_update: participant_schemas.ParticipantUpdate) -> Participant:
    db_participant = get_participant_or_404(db, participant_id)

    # wins is not part of the schema; only results move it
    update_data = participant_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_participant, key, value)

    db.commit()
    db.refresh(db_participant)
    return db_participant

def delete_participant(db: Session, participant_id: int) -> bool:
    db_participant = get_participant_or_404(db, participant_id)

    Match = match_model.Match
    in_match = db.query(Match.id).filter(or_(
        Match.player1_id == participant_id,
        Match.player2_id == participant_id,
        Match.winner_id == participant_id,
    )).first()
    if in_match:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Participant {participant_id} is still in a match, clear the tournament's matches first",
        )

    db.delete(db_participant)
    db.commit()
    logger.info("Deleted participant %s", participant_id)
    return True

def hall_of_fame(db: Session, limit: Optional[int] = None) -> List[Participant]:
    if limit is None:
        limit = settings.HALL_OF_FAME_SIZE
    return db.query(Participant)\
        .order_by(Participant.wins.desc(), func.lower(Participant.last_name))\
        .limit(limit)\
        .all()
