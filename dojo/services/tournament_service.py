import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from dojo.core import security
from dojo.models import tournament as tournament_model
from dojo.models import participant as participant_model
from dojo.models import entry as entry_model
from dojo.models import match as match_model
from dojo.schemas import tournament_schemas
from dojo.services import bracket_service

logger = logging.getLogger(__name__)

def create_tournament(db: Session, tournament: tournament_schemas.TournamentCreate) -> Tuple[tournament_model.Tournament, List[match_model.Match]]:
    """
    Creates the tournament, its roster and its round-1 bracket, in that order.
    Each step commits on its own: if a later step fails the earlier rows stay,
    e.g. a tournament can exist without matches.
    """
    participant_ids = list(dict.fromkeys(tournament.participant_ids))
    if participant_ids:
        found = db.query(participant_model.Participant.id)\
            .filter(participant_model.Participant.id.in_(participant_ids))\
            .all()
        known = {row.id for row in found}
        missing = [pid for pid in participant_ids if pid not in known]
        if missing:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown participants: {missing}")

    db_tournament = tournament_model.Tournament(
        name=tournament.name,
        code=security.generate_access_code(),
    )
    db.add(db_tournament)
    db.commit()
    db.refresh(db_tournament)
    logger.info("Created tournament %s (%s) with %d participants", db_tournament.id, db_tournament.name, len(participant_ids))

    matches: List[match_model.Match] = []
    if participant_ids:
        db.add_all([
            entry_model.TournamentEntry(tournament_id=db_tournament.id, participant_id=pid)
            for pid in participant_ids
        ])
        db.commit()
        matches = bracket_service.initialize_bracket(db, db_tournament.id, participant_ids)

    return db_tournament, matches

def get_tournament(db: Session, tournament_id: int) -> Optional[tournament_model.Tournament]:
    return db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == tournament_id).first()

def get_tournament_or_404(db: Session, tournament_id: int) -> tournament_model.Tournament:
    db_tournament = get_tournament(db, tournament_id)
    if not db_tournament:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found")
    return db_tournament

def list_tournaments(db: Session) -> List[tournament_model.Tournament]:
    return db.query(tournament_model.Tournament)\
        .order_by(tournament_model.Tournament.created_at.desc(), tournament_model.Tournament.id.desc())\
        .all()

def get_roster(db: Session, tournament_id: int) -> List[int]:
    """
    Participant ids registered for the tournament. Tournaments without roster
    rows fall back to whoever appears in their matches.
    """
    entries = db.query(entry_model.TournamentEntry)\
        .filter(entry_model.TournamentEntry.tournament_id == tournament_id)\
        .order_by(entry_model.TournamentEntry.id)\
        .all()
    if entries:
        return [e.participant_id for e in entries]

    seen: List[int] = []
    matches = db.query(match_model.Match)\
        .filter(match_model.Match.tournament_id == tournament_id)\
        .order_by(match_model.Match.round, match_model.Match.slot)\
        .all()
    for m in matches:
        for pid in (m.player1_id, m.player2_id):
            if pid is not None and pid not in seen:
                seen.append(pid)
    return seen

def verify_access_code(db_tournament: tournament_model.Tournament, code: Optional[str]) -> bool:
    if security.verify_access_code(db_tournament.code, code):
        return True
    logger.warning("Rejected access code for tournament %s", db_tournament.id)
    return False

def delete_tournament(db: Session, tournament_id: int) -> bool:
    db_tournament = get_tournament_or_404(db, tournament_id)
    db.delete(db_tournament)
    db.commit()
    logger.info("Deleted tournament %s", tournament_id)
    return True
