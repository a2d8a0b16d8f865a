from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from dojo.core.database import SessionLocal
from dojo.models import tournament as tournament_model
from dojo.services import tournament_service, match_service

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def _check_code(db_tournament: tournament_model.Tournament, code: Optional[str]) -> tournament_model.Tournament:
    if not tournament_service.verify_access_code(db_tournament, code):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid access code")
    return db_tournament

def require_tournament_code(
    tournament_id: int,
    x_access_code: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> tournament_model.Tournament:
    """Write access to a tournament, gated by its plaintext access code."""
    db_tournament = tournament_service.get_tournament_or_404(db, tournament_id)
    return _check_code(db_tournament, x_access_code)

def require_match_code(
    match_id: int,
    x_access_code: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> tournament_model.Tournament:
    db_match = match_service.get_match_or_404(db, match_id)
    db_tournament = tournament_service.get_tournament_or_404(db, db_match.tournament_id)
    return _check_code(db_tournament, x_access_code)
