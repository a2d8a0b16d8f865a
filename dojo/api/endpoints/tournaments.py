from typing import List, Dict

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from dojo.services import tournament_service, bracket_service
from dojo.models import tournament as tournament_model
from dojo.schemas import tournament_schemas, match_schemas
from dojo.api.dependencies import get_db, require_tournament_code

router = APIRouter()

@router.post("/", response_model=tournament_schemas.TournamentCreated, status_code=status.HTTP_201_CREATED)
async def create_tournament_endpoint(
    tournament_in: tournament_schemas.TournamentCreate,
    db: Session = Depends(get_db),
):
    tournament, matches = tournament_service.create_tournament(db=db, tournament=tournament_in)
    return tournament_schemas.TournamentCreated(
        id=tournament.id,
        name=tournament.name,
        created_at=tournament.created_at,
        code=tournament.code,
        match_count=len(matches),
    )

@router.get("/", response_model=List[tournament_schemas.TournamentRead])
async def list_tournaments_endpoint(db: Session = Depends(get_db)):
    return tournament_service.list_tournaments(db=db)

@router.get("/{tournament_id}", response_model=tournament_schemas.TournamentRead)
async def get_tournament_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
):
    return tournament_service.get_tournament_or_404(db=db, tournament_id=tournament_id)

@router.post("/{tournament_id}/verify", response_model=tournament_schemas.AccessCodeResult)
async def verify_access_code_endpoint(
    tournament_id: int,
    check_in: tournament_schemas.AccessCodeCheck,
    db: Session = Depends(get_db),
):
    tournament = tournament_service.get_tournament_or_404(db=db, tournament_id=tournament_id)
    return {"can_edit": tournament_service.verify_access_code(tournament, check_in.code)}

@router.get("/{tournament_id}/roster", response_model=tournament_schemas.RosterRead)
async def get_roster_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
):
    tournament_service.get_tournament_or_404(db=db, tournament_id=tournament_id)
    return {"tournament_id": tournament_id, "participant_ids": tournament_service.get_roster(db=db, tournament_id=tournament_id)}

@router.post("/{tournament_id}/bracket", response_model=List[match_schemas.MatchRead], status_code=status.HTTP_201_CREATED)
async def regenerate_bracket_endpoint(
    tournament_id: int,
    bracket_in: tournament_schemas.BracketRequest,
    db: Session = Depends(get_db),
    tournament: tournament_model.Tournament = Depends(require_tournament_code),
):
    return bracket_service.regenerate_bracket(db=db, tournament_id=tournament.id, participant_ids=bracket_in.participant_ids)

@router.delete("/{tournament_id}/matches", response_model=Dict[str, int])
async def clear_matches_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
    tournament: tournament_model.Tournament = Depends(require_tournament_code),
):
    deleted = bracket_service.clear_matches(db=db, tournament_id=tournament.id)
    return {"deleted": deleted}

@router.delete("/{tournament_id}", response_model=Dict[str, str])
async def delete_tournament_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
    tournament: tournament_model.Tournament = Depends(require_tournament_code),
):
    tournament_service.delete_tournament(db=db, tournament_id=tournament.id)
    return {"message": "Tournament deleted successfully"}
