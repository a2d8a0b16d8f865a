from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from dojo.services import match_service
from dojo.models import tournament as tournament_model
from dojo.schemas import match_schemas
from dojo.api.dependencies import get_db, require_match_code, require_tournament_code

router = APIRouter()

@router.get("/tournament/{tournament_id}", response_model=List[match_schemas.MatchRead])
async def get_tournament_matches_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
):
    return match_service.get_tournament_matches(db=db, tournament_id=tournament_id)

@router.post("/tournament/{tournament_id}/confirm", response_model=List[match_schemas.MatchRead])
async def confirm_results_endpoint(
    tournament_id: int,
    confirm_in: match_schemas.ConfirmResults,
    db: Session = Depends(get_db),
    tournament: tournament_model.Tournament = Depends(require_tournament_code),
):
    return match_service.confirm_results(db=db, tournament_id=tournament.id, selections=confirm_in.selections)

@router.put("/tournament/{tournament_id}/slots", response_model=match_schemas.MatchRead)
async def place_players_endpoint(
    tournament_id: int,
    placement_in: match_schemas.SlotPlacement,
    db: Session = Depends(get_db),
    tournament: tournament_model.Tournament = Depends(require_tournament_code),
):
    return match_service.place_players(
        db=db,
        tournament_id=tournament.id,
        round=placement_in.round,
        slot=placement_in.slot,
        player1_id=placement_in.player1_id,
        player2_id=placement_in.player2_id,
        bracket_type=placement_in.bracket_type,
    )

@router.get("/{match_id}", response_model=match_schemas.MatchRead)
async def get_match_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
):
    match = match_service.get_match(db=db, match_id=match_id)
    if not match:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return match

@router.post("/{match_id}/result", response_model=match_schemas.MatchRead)
async def record_result_endpoint(
    match_id: int,
    result_in: match_schemas.MatchResultUpdate,
    db: Session = Depends(get_db),
    tournament: tournament_model.Tournament = Depends(require_match_code),
):
    return match_service.record_result(db=db, match_id=match_id, winner_id=result_in.winner_id)

@router.post("/{match_id}/reset", response_model=match_schemas.MatchRead)
async def reset_result_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
    tournament: tournament_model.Tournament = Depends(require_match_code),
):
    return match_service.reset_result(db=db, match_id=match_id)
