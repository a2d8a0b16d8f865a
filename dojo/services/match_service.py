import logging
from typing import Dict, List, Optional

from fastapi import HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from dojo.core.config import settings
from dojo.models import match as match_model
from dojo.models import participant as participant_model
from dojo.models import tournament as tournament_model

logger = logging.getLogger(__name__)

Match = match_model.Match

def get_tournament_matches(db: Session, tournament_id: int) -> List[Match]:
    tournament = db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == tournament_id).first()
    if not tournament:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found")
    return db.query(Match)\
        .filter(Match.tournament_id == tournament_id)\
        .order_by(Match.round, Match.slot)\
        .all()

def get_match(db: Session, match_id: int) -> Optional[Match]:
    return db.query(Match).filter(Match.id == match_id).first()

def get_match_or_404(db: Session, match_id: int) -> Match:
    db_match = get_match(db, match_id)
    if not db_match:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return db_match

def get_final_round(db: Session, tournament_id: int) -> int:
    """
    Highest round number present for the tournament right now, 0 when it has
    no matches. Not stored: adding a later round moves the final.
    """
    max_round = db.query(func.max(Match.round)).filter(Match.tournament_id == tournament_id).scalar()
    return max_round or 0

def _credit_win(db: Session, participant_id: int, delta: int = 1) -> None:
    participant = db.query(participant_model.Participant)\
        .filter(participant_model.Participant.id == participant_id)\
        .first()
    if not participant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Participant {participant_id} not found")
    # Plain read-then-write, concurrent final results may lose an increment
    participant.wins = max((participant.wins or 0) + delta, 0)

def record_result(db: Session, match_id: int, winner_id: int) -> Match:
    db_match = get_match_or_404(db, match_id)

    if db_match.status == "done":
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Match {match_id} is already decided, reset it first.")
    if winner_id is None or winner_id not in (db_match.player1_id, db_match.player2_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Winner must be one of the players in the match.")

    db_match.winner_id = winner_id
    db_match.status = "done"
    db.flush()

    final_round = get_final_round(db, db_match.tournament_id)
    if db_match.round == final_round:
        _credit_win(db, winner_id)
        logger.info("Tournament %s won by participant %s (match %s, round %s)", db_match.tournament_id, winner_id, match_id, final_round)

    db.commit()
    db.refresh(db_match)
    logger.info("Match %s decided: winner %s", match_id, winner_id)
    return db_match

def reset_result(db: Session, match_id: int) -> Match:
    db_match = get_match_or_404(db, match_id)
    previous_winner = db_match.winner_id

    if (
        settings.REVOKE_WIN_ON_RESET
        and db_match.status == "done"
        and previous_winner is not None
        and db_match.round == get_final_round(db, db_match.tournament_id)
    ):
        _credit_win(db, previous_winner, delta=-1)
        logger.info("Revoked tournament win of participant %s (match %s reset)", previous_winner, match_id)

    db_match.winner_id = None
    db_match.status = "pending"
    db.commit()
    db.refresh(db_match)
    logger.info("Match %s reset (previous winner %s)", match_id, previous_winner)
    return db_match

def confirm_results(db: Session, tournament_id: int, selections: Dict[int, int]) -> List[Match]:
    """
    Applies a batch of winner selections: winner bracket first, then by round,
    then by slot. The whole batch is validated before anything is written.
    """
    if not selections:
        return []

    items = []
    for match_id, winner_id in selections.items():
        db_match = get_match_or_404(db, match_id)
        if db_match.tournament_id != tournament_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Match {match_id} does not belong to tournament {tournament_id}")
        if db_match.status == "done":
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Match {match_id} is already decided")
        if winner_id not in (db_match.player1_id, db_match.player2_id):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Winner must be one of the players in the match.")
        items.append((db_match, winner_id))

    items.sort(key=lambda item: (item[0].bracket_type != "winner", item[0].round, item[0].slot))
    return [record_result(db, m.id, winner_id) for m, winner_id in items]

def place_players(
    db: Session,
    tournament_id: int,
    round: int,
    slot: int,
    player1_id: Optional[int],
    player2_id: Optional[int],
    bracket_type: str = "winner",
) -> Match:
    """
    Puts two participants at a round/slot address, creating the match row if
    the address is empty. Manual only: results never trigger this.
    """
    tournament = db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == tournament_id).first()
    if not tournament:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found")

    for pid in (player1_id, player2_id):
        if pid is not None and not db.query(participant_model.Participant).filter(participant_model.Participant.id == pid).first():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Participant {pid} not found")

    db_match = db.query(Match).filter(
        Match.tournament_id == tournament_id,
        Match.bracket_type == bracket_type,
        Match.round == round,
        Match.slot == slot,
    ).first()
    if not db_match:
        db_match = Match(
            tournament_id=tournament_id,
            bracket_type=bracket_type,
            round=round,
            slot=slot,
            status="pending",
        )
        db.add(db_match)

    db_match.player1_id = player1_id
    db_match.player2_id = player2_id
    if db_match.winner_id not in (player1_id, player2_id):
        # a winner that left the match no longer holds
        db_match.winner_id = None
        db_match.status = "pending"

    db.commit()
    db.refresh(db_match)
    logger.info("Tournament %s: placed %s vs %s at %s round %s slot %s", tournament_id, player1_id, player2_id, bracket_type, round, slot)
    return db_match
