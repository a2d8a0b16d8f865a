import logging
import random
from typing import List, Optional, Sequence, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from dojo.models import match as match_model
from dojo.models import tournament as tournament_model
from dojo.models import participant as participant_model

logger = logging.getLogger(__name__)

Pairing = Tuple[int, Optional[int], Optional[int]]  # (slot, player1, player2)

def shuffle_participants(participant_ids: List[int], rng: random.Random = None) -> List[int]:
    """
    Fisher-Yates shuffle, in place. Seeding is deliberately left to the caller:
    two brackets built from the same ids are not expected to match.
    """
    rng = rng or random
    for i in range(len(participant_ids) - 1, 0, -1):
        j = rng.randint(0, i)
        participant_ids[i], participant_ids[j] = participant_ids[j], participant_ids[i]
    return participant_ids

def pair_round_one(participant_ids: Sequence[int]) -> List[Pairing]:
    """
    Pairs index 2k with 2k+1 into slot k+1. With an odd count the last
    participant gets a bye (absent opponent) instead of being dropped.
    """
    pairings: List[Pairing] = []
    for i in range(0, len(participant_ids), 2):
        player1 = participant_ids[i]
        player2 = participant_ids[i + 1] if (i + 1) < len(participant_ids) else None
        pairings.append((i // 2 + 1, player1, player2))
    return pairings

def initialize_bracket(db: Session, tournament_id: int, participant_ids: List[int], rng: random.Random = None) -> List[match_model.Match]:
    # Each participant appears in exactly one match
    players = shuffle_participants(list(dict.fromkeys(participant_ids)), rng=rng)

    new_matches = [
        match_model.Match(
            tournament_id=tournament_id,
            round=1,
            slot=slot,
            player1_id=player1,
            player2_id=player2,
            bracket_type="winner",
            status="pending",
            winner_id=None,
        )
        for slot, player1, player2 in pair_round_one(players)
    ]
    if not new_matches:
        return []

    db.add_all(new_matches)
    db.commit()
    for match in new_matches:
        db.refresh(match)

    byes = sum(1 for m in new_matches if m.player2_id is None)
    logger.info("Tournament %s: %d round-1 matches generated (%d bye)", tournament_id, len(new_matches), byes)
    return new_matches

def clear_matches(db: Session, tournament_id: int) -> int:
    deleted = db.query(match_model.Match)\
        .filter(match_model.Match.tournament_id == tournament_id)\
        .delete(synchronize_session=False)
    db.commit()
    logger.info("Tournament %s: cleared %d matches", tournament_id, deleted)
    return deleted

def regenerate_bracket(db: Session, tournament_id: int, participant_ids: Optional[List[int]] = None, rng: random.Random = None) -> List[match_model.Match]:
    # Imported here, tournament_service depends on this module for creation
    from dojo.services import tournament_service

    tournament = db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == tournament_id).first()
    if not tournament:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tournament not found")

    if participant_ids is None:
        participant_ids = tournament_service.get_roster(db, tournament_id)
    else:
        known = {
            p.id for p in db.query(participant_model.Participant.id)
            .filter(participant_model.Participant.id.in_(participant_ids))
        }
        missing = [pid for pid in participant_ids if pid not in known]
        if missing:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown participants: {missing}")

    clear_matches(db, tournament_id)
    return initialize_bracket(db, tournament_id, participant_ids, rng=rng)
