from typing import List, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from dojo.services import participant_service
from dojo.schemas import participant_schemas
from dojo.api.dependencies import get_db

router = APIRouter()

@router.post("/", response_model=participant_schemas.ParticipantCreated, status_code=status.HTTP_201_CREATED)
async def create_participant_endpoint(
    participant_in: participant_schemas.ParticipantCreate,
    db: Session = Depends(get_db),
):
    return participant_service.create_participant(db=db, participant_in=participant_in)

@router.get("/", response_model=List[participant_schemas.ParticipantRead])
async def list_participants_endpoint(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
):
    return participant_service.list_participants(db=db, search=search)

@router.get("/hall-of-fame", response_model=List[participant_schemas.HallOfFameEntry])
async def hall_of_fame_endpoint(
    limit: Optional[int] = Query(None, ge=1),
    db: Session = Depends(get_db),
):
    return participant_service.hall_of_fame(db=db, limit=limit)

@router.get("/{participant_id}", response_model=participant_schemas.ParticipantRead)
async def get_participant_endpoint(
    participant_id: int,
    db: Session = Depends(get_db),
):
    participant = participant_service.get_participant(db=db, participant_id=participant_id)
    if not participant:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")
    return participant

@router.put("/{participant_id}", response_model=participant_schemas.ParticipantRead)
async def update_participant_endpoint(
    participant_id: int,
    participant_in: participant_schemas.ParticipantUpdate,
    db: Session = Depends(get_db),
):
    return participant_service.update_participant(db=db, participant_id=participant_id, participant_update=participant_in)

@router.delete("/{participant_id}", response_model=Dict[str, str])
async def delete_participant_endpoint(
    participant_id: int,
    db: Session = Depends(get_db),
):
    participant_service.delete_participant(db=db, participant_id=participant_id)
    return {"message": "Participant deleted successfully"}
