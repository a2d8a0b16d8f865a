import os

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from dojo.services import participant_service, tournament_service, match_service
from dojo.api.dependencies import get_db

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "templates")

router = APIRouter()
templates = Jinja2Templates(directory=TEMPLATES_DIR)


@router.get("/", response_class=HTMLResponse)
async def home_page(request: Request):
    return templates.TemplateResponse(request, "home.html", {})


@router.get("/participants-page", response_class=HTMLResponse)
async def participants_page(request: Request, search: str = "", db: Session = Depends(get_db)):
    participants = participant_service.list_participants(db=db, search=search)
    return templates.TemplateResponse(request, "participants.html", {
        "participants": participants,
        "search": search,
    })


@router.get("/tournaments-page", response_class=HTMLResponse)
async def tournaments_page(request: Request, db: Session = Depends(get_db)):
    return templates.TemplateResponse(request, "tournaments.html", {
        "tournaments": tournament_service.list_tournaments(db=db),
    })


@router.get("/tournaments-page/{tournament_id}", response_class=HTMLResponse)
async def tournament_detail_page(tournament_id: int, request: Request, db: Session = Depends(get_db)):
    tournament = tournament_service.get_tournament_or_404(db=db, tournament_id=tournament_id)
    matches = match_service.get_tournament_matches(db=db, tournament_id=tournament_id)

    rounds = {}
    for m in matches:
        rounds.setdefault((m.bracket_type, m.round), []).append(m)

    ordered = sorted(rounds.items(), key=lambda item: (item[0][0] != "winner", item[0][1]))
    return templates.TemplateResponse(request, "tournament_detail.html", {
        "tournament": tournament,
        "rounds": [
            {"bracket_type": bracket_type, "number": number, "matches": round_matches}
            for (bracket_type, number), round_matches in ordered
        ],
    })


@router.get("/hall-of-fame", response_class=HTMLResponse)
async def hall_of_fame_page(request: Request, db: Session = Depends(get_db)):
    return templates.TemplateResponse(request, "hall_of_fame.html", {
        "participants": participant_service.hall_of_fame(db=db),
    })
