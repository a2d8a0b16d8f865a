import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from dojo.api.endpoints import participants as participant_endpoints
from dojo.api.endpoints import tournaments as tournament_endpoints
from dojo.api.endpoints import matches as match_endpoints
from dojo.api.endpoints import pages as page_endpoints
from dojo.core.config import settings
from dojo.models import init_db

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready at %s", settings.DATABASE_URL)
    yield


app = FastAPI(title="Dojo Club API", lifespan=lifespan)

# Include routers
app.include_router(participant_endpoints.router, prefix="/participants", tags=["Participants"])
app.include_router(tournament_endpoints.router, prefix="/tournaments", tags=["Tournaments"])
app.include_router(match_endpoints.router, prefix="/matches", tags=["Matches"])
app.include_router(page_endpoints.router, tags=["Pages"])


if __name__ == "__main__":
    uvicorn.run("dojo.main:app", host="0.0.0.0", port=8000, reload=True)
