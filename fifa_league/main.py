from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from fifa_league.api.finances import router as finances_router
from fifa_league.api.matches import router as matches_router
from fifa_league.api.roster import router as roster_router
from fifa_league.api.stats import router as stats_router
from fifa_league.storage.database import init_db

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    logger.info("database ready")
    yield


app = FastAPI(title="FIFA League Tracker API", lifespan=lifespan)
app.include_router(matches_router)
app.include_router(finances_router)
app.include_router(roster_router)
app.include_router(stats_router)


@app.get("/")
def home() -> dict[str, str]:
    return {"message": "AEK vs Real league tracker"}
