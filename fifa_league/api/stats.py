from fastapi import APIRouter, Depends, Query

from fifa_league.api.errors import store_error
from fifa_league.runtime import get_store
from fifa_league.services.stats_service import get_summary
from fifa_league.storage.repository import LeagueStore, StoreError

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("/summary")
def stats_summary(
    limit: int = Query(default=5, ge=1, le=50),
    store: LeagueStore = Depends(get_store),
) -> dict:
    try:
        return get_summary(store, limit=limit)
    except StoreError as exc:
        raise store_error(exc, operation="stats") from exc
