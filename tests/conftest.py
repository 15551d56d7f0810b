from datetime import date

import pytest
from sqlalchemy.pool import StaticPool

from fifa_league.domain import Team
from fifa_league.service import SettlementService
from fifa_league.services.finance_service import FinanceService
from fifa_league.services.roster_service import RosterService
from fifa_league.storage.database import build_engine, build_session_factory, init_db
from fifa_league.storage.repository import LeagueStore

MATCH_DAY = date(2025, 5, 1)

ROSTER = {
    Team.AEK: ["Ronaldo", "Kaka", "Figo"],
    Team.REAL: ["Raul", "Zidane", "Casillas"],
}


@pytest.fixture
def store() -> LeagueStore:
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield LeagueStore(build_session_factory(engine))
    engine.dispose()


@pytest.fixture
def roster(store: LeagueStore) -> dict[str, int]:
    ids = {}
    for team, names in ROSTER.items():
        for name in names:
            ids[name] = store.insert("players", {"name": name, "team": team, "goals": 0, "value": 0})
    return ids


@pytest.fixture
def settlement(store: LeagueStore) -> SettlementService:
    return SettlementService(store, clock=lambda: MATCH_DAY)


@pytest.fixture
def finance(store: LeagueStore) -> FinanceService:
    return FinanceService(store, clock=lambda: MATCH_DAY)


@pytest.fixture
def roster_service(store: LeagueStore) -> RosterService:
    return RosterService(store)


@pytest.fixture
def set_finance(store: LeagueStore):
    def _set(team: Team, *, balance: int = 0, debt: int = 0) -> None:
        if store.select_one("finances", team=team) is None:
            store.insert("finances", {"team": team, "balance": balance, "debt": debt})
        else:
            store.update("finances", {"team": team}, {"balance": balance, "debt": debt})

    return _set


@pytest.fixture
def funded(set_finance) -> None:
    set_finance(Team.AEK, balance=5_000_000)
    set_finance(Team.REAL, balance=5_000_000)
