from __future__ import annotations

import threading

from fifa_league.service import SettlementService
from fifa_league.services.finance_service import FinanceService
from fifa_league.services.roster_service import RosterService
from fifa_league.storage.database import SessionLocal
from fifa_league.storage.repository import LeagueStore

store = LeagueStore(SessionLocal)
write_lock = threading.RLock()
settlement_service = SettlementService(store, lock=write_lock)
finance_service = FinanceService(store, lock=write_lock)
roster_service = RosterService(store)


def get_store() -> LeagueStore:
    return store


def get_settlement_service() -> SettlementService:
    return settlement_service


def get_finance_service() -> FinanceService:
    return finance_service


def get_roster_service() -> RosterService:
    return roster_service
