from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

from fifa_league.domain import MATCH_TEAMS, DomainValidationError, Team, TransactionType
from fifa_league.storage.repository import LeagueStore, Record

logger = logging.getLogger(__name__)

MANUAL_TRANSACTION_TYPES = (
    TransactionType.OTHER,
    TransactionType.PLAYER_PURCHASE,
    TransactionType.PLAYER_SALE,
    TransactionType.EQUALIZATION,
)


@dataclass
class TeamFinance:
    team: Team
    balance: int
    debt: int


class FinanceService:
    """Finance overview and hand-entered ledger postings."""

    def __init__(
        self,
        store: LeagueStore,
        *,
        clock: Callable[[], date] = date.today,
        lock: threading.RLock | None = None,
    ) -> None:
        self.store = store
        self._clock = clock
        self._lock = lock or threading.RLock()

    def overview(self) -> list[TeamFinance]:
        rows = {row["team"]: row for row in self.store.select_all("finances")}
        result = []
        for team in MATCH_TEAMS:
            row = rows.get(team.value)
            if row is None:
                self.store.insert("finances", {"team": team, "balance": 0, "debt": 0})
                result.append(TeamFinance(team=team, balance=0, debt=0))
            else:
                result.append(TeamFinance(team=team, balance=int(row["balance"] or 0), debt=int(row["debt"] or 0)))
        return result

    def transactions(self, *, team: Team | None = None, match_id: int | None = None) -> list[Record]:
        filters = {}
        if team is not None:
            filters["team"] = team
        if match_id is not None:
            filters["match_id"] = match_id
        rows = self.store.select_all("transactions", **filters)
        return sorted(rows, key=lambda row: row["id"], reverse=True)

    def post_transaction(
        self,
        *,
        team: Team,
        tx_type: TransactionType,
        amount: int,
        info: str | None = None,
    ) -> Record:
        if team not in MATCH_TEAMS:
            raise DomainValidationError(f"transactions can only be booked for AEK or Real, got {team.value}")
        if tx_type not in MANUAL_TRANSACTION_TYPES:
            raise DomainValidationError(f"{tx_type.value} transactions are booked by match settlement only")

        record = {
            "date": self._clock(),
            "type": tx_type,
            "team": team,
            "amount": amount,
            "match_id": None,
            "info": (info or "").strip() or None,
        }
        with self._lock:
            record["id"] = self.store.insert("transactions", record)

            finance = {item.team: item for item in self.overview()}[team]
            if tx_type == TransactionType.EQUALIZATION:
                self.store.update("finances", {"team": team}, {"debt": max(0, finance.debt + amount)})
            else:
                self.store.update("finances", {"team": team}, {"balance": max(0, finance.balance + amount)})
        logger.info("%s of %s booked for %s", tx_type.value, amount, team.value)
        return record
