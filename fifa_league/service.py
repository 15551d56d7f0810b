"""Match settlement and reversal against the league record store.

A settlement persists a finished match and then applies, in a fixed order,
every side effect it has on the rest of the league: player goal totals, the
ban sweep, the SdS award counter, SdS bonus and prize money on the team
balances, and finally the real-money debt ledger. A reversal undoes all of
that except the debt ledger.

Each step is its own committed store call. If a call fails, the steps before
it stay applied; the failure is logged and reported through the notifier.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from fifa_league.domain import (
    MATCH_TEAMS,
    MATCH_TRANSACTION_TYPES,
    BonusResult,
    DebtSettlement,
    DomainValidationError,
    MatchInput,
    MatchNotFoundError,
    PrizeResult,
    ScorerEntry,
    Team,
    TransactionType,
    calculate_bonuses,
    calculate_match_prizes,
    resolve_roster_team,
    scorers_from_record,
    settle_debt,
    validate_goal_ledger,
)
from fifa_league.notifications import LoggingNotifier, Notifier
from fifa_league.storage.repository import LeagueStore, Record, StoreError

logger = logging.getLogger(__name__)


@dataclass
class SettlementContext:
    """Snapshot one settlement run computes against."""

    match: MatchInput
    today: date
    rosters: dict[Team, list[str]]
    debts: dict[Team, int]
    prizes: PrizeResult
    bonuses: BonusResult
    replace_id: int | None = None

    @property
    def motm_team(self) -> Team | None:
        return self.bonuses.team


@dataclass
class SettlementOutcome:
    match_id: int
    match_number: int
    prizes: PrizeResult
    bonuses: BonusResult
    balances: dict[Team, int]
    debt: DebtSettlement | None = None
    replaced_id: int | None = None


@dataclass
class ReversalOutcome:
    match_id: int
    removed_transactions: int
    balances: dict[Team, int] = field(default_factory=dict)


def match_number(matches: Iterable[Mapping[str, Any]], match_id: int) -> int:
    """1-based position of a match when ordered by date, then id."""
    ordered = sorted(matches, key=lambda row: (row["date"], row["id"]))
    for idx, row in enumerate(ordered, start=1):
        if row["id"] == match_id:
            return idx
    return 0


class SettlementService:
    def __init__(
        self,
        store: LeagueStore,
        notifier: Notifier | None = None,
        *,
        clock: Callable[[], date] = date.today,
        lock: threading.RLock | None = None,
    ) -> None:
        self.store = store
        self.notifier = notifier or LoggingNotifier()
        self._clock = clock
        # single writer for every balance/debt read-modify-write in this process
        self._lock = lock or threading.RLock()

    def prepare(self, match: MatchInput, *, replace_id: int | None = None) -> SettlementContext:
        validate_goal_ledger(match)

        rosters = {
            team: [row["name"] for row in self.store.select_all("players", team=team)] for team in MATCH_TEAMS
        }
        if match.man_of_the_match and resolve_roster_team(match.man_of_the_match, rosters) is None:
            raise DomainValidationError(
                f"man of the match {match.man_of_the_match} is on neither the AEK nor the Real roster"
            )
        if replace_id is not None and self.store.get("matches", replace_id) is None:
            raise MatchNotFoundError(f"match {replace_id} not found")

        return SettlementContext(
            match=match,
            today=self._clock(),
            rosters=rosters,
            debts={team: int(self._finance(team)["debt"] or 0) for team in MATCH_TEAMS},
            prizes=calculate_match_prizes(match),
            bonuses=calculate_bonuses(match.man_of_the_match, rosters),
            replace_id=replace_id,
        )

    def settle_match(
        self,
        match: MatchInput,
        *,
        replace_id: int | None = None,
        notifier: Notifier | None = None,
    ) -> SettlementOutcome:
        notifier = notifier or self.notifier
        with self._lock:
            try:
                context = self.prepare(match, replace_id=replace_id)
                outcome = self._settle(context)
            except DomainValidationError as exc:
                notifier.error(str(exc))
                raise
            except StoreError as exc:
                logger.exception("match settlement stopped part way")
                notifier.error(f"match save failed: {exc}")
                raise

        if replace_id is not None:
            notifier.success("Match updated")
        else:
            notifier.success(f"Match AEK vs Real ({match.score_a}:{match.score_b}) saved")
        return outcome

    def delete_match(self, match_id: int, *, notifier: Notifier | None = None) -> ReversalOutcome:
        notifier = notifier or self.notifier
        with self._lock:
            try:
                outcome = self._reverse(match_id)
            except DomainValidationError as exc:
                notifier.error(str(exc))
                raise
            except StoreError as exc:
                logger.exception("match reversal stopped part way")
                notifier.error(f"match delete failed: {exc}")
                raise

        notifier.success(f"Match {match_id} deleted")
        return outcome

    def sweep_bans(self) -> int:
        served = 0
        for ban in self.store.select_all("bans"):
            if ban["matches_served"] < ban["total_games"]:
                self.store.update("bans", ban["id"], {"matches_served": ban["matches_served"] + 1})
                served += 1
        return served

    def _settle(self, context: SettlementContext) -> SettlementOutcome:
        match = context.match
        if context.replace_id is not None:
            self._reverse(context.replace_id)

        match_id = self.store.insert("matches", self._match_record(context))
        number = match_number(self.store.select_all("matches"), match_id)
        logger.info("match %s saved as #%s (%s:%s)", match_id, number, match.score_a, match.score_b)

        for team in MATCH_TEAMS:
            if match.score(team) > 0:
                self._apply_goals(team, match.scorers(team), sign=1)

        served = self.sweep_bans()
        logger.info("ban sweep advanced %s active bans", served)

        balances = {team: int(self._finance(team)["balance"] or 0) for team in MATCH_TEAMS}

        motm_team = context.motm_team
        if motm_team is not None:
            self._increment_award(match.man_of_the_match, motm_team)
            bonus = context.bonuses.for_team(motm_team)
            self._record(context, TransactionType.MOTM_BONUS, motm_team, bonus, match_id, "SdS Bonus")
            balances[motm_team] = self._adjust_balance(motm_team, bonus)

        for team in MATCH_TEAMS:
            prize = context.prizes.for_team(team)
            if prize == 0:
                continue
            self._record(context, TransactionType.PRIZE, team, prize, match_id, "Preisgeld")
            balances[team] = self._adjust_balance(team, prize)

        debt = None
        if match.winner is not None:
            debt = settle_debt(
                winner=match.winner,
                balances=balances,
                prizes=context.prizes,
                bonuses=context.bonuses,
                debts=context.debts,
            )
            self._book_debt(context, debt, match_id)

        return SettlementOutcome(
            match_id=match_id,
            match_number=number,
            prizes=context.prizes,
            bonuses=context.bonuses,
            balances=balances,
            debt=debt,
            replaced_id=context.replace_id,
        )

    def _book_debt(self, context: SettlementContext, debt: DebtSettlement, match_id: int) -> None:
        self.store.update("finances", {"team": debt.winner}, {"debt": debt.winner_debt})

        if debt.remaining > 0:
            self._record(
                context, TransactionType.EQUALIZATION, debt.loser, debt.remaining, match_id, "Echtgeld-Ausgleich"
            )
            self.store.update("finances", {"team": debt.loser}, {"debt": debt.loser_debt})

        if debt.amortized > 0:
            self._record(
                context,
                TransactionType.EQUALIZATION_AMORTIZED,
                debt.winner,
                -debt.amortized,
                match_id,
                "Echtgeld-Ausgleich (getilgt)",
            )
        logger.info(
            "debt settled: %s owes %s units, %s amortized from %s",
            debt.loser.value,
            debt.remaining,
            debt.amortized,
            debt.winner.value,
        )

    def _reverse(self, match_id: int) -> ReversalOutcome:
        record = self.store.get("matches", match_id)
        if record is None:
            raise MatchNotFoundError(f"match {match_id} not found")

        bonus_rows = self.store.select_all("transactions", match_id=match_id, type=TransactionType.MOTM_BONUS)
        removed = sum(
            self.store.delete("transactions", {"match_id": match_id, "type": tx_type})
            for tx_type in MATCH_TRANSACTION_TYPES
        )

        balances: dict[Team, int] = {}
        for team, prize in ((Team.AEK, record["prize_a"]), (Team.REAL, record["prize_b"])):
            if prize:
                balances[team] = self._adjust_balance(team, -prize)
        for row in bonus_rows:
            team = Team(row["team"])
            balances[team] = self._adjust_balance(team, -row["amount"])

        scorers_a = scorers_from_record(record["scorers_a"])
        scorers_b = scorers_from_record(record["scorers_b"])
        self._apply_goals(Team.AEK, scorers_a, sign=-1)
        self._apply_goals(Team.REAL, scorers_b, sign=-1)

        motm = record["man_of_the_match"]
        if motm:
            team = self._award_team(motm, scorers_a, scorers_b)
            if team is None:
                logger.warning("cannot resolve team of SdS %s for match %s, counter left as is", motm, match_id)
            else:
                self._decrement_award(motm, team)

        self.store.delete("matches", match_id)
        logger.info("match %s reversed, %s transactions removed", match_id, removed)
        return ReversalOutcome(match_id=match_id, removed_transactions=removed, balances=balances)

    def _match_record(self, context: SettlementContext) -> Record:
        match = context.match
        return {
            "date": match.date,
            "team_a": Team.AEK,
            "team_b": Team.REAL,
            "score_a": match.score_a,
            "score_b": match.score_b,
            "scorers_a": [entry.as_record() for entry in match.scorers_a],
            "scorers_b": [entry.as_record() for entry in match.scorers_b],
            "yellow_a": match.yellow_a,
            "red_a": match.red_a,
            "yellow_b": match.yellow_b,
            "red_b": match.red_b,
            "man_of_the_match": match.man_of_the_match,
            "prize_a": context.prizes.prize_a,
            "prize_b": context.prizes.prize_b,
        }

    def _apply_goals(self, team: Team, scorers: Iterable[ScorerEntry], *, sign: int) -> None:
        for entry in scorers:
            player = self.store.select_one("players", name=entry.player, team=team)
            if player is None:
                logger.warning("scorer %s not found in %s roster, goals not booked", entry.player, team.value)
                continue
            goals = max(0, int(player["goals"] or 0) + sign * entry.count)
            self.store.update("players", player["id"], {"goals": goals})

    def _award_team(self, player: str, scorers_a: Iterable[ScorerEntry], scorers_b: Iterable[ScorerEntry]) -> Team | None:
        if any(entry.player == player for entry in scorers_a):
            return Team.AEK
        if any(entry.player == player for entry in scorers_b):
            return Team.REAL
        row = self.store.select_one("players", name=player)
        if row is None:
            return None
        try:
            return Team(row["team"])
        except ValueError:
            return None

    def _increment_award(self, player: str, team: Team) -> None:
        award = self.store.select_one("motm_awards", name=player, team=team)
        if award is None:
            self.store.insert("motm_awards", {"name": player, "team": team, "count": 1})
        else:
            self.store.update("motm_awards", award["id"], {"count": award["count"] + 1})

    def _decrement_award(self, player: str, team: Team) -> None:
        award = self.store.select_one("motm_awards", name=player, team=team)
        if award is None:
            logger.warning("no SdS counter for %s (%s)", player, team.value)
            return
        self.store.update("motm_awards", award["id"], {"count": max(0, award["count"] - 1)})

    def _finance(self, team: Team) -> Record:
        row = self.store.select_one("finances", team=team)
        if row is None:
            row = {"team": team.value, "balance": 0, "debt": 0}
            row["id"] = self.store.insert("finances", row)
        return row

    def _adjust_balance(self, team: Team, delta: int) -> int:
        balance = max(0, int(self._finance(team)["balance"] or 0) + delta)
        self.store.update("finances", {"team": team}, {"balance": balance})
        return balance

    def _record(
        self,
        context: SettlementContext,
        tx_type: TransactionType,
        team: Team,
        amount: int,
        match_id: int,
        info: str,
    ) -> int:
        return self.store.insert(
            "transactions",
            {
                "date": context.today,
                "type": tx_type,
                "team": team,
                "amount": amount,
                "match_id": match_id,
                "info": info,
            },
        )
