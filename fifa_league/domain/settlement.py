"""Domain logic for prize money, SdS bonus and real-money debt settlement."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum

from .match import MATCH_TEAMS, DomainValidationError, MatchInput, Team

WIN_PRIZE = 1_000_000
LOSS_BASE_PENALTY = 500_000
GOAL_PENALTY = 50_000
YELLOW_PENALTY = 20_000
RED_PENALTY = 50_000
MOTM_BONUS = 100_000

SETTLEMENT_BASE_UNITS = 5
SETTLEMENT_UNIT_SIZE = 100_000


class TransactionType(str, Enum):
    PRIZE = "Preisgeld"
    MOTM_BONUS = "Bonus SdS"
    EQUALIZATION = "Echtgeld-Ausgleich"
    EQUALIZATION_AMORTIZED = "Echtgeld-Ausgleich (getilgt)"
    PLAYER_PURCHASE = "Spielerkauf"
    PLAYER_SALE = "Spielerverkauf"
    OTHER = "Sonstiges"


MATCH_TRANSACTION_TYPES = (
    TransactionType.PRIZE,
    TransactionType.MOTM_BONUS,
    TransactionType.EQUALIZATION,
    TransactionType.EQUALIZATION_AMORTIZED,
)


@dataclass(frozen=True)
class PrizeResult:
    prize_a: int
    prize_b: int

    def for_team(self, team: Team) -> int:
        return self.prize_a if team == Team.AEK else self.prize_b


@dataclass(frozen=True)
class BonusResult:
    bonus_a: int = 0
    bonus_b: int = 0

    def for_team(self, team: Team) -> int:
        return self.bonus_a if team == Team.AEK else self.bonus_b

    @property
    def team(self) -> Team | None:
        if self.bonus_a:
            return Team.AEK
        if self.bonus_b:
            return Team.REAL
        return None


@dataclass(frozen=True)
class DebtSettlement:
    winner: Team
    loser: Team
    amounts: dict[Team, int]
    amortized: int
    winner_debt: int
    loser_debt: int
    remaining: int

    @property
    def loser_amount(self) -> int:
        return self.amounts[self.loser]


def calculate_prizes(
    score_a: int,
    score_b: int,
    yellow_a: int = 0,
    red_a: int = 0,
    yellow_b: int = 0,
    red_b: int = 0,
) -> PrizeResult:
    if score_a == score_b:
        return PrizeResult(prize_a=0, prize_b=0)

    if score_a > score_b:
        winner = _winner_prize(conceded=score_b, yellow=yellow_a, red=red_a)
        loser = _loser_prize(winner_goals=score_a, yellow=yellow_b, red=red_b)
        return PrizeResult(prize_a=winner, prize_b=loser)

    winner = _winner_prize(conceded=score_a, yellow=yellow_b, red=red_b)
    loser = _loser_prize(winner_goals=score_b, yellow=yellow_a, red=red_a)
    return PrizeResult(prize_a=loser, prize_b=winner)


def calculate_match_prizes(match: MatchInput) -> PrizeResult:
    return calculate_prizes(
        match.score_a,
        match.score_b,
        yellow_a=match.yellow_a,
        red_a=match.red_a,
        yellow_b=match.yellow_b,
        red_b=match.red_b,
    )


def _winner_prize(*, conceded: int, yellow: int, red: int) -> int:
    return WIN_PRIZE - GOAL_PENALTY * conceded - YELLOW_PENALTY * yellow - RED_PENALTY * red


def _loser_prize(*, winner_goals: int, yellow: int, red: int) -> int:
    return -(LOSS_BASE_PENALTY + GOAL_PENALTY * winner_goals + YELLOW_PENALTY * yellow + RED_PENALTY * red)


def resolve_roster_team(player: str, rosters: Mapping[Team, Iterable[str]]) -> Team | None:
    for team in MATCH_TEAMS:
        if player in rosters.get(team, ()):
            return team
    return None


def calculate_bonuses(man_of_the_match: str | None, rosters: Mapping[Team, Iterable[str]]) -> BonusResult:
    if not man_of_the_match:
        return BonusResult()
    team = resolve_roster_team(man_of_the_match, rosters)
    if team == Team.AEK:
        return BonusResult(bonus_a=MOTM_BONUS)
    if team == Team.REAL:
        return BonusResult(bonus_b=MOTM_BONUS)
    return BonusResult()


def settlement_amount(balance: int, prize: int, has_bonus: bool) -> int:
    """Real-money units a team owes for a result its account could not absorb."""
    account = balance + (MOTM_BONUS if has_bonus else 0)
    shortfall = Decimal(abs(prize) - account) / Decimal(SETTLEMENT_UNIT_SIZE)
    if shortfall < 0:
        shortfall = Decimal(0)
    return SETTLEMENT_BASE_UNITS + int(shortfall.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def settle_debt(
    *,
    winner: Team,
    balances: Mapping[Team, int],
    prizes: PrizeResult,
    bonuses: BonusResult,
    debts: Mapping[Team, int],
) -> DebtSettlement:
    if winner not in MATCH_TEAMS:
        raise DomainValidationError(f"winner must be one of the match teams, got {winner}")
    loser = Team.REAL if winner == Team.AEK else Team.AEK

    amounts = {
        team: settlement_amount(balances[team], prizes.for_team(team), bonuses.for_team(team) > 0)
        for team in MATCH_TEAMS
    }

    winner_debt_before = max(0, debts.get(winner, 0))
    loser_amount = amounts[loser]
    amortized = min(winner_debt_before, loser_amount)
    remaining = loser_amount - amortized

    return DebtSettlement(
        winner=winner,
        loser=loser,
        amounts=amounts,
        amortized=amortized,
        winner_debt=max(0, winner_debt_before - amortized),
        loser_debt=max(0, debts.get(loser, 0)) + max(0, remaining),
        remaining=remaining,
    )
