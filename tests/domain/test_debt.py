import pytest

from fifa_league.domain import (
    BonusResult,
    DomainValidationError,
    PrizeResult,
    Team,
    settle_debt,
    settlement_amount,
)

PRIZES = PrizeResult(prize_a=930_000, prize_b=-1_500_000)
BALANCES = {Team.AEK: 2_000_000, Team.REAL: 0}


@pytest.mark.parametrize(
    "balance, prize, has_bonus, expected",
    [
        (5_000_000, -740_000, False, 5),
        (0, -1_500_000, False, 20),
        (0, -250_000, False, 8),
        (0, -240_000, False, 7),
        (0, -650_000, True, 11),
        (1_000_000, 930_000, True, 5),
    ],
    ids=["absorbed", "fifteen_units_short", "half_rounds_up", "below_half", "bonus_counts", "winner"],
)
def test_settlement_amount(balance: int, prize: int, has_bonus: bool, expected: int) -> None:
    assert settlement_amount(balance, prize, has_bonus) == expected


def test_winner_debt_is_amortized_before_new_debt() -> None:
    result = settle_debt(
        winner=Team.AEK,
        balances=BALANCES,
        prizes=PRIZES,
        bonuses=BonusResult(),
        debts={Team.AEK: 30, Team.REAL: 0},
    )

    assert result.loser == Team.REAL
    assert result.loser_amount == 20
    assert result.amortized == 20
    assert result.winner_debt == 10
    assert result.remaining == 0
    assert result.loser_debt == 0


def test_remaining_obligation_becomes_loser_debt() -> None:
    result = settle_debt(
        winner=Team.AEK,
        balances=BALANCES,
        prizes=PRIZES,
        bonuses=BonusResult(),
        debts={Team.AEK: 10, Team.REAL: 3},
    )

    assert result.amortized == 10
    assert result.winner_debt == 0
    assert result.remaining == 10
    assert result.loser_debt == 13


def test_real_win_uses_aek_amount() -> None:
    result = settle_debt(
        winner=Team.REAL,
        balances={Team.AEK: 100_000, Team.REAL: 1_000_000},
        prizes=PrizeResult(prize_a=-600_000, prize_b=1_000_000),
        bonuses=BonusResult(bonus_b=100_000),
        debts={Team.AEK: 0, Team.REAL: 0},
    )

    assert result.loser == Team.AEK
    assert result.amounts[Team.AEK] == 10
    assert result.amortized == 0
    assert result.loser_debt == 10


def test_former_team_cannot_win() -> None:
    with pytest.raises(DomainValidationError):
        settle_debt(
            winner=Team.FORMER,
            balances=BALANCES,
            prizes=PRIZES,
            bonuses=BonusResult(),
            debts={},
        )


def test_negative_debt_input_is_treated_as_zero() -> None:
    result = settle_debt(
        winner=Team.AEK,
        balances=BALANCES,
        prizes=PRIZES,
        bonuses=BonusResult(),
        debts={Team.AEK: -10, Team.REAL: 3},
    )

    assert result.amortized == 0
    assert result.winner_debt == 0
    assert result.remaining == 20
    assert result.loser_debt == 23
