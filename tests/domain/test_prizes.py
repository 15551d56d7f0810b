import pytest

from fifa_league.domain import (
    MOTM_BONUS,
    BonusResult,
    Team,
    calculate_bonuses,
    calculate_prizes,
)

ROSTERS = {Team.AEK: ["Ronaldo", "Kaka"], Team.REAL: ["Raul", "Zidane"]}


def test_winner_and_loser_prize_follow_discipline() -> None:
    result = calculate_prizes(3, 1, yellow_a=1, red_a=0, yellow_b=2, red_b=1)

    assert result.prize_a == 930_000
    assert result.prize_b == -740_000


def test_away_win_mirrors_formula() -> None:
    result = calculate_prizes(0, 2, yellow_a=1, red_a=1, yellow_b=0, red_b=0)

    assert result.prize_b == 1_000_000
    assert result.prize_a == -(500_000 + 2 * 50_000 + 20_000 + 50_000)


@pytest.mark.parametrize("score", [0, 1, 4])
def test_draw_pays_nothing(score: int) -> None:
    result = calculate_prizes(score, score, yellow_a=3, red_a=1, yellow_b=2, red_b=2)

    assert (result.prize_a, result.prize_b) == (0, 0)


@pytest.mark.parametrize(
    "score_a, score_b, yellow_b, red_b",
    [(1, 0, 0, 0), (5, 4, 3, 1), (9, 0, 10, 2)],
)
def test_loser_prize_never_above_base_penalty(score_a: int, score_b: int, yellow_b: int, red_b: int) -> None:
    result = calculate_prizes(score_a, score_b, yellow_b=yellow_b, red_b=red_b)

    assert result.prize_b <= -500_000


def test_winner_prize_can_turn_negative_without_clamping() -> None:
    result = calculate_prizes(25, 24, yellow_a=2, red_a=1)

    assert result.prize_a == 1_000_000 - 24 * 50_000 - 40_000 - 50_000
    assert result.prize_a < 0


def test_bonus_goes_to_roster_of_motm() -> None:
    assert calculate_bonuses("Kaka", ROSTERS) == BonusResult(bonus_a=MOTM_BONUS, bonus_b=0)
    assert calculate_bonuses("Zidane", ROSTERS) == BonusResult(bonus_a=0, bonus_b=MOTM_BONUS)


@pytest.mark.parametrize("motm", [None, ""])
def test_no_motm_no_bonus(motm) -> None:
    bonus = calculate_bonuses(motm, ROSTERS)

    assert (bonus.bonus_a, bonus.bonus_b) == (0, 0)
    assert bonus.team is None


def test_bonus_is_exclusive() -> None:
    for player in ["Ronaldo", "Kaka", "Raul", "Zidane"]:
        bonus = calculate_bonuses(player, ROSTERS)
        assert sorted([bonus.bonus_a, bonus.bonus_b]) == [0, MOTM_BONUS]
