from datetime import date

import pytest

from fifa_league.domain import (
    DomainValidationError,
    MatchInput,
    ScorerEntry,
    ScorerSumError,
    Team,
    collect_scorers,
    tally_goals,
    validate_goal_ledger,
)


def test_collect_scorers_drops_rows_without_player() -> None:
    rows = [
        {"player": "Ronaldo", "count": 2},
        {"player": "", "count": 3},
        {"player": "  ", "count": 1},
        {"player": "Kaka"},
    ]

    assert collect_scorers(rows) == (ScorerEntry("Ronaldo", 2), ScorerEntry("Kaka", 1))


def test_undistributed_goals_are_accepted() -> None:
    assert tally_goals(Team.AEK, [ScorerEntry("Ronaldo", 1)], 3) == 1
    assert tally_goals(Team.AEK, [ScorerEntry("Ronaldo", 3)], 3) == 3


def test_scorer_sum_above_score_is_rejected() -> None:
    with pytest.raises(ScorerSumError) as exc_info:
        tally_goals(Team.REAL, [ScorerEntry("Raul", 2), ScorerEntry("Zidane", 1)], 2)

    assert exc_info.value.team == Team.REAL
    assert exc_info.value.scored == 3
    assert exc_info.value.score == 2
    assert "Real" in str(exc_info.value)


def test_validate_goal_ledger_checks_both_teams() -> None:
    match = MatchInput(
        date=date(2025, 5, 1),
        score_a=2,
        score_b=0,
        scorers_a=(ScorerEntry("Ronaldo", 2),),
        scorers_b=(ScorerEntry("Raul", 1),),
    )

    with pytest.raises(ScorerSumError) as exc_info:
        validate_goal_ledger(match)

    assert exc_info.value.team == Team.REAL


def test_scorer_count_must_be_positive() -> None:
    with pytest.raises(DomainValidationError):
        ScorerEntry("Ronaldo", 0)


def test_negative_scores_and_cards_rejected() -> None:
    with pytest.raises(DomainValidationError):
        MatchInput(date=date(2025, 5, 1), score_a=-1, score_b=0)
    with pytest.raises(DomainValidationError):
        MatchInput(date=date(2025, 5, 1), score_a=1, score_b=0, red_b=-1)


def test_match_input_resolves_winner() -> None:
    match = MatchInput(date=date(2025, 5, 1), score_a=1, score_b=3, man_of_the_match="  ")

    assert match.winner == Team.REAL
    assert match.loser == Team.AEK
    assert match.man_of_the_match is None
    assert MatchInput(date=date(2025, 5, 1), score_a=2, score_b=2).winner is None


def test_collect_scorers_defaults_only_missing_counts() -> None:
    assert collect_scorers([{"player": "Kaka", "count": None}]) == (ScorerEntry("Kaka", 1),)
    with pytest.raises(DomainValidationError):
        collect_scorers([{"player": "Ronaldo", "count": 0}])
