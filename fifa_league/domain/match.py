from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Tuple


class DomainValidationError(ValueError):
    """Raised when a match rule is violated."""


class MatchNotFoundError(DomainValidationError):
    """Raised when a match id does not exist in the store."""


class ScorerSumError(DomainValidationError):
    def __init__(self, team: "Team", scored: int, score: int) -> None:
        super().__init__(
            f"sum of scorer goals for {team.value} ({scored}) must not exceed the team's goals ({score})"
        )
        self.team = team
        self.scored = scored
        self.score = score


class Team(str, Enum):
    AEK = "AEK"
    REAL = "Real"
    FORMER = "Ehemalige"


MATCH_TEAMS: Tuple[Team, Team] = (Team.AEK, Team.REAL)


def normalize_player(name: str) -> str:
    value = name.strip()
    if not value:
        raise DomainValidationError("player name must be non-empty")
    return value


@dataclass(frozen=True)
class ScorerEntry:
    player: str
    count: int = 1

    def __post_init__(self) -> None:
        object.__setattr__(self, "player", normalize_player(self.player))
        if self.count < 1:
            raise DomainValidationError(f"goal count for {self.player} must be at least 1")

    def as_record(self) -> dict[str, Any]:
        return {"player": self.player, "count": self.count}


def collect_scorers(rows: Iterable[Mapping[str, Any]]) -> tuple[ScorerEntry, ...]:
    """Turn raw scorer rows into entries, dropping rows without a player."""
    entries = []
    for row in rows:
        player = (row.get("player") or "").strip()
        if not player:
            continue
        count = row.get("count")
        entries.append(ScorerEntry(player=player, count=1 if count is None else int(count)))
    return tuple(entries)


def tally_goals(team: Team, scorers: Iterable[ScorerEntry], score: int) -> int:
    scored = sum(entry.count for entry in scorers)
    if scored > score:
        raise ScorerSumError(team, scored, score)
    return scored


@dataclass(frozen=True)
class MatchInput:
    date: date
    score_a: int
    score_b: int
    scorers_a: Tuple[ScorerEntry, ...] = field(default_factory=tuple)
    scorers_b: Tuple[ScorerEntry, ...] = field(default_factory=tuple)
    yellow_a: int = 0
    red_a: int = 0
    yellow_b: int = 0
    red_b: int = 0
    man_of_the_match: str | None = None

    def __post_init__(self) -> None:
        for name in ("score_a", "score_b", "yellow_a", "red_a", "yellow_b", "red_b"):
            if getattr(self, name) < 0:
                raise DomainValidationError(f"{name} must not be negative")
        motm = (self.man_of_the_match or "").strip()
        object.__setattr__(self, "man_of_the_match", motm or None)
        object.__setattr__(self, "scorers_a", tuple(self.scorers_a))
        object.__setattr__(self, "scorers_b", tuple(self.scorers_b))

    @property
    def is_draw(self) -> bool:
        return self.score_a == self.score_b

    @property
    def winner(self) -> Team | None:
        if self.score_a > self.score_b:
            return Team.AEK
        if self.score_b > self.score_a:
            return Team.REAL
        return None

    @property
    def loser(self) -> Team | None:
        winner = self.winner
        if winner is None:
            return None
        return Team.REAL if winner == Team.AEK else Team.AEK

    def score(self, team: Team) -> int:
        return self.score_a if team == Team.AEK else self.score_b

    def scorers(self, team: Team) -> Tuple[ScorerEntry, ...]:
        return self.scorers_a if team == Team.AEK else self.scorers_b


def validate_goal_ledger(match: MatchInput) -> dict[Team, int]:
    """Check both teams' scorer sums against their declared scores."""
    return {team: tally_goals(team, match.scorers(team), match.score(team)) for team in MATCH_TEAMS}


def scorers_from_record(raw: Iterable[Mapping[str, Any]] | None) -> tuple[ScorerEntry, ...]:
    if not raw:
        return ()
    return collect_scorers(raw)
