from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass
from typing import Any

from fifa_league.domain import MATCH_TEAMS, Team
from fifa_league.storage.repository import LeagueStore


@dataclass
class TeamRecord:
    team: str
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    yellow_cards: int = 0
    red_cards: int = 0

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against


class StatsService:
    """Aggregations over match, player and SdS records."""

    def aggregate(self, matches: Iterable[Mapping[str, Any]]) -> dict[str, TeamRecord]:
        records = {team.value: TeamRecord(team=team.value) for team in MATCH_TEAMS}
        aek, real = records[Team.AEK.value], records[Team.REAL.value]
        for match in matches:
            score_a, score_b = match["score_a"], match["score_b"]
            for record, scored, conceded, yellow, red in (
                (aek, score_a, score_b, match["yellow_a"], match["red_a"]),
                (real, score_b, score_a, match["yellow_b"], match["red_b"]),
            ):
                record.played += 1
                record.goals_for += scored
                record.goals_against += conceded
                record.yellow_cards += yellow
                record.red_cards += red
                if scored > conceded:
                    record.wins += 1
                elif scored == conceded:
                    record.draws += 1
                else:
                    record.losses += 1
        return records

    def top_scorers(self, players: Iterable[Mapping[str, Any]], limit: int = 5) -> list[dict[str, Any]]:
        scorers = [p for p in players if p["goals"] > 0]
        scorers.sort(key=lambda p: (-p["goals"], p["name"]))
        return [{"name": p["name"], "team": p["team"], "goals": p["goals"]} for p in scorers[:limit]]

    def motm_ranking(self, awards: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
        ranked = sorted((a for a in awards if a["count"] > 0), key=lambda a: (-a["count"], a["name"]))
        return [{"name": a["name"], "team": a["team"], "count": a["count"]} for a in ranked]


def get_summary(store: LeagueStore, *, limit: int = 5) -> dict[str, Any]:
    service = StatsService()
    records = service.aggregate(store.select_all("matches"))
    return {
        "teams": [{**asdict(record), "goal_difference": record.goal_difference} for record in records.values()],
        "top_scorers": service.top_scorers(store.select_all("players"), limit=limit),
        "motm_ranking": service.motm_ranking(store.select_all("motm_awards")),
    }
