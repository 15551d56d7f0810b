from __future__ import annotations

from fifa_league.domain import MATCH_TEAMS, DomainValidationError, Team, normalize_player
from fifa_league.storage.repository import LeagueStore, Record


def remaining_games(ban: Record) -> int:
    return (ban["total_games"] or 1) - (ban["matches_served"] or 0)


class RosterService:
    def __init__(self, store: LeagueStore) -> None:
        self.store = store

    def create_player(
        self,
        name: str,
        team: Team,
        *,
        position: str | None = None,
        value: int = 0,
        goals: int = 0,
    ) -> Record:
        name = normalize_player(name)
        if self.store.select_one("players", name=name, team=team) is not None:
            raise DomainValidationError(f"{name} is already on the {team.value} roster")
        if goals < 0:
            raise DomainValidationError("goals must not be negative")
        record = {"name": name, "team": team.value, "position": position, "value": value, "goals": goals}
        record["id"] = self.store.insert("players", record)
        return record

    def list_players(self, team: Team | None = None) -> list[Record]:
        if team is None:
            return self.store.select_all("players")
        return self.store.select_all("players", team=team)

    def create_ban(
        self,
        player_id: int,
        *,
        ban_type: str,
        total_games: int = 1,
        reason: str | None = None,
    ) -> Record:
        player = self.store.get("players", player_id)
        if player is None:
            raise DomainValidationError(f"player {player_id} not found")
        if player["team"] not in {team.value for team in MATCH_TEAMS}:
            raise DomainValidationError(f"{player['name']} is not on an active roster")
        if total_games < 1:
            raise DomainValidationError("a ban must cover at least one game")
        record = {
            "player_id": player_id,
            "team": player["team"],
            "type": ban_type,
            "total_games": total_games,
            "matches_served": 0,
            "reason": reason,
        }
        record["id"] = self.store.insert("bans", record)
        return record

    def list_bans(self, *, active: bool | None = None) -> list[Record]:
        bans = self.store.select_all("bans")
        if active is None:
            return bans
        return [ban for ban in bans if (remaining_games(ban) > 0) == active]
