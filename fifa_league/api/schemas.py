from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, model_validator

from fifa_league.domain import MatchInput, Team, TransactionType, collect_scorers


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Any | None = None


class ScorerRow(BaseModel):
    player: str = Field(default="", description="Empty rows are ignored", examples=["Ronaldo"])
    count: int = Field(default=1, ge=1, examples=[2])


class MatchRequest(BaseModel):
    date: dt.date
    score_a: int = Field(..., ge=0, description="Goals of AEK")
    score_b: int = Field(..., ge=0, description="Goals of Real")
    scorers_a: list[ScorerRow] = Field(default_factory=list)
    scorers_b: list[ScorerRow] = Field(default_factory=list)
    yellow_a: int = Field(default=0, ge=0)
    red_a: int = Field(default=0, ge=0)
    yellow_b: int = Field(default=0, ge=0)
    red_b: int = Field(default=0, ge=0)
    man_of_the_match: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "date": "2025-05-01",
                    "score_a": 3,
                    "score_b": 1,
                    "scorers_a": [{"player": "Ronaldo", "count": 2}, {"player": "Kaka", "count": 1}],
                    "scorers_b": [{"player": "Raul", "count": 1}],
                    "yellow_a": 1,
                    "yellow_b": 2,
                    "red_b": 1,
                    "man_of_the_match": "Ronaldo",
                }
            ]
        }
    }

    def to_domain(self) -> MatchInput:
        return MatchInput(
            date=self.date,
            score_a=self.score_a,
            score_b=self.score_b,
            scorers_a=collect_scorers(row.model_dump() for row in self.scorers_a),
            scorers_b=collect_scorers(row.model_dump() for row in self.scorers_b),
            yellow_a=self.yellow_a,
            red_a=self.red_a,
            yellow_b=self.yellow_b,
            red_b=self.red_b,
            man_of_the_match=self.man_of_the_match,
        )


class MatchResponse(BaseModel):
    id: int
    number: int
    date: dt.date
    team_a: str
    team_b: str
    score_a: int
    score_b: int
    scorers_a: list[ScorerRow]
    scorers_b: list[ScorerRow]
    yellow_a: int
    red_a: int
    yellow_b: int
    red_b: int
    man_of_the_match: str | None = None
    prize_a: int
    prize_b: int


class DebtResponse(BaseModel):
    winner: Team
    loser: Team
    amounts: dict[str, int]
    amortized: int
    remaining: int
    winner_debt: int
    loser_debt: int


class SettlementResponse(BaseModel):
    match_id: int
    match_number: int
    prize_a: int
    prize_b: int
    bonus_a: int
    bonus_b: int
    balances: dict[str, int]
    debt: DebtResponse | None = None
    replaced_id: int | None = None
    messages: list[str] = Field(default_factory=list)


class ReversalResponse(BaseModel):
    match_id: int
    removed_transactions: int
    balances: dict[str, int]
    messages: list[str] = Field(default_factory=list)


class FinanceResponse(BaseModel):
    team: Team
    balance: int
    debt: int


class TransactionRequest(BaseModel):
    team: Team
    type: TransactionType = TransactionType.OTHER
    amount: int = Field(..., description="Negative for expenses")
    info: str | None = Field(default=None, max_length=500)

    @model_validator(mode="after")
    def validate_team(self) -> "TransactionRequest":
        if self.team == Team.FORMER:
            raise ValueError("Transactions can only be booked for AEK or Real")
        return self


class TransactionResponse(BaseModel):
    id: int
    date: dt.date
    type: str
    team: str
    amount: int
    match_id: int | None = None
    info: str | None = None


class PlayerRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=128)
    team: Team
    position: str | None = Field(default=None, max_length=32)
    value: int = Field(default=0, ge=0)
    goals: int = Field(default=0, ge=0)


class PlayerResponse(BaseModel):
    id: int
    name: str
    team: str
    position: str | None = None
    value: int
    goals: int


class BanRequest(BaseModel):
    player_id: int
    type: str = Field(default="Rot", max_length=64)
    total_games: int = Field(default=1, ge=1)
    reason: str | None = None


class BanResponse(BaseModel):
    id: int
    player_id: int | None
    team: str
    type: str
    total_games: int
    matches_served: int
    remaining_games: int
    reason: str | None = None
