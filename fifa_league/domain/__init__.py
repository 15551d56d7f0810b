from .match import (
    MATCH_TEAMS,
    DomainValidationError,
    MatchInput,
    MatchNotFoundError,
    ScorerEntry,
    ScorerSumError,
    Team,
    collect_scorers,
    normalize_player,
    scorers_from_record,
    tally_goals,
    validate_goal_ledger,
)
from .settlement import (
    MATCH_TRANSACTION_TYPES,
    MOTM_BONUS,
    BonusResult,
    DebtSettlement,
    PrizeResult,
    TransactionType,
    calculate_bonuses,
    calculate_match_prizes,
    calculate_prizes,
    resolve_roster_team,
    settle_debt,
    settlement_amount,
)

__all__ = [
    "BonusResult",
    "DebtSettlement",
    "DomainValidationError",
    "MATCH_TEAMS",
    "MATCH_TRANSACTION_TYPES",
    "MOTM_BONUS",
    "MatchInput",
    "MatchNotFoundError",
    "PrizeResult",
    "ScorerEntry",
    "ScorerSumError",
    "Team",
    "TransactionType",
    "calculate_bonuses",
    "calculate_match_prizes",
    "calculate_prizes",
    "collect_scorers",
    "normalize_player",
    "resolve_roster_team",
    "scorers_from_record",
    "settle_debt",
    "settlement_amount",
    "tally_goals",
    "validate_goal_ledger",
]
