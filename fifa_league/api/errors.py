from __future__ import annotations

from typing import Any

from fastapi import HTTPException, status

from fifa_league.domain import DomainValidationError, MatchNotFoundError, ScorerSumError
from fifa_league.storage.repository import StoreError


def api_error(
    *,
    code: str,
    message: str,
    details: Any | None = None,
    status_code: int = status.HTTP_400_BAD_REQUEST,
) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "code": code,
            "message": message,
            "details": details,
        },
    )


def domain_error(exc: DomainValidationError) -> HTTPException:
    if isinstance(exc, MatchNotFoundError):
        return api_error(code="match_not_found", message=str(exc), status_code=status.HTTP_404_NOT_FOUND)
    if isinstance(exc, ScorerSumError):
        return api_error(
            code="scorer_sum_exceeded",
            message=str(exc),
            details={"team": exc.team.value, "scored": exc.scored, "score": exc.score},
        )
    return api_error(code="validation_error", message=str(exc))


def store_error(exc: StoreError, *, operation: str) -> HTTPException:
    return api_error(
        code="store_unavailable",
        message=f"{operation} failed: {exc.reason}",
        details={"operation": exc.operation, "collection": exc.collection},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )
