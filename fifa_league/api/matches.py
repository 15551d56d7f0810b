from __future__ import annotations

from fastapi import APIRouter, Depends, status

from fifa_league.api.errors import domain_error, store_error
from fifa_league.api.schemas import (
    DebtResponse,
    ErrorResponse,
    MatchRequest,
    MatchResponse,
    ReversalResponse,
    SettlementResponse,
)
from fifa_league.domain import DomainValidationError
from fifa_league.notifications import CollectingNotifier
from fifa_league.runtime import get_settlement_service, get_store
from fifa_league.service import SettlementOutcome, SettlementService
from fifa_league.storage.repository import LeagueStore, StoreError

router = APIRouter(prefix="/matches", tags=["matches"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    503: {"model": ErrorResponse},
}


def _settlement_response(outcome: SettlementOutcome, notifier: CollectingNotifier) -> SettlementResponse:
    debt = None
    if outcome.debt is not None:
        debt = DebtResponse(
            winner=outcome.debt.winner,
            loser=outcome.debt.loser,
            amounts={team.value: amount for team, amount in outcome.debt.amounts.items()},
            amortized=outcome.debt.amortized,
            remaining=outcome.debt.remaining,
            winner_debt=outcome.debt.winner_debt,
            loser_debt=outcome.debt.loser_debt,
        )
    return SettlementResponse(
        match_id=outcome.match_id,
        match_number=outcome.match_number,
        prize_a=outcome.prizes.prize_a,
        prize_b=outcome.prizes.prize_b,
        bonus_a=outcome.bonuses.bonus_a,
        bonus_b=outcome.bonuses.bonus_b,
        balances={team.value: balance for team, balance in outcome.balances.items()},
        debt=debt,
        replaced_id=outcome.replaced_id,
        messages=notifier.successes,
    )


def _settle(
    payload: MatchRequest,
    service: SettlementService,
    replace_id: int | None = None,
) -> SettlementResponse:
    notifier = CollectingNotifier()
    try:
        outcome = service.settle_match(payload.to_domain(), replace_id=replace_id, notifier=notifier)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    except StoreError as exc:
        raise store_error(exc, operation="match save") from exc
    return _settlement_response(outcome, notifier)


@router.get("", response_model=list[MatchResponse], summary="List matches in playing order")
def list_matches(store: LeagueStore = Depends(get_store)) -> list[MatchResponse]:
    try:
        rows = store.select_all("matches", order_by=("date", "id"))
    except StoreError as exc:
        raise store_error(exc, operation="match list") from exc
    return [MatchResponse(number=idx, **row) for idx, row in enumerate(rows, start=1)]


@router.post(
    "",
    response_model=SettlementResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
    summary="Save a finished match and settle its finances",
)
def create_match(
    payload: MatchRequest,
    service: SettlementService = Depends(get_settlement_service),
) -> SettlementResponse:
    return _settle(payload, service)


@router.put(
    "/{match_id}",
    response_model=SettlementResponse,
    responses=ERROR_RESPONSES,
    summary="Reverse a match and settle it again with new data",
)
def replace_match(
    match_id: int,
    payload: MatchRequest,
    service: SettlementService = Depends(get_settlement_service),
) -> SettlementResponse:
    return _settle(payload, service, replace_id=match_id)


@router.delete(
    "/{match_id}",
    response_model=ReversalResponse,
    responses=ERROR_RESPONSES,
    summary="Delete a match and reverse its effects",
)
def delete_match(
    match_id: int,
    service: SettlementService = Depends(get_settlement_service),
) -> ReversalResponse:
    notifier = CollectingNotifier()
    try:
        outcome = service.delete_match(match_id, notifier=notifier)
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    except StoreError as exc:
        raise store_error(exc, operation="match delete") from exc
    return ReversalResponse(
        match_id=outcome.match_id,
        removed_transactions=outcome.removed_transactions,
        balances={team.value: balance for team, balance in outcome.balances.items()},
        messages=notifier.successes,
    )
