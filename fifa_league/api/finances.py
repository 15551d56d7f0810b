from __future__ import annotations

from fastapi import APIRouter, Depends, status

from fifa_league.api.errors import domain_error, store_error
from fifa_league.api.schemas import ErrorResponse, FinanceResponse, TransactionRequest, TransactionResponse
from fifa_league.domain import DomainValidationError, Team
from fifa_league.runtime import get_finance_service
from fifa_league.services.finance_service import FinanceService
from fifa_league.storage.repository import StoreError

router = APIRouter(tags=["finances"])


@router.get("/finances", response_model=list[FinanceResponse], summary="Balance and debt of both teams")
def finances(service: FinanceService = Depends(get_finance_service)) -> list[FinanceResponse]:
    try:
        overview = service.overview()
    except StoreError as exc:
        raise store_error(exc, operation="finance overview") from exc
    return [FinanceResponse(team=item.team, balance=item.balance, debt=item.debt) for item in overview]


@router.get("/transactions", response_model=list[TransactionResponse], summary="Ledger, newest first")
def transactions(
    team: Team | None = None,
    match_id: int | None = None,
    service: FinanceService = Depends(get_finance_service),
) -> list[TransactionResponse]:
    try:
        rows = service.transactions(team=team, match_id=match_id)
    except StoreError as exc:
        raise store_error(exc, operation="transaction list") from exc
    return [TransactionResponse(**row) for row in rows]


@router.post(
    "/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Book a manual transaction",
)
def post_transaction(
    payload: TransactionRequest,
    service: FinanceService = Depends(get_finance_service),
) -> TransactionResponse:
    try:
        record = service.post_transaction(
            team=payload.team,
            tx_type=payload.type,
            amount=payload.amount,
            info=payload.info,
        )
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    except StoreError as exc:
        raise store_error(exc, operation="transaction save") from exc
    return TransactionResponse(
        **{**record, "type": payload.type.value, "team": payload.team.value},
    )
