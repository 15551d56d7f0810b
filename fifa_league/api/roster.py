from __future__ import annotations

from fastapi import APIRouter, Depends, status

from fifa_league.api.errors import domain_error, store_error
from fifa_league.api.schemas import BanRequest, BanResponse, ErrorResponse, PlayerRequest, PlayerResponse
from fifa_league.domain import DomainValidationError, Team
from fifa_league.runtime import get_roster_service
from fifa_league.services.roster_service import RosterService, remaining_games
from fifa_league.storage.repository import StoreError

router = APIRouter(tags=["roster"])


@router.get("/players", response_model=list[PlayerResponse])
def list_players(
    team: Team | None = None,
    service: RosterService = Depends(get_roster_service),
) -> list[PlayerResponse]:
    try:
        return [PlayerResponse(**row) for row in service.list_players(team)]
    except StoreError as exc:
        raise store_error(exc, operation="player list") from exc


@router.post(
    "/players",
    response_model=PlayerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_player(
    payload: PlayerRequest,
    service: RosterService = Depends(get_roster_service),
) -> PlayerResponse:
    try:
        record = service.create_player(
            payload.name,
            payload.team,
            position=payload.position,
            value=payload.value,
            goals=payload.goals,
        )
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    except StoreError as exc:
        raise store_error(exc, operation="player save") from exc
    return PlayerResponse(**record)


@router.get("/bans", response_model=list[BanResponse])
def list_bans(
    active: bool | None = None,
    service: RosterService = Depends(get_roster_service),
) -> list[BanResponse]:
    try:
        bans = service.list_bans(active=active)
    except StoreError as exc:
        raise store_error(exc, operation="ban list") from exc
    return [BanResponse(**ban, remaining_games=remaining_games(ban)) for ban in bans]


@router.post(
    "/bans",
    response_model=BanResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
def create_ban(
    payload: BanRequest,
    service: RosterService = Depends(get_roster_service),
) -> BanResponse:
    try:
        ban = service.create_ban(
            payload.player_id,
            ban_type=payload.type,
            total_games=payload.total_games,
            reason=payload.reason,
        )
    except DomainValidationError as exc:
        raise domain_error(exc) from exc
    except StoreError as exc:
        raise store_error(exc, operation="ban save") from exc
    return BanResponse(**ban, remaining_games=remaining_games(ban))
