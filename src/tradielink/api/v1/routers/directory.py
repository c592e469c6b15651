from __future__ import annotations

from fastapi import APIRouter

from tradielink.api.deps import CurrentPrincipal, UoWDep
from tradielink.api.v1.schemas.user import (
    BuilderDirectoryItem,
    BuildersResponse,
    TradieDirectoryItem,
    TradiesResponse,
)
from tradielink.services import directory_service

router = APIRouter(tags=["directory"])


@router.get("/builders", response_model=BuildersResponse)
async def list_builders(principal: CurrentPrincipal, uow: UoWDep) -> BuildersResponse:
    builders = await directory_service.list_builders(uow)
    return BuildersResponse(
        builders=[BuilderDirectoryItem.model_validate(b, from_attributes=True) for b in builders],
    )


@router.get("/tradies", response_model=TradiesResponse)
async def list_tradies(principal: CurrentPrincipal, uow: UoWDep) -> TradiesResponse:
    tradies = await directory_service.list_tradies(uow)
    return TradiesResponse(
        tradies=[TradieDirectoryItem.model_validate(t, from_attributes=True) for t in tradies],
    )
