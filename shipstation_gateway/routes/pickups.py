from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/pickups", tags=["pickups"])


@router.get("", summary="List pickups")
async def list_pickups(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_pickups", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Schedule pickup")
async def schedule_pickup(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("schedule_pickup", payload or {})


@router.get("/{pickup_id}", summary="Get pickup by ID")
async def get_pickup(pickup_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_pickup_by_id", {"pickup_id": pickup_id})


@router.delete("/{pickup_id}", summary="Cancel pickup")
async def cancel_pickup(pickup_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("cancel_pickup", {"pickup_id": pickup_id})
