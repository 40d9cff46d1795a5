from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher

router = APIRouter(prefix="/api/rates", tags=["rates"])


@router.post("", summary="Calculate rates")
async def calculate_rates(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("calculate_rates", payload or {})


@router.post("/estimate", summary="Estimate rates")
async def estimate_rates(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("estimate_rates", payload or {})


@router.get("/{rate_id}", summary="Get rate by ID")
async def get_rate(rate_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_rate_by_id", {"rate_id": rate_id})
