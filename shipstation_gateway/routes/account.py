from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api")


@router.get("/users", tags=["users"], summary="List users")
async def list_users(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_users", query_args(request))


@router.get("/products", tags=["products"], summary="List products")
async def list_products(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_products", query_args(request))


@router.post("/tracking/stop", tags=["tracking"], summary="Stop tracking updates")
async def stop_tracking(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("stop_tracking", payload or {})
