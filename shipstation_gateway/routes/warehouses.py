from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/warehouses", tags=["warehouses"])


@router.get("", summary="List warehouses")
async def list_warehouses(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_warehouses", query_args(request))


@router.get("/{warehouse_id}", summary="Get warehouse by ID")
async def get_warehouse(warehouse_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_warehouse_by_id", {"warehouse_id": warehouse_id})
