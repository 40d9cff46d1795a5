from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api", tags=["inventory"])


@router.get("/inventory", summary="Get inventory levels")
async def get_inventory(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_inventory", query_args(request))


@router.post("/inventory", summary="Update inventory")
async def update_inventory(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("update_inventory", payload or {})


# --- Inventory warehouses ---

@router.get("/inventory-warehouses", summary="List inventory warehouses")
async def list_inventory_warehouses(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_inventory_warehouses", query_args(request))


@router.post("/inventory-warehouses", status_code=status.HTTP_201_CREATED, summary="Create inventory warehouse")
async def create_inventory_warehouse(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_inventory_warehouse", payload or {})


@router.get("/inventory-warehouses/{warehouse_id}", summary="Get inventory warehouse by ID")
async def get_inventory_warehouse(warehouse_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_inventory_warehouse_by_id", {"inventory_warehouse_id": warehouse_id})


@router.put("/inventory-warehouses/{warehouse_id}", summary="Update inventory warehouse")
async def update_inventory_warehouse(
    warehouse_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch(
        "update_inventory_warehouse",
        {"inventory_warehouse_id": warehouse_id, "inventory_warehouse_data": payload},
    )


@router.delete("/inventory-warehouses/{warehouse_id}", summary="Delete inventory warehouse")
async def delete_inventory_warehouse(warehouse_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("delete_inventory_warehouse", {"inventory_warehouse_id": warehouse_id})


# --- Inventory locations ---

@router.get("/inventory-locations", summary="List inventory locations")
async def list_inventory_locations(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_inventory_locations", query_args(request))


@router.post("/inventory-locations", status_code=status.HTTP_201_CREATED, summary="Create inventory location")
async def create_inventory_location(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_inventory_location", payload or {})


@router.get("/inventory-locations/{location_id}", summary="Get inventory location by ID")
async def get_inventory_location(location_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_inventory_location_by_id", {"inventory_location_id": location_id})


@router.put("/inventory-locations/{location_id}", summary="Update inventory location")
async def update_inventory_location(
    location_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch(
        "update_inventory_location",
        {"inventory_location_id": location_id, "inventory_location_data": payload},
    )


@router.delete("/inventory-locations/{location_id}", summary="Delete inventory location")
async def delete_inventory_location(location_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("delete_inventory_location", {"inventory_location_id": location_id})
