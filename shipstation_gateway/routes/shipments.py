from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/shipments", tags=["shipments"])


@router.get("", summary="List shipments")
async def list_shipments(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_shipments", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create shipment (single object or {shipments: [...]})")
async def create_shipment(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    if payload is not None and "shipments" in payload:
        return await dispatcher.dispatch("create_shipments_bulk", payload)
    return await dispatcher.dispatch("create_shipment", {"shipment": payload})


@router.get("/external/{external_id}", summary="Get shipment by external ID")
async def get_shipment_by_external_id(external_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_shipment_by_external_id", {"external_shipment_id": external_id})


@router.get("/{shipment_id}", summary="Get shipment by ID")
async def get_shipment(shipment_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_shipment_by_id", {"shipment_id": shipment_id})


@router.put("/{shipment_id}", summary="Update shipment")
async def update_shipment(
    shipment_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("update_shipment", {"shipment_id": shipment_id, "shipment_data": payload})


@router.put("/{shipment_id}/cancel", summary="Cancel shipment")
async def cancel_shipment(shipment_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("cancel_shipment", {"shipment_id": shipment_id})


@router.get("/{shipment_id}/rates", summary="Get shipment rates")
async def get_shipment_rates(shipment_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_shipment_rates", {"shipment_id": shipment_id})


@router.post("/{shipment_id}/tags/{tag_name}", summary="Tag shipment")
async def tag_shipment(shipment_id: str, tag_name: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("tag_shipment", {"shipment_id": shipment_id, "tag_name": tag_name})


@router.delete("/{shipment_id}/tags/{tag_name}", summary="Remove tag from shipment")
async def untag_shipment(shipment_id: str, tag_name: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("untag_shipment", {"shipment_id": shipment_id, "tag_name": tag_name})
