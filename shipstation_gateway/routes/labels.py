from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/labels", tags=["labels"])


@router.get("", summary="List labels")
async def list_labels(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_labels", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create label")
async def create_label(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_label", payload or {})


@router.post("/rates/{rate_id}", status_code=status.HTTP_201_CREATED, summary="Create label from rate")
async def create_label_from_rate(
    rate_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_label_from_rate", {**(payload or {}), "rate_id": rate_id})


@router.post("/shipment/{shipment_id}", status_code=status.HTTP_201_CREATED, summary="Create label from shipment")
async def create_label_from_shipment(
    shipment_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_label_from_shipment", {**(payload or {}), "shipment_id": shipment_id})


@router.get("/{label_id}", summary="Get label by ID")
async def get_label(label_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_label_by_id", {"label_id": label_id})


@router.post("/{label_id}/return", status_code=status.HTTP_201_CREATED, summary="Create return label")
async def create_return_label(
    label_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_return_label", {**(payload or {}), "label_id": label_id})


@router.get("/{label_id}/track", summary="Track label")
async def track_label(label_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("track_package", {"label_id": label_id})


@router.put("/{label_id}/void", summary="Void label")
async def void_label(label_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("void_label", {"label_id": label_id})
