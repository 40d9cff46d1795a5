from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/batches", tags=["batches"])


@router.get("", summary="List batches")
async def list_batches(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_batches", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create batch")
async def create_batch(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_batch", payload or {})


@router.get("/external/{external_id}", summary="Get batch by external ID")
async def get_batch_by_external_id(external_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_batch_by_external_id", {"external_batch_id": external_id})


@router.get("/{batch_id}", summary="Get batch by ID")
async def get_batch(batch_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_batch_by_id", {"batch_id": batch_id})


@router.put("/{batch_id}", summary="Update batch")
async def update_batch(
    batch_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("update_batch", {"batch_id": batch_id, "batch_data": payload})


@router.delete("/{batch_id}", summary="Delete batch")
async def delete_batch(batch_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("delete_batch", {"batch_id": batch_id})


@router.post("/{batch_id}/add", summary="Add to batch")
async def add_to_batch(
    batch_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("add_to_batch", {**(payload or {}), "batch_id": batch_id})


@router.post("/{batch_id}/remove", summary="Remove from batch")
async def remove_from_batch(
    batch_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("remove_from_batch", {**(payload or {}), "batch_id": batch_id})


@router.get("/{batch_id}/errors", summary="Get batch errors")
async def get_batch_errors(batch_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_batch_errors", {"batch_id": batch_id})


@router.post("/{batch_id}/process", summary="Process batch")
async def process_batch(
    batch_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("process_batch", {**(payload or {}), "batch_id": batch_id})
