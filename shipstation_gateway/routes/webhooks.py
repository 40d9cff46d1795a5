from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/webhooks", tags=["webhooks"])


@router.get("", summary="List webhooks")
async def list_webhooks(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_webhooks", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create webhook")
async def create_webhook(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_webhook", payload or {})


@router.get("/{webhook_id}", summary="Get webhook by ID")
async def get_webhook(webhook_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_webhook_by_id", {"webhook_id": webhook_id})


@router.put("/{webhook_id}", summary="Update webhook")
async def update_webhook(
    webhook_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("update_webhook", {"webhook_id": webhook_id, "webhook_data": payload})


@router.delete("/{webhook_id}", summary="Delete webhook")
async def delete_webhook(webhook_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("delete_webhook", {"webhook_id": webhook_id})
