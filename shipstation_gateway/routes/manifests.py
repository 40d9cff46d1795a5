from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/manifests", tags=["manifests"])


@router.get("", summary="List manifests")
async def list_manifests(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_manifests", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create manifest")
async def create_manifest(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_manifest", payload or {})


@router.get("/{manifest_id}", summary="Get manifest by ID")
async def get_manifest(manifest_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_manifest_by_id", {"manifest_id": manifest_id})
