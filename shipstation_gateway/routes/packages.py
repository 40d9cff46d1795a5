from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/packages", tags=["packages"])


@router.get("", summary="List custom package types")
async def list_package_types(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_package_types", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create custom package type")
async def create_package_type(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_package_type", payload or {})


@router.get("/{package_id}", summary="Get package type by ID")
async def get_package_type(package_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_package_type_by_id", {"package_id": package_id})


@router.put("/{package_id}", summary="Update package type")
async def update_package_type(
    package_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("update_package_type", {"package_id": package_id, "package_data": payload})


@router.delete("/{package_id}", summary="Delete package type")
async def delete_package_type(package_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("delete_package_type", {"package_id": package_id})
