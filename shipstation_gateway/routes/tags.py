from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Request, status

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("", summary="List tags")
async def list_tags(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_tags", query_args(request))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create tag")
async def create_tag(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    return await dispatcher.dispatch("create_tag", payload or {})


@router.delete("/{tag_name}", summary="Delete tag")
async def delete_tag(tag_name: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("delete_tag", {"tag_name": tag_name})
