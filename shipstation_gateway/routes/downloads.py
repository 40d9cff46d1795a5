from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher

router = APIRouter(prefix="/api/download", tags=["downloads"])

CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".zpl": "text/plain",
}


def content_type_for(file_path: str) -> str:
    for ext, content_type in CONTENT_TYPES.items():
        if file_path.lower().endswith(ext):
            return content_type
    return "application/octet-stream"


@router.get("/{file_path:path}", summary="Download label, form or manifest file")
async def download_file(
    file_path: str,
    rotation: Optional[str] = Query(None, description="Rotate the document by this many degrees"),
    dispatcher: Dispatcher = Depends(get_dispatcher),
):
    data = await dispatcher.dispatch("download_file", {"file_path": file_path, "rotation": rotation})
    return Response(content=data, media_type=content_type_for(file_path))
