from collections import defaultdict
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.routing import APIRoute

from .. import __version__

router = APIRouter()


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health", tags=["Monitoring"], summary="Health check endpoint")
async def health_check():
    return {"status": "healthy", "timestamp": _timestamp()}


@router.get("/", tags=["Monitoring"], summary="API documentation map")
async def api_index(request: Request) -> Dict[str, Any]:
    """Every route of ``app.state.api_routers``, grouped by resource: ``"VERB /path": summary``."""
    endpoints: Dict[str, Dict[str, str]] = defaultdict(dict)
    for api_router in request.app.state.api_routers:
        for route in api_router.routes:
            if not isinstance(route, APIRoute):
                continue
            group = route.tags[0] if route.tags else "other"
            for method in sorted(route.methods):
                endpoints[group][f"{method} {route.path}"] = route.summary or route.name
    return {
        "name": "ShipStation API Server",
        "version": __version__,
        "description": "Gateway for the ShipStation API v2",
        "endpoints": dict(endpoints),
    }
