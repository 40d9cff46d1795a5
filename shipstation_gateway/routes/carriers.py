from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from ..mcp.dispatcher import Dispatcher
from .deps import get_dispatcher, query_args

router = APIRouter(prefix="/api/carriers", tags=["carriers"])


@router.get("", summary="List carriers")
async def list_carriers(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_carriers", query_args(request))


@router.get("/{carrier_id}", summary="Get carrier by ID")
async def get_carrier(carrier_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_carrier_by_id", {"carrier_id": carrier_id})


@router.get("/{carrier_id}/services", summary="Get carrier services")
async def get_carrier_services(carrier_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_carrier_services", {"carrier_id": carrier_id})


@router.get("/{carrier_id}/packages", summary="Get carrier package types")
async def get_carrier_package_types(carrier_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_carrier_package_types", {"carrier_id": carrier_id})


@router.get("/{carrier_id}/options", summary="Get carrier options")
async def get_carrier_options(carrier_id: str, dispatcher: Dispatcher = Depends(get_dispatcher)):
    return await dispatcher.dispatch("get_carrier_options", {"carrier_id": carrier_id})
