from typing import Any, Dict, Optional

from fastapi import Request

from ..mcp.dispatcher import Dispatcher


class RequestDispatcher:
    """The shared Dispatcher, noting each operation on ``request.state`` for the access log."""

    def __init__(self, dispatcher: Dispatcher, request: Request) -> None:
        self._dispatcher = dispatcher
        self._request = request

    async def dispatch(self, name: Optional[str], arguments: Optional[Dict[str, Any]] = None) -> Any:
        self._request.state.operation = name
        return await self._dispatcher.dispatch(name, arguments)


def get_dispatcher(request: Request) -> RequestDispatcher:
    return RequestDispatcher(request.app.state.dispatcher, request)


def query_args(request: Request) -> Dict[str, Any]:
    """Query string as a flat argument bag; repeated keys keep the last value."""
    return dict(request.query_params)
