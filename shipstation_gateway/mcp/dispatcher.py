from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from ..services.shipstation import ShipStationClient
from ..utils.errors import UnknownOperationError, ValidationError
from .tool_registry import OPERATIONS, Operation

logger = logging.getLogger("shipstation.dispatch")


class Dispatcher:
    """
    Resolves an operation name plus argument bag to one ShipStationClient call.

    Stateless apart from the client it was given; both front ends share one
    instance.
    """

    def __init__(self, client: ShipStationClient, operations: Optional[Dict[str, Operation]] = None) -> None:
        self.client = client
        self.operations = operations if operations is not None else OPERATIONS

    def resolve(self, name: Optional[str]) -> Operation:
        operation = self.operations.get(name) if name else None
        if operation is None:
            raise UnknownOperationError(name)
        return operation

    async def dispatch(self, name: Optional[str], arguments: Optional[Dict[str, Any]] = None) -> Any:
        operation = self.resolve(name)
        args = dict(arguments or {})

        missing = [key for key in operation.required if args.get(key) is None]
        if missing:
            raise ValidationError(f"Missing required argument(s) for {operation.name}: {', '.join(missing)}")

        call_args = operation.shape(args)
        method = getattr(self.client, operation.action)

        start = time.perf_counter()
        try:
            return await method(*call_args)
        finally:
            logger.info(
                "%s -> %s (%.1fms)", operation.name, operation.action, (time.perf_counter() - start) * 1000
            )
