"""
ShipStation MCP Server
======================

Line-delimited JSON-RPC 2.0 over stdin/stdout. Every request is one JSON
value on one line; every response is written as one line. Diagnostics go to
stderr through logging, never to stdout.

Usage: shipstation-gateway-mcp [--log-level DEBUG]
"""

from __future__ import annotations

import argparse
import asyncio
import base64
import json
import logging
import sys
from typing import Any, Dict, List, Optional, Set

from .. import __version__
from ..config import get_settings, require_api_key
from ..services.shipstation import ShipStationClient
from ..utils.central_logging import setup_central_logging
from ..utils.errors import ConfigurationError, describe
from .dispatcher import Dispatcher
from .tool_registry import get_all_tools

logger = logging.getLogger("shipstation.mcp")

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "shipstation-api-server"


def _rpc_error(code: int, message: str, req_id: Any = None, data: Any = None) -> Dict[str, Any]:
    error: Dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return {"jsonrpc": "2.0", "error": error, "id": req_id}


def render_result(result: Any) -> str:
    """Pretty-printed JSON text for one content item."""
    if isinstance(result, (bytes, bytearray)):
        result = {
            "encoding": "base64",
            "data": base64.b64encode(bytes(result)).decode("ascii"),
            "size": len(result),
        }
    return json.dumps(result, indent=2, ensure_ascii=False)


class ToolServer:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher
        self._pending: Set[asyncio.Task] = set()

    async def call_tool(self, name: Optional[str], arguments: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Invoke one operation. Failures come back flagged, never raised."""
        try:
            result = await self.dispatcher.dispatch(name, arguments)
        except Exception as exc:
            message = describe(exc)
            logger.warning("Tool %s failed: %s", name, message)
            return {"content": [{"type": "text", "text": f"Error: {message}"}], "isError": True}
        return {"content": [{"type": "text", "text": render_result(result)}]}

    async def handle_request(self, body: Any) -> Optional[Dict[str, Any]]:
        """Process a single JSON-RPC request and return the response (None for notifications)."""
        if not isinstance(body, dict):
            return _rpc_error(-32600, "Invalid Request", data="request must be an object")

        method = body.get("method")
        params = body.get("params") or {}
        req_id = body.get("id")

        if body.get("jsonrpc") != "2.0":
            return _rpc_error(-32600, "Invalid Request", req_id, "jsonrpc must be '2.0'")

        if isinstance(method, str) and method.startswith("notifications/"):
            if req_id is None:
                return None
            return {"jsonrpc": "2.0", "result": {}, "id": req_id}

        if not method:
            return _rpc_error(-32600, "Invalid Request", req_id, "method is required")

        if method == "initialize":
            result: Dict[str, Any] = {
                "protocolVersion": PROTOCOL_VERSION,
                "serverInfo": {"name": SERVER_NAME, "version": __version__},
                "capabilities": {"tools": {}},
            }
        elif method == "ping":
            result = {}
        elif method == "tools/list":
            result = {"tools": get_all_tools()}
        elif method == "tools/call":
            if not isinstance(params, dict):
                return _rpc_error(-32602, "Invalid params", req_id, "params must be an object")
            result = await self.call_tool(params.get("name"), params.get("arguments"))
        else:
            return _rpc_error(-32601, "Method not found", req_id, f"'{method}' not supported")

        return {"jsonrpc": "2.0", "result": result, "id": req_id}

    async def handle_line(self, line: str) -> Optional[Any]:
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            return _rpc_error(-32700, "Parse error", data=str(e))

        if isinstance(message, list):
            if not message:
                return _rpc_error(-32600, "Invalid Request", data="empty batch")
            responses: List[Dict[str, Any]] = [
                r for r in await asyncio.gather(*(self.handle_request(m) for m in message)) if r is not None
            ]
            return responses or None
        return await self.handle_request(message)

    async def _respond(self, line: str, stdout) -> None:
        response = await self.handle_line(line)
        if response is not None:
            stdout.write(json.dumps(response, ensure_ascii=False) + "\n")
            stdout.flush()

    async def serve(self, stdin=None, stdout=None) -> None:
        """Read requests until EOF; each line is handled concurrently."""
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout
        logger.info("ShipStation MCP server running on stdio")

        while True:
            line = await asyncio.to_thread(stdin.readline)
            if not line:
                break
            line = line.strip()
            if not line:
                continue
            task = asyncio.create_task(self._respond(line, stdout))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        if self._pending:
            await asyncio.gather(*self._pending)
        logger.info("stdin closed, shutting down")


async def _run(server: ToolServer, client: ShipStationClient) -> None:
    try:
        await server.serve()
    finally:
        await client.close()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="ShipStation MCP server (stdio)")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_central_logging(args.log_level or settings.log_level, settings.log_dir)

    try:
        api_key = require_api_key(settings)
    except ConfigurationError as e:
        sys.stderr.write(f"Error: {e}\n")
        sys.stderr.flush()
        sys.exit(1)

    client = ShipStationClient(api_key, base_url=settings.base_url, timeout=settings.request_timeout)
    server = ToolServer(Dispatcher(client))
    try:
        asyncio.run(_run(server, client))
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    main()
