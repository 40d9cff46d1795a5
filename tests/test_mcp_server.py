"""
Tests for the stdio tool server: JSON-RPC handling, result envelopes and
the line loop.
"""

import base64
import io
import json
from unittest.mock import patch

import pytest

from shipstation_gateway.config import Settings
from shipstation_gateway.mcp import server as mcp_server
from shipstation_gateway.mcp.server import PROTOCOL_VERSION, ToolServer, render_result
from shipstation_gateway.mcp.tool_registry import get_all_tools


@pytest.fixture
def tool_server(dispatcher):
    return ToolServer(dispatcher)


def _call(name, arguments=None, req_id=1):
    return {"jsonrpc": "2.0", "id": req_id, "method": "tools/call", "params": {"name": name, "arguments": arguments}}


class TestJsonRpc:
    @pytest.mark.asyncio
    async def test_initialize(self, tool_server):
        response = await tool_server.handle_request({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}})

        assert response["id"] == 1
        assert response["result"]["protocolVersion"] == PROTOCOL_VERSION
        assert "tools" in response["result"]["capabilities"]
        assert response["result"]["serverInfo"]["name"]

    @pytest.mark.asyncio
    async def test_tools_list_returns_catalog(self, tool_server):
        response = await tool_server.handle_request({"jsonrpc": "2.0", "id": "a", "method": "tools/list"})

        assert response["result"]["tools"] == get_all_tools()

    @pytest.mark.asyncio
    async def test_ping(self, tool_server):
        response = await tool_server.handle_request({"jsonrpc": "2.0", "id": 7, "method": "ping"})
        assert response == {"jsonrpc": "2.0", "result": {}, "id": 7}

    @pytest.mark.asyncio
    async def test_notification_gets_no_response(self, tool_server):
        assert await tool_server.handle_request({"jsonrpc": "2.0", "method": "notifications/initialized"}) is None

    @pytest.mark.asyncio
    async def test_unknown_method(self, tool_server):
        response = await tool_server.handle_request({"jsonrpc": "2.0", "id": 3, "method": "resources/list"})
        assert response["error"]["code"] == -32601

    @pytest.mark.asyncio
    async def test_wrong_version(self, tool_server):
        response = await tool_server.handle_request({"jsonrpc": "1.0", "id": 3, "method": "ping"})
        assert response["error"]["code"] == -32600
        assert response["id"] == 3

    @pytest.mark.asyncio
    async def test_parse_error(self, tool_server):
        response = await tool_server.handle_line("{not json")
        assert response["error"]["code"] == -32700
        assert response["id"] is None

    @pytest.mark.asyncio
    async def test_batch_request(self, tool_server):
        line = json.dumps([
            {"jsonrpc": "2.0", "id": 1, "method": "ping"},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
        ])
        response = await tool_server.handle_line(line)
        assert response == [{"jsonrpc": "2.0", "result": {}, "id": 1}]


class TestToolsCall:
    @pytest.mark.asyncio
    async def test_unknown_tool_is_flagged_not_raised(self, tool_server):
        response = await tool_server.handle_request(_call("launch_rocket", {}))

        result = response["result"]
        assert result["isError"] is True
        assert result["content"] == [{"type": "text", "text": "Error: Unknown tool: launch_rocket"}]

    @pytest.mark.asyncio
    async def test_get_carriers_round_trip(self, tool_server, upstream):
        carriers = {"carriers": [{"carrier_id": "se-1", "friendly_name": "USPS"}]}
        upstream.stub("GET", "/v2/carriers", json_body=carriers)

        response = await tool_server.handle_request(_call("get_carriers", {"page_size": 5}))

        assert len(upstream.requests) == 1
        assert upstream.last.method == "GET"
        assert upstream.last.url.path == "/v2/carriers"
        assert dict(upstream.last.url.params) == {"page_size": "5"}
        result = response["result"]
        assert "isError" not in result
        assert result["content"] == [{"type": "text", "text": json.dumps(carriers, indent=2)}]

    @pytest.mark.asyncio
    async def test_upstream_404_is_flagged(self, tool_server, upstream):
        upstream.stub("GET", "/v2/shipments/se-missing", 404, json_body={"message": "Shipment not found"})

        response = await tool_server.handle_request(_call("get_shipment_by_id", {"shipment_id": "se-missing"}))

        result = response["result"]
        assert result["isError"] is True
        text = result["content"][0]["text"]
        assert text.startswith("Error: ShipStation API Error 404")
        assert "Shipment not found" in text

    @pytest.mark.asyncio
    async def test_create_shipment_wraps_single_object(self, tool_server, upstream, sample_shipment):
        upstream.stub("POST", "/v2/shipments", 200, json_body={"shipments": [{"shipment_id": "se-1"}]})

        await tool_server.handle_request(_call("create_shipment", {"shipment": sample_shipment}))

        assert upstream.last_json() == {"shipments": [sample_shipment]}

    @pytest.mark.asyncio
    async def test_validation_error_is_flagged(self, tool_server, upstream):
        response = await tool_server.handle_request(_call("create_shipments_bulk", {"shipments": []}))

        assert response["result"]["isError"] is True
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_flagged(self, tool_server):
        with patch.object(tool_server.dispatcher, "dispatch", side_effect=RuntimeError("boom")):
            result = await tool_server.call_tool("get_users", {})

        assert result == {"content": [{"type": "text", "text": "Error: boom"}], "isError": True}

    @pytest.mark.asyncio
    async def test_download_is_base64_encoded(self, tool_server, upstream):
        upstream.stub("GET", "/v2/downloads/label.png", content=b"\x89PNG")

        result = await tool_server.call_tool("download_file", {"file_path": "label.png"})

        payload = json.loads(result["content"][0]["text"])
        assert payload["encoding"] == "base64"
        assert base64.b64decode(payload["data"]) == b"\x89PNG"
        assert payload["size"] == 4


def test_render_result_pretty_prints():
    assert render_result({"a": 1}) == '{\n  "a": 1\n}'
    assert render_result(None) == "null"


class TestServeLoop:
    @pytest.mark.asyncio
    async def test_one_response_line_per_request(self, tool_server):
        stdin = io.StringIO(
            "\n".join([
                json.dumps({"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}}),
                json.dumps({"jsonrpc": "2.0", "method": "notifications/initialized"}),
                "",
                json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}),
            ]) + "\n"
        )
        stdout = io.StringIO()

        await tool_server.serve(stdin=stdin, stdout=stdout)

        lines = stdout.getvalue().splitlines()
        assert len(lines) == 2
        responses = {r["id"]: r for r in map(json.loads, lines)}
        assert responses[1]["result"]["protocolVersion"] == PROTOCOL_VERSION
        assert len(responses[2]["result"]["tools"]) == len(get_all_tools())


class TestMain:
    def test_missing_api_key_exits_non_zero(self, capsys):
        settings = Settings(shipstation_api_key="", _env_file=None)
        with patch.object(mcp_server, "get_settings", return_value=settings), \
                patch.object(mcp_server, "setup_central_logging"), \
                patch.object(mcp_server.asyncio, "run") as run:
            with pytest.raises(SystemExit) as exc_info:
                mcp_server.main([])

        assert exc_info.value.code == 1
        assert "SHIPSTATION_API_KEY" in capsys.readouterr().err
        run.assert_not_called()

    def test_starts_server_with_configured_client(self):
        settings = Settings(shipstation_api_key="k", _env_file=None)
        with patch.object(mcp_server, "get_settings", return_value=settings), \
                patch.object(mcp_server, "setup_central_logging") as setup_logging, \
                patch.object(mcp_server.asyncio, "run") as run:
            mcp_server.main(["--log-level", "DEBUG"])

        setup_logging.assert_called_once_with("DEBUG", None)
        run.assert_called_once()
        run.call_args.args[0].close()
