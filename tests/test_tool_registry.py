import inspect

import pytest

from shipstation_gateway.mcp import tool_registry
from shipstation_gateway.mcp.schemas import ADDRESS, SHIPMENT
from shipstation_gateway.services.shipstation import ShipStationClient


def test_catalog_is_non_empty_and_unique():
    names = tool_registry.get_tool_names()
    assert names
    assert len(names) == len(set(names))
    assert tool_registry.get_tool_count() == len(names)


def test_tool_view_has_name_description_and_schema():
    for tool in tool_registry.get_all_tools():
        assert set(tool) == {"name", "description", "inputSchema"}
        assert tool["description"]
        assert tool["inputSchema"]["type"] == "object"


@pytest.mark.parametrize("name", tool_registry.get_tool_names())
def test_every_operation_maps_to_a_client_coroutine(name):
    operation = tool_registry.get_operation(name)
    method = getattr(ShipStationClient, operation.action, None)
    assert method is not None, f"{name} -> {operation.action} missing on client"
    assert inspect.iscoroutinefunction(method)


@pytest.mark.parametrize("name", tool_registry.get_tool_names())
def test_required_fields_are_declared_properties(name):
    schema = tool_registry.get_operation(name).input_schema
    assert set(schema.get("required", [])) <= set(schema["properties"])


def test_categories_cover_every_operation():
    categorized = [n for names in tool_registry.get_categories().values() for n in names]
    assert sorted(categorized) == sorted(tool_registry.get_tool_names())
    assert tool_registry.get_operation("void_label").category == "labels"


def test_known_operations_present():
    names = set(tool_registry.get_tool_names())
    for expected in (
        "get_shipments",
        "create_shipment",
        "create_shipments_bulk",
        "create_label",
        "calculate_rates",
        "get_carriers",
        "add_to_batch",
        "process_batch",
        "create_manifest",
        "download_file",
    ):
        assert expected in names


def test_shipment_schema_is_shared_fragment():
    create = tool_registry.get_operation("create_shipment").input_schema
    rates = tool_registry.get_operation("calculate_rates").input_schema
    assert create["properties"]["shipment"] is SHIPMENT
    assert rates["properties"]["shipment"] is SHIPMENT
    assert SHIPMENT["properties"]["ship_to"] is ADDRESS


def test_unknown_operation_lookup_returns_none():
    assert tool_registry.get_operation("does_not_exist") is None


def test_prune_drops_unset_fields_only():
    assert tool_registry.prune({"a": None, "b": "", "c": 0, "d": False, "e": "x"}) == {"c": 0, "d": False, "e": "x"}
    assert tool_registry.prune(None) == {}
