"""
Operation catalog
=================

Every ShipStation action the gateway exposes, grouped by resource. Each
entry binds a tool name to a ShipStationClient method (``action``), the
input schema advertised to callers, and a shape function turning the
caller's argument bag into the positional arguments of that method.

Verb and path live on the client method; the catalog never builds URLs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..utils.errors import ValidationError
from .schemas import (
    ADDRESS,
    DIMENSIONS,
    LABEL_OUTPUT,
    MONEY,
    SHIPMENT,
    WEIGHT,
    Schema,
    boolean,
    by_id,
    input_schema,
    list_query,
    number,
    obj,
    string,
    string_list,
    update,
)

logger = logging.getLogger("shipstation.registry")

Args = Dict[str, Any]
Shape = Callable[[Args], Tuple[Any, ...]]

MAX_BULK_SHIPMENTS = 100


# =============================================================================
# Shape functions
# =============================================================================

def prune(args: Optional[Args]) -> Args:
    """Drop fields the caller left unset (``None`` or empty string)."""
    return {k: v for k, v in (args or {}).items() if v is not None and v != ""}


def query(args: Args) -> Tuple[Any, ...]:
    return (prune(args),)


def body(args: Args) -> Tuple[Any, ...]:
    return (prune(args),)


def path(name: str) -> Shape:
    def shape(args: Args) -> Tuple[Any, ...]:
        return (args[name],)
    return shape


def path_and_body(name: str) -> Shape:
    """Path id plus every other supplied field as the body."""
    def shape(args: Args) -> Tuple[Any, ...]:
        rest = prune({k: v for k, v in args.items() if k != name})
        return (args[name], rest)
    return shape


def path_and_data(name: str, data_field: str) -> Shape:
    def shape(args: Args) -> Tuple[Any, ...]:
        return (args[name], args.get(data_field) or {})
    return shape


def path_and_pick(name: str, *keys: str) -> Shape:
    """Path id plus only the listed fields, and only when supplied."""
    def shape(args: Args) -> Tuple[Any, ...]:
        return (args[name], {k: args[k] for k in keys if args.get(k)})
    return shape


def wrap_shipment(args: Args) -> Tuple[Any, ...]:
    return ({"shipments": [args["shipment"]]},)


def bulk_shipments(args: Args) -> Tuple[Any, ...]:
    shipments = args["shipments"]
    if not isinstance(shipments, list):
        raise ValidationError("shipments must be an array")
    if not 1 <= len(shipments) <= MAX_BULK_SHIPMENTS:
        raise ValidationError(
            f"shipments must contain between 1 and {MAX_BULK_SHIPMENTS} items, got {len(shipments)}"
        )
    return ({"shipments": shipments},)


def rate_request(args: Args) -> Tuple[Any, ...]:
    """Forward the request as given; it must name a shipment inline or by id."""
    if not args.get("shipment") and not args.get("shipment_id"):
        raise ValidationError("calculate_rates needs either shipment or shipment_id")
    return ({**prune(args), "rate_options": args.get("rate_options") or {}},)


def download(args: Args) -> Tuple[Any, ...]:
    return (args["file_path"], args.get("rotation"))


def shipment_tag(args: Args) -> Tuple[Any, ...]:
    return (args["shipment_id"], args["tag_name"])


# =============================================================================
# Operation record
# =============================================================================

@dataclass(frozen=True)
class Operation:
    name: str
    description: str
    input_schema: Schema
    action: str
    shape: Shape = field(default=query, repr=False)
    category: str = ""

    @property
    def required(self) -> List[str]:
        return list(self.input_schema.get("required", []))

    def to_tool(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": self.input_schema}


def op(name: str, description: str, schema: Schema, shape: Shape = query, action: Optional[str] = None) -> Operation:
    return Operation(name=name, description=description, input_schema=schema, action=action or name, shape=shape)


# =============================================================================
# SHIPMENTS
# =============================================================================

SHIPMENT_TOOLS: List[Operation] = [
    op(
        "get_shipments",
        "List shipments with optional filtering parameters",
        list_query(
            shipment_status=string("Filter by shipment status", enum=["pending", "processing", "label_purchased", "cancelled"]),
            external_shipment_id=string("Filter by external shipment ID"),
            batch_id=string("Filter by batch ID"),
            tag=string("Filter by tag name"),
            created_at_start=string("Created on or after (ISO 8601)"),
            created_at_end=string("Created on or before (ISO 8601)"),
            sort_by=string("Sort field", enum=["created_at", "modified_at"]),
            sort_dir=string("Sort direction", enum=["asc", "desc"]),
        ),
    ),
    op(
        "create_shipment",
        "Create a new shipment",
        input_schema({"shipment": SHIPMENT}, required=["shipment"]),
        wrap_shipment,
    ),
    op(
        "create_shipments_bulk",
        f"Create up to {MAX_BULK_SHIPMENTS} shipments in one request",
        input_schema(
            {"shipments": {"type": "array", "items": SHIPMENT, "minItems": 1, "maxItems": MAX_BULK_SHIPMENTS}},
            required=["shipments"],
        ),
        bulk_shipments,
        action="create_shipment",
    ),
    op("get_shipment_by_id", "Get a shipment by its ID", by_id("shipment_id", "The shipment ID"), path("shipment_id")),
    op(
        "get_shipment_by_external_id",
        "Get a shipment by its external shipment ID",
        by_id("external_shipment_id", "The external shipment ID"),
        path("external_shipment_id"),
    ),
    op(
        "update_shipment",
        "Update an existing shipment",
        update("shipment_id", "The shipment ID", "shipment_data", SHIPMENT),
        path_and_data("shipment_id", "shipment_data"),
    ),
    op("cancel_shipment", "Cancel a shipment", by_id("shipment_id", "The shipment ID to cancel"), path("shipment_id")),
    op(
        "get_shipment_rates",
        "Get the rates previously calculated for a shipment",
        by_id("shipment_id", "The shipment ID"),
        path("shipment_id"),
    ),
    op(
        "tag_shipment",
        "Add a tag to a shipment",
        input_schema(
            {"shipment_id": string("The shipment ID"), "tag_name": string("Tag to apply")},
            required=["shipment_id", "tag_name"],
        ),
        shipment_tag,
    ),
    op(
        "untag_shipment",
        "Remove a tag from a shipment",
        input_schema(
            {"shipment_id": string("The shipment ID"), "tag_name": string("Tag to remove")},
            required=["shipment_id", "tag_name"],
        ),
        shipment_tag,
    ),
]


# =============================================================================
# LABELS
# =============================================================================

LABEL_TOOLS: List[Operation] = [
    op(
        "get_labels",
        "List labels with optional filtering parameters",
        list_query(
            label_status=string("Filter by label status", enum=["processing", "completed", "error", "voided"]),
            shipment_id=string("Filter by shipment ID"),
            carrier_id=string("Filter by carrier ID"),
            tracking_number=string("Filter by tracking number"),
            batch_id=string("Filter by batch ID"),
            warehouse_id=string("Filter by warehouse ID"),
        ),
    ),
    op(
        "create_label",
        "Create a new shipping label",
        input_schema({"shipment": SHIPMENT, "test_label": boolean("Create a test label"), **LABEL_OUTPUT}, required=["shipment"]),
        body,
    ),
    op(
        "create_label_from_rate",
        "Purchase a label for a previously quoted rate",
        input_schema({"rate_id": string("The rate ID"), **LABEL_OUTPUT}, required=["rate_id"]),
        path_and_body("rate_id"),
    ),
    op(
        "create_label_from_shipment",
        "Purchase a label for an existing shipment",
        input_schema({"shipment_id": string("The shipment ID"), **LABEL_OUTPUT}, required=["shipment_id"]),
        path_and_body("shipment_id"),
    ),
    op("get_label_by_id", "Get a label by its ID", by_id("label_id", "The label ID"), path("label_id")),
    op("void_label", "Void a shipping label", by_id("label_id", "The label ID to void"), path("label_id")),
    op(
        "track_package",
        "Track a package using label ID",
        by_id("label_id", "The label ID to track"),
        path("label_id"),
        action="track_label",
    ),
    op(
        "create_return_label",
        "Create a return label for an existing label",
        input_schema({"label_id": string("The original label ID"), **LABEL_OUTPUT}, required=["label_id"]),
        path_and_body("label_id"),
    ),
]


# =============================================================================
# RATES
# =============================================================================

RATE_OPTIONS: Schema = obj(
    {
        "carrier_ids": string_list("Array of carrier IDs to get rates from"),
        "service_codes": string_list("Restrict to these service codes"),
        "package_types": string_list("Restrict to these package types"),
    }
)

RATE_TOOLS: List[Operation] = [
    op(
        "calculate_rates",
        "Calculate shipping rates for an inline shipment or an existing shipment_id",
        input_schema(
            {
                "rate_options": RATE_OPTIONS,
                "shipment": SHIPMENT,
                "shipment_id": string("Existing shipment to rate instead of an inline shipment"),
            }
        ),
        rate_request,
    ),
    op(
        "estimate_rates",
        "Estimate rates from addresses and package details without creating a shipment",
        input_schema(
            {
                "carrier_ids": string_list("Carrier IDs to quote"),
                "from_country_code": string("Origin country code"),
                "from_postal_code": string("Origin postal code"),
                "to_country_code": string("Destination country code"),
                "to_postal_code": string("Destination postal code"),
                "to_city_locality": string("Destination city"),
                "to_state_province": string("Destination state or province"),
                "weight": WEIGHT,
                "dimensions": DIMENSIONS,
                "ship_date": string("Ship date (YYYY-MM-DD)"),
            },
            required=["from_country_code", "from_postal_code", "to_country_code", "to_postal_code", "weight"],
        ),
        body,
    ),
    op("get_rate_by_id", "Get a rate by its ID", by_id("rate_id", "The rate ID"), path("rate_id")),
]


# =============================================================================
# CARRIERS & WAREHOUSES
# =============================================================================

CARRIER_TOOLS: List[Operation] = [
    op("get_carriers", "List all carriers connected to the account", list_query()),
    op("get_carrier_by_id", "Get a carrier by its ID", by_id("carrier_id", "The carrier ID"), path("carrier_id")),
    op(
        "get_carrier_services",
        "List the services offered by a carrier",
        by_id("carrier_id", "The carrier ID"),
        path("carrier_id"),
    ),
    op(
        "get_carrier_package_types",
        "List the package types a carrier supports",
        by_id("carrier_id", "The carrier ID"),
        path("carrier_id"),
    ),
    op(
        "get_carrier_options",
        "List the advanced options a carrier supports",
        by_id("carrier_id", "The carrier ID"),
        path("carrier_id"),
    ),
]

WAREHOUSE_TOOLS: List[Operation] = [
    op("get_warehouses", "List warehouses", list_query()),
    op("get_warehouse_by_id", "Get a warehouse by its ID", by_id("warehouse_id", "The warehouse ID"), path("warehouse_id")),
]


# =============================================================================
# INVENTORY
# =============================================================================

INVENTORY_WAREHOUSE: Schema = obj({"name": string("Warehouse name")})
INVENTORY_LOCATION: Schema = obj({"name": string("Location name")})

INVENTORY_TOOLS: List[Operation] = [
    op(
        "get_inventory",
        "Get inventory levels",
        input_schema(
            {
                "sku": string("Filter by SKU"),
                "inventory_warehouse_id": string("Filter by inventory warehouse ID"),
                "inventory_location_id": string("Filter by inventory location ID"),
                "group_by": string("Group by warehouse or location", enum=["warehouse", "location"]),
                "limit": number("Number of items to return"),
            }
        ),
        action="get_inventory_levels",
    ),
    op(
        "update_inventory",
        "Update SKU stock levels",
        input_schema(
            {
                "transaction_type": string(
                    "Type of update (increment, decrement, adjust, modify)",
                    enum=["increment", "decrement", "adjust", "modify"],
                ),
                "sku": string("SKU to update"),
                "quantity": number("Quantity to update"),
                "inventory_location_id": string("Inventory location ID"),
                "cost": MONEY,
                "condition": string("Inventory condition", enum=["sellable", "damaged", "expired", "qa_hold"]),
                "reason": string("Reason for update"),
                "notes": string("Additional notes"),
            },
            required=["transaction_type", "sku", "quantity", "inventory_location_id"],
        ),
        body,
    ),
    op("get_inventory_warehouses", "Get inventory warehouses", input_schema({"limit": number("Number of items to return")})),
    op(
        "create_inventory_warehouse",
        "Create a new inventory warehouse",
        input_schema({"name": string("Warehouse name")}, required=["name"]),
        body,
    ),
    op(
        "get_inventory_warehouse_by_id",
        "Get an inventory warehouse by its ID",
        by_id("inventory_warehouse_id", "The inventory warehouse ID"),
        path("inventory_warehouse_id"),
    ),
    op(
        "update_inventory_warehouse",
        "Rename an inventory warehouse",
        update("inventory_warehouse_id", "The inventory warehouse ID", "inventory_warehouse_data", INVENTORY_WAREHOUSE),
        path_and_data("inventory_warehouse_id", "inventory_warehouse_data"),
    ),
    op(
        "delete_inventory_warehouse",
        "Delete an inventory warehouse",
        by_id("inventory_warehouse_id", "The inventory warehouse ID"),
        path("inventory_warehouse_id"),
    ),
    op("get_inventory_locations", "Get inventory locations", input_schema({"limit": number("Number of items to return")})),
    op(
        "create_inventory_location",
        "Create a new inventory location",
        input_schema(
            {"name": string("Location name"), "inventory_warehouse_id": string("Warehouse ID")},
            required=["name", "inventory_warehouse_id"],
        ),
        body,
    ),
    op(
        "get_inventory_location_by_id",
        "Get an inventory location by its ID",
        by_id("inventory_location_id", "The inventory location ID"),
        path("inventory_location_id"),
    ),
    op(
        "update_inventory_location",
        "Rename an inventory location",
        update("inventory_location_id", "The inventory location ID", "inventory_location_data", INVENTORY_LOCATION),
        path_and_data("inventory_location_id", "inventory_location_data"),
    ),
    op(
        "delete_inventory_location",
        "Delete an inventory location",
        by_id("inventory_location_id", "The inventory location ID"),
        path("inventory_location_id"),
    ),
]


# =============================================================================
# BATCHES & MANIFESTS
# =============================================================================

BATCH_FIELDS: Dict[str, Schema] = {
    "batch_number": string("Batch number"),
    "external_batch_id": string("External batch ID"),
    "batch_notes": string("Notes for the batch"),
}

BATCH_MEMBERS: Dict[str, Schema] = {
    "shipment_ids": string_list("Array of shipment IDs"),
    "rate_ids": string_list("Array of rate IDs"),
}

BATCH_TOOLS: List[Operation] = [
    op(
        "get_batches",
        "List batches with optional filtering parameters",
        list_query(
            batch_number=string("Filter by batch number"),
            external_batch_id=string("Filter by external batch ID"),
            status=string("Filter by batch status"),
        ),
    ),
    op(
        "create_batch",
        "Create a new batch for bulk label processing",
        input_schema({**BATCH_FIELDS, **BATCH_MEMBERS}),
        body,
    ),
    op("get_batch_by_id", "Get a batch by its ID", by_id("batch_id", "The batch ID"), path("batch_id")),
    op(
        "get_batch_by_external_id",
        "Get a batch by its external ID",
        by_id("external_batch_id", "The external batch ID"),
        path("external_batch_id"),
    ),
    op(
        "update_batch",
        "Update batch information",
        update("batch_id", "The batch ID", "batch_data", obj(BATCH_FIELDS)),
        path_and_data("batch_id", "batch_data"),
    ),
    op("delete_batch", "Delete a batch", by_id("batch_id", "The batch ID to delete"), path("batch_id")),
    op(
        "add_to_batch",
        "Add shipments to an existing batch",
        input_schema({"batch_id": string("The batch ID"), **BATCH_MEMBERS}, required=["batch_id"]),
        path_and_pick("batch_id", "shipment_ids", "rate_ids"),
    ),
    op(
        "remove_from_batch",
        "Remove items from a batch",
        input_schema({"batch_id": string("The batch ID"), **BATCH_MEMBERS}, required=["batch_id"]),
        path_and_pick("batch_id", "shipment_ids", "rate_ids"),
    ),
    op("get_batch_errors", "Get validation errors for a batch", by_id("batch_id", "The batch ID"), path("batch_id")),
    op(
        "process_batch",
        "Process a batch to create labels for all items",
        input_schema({"batch_id": string("The batch ID"), **LABEL_OUTPUT}, required=["batch_id"]),
        path_and_pick("batch_id", "label_format", "label_layout"),
    ),
]

MANIFEST_TOOLS: List[Operation] = [
    op(
        "get_manifests",
        "List manifests with optional filtering parameters",
        list_query(
            carrier_id=string("Filter by carrier ID"),
            warehouse_id=string("Filter by warehouse ID"),
            ship_date_start=string("Filter by ship date start (YYYY-MM-DD)"),
            ship_date_end=string("Filter by ship date end (YYYY-MM-DD)"),
            created_at_start=string("Filter by creation date start (YYYY-MM-DD)"),
            created_at_end=string("Filter by creation date end (YYYY-MM-DD)"),
        ),
    ),
    op(
        "create_manifest",
        "Create a new manifest for end-of-day processing",
        input_schema(
            {
                "carrier_id": string("Carrier ID for the manifest"),
                "warehouse_id": string("Warehouse ID for the manifest"),
                "ship_date": string("Ship date for the manifest (YYYY-MM-DD)"),
                "label_ids": string_list("Array of label IDs to include in the manifest"),
                "excluded_label_ids": string_list("Array of label IDs to exclude from the manifest"),
            },
            required=["carrier_id"],
        ),
        body,
    ),
    op("get_manifest_by_id", "Get a manifest by its ID", by_id("manifest_id", "The manifest ID"), path("manifest_id")),
]


# =============================================================================
# PACKAGE TYPES, PICKUPS & TAGS
# =============================================================================

PACKAGE_TYPE: Schema = obj(
    {
        "package_code": string("Package code"),
        "name": string("Package name"),
        "description": string("Package description"),
        "dimensions": DIMENSIONS,
    }
)

PACKAGE_TYPE_TOOLS: List[Operation] = [
    op("get_package_types", "List custom package types", list_query()),
    op(
        "create_package_type",
        "Create a custom package type",
        input_schema(PACKAGE_TYPE["properties"], required=["package_code", "name"]),
        body,
    ),
    op(
        "get_package_type_by_id",
        "Get a custom package type by its ID",
        by_id("package_id", "The package type ID"),
        path("package_id"),
    ),
    op(
        "update_package_type",
        "Update a custom package type",
        update("package_id", "The package type ID", "package_data", PACKAGE_TYPE),
        path_and_data("package_id", "package_data"),
    ),
    op(
        "delete_package_type",
        "Delete a custom package type",
        by_id("package_id", "The package type ID"),
        path("package_id"),
    ),
]

PICKUP_TOOLS: List[Operation] = [
    op("get_pickups", "List scheduled pickups", list_query(carrier_id=string("Filter by carrier ID"))),
    op(
        "schedule_pickup",
        "Schedule a carrier pickup for one or more labels",
        input_schema(
            {
                "label_ids": string_list("Labels to be picked up"),
                "contact_details": obj({"name": string(), "email": string(), "phone": string()}),
                "pickup_notes": string("Notes for the driver"),
                "pickup_window": obj({"start_at": string("ISO 8601"), "end_at": string("ISO 8601")}),
                "pickup_address": ADDRESS,
            },
            required=["label_ids", "contact_details", "pickup_window"],
        ),
        body,
    ),
    op("get_pickup_by_id", "Get a pickup by its ID", by_id("pickup_id", "The pickup ID"), path("pickup_id")),
    op("cancel_pickup", "Cancel a scheduled pickup", by_id("pickup_id", "The pickup ID"), path("pickup_id")),
]

TAG_TOOLS: List[Operation] = [
    op("get_tags", "List tags defined on the account", input_schema()),
    op("create_tag", "Create a tag", input_schema({"name": string("Tag name")}, required=["name"]), body),
    op("delete_tag", "Delete a tag", by_id("tag_name", "Tag name"), path("tag_name")),
]


# =============================================================================
# TRACKING, WEBHOOKS & ACCOUNT
# =============================================================================

WEBHOOK_EVENTS = [
    "batch",
    "carrier_connected",
    "order_source_refresh_complete",
    "rate",
    "report_complete",
    "sales_orders_imported",
    "track",
]

WEBHOOK: Schema = obj(
    {
        "name": string("Webhook name"),
        "event": string("Event that triggers the webhook", enum=WEBHOOK_EVENTS),
        "url": string("Callback URL"),
        "store_id": string("Restrict to one store"),
    }
)

TRACKING_TOOLS: List[Operation] = [
    op(
        "stop_tracking",
        "Stop receiving tracking updates for a package",
        input_schema(
            {"carrier_code": string("Carrier code"), "tracking_number": string("Tracking number")},
            required=["carrier_code", "tracking_number"],
        ),
        body,
    ),
]

WEBHOOK_TOOLS: List[Operation] = [
    op("get_webhooks", "List webhooks", input_schema()),
    op(
        "create_webhook",
        "Create a webhook",
        input_schema(WEBHOOK["properties"], required=["name", "event", "url"]),
        body,
    ),
    op("get_webhook_by_id", "Get a webhook by its ID", by_id("webhook_id", "The webhook ID"), path("webhook_id")),
    op(
        "update_webhook",
        "Update a webhook",
        update("webhook_id", "The webhook ID", "webhook_data", WEBHOOK),
        path_and_data("webhook_id", "webhook_data"),
    ),
    op("delete_webhook", "Delete a webhook", by_id("webhook_id", "The webhook ID"), path("webhook_id")),
]

ACCOUNT_TOOLS: List[Operation] = [
    op("get_users", "List users on the account", list_query()),
    op(
        "get_products",
        "List products in the catalog",
        list_query(sku=string("Filter by SKU"), name=string("Filter by product name")),
    ),
    op(
        "download_file",
        "Download a label, form or manifest file; the result is base64 encoded",
        input_schema(
            {
                "file_path": string("Path below /v2/downloads/, as returned in a label's href"),
                "rotation": number("Rotate the document by this many degrees"),
            },
            required=["file_path"],
        ),
        download,
    ),
]


# =============================================================================
# REGISTRY
# =============================================================================

TOOL_CATEGORIES: Dict[str, List[Operation]] = {
    "shipments": SHIPMENT_TOOLS,
    "labels": LABEL_TOOLS,
    "rates": RATE_TOOLS,
    "carriers": CARRIER_TOOLS,
    "warehouses": WAREHOUSE_TOOLS,
    "inventory": INVENTORY_TOOLS,
    "batches": BATCH_TOOLS,
    "manifests": MANIFEST_TOOLS,
    "package_types": PACKAGE_TYPE_TOOLS,
    "pickups": PICKUP_TOOLS,
    "tags": TAG_TOOLS,
    "tracking": TRACKING_TOOLS,
    "webhooks": WEBHOOK_TOOLS,
    "account": ACCOUNT_TOOLS,
}


def _build_index() -> Dict[str, Operation]:
    index: Dict[str, Operation] = {}
    for category, operations in TOOL_CATEGORIES.items():
        for operation in operations:
            if operation.name in index:
                raise RuntimeError(f"Duplicate operation name: {operation.name}")
            index[operation.name] = Operation(
                name=operation.name,
                description=operation.description,
                input_schema=operation.input_schema,
                action=operation.action,
                shape=operation.shape,
                category=category,
            )
    logger.debug("Registered %d operations in %d categories", len(index), len(TOOL_CATEGORIES))
    return index


OPERATIONS: Dict[str, Operation] = _build_index()


def get_all_tools() -> List[Dict[str, Any]]:
    """Catalog in tool-listing form: name, description, inputSchema."""
    return [operation.to_tool() for operation in OPERATIONS.values()]


def get_tool_count() -> int:
    return len(OPERATIONS)


def get_tool_names() -> List[str]:
    return list(OPERATIONS)


def get_operation(name: str) -> Optional[Operation]:
    return OPERATIONS.get(name)


def get_categories() -> Dict[str, List[str]]:
    return {category: [o.name for o in operations] for category, operations in TOOL_CATEGORIES.items()}
