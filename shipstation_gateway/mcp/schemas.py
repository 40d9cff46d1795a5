"""
JSON-Schema fragments shared by the operation catalog.

Schemas are advisory metadata shown to tool callers. The dispatcher only
enforces the top-level ``required`` list.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

Schema = Dict[str, Any]

LABEL_FORMATS = ["pdf", "png", "zpl"]
WEIGHT_UNITS = ["pound", "ounce", "kilogram", "gram"]
DIMENSION_UNITS = ["inch", "centimeter"]


def string(description: str = "", **extra: Any) -> Schema:
    schema: Schema = {"type": "string"}
    if description:
        schema["description"] = description
    schema.update(extra)
    return schema


def number(description: str = "") -> Schema:
    schema: Schema = {"type": "number"}
    if description:
        schema["description"] = description
    return schema


def boolean(description: str, default: bool = False) -> Schema:
    return {"type": "boolean", "description": description, "default": default}


def string_list(description: str) -> Schema:
    return {"type": "array", "items": {"type": "string"}, "description": description}


def obj(properties: Dict[str, Schema], required: Optional[List[str]] = None, description: str = "") -> Schema:
    schema: Schema = {"type": "object", "properties": properties}
    if required:
        schema["required"] = list(required)
    if description:
        schema["description"] = description
    return schema


# =============================================================================
# Fragments
# =============================================================================

ADDRESS: Schema = obj(
    {
        "name": string("Contact name"),
        "company_name": string("Company name"),
        "phone": string("Phone number"),
        "address_line1": string("Street address"),
        "address_line2": string("Apartment, suite, unit"),
        "city_locality": string("City"),
        "state_province": string("State or province code"),
        "postal_code": string("Postal code"),
        "country_code": string("Two-letter ISO country code"),
        "address_residential_indicator": string("Residential flag", enum=["unknown", "yes", "no"]),
    },
    required=["name", "address_line1", "city_locality", "state_province", "postal_code", "country_code"],
)

WEIGHT: Schema = obj(
    {"value": number(), "unit": string(enum=WEIGHT_UNITS)},
    required=["value", "unit"],
)

DIMENSIONS: Schema = obj(
    {
        "unit": string(enum=DIMENSION_UNITS),
        "length": number(),
        "width": number(),
        "height": number(),
    }
)

MONEY: Schema = obj({"amount": number(), "currency": string()})

PACKAGE: Schema = obj(
    {
        "package_code": string("Carrier package code"),
        "weight": WEIGHT,
        "dimensions": DIMENSIONS,
        "insured_value": MONEY,
    },
    required=["weight"],
)

ITEM: Schema = obj(
    {
        "name": string("Item name"),
        "sku": string("Item SKU"),
        "quantity": number("Item quantity"),
        "unit_price": number("Unit price of the item"),
    }
)

SHIPMENT: Schema = obj(
    {
        "carrier_id": string("Carrier ID"),
        "service_code": string("Service code"),
        "external_shipment_id": string("External shipment ID"),
        "ship_date": string("Ship date (YYYY-MM-DD)"),
        "create_sales_order": boolean("Whether to create a sales order for this shipment"),
        "store_id": string("Store ID associated with the shipment"),
        "notes_from_buyer": string("Notes from the buyer"),
        "notes_for_gift": string("Gift notes"),
        "is_gift": boolean("Indicates if the shipment is a gift"),
        "validate_address": string(
            "Address validation option",
            enum=["no_validation", "validate_only", "validate_and_clean"],
        ),
        "ship_to": ADDRESS,
        "ship_from": ADDRESS,
        "warehouse_id": string("Warehouse to ship from instead of ship_from"),
        "packages": {"type": "array", "items": PACKAGE},
        "items": {"type": "array", "items": ITEM, "description": "Items in the shipment (useful for sales orders)"},
    },
    required=["ship_to", "packages"],
)

PAGINATION: Dict[str, Schema] = {
    "page": number("Page number for pagination"),
    "page_size": number("Number of items per page"),
}

LABEL_OUTPUT: Dict[str, Schema] = {
    "label_format": string("Label format (pdf, png, zpl)", enum=LABEL_FORMATS),
    "label_layout": string("Label layout", enum=["4x6", "letter"]),
}


# =============================================================================
# Input schema builders
# =============================================================================

def input_schema(properties: Optional[Dict[str, Schema]] = None, required: Iterable[str] = ()) -> Schema:
    schema: Schema = {"type": "object", "properties": dict(properties or {})}
    required = list(required)
    if required:
        schema["required"] = required
    return schema


def list_query(**filters: Schema) -> Schema:
    """Paginated list with optional filters."""
    return input_schema({**PAGINATION, **filters})


def by_id(field: str, description: str) -> Schema:
    return input_schema({field: string(description)}, required=[field])


def update(field: str, description: str, data_field: str, data: Schema) -> Schema:
    return input_schema({field: string(description), data_field: data}, required=[field, data_field])
