from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from ..config import DEFAULT_SHIPSTATION_BASE_URL
from ..utils.http_client import DEFAULT_TIMEOUT, HttpClient

logger = logging.getLogger("shipstation.client")

API_PREFIX = "/v2"

Params = Optional[Dict[str, Any]]
Body = Optional[Dict[str, Any]]


def _seg(value: Any) -> str:
    return quote(str(value), safe="")


class ShipStationClient:
    """One coroutine per ShipStation v2 resource action.

    Every method issues exactly one request and returns the decoded JSON
    body (``None`` for an empty 2xx body). Errors come from HttpClient.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_SHIPSTATION_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url
        self._client = HttpClient(
            base_url=base_url,
            timeout=timeout,
            headers={"api-key": api_key, "Content-Type": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.close()

    async def _call(self, method: str, path: str, *, params: Params = None, json: Body = None) -> Any:
        response = await self._client.request(method, API_PREFIX + path, params=params, json=json)
        if not response.content:
            return None
        return response.json()

    # Shipments
    async def get_shipments(self, params: Params = None) -> Any:
        return await self._call("GET", "/shipments", params=params)

    async def create_shipment(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/shipments", json=data)

    async def update_shipment(self, shipment_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("PUT", f"/shipments/{_seg(shipment_id)}", json=data)

    async def get_shipment_by_id(self, shipment_id: str) -> Any:
        return await self._call("GET", f"/shipments/{_seg(shipment_id)}")

    async def get_shipment_by_external_id(self, external_id: str) -> Any:
        return await self._call("GET", f"/shipments/external_shipment_id/{_seg(external_id)}")

    async def cancel_shipment(self, shipment_id: str) -> Any:
        return await self._call("POST", f"/shipments/{_seg(shipment_id)}/cancel")

    async def get_shipment_rates(self, shipment_id: str) -> Any:
        return await self._call("GET", f"/shipments/{_seg(shipment_id)}/rates")

    async def tag_shipment(self, shipment_id: str, tag_name: str) -> Any:
        return await self._call("POST", f"/shipments/{_seg(shipment_id)}/tags/{_seg(tag_name)}")

    async def untag_shipment(self, shipment_id: str, tag_name: str) -> Any:
        return await self._call("DELETE", f"/shipments/{_seg(shipment_id)}/tags/{_seg(tag_name)}")

    # Labels
    async def get_labels(self, params: Params = None) -> Any:
        return await self._call("GET", "/labels", params=params)

    async def create_label(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/labels", json=data)

    async def create_label_from_rate(self, rate_id: str, data: Body = None) -> Any:
        return await self._call("POST", f"/labels/rates/{_seg(rate_id)}", json=data or {})

    async def create_label_from_shipment(self, shipment_id: str, data: Body = None) -> Any:
        return await self._call("POST", f"/labels/shipment/{_seg(shipment_id)}", json=data or {})

    async def get_label_by_id(self, label_id: str) -> Any:
        return await self._call("GET", f"/labels/{_seg(label_id)}")

    async def void_label(self, label_id: str) -> Any:
        return await self._call("POST", f"/labels/{_seg(label_id)}/void")

    async def track_label(self, label_id: str) -> Any:
        return await self._call("GET", f"/labels/{_seg(label_id)}/track")

    async def create_return_label(self, label_id: str, data: Body = None) -> Any:
        return await self._call("POST", f"/labels/{_seg(label_id)}/return", json=data or {})

    # Rates
    async def calculate_rates(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/rates", json=data)

    async def estimate_rates(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/rates/estimate", json=data)

    async def get_rate_by_id(self, rate_id: str) -> Any:
        return await self._call("GET", f"/rates/{_seg(rate_id)}")

    # Carriers
    async def get_carriers(self, params: Params = None) -> Any:
        return await self._call("GET", "/carriers", params=params)

    async def get_carrier_by_id(self, carrier_id: str) -> Any:
        return await self._call("GET", f"/carriers/{_seg(carrier_id)}")

    async def get_carrier_services(self, carrier_id: str) -> Any:
        return await self._call("GET", f"/carriers/{_seg(carrier_id)}/services")

    async def get_carrier_package_types(self, carrier_id: str) -> Any:
        return await self._call("GET", f"/carriers/{_seg(carrier_id)}/packages")

    async def get_carrier_options(self, carrier_id: str) -> Any:
        return await self._call("GET", f"/carriers/{_seg(carrier_id)}/options")

    # Warehouses
    async def get_warehouses(self, params: Params = None) -> Any:
        return await self._call("GET", "/warehouses", params=params)

    async def get_warehouse_by_id(self, warehouse_id: str) -> Any:
        return await self._call("GET", f"/warehouses/{_seg(warehouse_id)}")

    # Inventory
    async def get_inventory_levels(self, params: Params = None) -> Any:
        return await self._call("GET", "/inventory", params=params)

    async def update_inventory(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/inventory", json=data)

    async def get_inventory_warehouses(self, params: Params = None) -> Any:
        return await self._call("GET", "/inventory_warehouses", params=params)

    async def create_inventory_warehouse(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/inventory_warehouses", json=data)

    async def get_inventory_warehouse_by_id(self, warehouse_id: str) -> Any:
        return await self._call("GET", f"/inventory_warehouses/{_seg(warehouse_id)}")

    async def update_inventory_warehouse(self, warehouse_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("PUT", f"/inventory_warehouses/{_seg(warehouse_id)}", json=data)

    async def delete_inventory_warehouse(self, warehouse_id: str) -> Any:
        return await self._call("DELETE", f"/inventory_warehouses/{_seg(warehouse_id)}")

    async def get_inventory_locations(self, params: Params = None) -> Any:
        return await self._call("GET", "/inventory_locations", params=params)

    async def create_inventory_location(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/inventory_locations", json=data)

    async def get_inventory_location_by_id(self, location_id: str) -> Any:
        return await self._call("GET", f"/inventory_locations/{_seg(location_id)}")

    async def update_inventory_location(self, location_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("PUT", f"/inventory_locations/{_seg(location_id)}", json=data)

    async def delete_inventory_location(self, location_id: str) -> Any:
        return await self._call("DELETE", f"/inventory_locations/{_seg(location_id)}")

    # Batches
    async def get_batches(self, params: Params = None) -> Any:
        return await self._call("GET", "/batches", params=params)

    async def create_batch(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/batches", json=data)

    async def get_batch_by_external_id(self, external_batch_id: str) -> Any:
        return await self._call("GET", f"/batches/external_batch_id/{_seg(external_batch_id)}")

    async def get_batch_by_id(self, batch_id: str) -> Any:
        return await self._call("GET", f"/batches/{_seg(batch_id)}")

    async def update_batch(self, batch_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("PUT", f"/batches/{_seg(batch_id)}", json=data)

    async def delete_batch(self, batch_id: str) -> Any:
        return await self._call("DELETE", f"/batches/{_seg(batch_id)}")

    async def add_to_batch(self, batch_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("POST", f"/batches/{_seg(batch_id)}/add", json=data)

    async def remove_from_batch(self, batch_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("POST", f"/batches/{_seg(batch_id)}/remove", json=data)

    async def get_batch_errors(self, batch_id: str) -> Any:
        return await self._call("GET", f"/batches/{_seg(batch_id)}/errors")

    async def process_batch(self, batch_id: str, data: Body = None) -> Any:
        return await self._call("POST", f"/batches/{_seg(batch_id)}/process/labels", json=data or {})

    # Manifests
    async def get_manifests(self, params: Params = None) -> Any:
        return await self._call("GET", "/manifests", params=params)

    async def create_manifest(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/manifests", json=data)

    async def get_manifest_by_id(self, manifest_id: str) -> Any:
        return await self._call("GET", f"/manifests/{_seg(manifest_id)}")

    # Package types
    async def get_package_types(self, params: Params = None) -> Any:
        return await self._call("GET", "/packages", params=params)

    async def create_package_type(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/packages", json=data)

    async def get_package_type_by_id(self, package_id: str) -> Any:
        return await self._call("GET", f"/packages/{_seg(package_id)}")

    async def update_package_type(self, package_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("PUT", f"/packages/{_seg(package_id)}", json=data)

    async def delete_package_type(self, package_id: str) -> Any:
        return await self._call("DELETE", f"/packages/{_seg(package_id)}")

    # Pickups
    async def get_pickups(self, params: Params = None) -> Any:
        return await self._call("GET", "/pickups", params=params)

    async def schedule_pickup(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/pickups", json=data)

    async def get_pickup_by_id(self, pickup_id: str) -> Any:
        return await self._call("GET", f"/pickups/{_seg(pickup_id)}")

    async def cancel_pickup(self, pickup_id: str) -> Any:
        return await self._call("DELETE", f"/pickups/{_seg(pickup_id)}")

    # Tags
    async def get_tags(self, params: Params = None) -> Any:
        return await self._call("GET", "/tags", params=params)

    async def create_tag(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/tags", json=data)

    async def delete_tag(self, tag_name: str) -> Any:
        return await self._call("DELETE", f"/tags/{_seg(tag_name)}")

    # Tracking
    async def stop_tracking(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/tracking/stop", json=data)

    # Webhooks
    async def get_webhooks(self, params: Params = None) -> Any:
        return await self._call("GET", "/environment/webhooks", params=params)

    async def create_webhook(self, data: Dict[str, Any]) -> Any:
        return await self._call("POST", "/environment/webhooks", json=data)

    async def get_webhook_by_id(self, webhook_id: str) -> Any:
        return await self._call("GET", f"/environment/webhooks/{_seg(webhook_id)}")

    async def update_webhook(self, webhook_id: str, data: Dict[str, Any]) -> Any:
        return await self._call("PUT", f"/environment/webhooks/{_seg(webhook_id)}", json=data)

    async def delete_webhook(self, webhook_id: str) -> Any:
        return await self._call("DELETE", f"/environment/webhooks/{_seg(webhook_id)}")

    # Users and products
    async def get_users(self, params: Params = None) -> Any:
        return await self._call("GET", "/users", params=params)

    async def get_products(self, params: Params = None) -> Any:
        return await self._call("GET", "/products", params=params)

    # File downloads
    async def download_file(self, file_path: str, rotation: Optional[Any] = None) -> bytes:
        params = {"rotation": rotation} if rotation else None
        path = API_PREFIX + "/downloads/" + quote(file_path.lstrip("/"), safe="/")
        response = await self._client.get(path, params=params)
        return response.content
