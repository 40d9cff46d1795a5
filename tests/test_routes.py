"""
End-to-end tests for the REST front end: TestClient -> routes -> dispatcher
-> ShipStationClient -> MockTransport.
"""

import pytest

from shipstation_gateway.utils.errors import TransportError


class TestShipmentRoutes:
    def test_upstream_404_becomes_local_404(self, client, upstream):
        upstream.stub("GET", "/v2/shipments/se-404", 404, json_body={"message": "not found"})

        response = client.get("/api/shipments/se-404")

        assert response.status_code == 404
        body = response.json()
        assert body["error"].startswith("ShipStation API Error 404")
        assert body["path"] == "/api/shipments/se-404"
        assert "timestamp" in body

    def test_create_single_shipment(self, client, upstream, sample_shipment):
        created = {"shipments": [{"shipment_id": "se-1", "shipment_status": "pending"}], "has_errors": False}
        upstream.stub("POST", "/v2/shipments", 201, json_body=created)

        response = client.post("/api/shipments", json=sample_shipment)

        assert response.status_code == 201
        assert response.json() == created
        assert len(upstream.requests) == 1
        assert upstream.last.method == "POST"
        assert upstream.last.url.path == "/v2/shipments"
        assert upstream.last_json() == {"shipments": [sample_shipment]}

    def test_create_bulk_envelope_is_not_rewrapped(self, client, upstream, sample_shipment):
        upstream.stub("POST", "/v2/shipments", 200, json_body={"shipments": []})
        envelope = {"shipments": [sample_shipment, sample_shipment]}

        response = client.post("/api/shipments", json=envelope)

        assert response.status_code == 201
        assert upstream.last_json() == envelope

    def test_empty_bulk_rejected_before_upstream(self, client, upstream):
        response = client.post("/api/shipments", json={"shipments": []})

        assert response.status_code == 500
        assert "shipments" in response.json()["error"]
        assert upstream.requests == []

    def test_list_forwards_query_string(self, client, upstream):
        upstream.stub("GET", "/v2/shipments", json_body={"shipments": [], "total": 0})

        response = client.get("/api/shipments", params={"page": 3, "shipment_status": "pending"})

        assert response.status_code == 200
        assert dict(upstream.last.url.params) == {"page": "3", "shipment_status": "pending"}

    def test_cancel_is_put_locally_and_post_upstream(self, client, upstream):
        upstream.stub("POST", "/v2/shipments/se-1/cancel", 204)

        response = client.put("/api/shipments/se-1/cancel")

        assert response.status_code == 200
        assert response.json() is None
        assert upstream.last.method == "POST"

    def test_external_id_lookup(self, client, upstream):
        upstream.stub("GET", "/v2/shipments/external_shipment_id/ORD-1", json_body={"shipment_id": "se-1"})

        response = client.get("/api/shipments/external/ORD-1")

        assert response.json() == {"shipment_id": "se-1"}

    def test_tag_shipment(self, client, upstream):
        upstream.stub("POST", "/v2/shipments/se-1/tags/rush", 204)

        assert client.post("/api/shipments/se-1/tags/rush").status_code == 200


class TestLabelRoutes:
    def test_create_label_returns_201(self, client, upstream, sample_shipment):
        upstream.stub("POST", "/v2/labels", 200, json_body={"label_id": "se-l1"})

        response = client.post("/api/labels", json={"shipment": sample_shipment})

        assert response.status_code == 201
        assert upstream.last_json() == {"shipment": sample_shipment}

    def test_label_from_rate(self, client, upstream):
        upstream.stub("POST", "/v2/labels/rates/se-r1", 200, json_body={"label_id": "se-l1"})

        response = client.post("/api/labels/rates/se-r1", json={"label_format": "pdf"})

        assert response.status_code == 201
        assert upstream.last_json() == {"label_format": "pdf"}

    def test_void_label(self, client, upstream):
        upstream.stub("POST", "/v2/labels/se-l1/void", json_body={"approved": True})

        response = client.put("/api/labels/se-l1/void")

        assert response.json() == {"approved": True}
        assert upstream.last.method == "POST"


class TestRateRoutes:
    def test_calculate_rates_passes_body(self, client, upstream, sample_shipment):
        upstream.stub("POST", "/v2/rates", json_body={"rate_response": {"rates": []}})
        body = {"rate_options": {"carrier_ids": ["se-1"]}, "shipment": sample_shipment}

        response = client.post("/api/rates", json=body)

        assert response.status_code == 200
        assert upstream.last_json() == body

    def test_calculate_rates_without_options(self, client, upstream, sample_shipment):
        upstream.stub("POST", "/v2/rates", json_body={})

        client.post("/api/rates", json={"shipment": sample_shipment})

        assert upstream.last_json() == {"rate_options": {}, "shipment": sample_shipment}

    def test_calculate_rates_for_existing_shipment(self, client, upstream):
        upstream.stub("POST", "/v2/rates", json_body={"rate_response": {"rates": []}})
        body = {"shipment_id": "se-1", "rate_options": {"carrier_ids": ["se-123890"]}}

        response = client.post("/api/rates", json=body)

        assert response.status_code == 200
        assert len(upstream.requests) == 1
        assert upstream.last_json() == body


class TestResourceRoutes:
    def test_carriers_page_size(self, client, upstream):
        upstream.stub("GET", "/v2/carriers", json_body={"carriers": []})

        response = client.get("/api/carriers?page_size=5")

        assert response.status_code == 200
        assert dict(upstream.last.url.params) == {"page_size": "5"}

    def test_inventory_warehouse_update(self, client, upstream):
        upstream.stub("PUT", "/v2/inventory_warehouses/iw-1", 204)

        response = client.put("/api/inventory-warehouses/iw-1", json={"name": "East"})

        assert response.status_code == 200
        assert upstream.last_json() == {"name": "East"}

    def test_update_without_body_is_rejected(self, client, upstream):
        response = client.put("/api/batches/b-1")

        assert response.status_code == 500
        assert upstream.requests == []

    def test_add_to_batch_forwards_only_ids(self, client, upstream):
        upstream.stub("POST", "/v2/batches/b-1/add", 204)

        client.post("/api/batches/b-1/add", json={"shipment_ids": ["se-1"], "label_layout": "4x6"})

        assert upstream.last_json() == {"shipment_ids": ["se-1"]}

    def test_process_batch(self, client, upstream):
        upstream.stub("POST", "/v2/batches/b-1/process/labels", 204)

        client.post("/api/batches/b-1/process", json={"label_format": "pdf"})

        assert upstream.last_json() == {"label_format": "pdf"}

    @pytest.mark.parametrize(
        "method, path, upstream_method, upstream_path, status",
        [
            ("post", "/api/manifests", "POST", "/v2/manifests", 201),
            ("post", "/api/tags", "POST", "/v2/tags", 201),
            ("post", "/api/webhooks", "POST", "/v2/environment/webhooks", 201),
            ("delete", "/api/pickups/p-1", "DELETE", "/v2/pickups/p-1", 200),
            ("get", "/api/users", "GET", "/v2/users", 200),
            ("get", "/api/products", "GET", "/v2/products", 200),
            ("get", "/api/warehouses/w-1", "GET", "/v2/warehouses/w-1", 200),
            ("get", "/api/packages", "GET", "/v2/packages", 200),
        ],
    )
    def test_route_maps_to_upstream(self, client, upstream, method, path, upstream_method, upstream_path, status):
        upstream.stub(upstream_method, upstream_path, json_body={"ok": True})
        kwargs = {"json": {"carrier_id": "se-1", "name": "n", "event": "track", "url": "https://h"}} if method == "post" else {}

        response = getattr(client, method)(path, **kwargs)

        assert response.status_code == status
        assert upstream.last.method == upstream_method
        assert upstream.last.url.path == upstream_path


class TestDownloadRoute:
    @pytest.mark.parametrize(
        "file_path, content_type",
        [
            ("10/abc/label.pdf", "application/pdf"),
            ("10/abc/label.png", "image/png"),
            ("10/abc/label.zpl", "text/plain"),
            ("10/abc/manifest.bin", "application/octet-stream"),
        ],
    )
    def test_content_type_from_extension(self, client, upstream, file_path, content_type):
        upstream.stub("GET", f"/v2/downloads/{file_path}", content=b"DATA")

        response = client.get(f"/api/download/{file_path}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith(content_type)
        assert response.content == b"DATA"

    def test_rotation_is_forwarded(self, client, upstream):
        upstream.stub("GET", "/v2/downloads/label.pdf", content=b"%PDF")

        client.get("/api/download/label.pdf?rotation=180")

        assert upstream.last.url.params["rotation"] == "180"


class TestErrorTranslation:
    def test_transport_failure_is_500(self, app, client):
        dispatcher = app.state.dispatcher

        async def fail(*args, **kwargs):
            raise TransportError("ShipStation request failed: GET /v2/users: refused")

        dispatcher.client.get_users = fail
        response = client.get("/api/users")

        assert response.status_code == 500
        assert response.json()["error"].startswith("ShipStation request failed")
        assert response.json()["path"] == "/api/users"
