"""Integration tests for the EDIFACT gateway API.

Runs the full FastAPI app in-process through TestClient.
"""

import re
from decimal import Decimal

import pytest

from config import Settings, get_settings
from dependencies import get_codec
from domain.edifact import EdifactOrdersCodec
from main import app

ORDERS_URL = "/api/v1/edifact/orders"
STANDARDS_URL = "/api/v1/edifact/standards"

REFERENCE_MESSAGE = (
    "UNH+REF1+ORDERS:D:01B:UN:EAN010'"
    "BGM+220+PO-1001+9'"
    "DTM+137:20240115:203'"
    "NAD+BY+BUYER-GLN-1'"
    "NAD+SE+SELLER-GLN-2'"
    "LIN+1+40123456789010:EN'"
    "QTY+21:5'"
    "MOA+203:12.50'"
    "UNS+S'"
    "CNT+2:1'"
    "UNT+10+REF1'"
)

TEXT_HEADERS = {"Content-Type": "text/plain"}


@pytest.fixture
def order_payload() -> dict:
    return {
        "order_number": "PO-1001",
        "buyer_id": "BUYER-GLN-1",
        "seller_id": "SELLER-GLN-2",
        "order_date": "2024-01-15",
        "items": [
            {
                "line_number": 1,
                "product_code": "40123456789010",
                "quantity": 5,
                "unit_price": "12.50",
            }
        ],
    }


class TestEncodeEndpoint:

    def test_encode_order(self, client, order_payload):
        response = client.post(f"{ORDERS_URL}/encode", json=order_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["message_type"] == "ORDERS:D:01B:UN"
        assert data["segment_count"] == 11
        assert re.fullmatch(r"[0-9a-f]{14}", data["message_reference"])
        assert data["message"].startswith(f"UNH+{data['message_reference']}+ORDERS:D:01B:UN:EAN010'")
        assert data["message"].endswith(f"UNT+10+{data['message_reference']}'")

    def test_missing_fields(self, client, order_payload):
        order_payload["order_number"] = ""
        del order_payload["seller_id"]
        response = client.post(f"{ORDERS_URL}/encode", json=order_payload)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "missing_field"
        assert data["field"] == "order_number"
        assert data["missing_fields"] == ["order_number", "seller_id"]

    def test_no_items(self, client, order_payload):
        order_payload["items"] = []
        response = client.post(f"{ORDERS_URL}/encode", json=order_payload)

        assert response.status_code == 400
        assert response.json()["field"] == "items"

    def test_invalid_quantity(self, client, order_payload):
        order_payload["items"][0]["quantity"] = 0
        response = client.post(f"{ORDERS_URL}/encode", json=order_payload)

        assert response.status_code == 400
        assert response.json() == {
            "error": "invalid_field",
            "field": "items[0].quantity",
            "message": "Invalid value for items[0].quantity: must be positive, got 0",
        }

    def test_wrong_json_types(self, client, order_payload):
        order_payload["items"][0]["quantity"] = "many"
        response = client.post(f"{ORDERS_URL}/encode", json=order_payload)

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"


class TestDecodeEndpoint:

    def test_decode_reference_message(self, client):
        response = client.post(f"{ORDERS_URL}/decode", content=REFERENCE_MESSAGE, headers=TEXT_HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["order_number"] == "PO-1001"
        assert data["buyer_id"] == "BUYER-GLN-1"
        assert data["seller_id"] == "SELLER-GLN-2"
        assert data["order_date"] == "2024-01-15"
        assert data["status"] is None
        assert len(data["items"]) == 1
        assert data["items"][0]["quantity"] == 5
        assert Decimal(str(data["items"][0]["unit_price"])) == Decimal("12.50")

    def test_round_trip_through_api(self, client, order_payload):
        order_payload["order_number"] = "PO'1+X"
        encoded = client.post(f"{ORDERS_URL}/encode", json=order_payload).json()["message"]
        response = client.post(f"{ORDERS_URL}/decode", content=encoded, headers=TEXT_HEADERS)

        assert response.status_code == 200
        assert response.json()["order_number"] == "PO'1+X"

    def test_structural_violation(self, client):
        message = REFERENCE_MESSAGE.replace("UNT+10+REF1'", "")
        response = client.post(f"{ORDERS_URL}/decode", content=message, headers=TEXT_HEADERS)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "structural_violation"
        assert data["errors"] == {"SEQUENCE": ["Message must end with UNT segment"]}

    def test_semantic_failure(self, client):
        message = REFERENCE_MESSAGE.replace("QTY+21:5", "QTY+21:five")
        response = client.post(f"{ORDERS_URL}/decode", content=message, headers=TEXT_HEADERS)

        assert response.status_code == 422
        data = response.json()
        assert data["error"] == "semantic_extraction"
        assert data["segment"] == "QTY"

    def test_message_over_codec_limit(self, client):
        app.dependency_overrides[get_codec] = lambda: EdifactOrdersCodec(max_message_bytes=64)
        response = client.post(f"{ORDERS_URL}/decode", content=REFERENCE_MESSAGE, headers=TEXT_HEADERS)

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "oversized_input"
        assert list(data["errors"]) == ["GENERAL"]
        assert len(data["errors"]["GENERAL"]) == 1

    def test_overlong_quantity_is_unprocessable(self, client):
        message = REFERENCE_MESSAGE.replace("QTY+21:5", "QTY+21:" + "9" * 5000)
        response = client.post(f"{ORDERS_URL}/decode", content=message, headers=TEXT_HEADERS)

        assert response.status_code == 422
        assert response.json()["segment"] == "QTY"

    def test_payload_over_gateway_ceiling(self, client):
        app.dependency_overrides[get_settings] = lambda: Settings(GATEWAY_MAX_PAYLOAD_BYTES=100)
        response = client.post(f"{ORDERS_URL}/decode", content=REFERENCE_MESSAGE, headers=TEXT_HEADERS)

        assert response.status_code == 413


class TestValidateEndpoint:

    def test_valid_message(self, client):
        response = client.post(f"{ORDERS_URL}/validate", content=REFERENCE_MESSAGE, headers=TEXT_HEADERS)

        assert response.status_code == 200
        assert response.json() == {"valid": True, "errors": {}}

    def test_invalid_message_still_returns_200(self, client):
        message = REFERENCE_MESSAGE.replace("CNT+2:1", "CNT+2:4")
        response = client.post(f"{ORDERS_URL}/validate", content=message, headers=TEXT_HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert list(data["errors"]) == ["CNT"]

    def test_empty_body(self, client):
        response = client.post(f"{ORDERS_URL}/validate", content=b"", headers=TEXT_HEADERS)

        assert response.json() == {"valid": False, "errors": {"GENERAL": ["Message is empty"]}}


class TestStandardsEndpoints:

    def test_valid_gtin(self, client):
        response = client.get(f"{STANDARDS_URL}/gtin/40123456789010")

        assert response.status_code == 200
        assert response.json() == {"gtin": "40123456789010", "valid": True, "check_digit": 0}

    def test_invalid_gtin(self, client):
        data = client.get(f"{STANDARDS_URL}/gtin/4012345678901").json()

        assert data["valid"] is False
        assert data["check_digit"] is None

    def test_bulk_gtin(self, client):
        response = client.post(
            f"{STANDARDS_URL}/gtin/bulk",
            json={"gtins": ["40123456789010", "40123456789011"]},
        )

        assert response.status_code == 200
        assert response.json() == {
            "results": {"40123456789010": True, "40123456789011": False},
            "valid_count": 1,
            "invalid_count": 1,
        }

    def test_bulk_gtin_requires_values(self, client):
        response = client.post(f"{STANDARDS_URL}/gtin/bulk", json={"gtins": []})
        assert response.status_code == 422

    def test_valid_gln(self, client):
        response = client.get(f"{STANDARDS_URL}/gln/4006381333931")

        assert response.status_code == 200
        assert response.json() == {"value": "4006381333931", "valid": True, "check_digit": 1}

    def test_gln_with_wrong_check_digit(self, client):
        data = client.get(f"{STANDARDS_URL}/gln/4006381333932").json()

        assert data["valid"] is False
        assert data["check_digit"] == 1

    def test_sscc(self, client):
        assert client.get(f"{STANDARDS_URL}/sscc/106141412345678908").json() == {
            "value": "106141412345678908",
            "valid": True,
            "check_digit": 8,
        }

    def test_sscc_of_wrong_length(self, client):
        data = client.get(f"{STANDARDS_URL}/sscc/4006381333931").json()

        assert data["valid"] is False
        assert data["check_digit"] is None

    def test_gs1_checks_are_counted(self, client):
        client.get(f"{STANDARDS_URL}/gln/4006381333931")
        client.get(f"{STANDARDS_URL}/sscc/106141412345678909")
        text = client.get("/metrics").text

        assert 'standard="gln"' in text
        assert 'standard="sscc"' in text

    def test_eclass_code(self, client):
        response = client.get(f"{STANDARDS_URL}/eclass/11010203")

        assert response.json() == {
            "code": "11010203",
            "valid": True,
            "version": 11,
            "display": "11-01-02-03",
        }

    def test_eclass_unsupported_version(self, client):
        data = client.get(f"{STANDARDS_URL}/eclass/27010203").json()

        assert data["valid"] is False
        assert data["version"] == 27


class TestObservabilityEndpoints:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert set(data["components"]) == {"edifact_codec", "standards"}

    def test_metrics_after_traffic(self, client, order_payload):
        client.post(f"{ORDERS_URL}/encode", json=order_payload)
        response = client.get("/metrics")

        assert response.status_code == 200
        assert "tradedoc_edifact_messages_total" in response.text

    def test_request_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc-123"})
        assert response.headers["X-Request-ID"] == "abc-123"

    def test_request_id_is_generated(self, client):
        response = client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 36
