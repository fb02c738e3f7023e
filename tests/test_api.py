"""
End-to-end API tests running the full application against a SQLite test database.
"""

import pytest
from typing import Dict
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app
from tests.conftest import TEST_PASSWORD, make_image_bytes, register_and_login


PROPERTY_FORM = {
    "title": "Modern Villa",
    "type": "villa",
    "price": "$1,234.56",
    "ethPrice": "0.5",
    "address": "Jl. Sudirman 1, Jakarta",
    "description": "Three bedrooms with a pool",
}


def image_file(name: str = "villa.png", content_type: str = "image/png", content: bytes = None):
    return {"image": (name, content if content is not None else make_image_bytes(), content_type)}


def create_property(client: TestClient, headers: Dict[str, str], with_image: bool = False, **overrides) -> dict:
    form = {**PROPERTY_FORM, **overrides}
    files = image_file() if with_image else None
    response = client.post("/api/properties", data=form, files=files, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestHealthEndpoints:
    """Test liveness and health endpoints."""

    def test_ping(self, client: TestClient):
        response = client.get("/api/ping")

        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Server is running"}

    def test_database_health(self, client: TestClient):
        assert client.get("/api/health/db").status_code == 200

    def test_unknown_route(self, client: TestClient):
        response = client.get("/api/nothing-here")

        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_development_hides_error_details(self, settings: Settings):
        development = settings.model_copy(update={"environment": "development", "auto_create_tables": False})

        with TestClient(create_app(development)) as client:
            response = client.get("/api/properties")

        assert response.status_code == 500
        data = response.json()
        assert data["error_code"] == "SCHEMA_MISMATCH"
        assert "error" not in data


class TestAuthEndpoints:
    """Test registration, login and the profile gate."""

    def test_register(self, client: TestClient):
        response = client.post(
            "/api/register",
            json={"name": "Alice", "email": "alice@example.com", "password": "secret123"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert isinstance(data["userId"], int)

    def test_register_missing_fields(self, client: TestClient):
        response = client.post("/api/register", json={"name": "Alice"})

        assert response.status_code == 400
        data = response.json()
        assert data["success"] is False
        assert data["missing"] == ["email", "password"]

    def test_register_duplicate_email(self, client: TestClient):
        payload = {"name": "Alice", "email": "alice@example.com", "password": "secret123"}
        client.post("/api/register", json=payload)
        response = client.post("/api/register", json=payload)

        assert response.status_code == 400
        assert response.json()["error_code"] == "DUPLICATE_EMAIL"

    def test_register_local_domain_email(self, client: TestClient):
        response = client.post(
            "/api/register",
            json={"name": "Root", "email": "root@localhost", "password": "secret123"}
        )

        assert response.status_code == 201
        assert response.json()["success"] is True

    def test_register_malformed_body(self, client: TestClient):
        response = client.post(
            "/api/register",
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    def test_login(self, client: TestClient):
        client.post("/api/register", json={"name": "Alice", "email": "alice@example.com", "password": TEST_PASSWORD})

        response = client.post("/api/login", json={"email": "alice@example.com", "password": TEST_PASSWORD})

        assert response.status_code == 200
        data = response.json()
        assert data["token"]
        assert data["user"]["name"] == "Alice"
        assert data["user"]["email"] == "alice@example.com"
        assert "password" not in data["user"]
        assert "password_hash" not in data["user"]

    def test_login_unknown_email(self, client: TestClient):
        response = client.post("/api/login", json={"email": "nobody@example.com", "password": "secret123"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNKNOWN_EMAIL"

    def test_login_wrong_password(self, client: TestClient):
        register_and_login(client)

        response = client.post("/api/login", json={"email": "alice@example.com", "password": "wrong"})

        assert response.status_code == 401
        assert response.json()["error_code"] == "WRONG_PASSWORD"

    def test_login_missing_fields(self, client: TestClient):
        response = client.post("/api/login", json={"email": "alice@example.com"})

        assert response.status_code == 400
        assert response.json()["missing"] == ["password"]

    def test_profile(self, client: TestClient, auth_headers: Dict[str, str]):
        response = client.get("/api/user/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["email"] == "alice@example.com"

    def test_profile_without_token(self, client: TestClient):
        response = client.get("/api/user/profile")

        assert response.status_code == 401
        assert response.json()["error_code"] == "MISSING_TOKEN"

    @pytest.mark.parametrize("header", ["Bearer not-a-token", "Bearer a.b.c"])
    def test_profile_invalid_token(self, client: TestClient, header: str):
        response = client.get("/api/user/profile", headers={"Authorization": header})

        assert response.status_code == 403
        assert response.json()["error_code"] == "INVALID_TOKEN"

    def test_profile_non_bearer_scheme(self, client: TestClient):
        response = client.get("/api/user/profile", headers={"Authorization": "Basic YWxpY2U6c2VjcmV0"})
        assert response.status_code == 401


class TestPropertyEndpoints:
    """Test property CRUD over HTTP."""

    def test_list_empty(self, client: TestClient):
        response = client.get("/api/properties")

        assert response.status_code == 200
        assert response.json() == {"success": True, "data": []}

    def test_create_requires_token(self, client: TestClient):
        response = client.post("/api/properties", data=PROPERTY_FORM)
        assert response.status_code == 401

    def test_create_property(self, client: TestClient, auth_headers: Dict[str, str]):
        data = create_property(client, auth_headers)

        assert data["title"] == "Modern Villa"
        assert data["type"] == "villa"
        assert data["price"] == 1234.56
        assert data["ethPrice"] == 0.5
        assert data["image"] is None

    def test_create_property_with_image(self, client: TestClient, auth_headers: Dict[str, str]):
        data = create_property(client, auth_headers, with_image=True)

        assert data["image"].startswith("http://testserver/uploads/image-")
        assert data["image"].endswith(".png")

        served = client.get(data["image"].replace("http://testserver", ""))
        assert served.status_code == 200
        assert served.content == make_image_bytes()

    def test_create_property_empty_file_part(self, client: TestClient, auth_headers: Dict[str, str]):
        response = client.post(
            "/api/properties",
            data=PROPERTY_FORM,
            files=image_file(name="", content=b"", content_type="application/octet-stream"),
            headers=auth_headers
        )

        assert response.status_code == 201
        assert response.json()["data"]["image"] is None

    def test_create_property_validation(self, client: TestClient, auth_headers: Dict[str, str]):
        response = client.post(
            "/api/properties",
            data={"title": "Villa", "price": "abc"},
            headers=auth_headers
        )

        assert response.status_code == 400
        data = response.json()
        assert data["missing"] == ["ethPrice", "address", "description"]
        assert data["invalid"] == ["price"]

    def test_create_property_rejects_non_image(self, client: TestClient, auth_headers: Dict[str, str]):
        response = client.post(
            "/api/properties",
            data=PROPERTY_FORM,
            files=image_file(name="notes.txt", content=b"hello", content_type="text/plain"),
            headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "UNSUPPORTED_MEDIA"

    def test_create_property_rejects_large_image(self, client: TestClient, auth_headers: Dict[str, str]):
        response = client.post(
            "/api/properties",
            data=PROPERTY_FORM,
            files=image_file(content=b"\x89PNG" + b"0" * (65 * 1024)),
            headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "PAYLOAD_TOO_LARGE"

    def test_list_newest_first(self, client: TestClient, auth_headers: Dict[str, str]):
        first = create_property(client, auth_headers, title="First")
        second = create_property(client, auth_headers, title="Second")

        data = client.get("/api/properties").json()["data"]

        assert [p["id"] for p in data] == [second["id"], first["id"]]

    def test_update_property(self, client: TestClient, auth_headers: Dict[str, str]):
        created = create_property(client, auth_headers)

        response = client.put(
            f"/api/properties/{created['id']}",
            data={"title": "Renamed", "ethPrice": "0.75"},
            headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Renamed"
        assert data["ethPrice"] == 0.75
        assert data["price"] == 1234.56
        assert data["address"] == PROPERTY_FORM["address"]

    def test_update_property_replaces_image(self, client: TestClient, auth_headers: Dict[str, str]):
        created = create_property(client, auth_headers, with_image=True)
        old_path = created["image"].replace("http://testserver", "")

        response = client.put(
            f"/api/properties/{created['id']}",
            files=image_file(name="new.gif", content=make_image_bytes("GIF"), content_type="image/gif"),
            headers=auth_headers
        )

        assert response.status_code == 200
        new_image = response.json()["data"]["image"]
        assert new_image.endswith(".gif")
        assert client.get(old_path).status_code == 404

    def test_update_requires_token(self, client: TestClient, auth_headers: Dict[str, str]):
        created = create_property(client, auth_headers)

        response = client.put(f"/api/properties/{created['id']}", data={"title": "Nope"})

        assert response.status_code == 401

    def test_update_missing_property(self, client: TestClient, auth_headers: Dict[str, str]):
        response = client.put("/api/properties/9999", data={"title": "Ghost"}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND"

    def test_delete_property(self, client: TestClient, auth_headers: Dict[str, str]):
        created = create_property(client, auth_headers, with_image=True)
        image_path = created["image"].replace("http://testserver", "")

        response = client.delete(f"/api/properties/{created['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/api/properties").json()["data"] == []
        assert client.get(image_path).status_code == 404

        again = client.delete(f"/api/properties/{created['id']}", headers=auth_headers)
        assert again.status_code == 404

    def test_delete_invalid_token(self, client: TestClient):
        response = client.delete("/api/properties/1", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 403

    def test_non_numeric_id(self, client: TestClient, auth_headers: Dict[str, str]):
        response = client.put("/api/properties/abc", data={"title": "x"}, headers=auth_headers)
        assert response.status_code == 400


class TestTransactionEndpoints:
    """Test the transaction log and dashboard statistics."""

    @staticmethod
    def transaction_payload(property_id, **overrides) -> dict:
        payload = {
            "name": "Bob",
            "email": "bob@example.com",
            "phone": "+628123456789",
            "property_id": property_id,
            "ethAmount": 0.5,
            "txHash": "0xabc123",
            "user_id": 7,
        }
        payload.update(overrides)
        return payload

    def test_create_transaction(self, client: TestClient, auth_headers: Dict[str, str]):
        created = create_property(client, auth_headers, with_image=True)

        response = client.post("/api/transactions", json=self.transaction_payload(created["id"]))

        assert response.status_code == 201
        assert isinstance(response.json()["transactionId"], int)

        listing = client.get("/api/transactions").json()["data"]
        assert len(listing) == 1
        assert listing[0]["property_title"] == "Modern Villa"
        assert listing[0]["property_image"] == created["image"]
        assert listing[0]["eth_amount"] == 0.5
        assert listing[0]["status"] == "Completed"

    def test_create_transaction_string_amount(self, client: TestClient, auth_headers: Dict[str, str]):
        created = create_property(client, auth_headers)

        response = client.post(
            "/api/transactions",
            json=self.transaction_payload(str(created["id"]), ethAmount="1.5 ETH")
        )

        assert response.status_code == 201

    def test_create_transaction_missing_fields(self, client: TestClient):
        response = client.post("/api/transactions", json={"name": "Bob"})

        assert response.status_code == 400
        assert response.json()["missing"] == ["email", "property_id", "ethAmount", "txHash"]

    def test_create_transaction_unknown_property(self, client: TestClient):
        response = client.post("/api/transactions", json=self.transaction_payload(9999))
        assert response.status_code == 404

    def test_dashboard_stats(self, client: TestClient, auth_headers: Dict[str, str]):
        created = create_property(client, auth_headers)
        create_property(client, auth_headers, title="Second")
        for amount in (0.5, 1.25):
            client.post("/api/transactions", json=self.transaction_payload(created["id"], ethAmount=amount))

        response = client.get("/api/dashboard/stats")

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalProperties"] == 2
        assert data["totalTransactions"] == 2
        assert data["pendingTransactions"] == 0
        assert data["totalEth"] == 1.75
        assert len(data["recentTransactions"]) == 2
        assert data["recentTransactions"][0]["property_title"] == "Modern Villa"
