"""Integration tests for the REST API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from jsondb.adapters.inbound.rest_api import create_app
from jsondb.application import TableStore

PEOPLE = {
    "tableName": "people",
    "columns": [
        {"name": "name", "type": "string"},
        {"name": "age", "type": "number"},
        {"name": "email", "type": "string"},
    ],
}


@pytest.fixture
def client(store: TableStore) -> TestClient:
    """Provide a test client over a permissive store."""
    return TestClient(create_app(store))


@pytest.fixture
def strict_client(strict_store: TableStore) -> TestClient:
    return TestClient(create_app(strict_store))


@pytest.fixture
def seeded(client: TestClient) -> TestClient:
    """Client with a populated ``people`` table."""
    client.post("/tables", json=PEOPLE)
    client.post("/tables/people/records", json={"name": "Yunus", "age": 30, "email": "yunus@gmail.com"})
    client.post("/tables/people/records", json={"name": "Ali", "age": 25, "email": "ali@example.org"})
    return client


@pytest.mark.integration
class TestHealth:
    """Tests for index and health endpoints."""

    def test_index(self, client: TestClient) -> None:
        response = client.get("/")

        assert response.status_code == 200
        assert "POST /tables" in response.json()["endpoints"]

    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


@pytest.mark.integration
class TestTableEndpoints:
    """Tests for table endpoints."""

    def test_create_table(self, client: TestClient) -> None:
        response = client.post("/tables", json=PEOPLE)

        assert response.status_code == 201
        body = response.json()
        assert body["tableName"] == "people"
        assert [c["name"] for c in body["columns"]] == ["name", "age", "email"]
        assert body["data"] == []

    def test_create_duplicate(self, client: TestClient) -> None:
        client.post("/tables", json=PEOPLE)

        response = client.post("/tables", json=PEOPLE)

        assert response.status_code == 409
        assert "already exists" in response.json()["detail"]

    def test_create_with_empty_column_name(self, client: TestClient) -> None:
        response = client.post(
            "/tables", json={"tableName": "bad", "columns": [{"name": "", "type": "string"}]}
        )

        assert response.status_code == 400

    def test_create_with_invalid_name(self, client: TestClient) -> None:
        response = client.post("/tables", json={**PEOPLE, "tableName": ".hidden"})

        assert response.status_code == 400

    def test_create_missing_body_fields(self, client: TestClient) -> None:
        response = client.post("/tables", json={"tableName": "people"})

        assert response.status_code == 422

    def test_list_tables(self, client: TestClient) -> None:
        client.post("/tables", json=PEOPLE)
        client.post("/tables", json={**PEOPLE, "tableName": "archive"})

        assert client.get("/tables").json() == ["archive", "people"]

    def test_get_table(self, seeded: TestClient) -> None:
        response = seeded.get("/tables/people")

        assert response.status_code == 200
        body = response.json()
        assert body["tableName"] == "people"
        assert len(body["columns"]) == 3
        assert [r["name"] for r in body["data"]] == ["Yunus", "Ali"]

    def test_get_missing_table(self, client: TestClient) -> None:
        assert client.get("/tables/ghost").status_code == 404

    def test_delete_table(self, seeded: TestClient) -> None:
        response = seeded.delete("/tables/people")

        assert response.status_code == 200
        assert seeded.get("/tables/people").status_code == 404

    def test_delete_missing_table(self, client: TestClient) -> None:
        assert client.delete("/tables/ghost").status_code == 404


@pytest.mark.integration
class TestRecordEndpoints:
    """Tests for record endpoints."""

    def test_insert(self, seeded: TestClient) -> None:
        response = seeded.post("/tables/people/records", json={"name": "Khalid", "id": "x"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Record added"
        assert body["record"]["name"] == "Khalid"
        assert body["record"]["id"] != "x"

    def test_insert_missing_table(self, client: TestClient) -> None:
        response = client.post("/tables/ghost/records", json={"name": "Ali"})

        assert response.status_code == 404
        assert client.get("/tables").json() == []

    def test_insert_non_object(self, seeded: TestClient) -> None:
        response = seeded.post("/tables/people/records", json=["Ali"])

        assert response.status_code == 422

    def test_list_records(self, seeded: TestClient) -> None:
        response = seeded.get("/tables/people/records")

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == ["Yunus", "Ali"]

    @pytest.mark.parametrize(
        "expression,names",
        [
            ("age>26", ["Yunus"]),
            ("age>=25", ["Yunus", "Ali"]),
            ("name:contains:ali", ["Ali"]),
            ("name==YUNUS", ["Yunus"]),
            ("email:endsWith:.org", ["Ali"]),
            ("age>100", []),
            ("garbage,age<30", ["Ali"]),
        ],
    )
    def test_filter(self, seeded: TestClient, expression: str, names: list[str]) -> None:
        response = seeded.get("/tables/people/records", params={"filter": expression})

        assert response.status_code == 200
        assert [r["name"] for r in response.json()] == names

    def test_filter_strict_mode(self, strict_client: TestClient) -> None:
        strict_client.post("/tables", json=PEOPLE)

        response = strict_client.get("/tables/people/records", params={"filter": "garbage"})

        assert response.status_code == 400

    def test_list_records_missing_table(self, client: TestClient) -> None:
        assert client.get("/tables/ghost/records").status_code == 404

    def test_get_record(self, seeded: TestClient) -> None:
        yunus = seeded.get("/tables/people/records").json()[0]

        response = seeded.get(f"/tables/people/records/{yunus['id']}")

        assert response.status_code == 200
        assert response.json() == yunus

    def test_get_missing_record(self, seeded: TestClient) -> None:
        assert seeded.get("/tables/people/records/nope").status_code == 404

    def test_update_record(self, seeded: TestClient) -> None:
        yunus = seeded.get("/tables/people/records").json()[0]

        response = seeded.put(
            f"/tables/people/records/{yunus['id']}", json={"age": 31, "id": "other"}
        )

        assert response.status_code == 200
        record = response.json()["record"]
        assert record == {**yunus, "age": 31}
        assert seeded.get(f"/tables/people/records/{yunus['id']}").json()["age"] == 31

    def test_update_missing_record(self, seeded: TestClient) -> None:
        assert seeded.put("/tables/people/records/nope", json={"age": 1}).status_code == 404

    def test_delete_record(self, seeded: TestClient) -> None:
        yunus = seeded.get("/tables/people/records").json()[0]

        response = seeded.delete(f"/tables/people/records/{yunus['id']}")

        assert response.status_code == 200
        assert [r["name"] for r in seeded.get("/tables/people/records").json()] == ["Ali"]
        assert seeded.delete(f"/tables/people/records/{yunus['id']}").status_code == 404
