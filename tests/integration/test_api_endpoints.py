import re

import pytest
from fastapi.testclient import TestClient

from apps.api.main import app

client = TestClient(app)

MISSING = {"error": "Missing required fields: a, b, operation"}


def test_health_reports_status_and_timestamp():
    response = client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "healthy"
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", body["timestamp"])


def test_hello_returns_greeting():
    response = client.get("/api/hello")
    assert response.status_code == 200
    assert response.json() == {"message": "Hello from CI/CD project! Automation is awesome!"}


def test_users_returns_three_entries():
    response = client.get("/api/users")
    assert response.status_code == 200
    users = response.json()["users"]
    assert len(users) == 3
    for user in users:
        assert set(user) == {"id", "name", "email"}
    assert [u["name"] for u in users] == ["Alice", "Bob", "Charlie"]


def test_time_returns_locale_formatted_time():
    response = client.get("/api/time")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Current time"
    assert re.fullmatch(r"\d{1,2}/\d{1,2}/\d{4}, \d{1,2}:\d{2}:\d{2} (AM|PM)", body["time"])


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"a": 5, "b": 3, "operation": "add"}, 8),
        ({"a": 10, "b": 4, "operation": "subtract"}, 6),
        ({"a": 6, "b": 7, "operation": "multiply"}, 42),
        ({"a": 20, "b": 4, "operation": "divide"}, 5),
        ({"a": 7, "b": 2, "operation": "divide"}, 3.5),
        ({"a": 0, "b": 9, "operation": "multiply"}, 0),
    ],
)
def test_calculate_success(payload, expected):
    response = client.post("/api/calculate", json=payload)
    assert response.status_code == 200
    assert response.json() == {"result": expected}


def test_divide_result_serialises_as_integer():
    response = client.post("/api/calculate", json={"a": 20, "b": 4, "operation": "divide"})
    assert response.text == '{"result":5}'


def test_divide_by_zero_is_a_successful_sentinel():
    response = client.post("/api/calculate", json={"a": 10, "b": 0, "operation": "divide"})
    assert response.status_code == 200
    assert response.json() == {"result": "Cannot divide by zero"}


@pytest.mark.parametrize(
    "payload",
    [
        {"a": 5, "operation": "add"},
        {"b": 5, "operation": "add"},
        {"a": 5, "b": 3},
        {"a": 5, "b": 3, "operation": ""},
        {"a": 5, "b": 3, "operation": None},
        {},
    ],
)
def test_calculate_missing_fields(payload):
    response = client.post("/api/calculate", json=payload)
    assert response.status_code == 400
    assert response.json() == MISSING


def test_calculate_without_body_reports_missing_fields():
    response = client.post("/api/calculate")
    assert response.status_code == 400
    assert response.json() == MISSING


@pytest.mark.parametrize("operation", ["pow", "modulo", "invalid", "ADD"])
def test_calculate_invalid_operation(operation):
    response = client.post("/api/calculate", json={"a": 5, "b": 3, "operation": operation})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid operation"}


def test_calculate_rejects_non_numeric_operand():
    response = client.post("/api/calculate", json={"a": "five", "b": 3, "operation": "add"})
    assert response.status_code == 422


@pytest.mark.parametrize("field", ["a", "b"])
def test_null_operand_is_a_type_error_not_a_missing_field(field):
    payload = {"a": 5, "b": 3, "operation": "add", field: None}
    response = client.post("/api/calculate", json=payload)
    assert response.status_code == 422

    del payload[field]
    response = client.post("/api/calculate", json=payload)
    assert response.status_code == 400
    assert response.json() == MISSING


@pytest.mark.parametrize("operation", [5, True, ["add"]])
def test_non_string_operation_is_invalid(operation):
    response = client.post("/api/calculate", json={"a": 5, "b": 3, "operation": operation})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid operation"}


def test_result_too_large_for_a_double_is_null():
    huge = 10**300
    response = client.post("/api/calculate", json={"a": huge, "b": huge, "operation": "multiply"})
    assert response.status_code == 200
    assert response.json() == {"result": None}


@pytest.mark.parametrize(
    "method, path",
    [
        ("GET", "/unknown/route"),
        ("GET", "/unknown/anything"),
        ("DELETE", "/api/users"),
        ("POST", "/health"),
        ("GET", "/api/calculate"),
    ],
)
def test_unmatched_routes_return_404(method, path):
    response = client.request(method, path)
    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}
