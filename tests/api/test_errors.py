"""
Test suite for exception handlers.

Builds a bare app with routes that raise, and checks status codes, the
error body shape and detail hiding in production.

System role: Verification of uniform API error responses
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from second_brain.api.errors import STATUS_BY_KIND, register_exception_handlers
from second_brain.core.exceptions import (
    AuthorizationError,
    EmbeddingFailure,
    GenerationFailure,
    MalformedProviderOutput,
    NotFoundError,
    QuotaExceeded,
    RateLimitExceeded,
    ValidationError,
)

ERRORS = {
    "validation": ValidationError("Bad input", field="title"),
    "authorization": AuthorizationError(),
    "not-found": NotFoundError("doc-1"),
    "embedding": EmbeddingFailure("embed failed"),
    "generation": GenerationFailure("generate failed"),
    "malformed": MalformedProviderOutput("not json", raw_output="{{"),
    "quota": QuotaExceeded(retry_after=4.2),
    "quota-unknown": QuotaExceeded(),
    "rate-limited": RateLimitExceeded(retry_after=30),
}


class Payload(BaseModel):
    count: int


def build_app(expose_details: bool = True) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app, expose_details=expose_details)

    @app.get("/raise/{name}")
    async def raise_error(name: str):
        raise ERRORS[name]

    @app.get("/boom")
    async def boom():
        raise RuntimeError("database on fire")

    @app.post("/payload")
    async def payload(body: Payload):
        return body

    return app


@pytest.fixture
def client() -> TestClient:
    return TestClient(build_app(), raise_server_exceptions=False)


@pytest.mark.parametrize(
    "name, status_code",
    [
        ("validation", 400),
        ("authorization", 403),
        ("not-found", 404),
        ("embedding", 502),
        ("generation", 502),
        ("malformed", 502),
        ("quota", 429),
        ("rate-limited", 429),
    ],
)
def test_status_per_kind(client, name, status_code) -> None:
    response = client.get(f"/raise/{name}")

    assert response.status_code == status_code
    error = response.json()["error"]
    assert error["kind"] == ERRORS[name].kind
    assert error["message"] == ERRORS[name].message
    assert STATUS_BY_KIND[error["kind"]] == status_code


def test_details_are_exposed_outside_production(client) -> None:
    error = client.get("/raise/validation").json()["error"]

    assert error["details"] == {"field": "title"}


def test_details_are_hidden_in_production() -> None:
    client = TestClient(build_app(expose_details=False), raise_server_exceptions=False)

    error = client.get("/raise/not-found").json()["error"]

    assert error == {"kind": "not_found", "message": "Document not found: doc-1"}


@pytest.mark.parametrize("name, header", [("quota", "5"), ("rate-limited", "30")])
def test_retry_after_header(client, name, header) -> None:
    response = client.get(f"/raise/{name}")

    assert response.headers["Retry-After"] == header


def test_quota_without_hint_has_no_retry_after(client) -> None:
    response = client.get("/raise/quota-unknown")

    assert response.status_code == 429
    assert "Retry-After" not in response.headers


def test_request_validation_uses_error_body(client) -> None:
    response = client.post("/payload", json={"count": "many"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["kind"] == "validation_error"
    assert error["details"]["errors"][0]["loc"] == ["body", "count"]


def test_unexpected_error_is_internal_error(client) -> None:
    response = client.get("/boom")

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["kind"] == "internal_error"
    assert error["details"] == {"error": "database on fire"}


def test_unexpected_error_hides_message_in_production() -> None:
    client = TestClient(build_app(expose_details=False), raise_server_exceptions=False)

    error = client.get("/boom").json()["error"]

    assert error == {"kind": "internal_error", "message": "Internal server error"}


@pytest.mark.parametrize(
    "method, path, status_code, kind",
    [
        ("get", "/no-such-route", 404, "not_found"),
        ("delete", "/boom", 405, "http_error"),
    ],
)
def test_framework_http_errors_use_error_body(client, method, path, status_code, kind) -> None:
    response = client.request(method.upper(), path)

    assert response.status_code == status_code
    assert response.json()["error"]["kind"] == kind
