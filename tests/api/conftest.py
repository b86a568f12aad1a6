"""
Fixtures for HTTP API tests.

The app is created without running its lifespan; shared components are
replaced by a lightweight stand-in and services by AsyncMock overrides.
"""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from second_brain.api.rate_limit import FixedWindowRateLimiter
from second_brain.boundary.db.models import DocumentType
from second_brain.configs import Settings
from second_brain.configs.api import ApiSettings
from second_brain.main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="development",
        api=ApiSettings(rate_limit_requests=3, rate_limit_window_seconds=60, max_upload_bytes=10_000),
    )


@pytest.fixture
def services(settings: Settings) -> SimpleNamespace:
    """Stand-in for the startup-built ServiceContainer."""
    return SimpleNamespace(
        settings=settings,
        scheduler=AsyncMock(),
        rate_limiter=FixedWindowRateLimiter(
            max_requests=settings.api.rate_limit_requests,
            window_seconds=settings.api.rate_limit_window_seconds,
        ),
    )


@pytest.fixture
def app(settings: Settings, services: SimpleNamespace) -> FastAPI:
    app = create_app(settings)
    app.state.services = services
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def headers(owner_id: uuid.UUID) -> dict[str, str]:
    return {"X-Owner-Id": str(owner_id)}


@pytest.fixture
def make_note_row(owner_id: uuid.UUID):
    """Attribute-style document row as returned by the ORM."""

    def _make(**overrides):
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        values = {
            "id": uuid.uuid4(),
            "owner_id": owner_id,
            "title": "Untitled",
            "content": {},
            "type": DocumentType.NOTE,
            "active_index_version": None,
            "created_at": now,
            "updated_at": now,
        }
        values.update(overrides)
        return SimpleNamespace(**values)

    return _make
