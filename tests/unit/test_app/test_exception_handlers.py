"""Tests for the Problem Details exception handlers."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from notify_console.app.exception_handlers import configure_exception_handlers
from notify_console.core.exceptions import NotFoundException
from notify_console.features.templates.exceptions import TemplateStoreError


class Body(BaseModel):
    name: str


@pytest.fixture
async def handler_client():
    app = FastAPI()
    configure_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise NotFoundException("Template welcome not found", extra={"template_ids": ["welcome"]})

    @app.get("/relay")
    async def relay():
        raise TemplateStoreError("Relay unreachable", type="relay-unavailable")

    @app.get("/boom")
    async def boom():
        raise RuntimeError("secret internals")

    @app.post("/items")
    async def items(body: Body):
        return body

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


async def test_app_exception_becomes_problem_details(handler_client: AsyncClient):
    response = await handler_client.get("/missing")

    assert response.status_code == 404
    assert response.json() == {
        "type": "not-found",
        "title": "Not Found",
        "status": 404,
        "detail": "Template welcome not found",
        "instance": "/missing",
        "template_ids": ["welcome"],
    }


async def test_store_error_is_bad_gateway(handler_client: AsyncClient):
    response = await handler_client.get("/relay")

    assert response.status_code == 502
    assert response.json()["type"] == "relay-unavailable"


async def test_unexpected_error_hides_details(handler_client: AsyncClient):
    response = await handler_client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "internal-error"
    assert "secret" not in body["detail"]


async def test_request_validation_errors(handler_client: AsyncClient):
    response = await handler_client.post("/items", json={})

    assert response.status_code == 422
    body = response.json()
    assert body["title"] == "Validation Error"
    assert body["errors"][0]["field"] == "body.name"
    assert body["errors"][0]["type"] == "missing"
