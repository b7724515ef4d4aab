"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from apidoc.core.settings import DocsConfig, SecurityHeader
from apidoc.services.apidoc_service import ApiDoc

USERS_YAML = b"""
create:
  summary: Create a user
  tags: [users]
  parameters:
    - in: body
      name: body
      required: true
      type: object
      schema:
        type: object
        properties:
          name:
            type: string
        required: [name]
  responses:
    200:
      description: OK
      schema:
        type: object
        properties:
          id:
            type: integer
list:
  summary: List users
  tags: [users]
  parameters:
    - in: query
      name: page
      type: integer
  responses:
    200:
      description: OK
untagged:
  summary: Broken entry
  tags: []
  responses:
    200:
      description: OK
"""


class CountingLoader:
    """Doc loader recording every requested file key."""

    def __init__(self, files: dict[str, bytes]) -> None:
        self.files = files
        self.calls: list[str] = []

    def __call__(self, key: str) -> bytes:
        self.calls.append(key)
        return self.files[key]


@pytest.fixture
def loader() -> CountingLoader:
    return CountingLoader({"users.yaml": USERS_YAML})


@pytest.fixture
def docs_config() -> DocsConfig:
    return DocsConfig(
        base_path="/api/v1",
        title="Test API",
        description="Test API description",
        version="1.2.3",
        ui_url="http://ui.example.com/",
        security_headers=(
            SecurityHeader(name="Authorization", description="Bearer token"),
        ),
    )


@pytest.fixture
def make_apidoc(
    docs_config: DocsConfig, loader: CountingLoader
) -> Callable[..., ApiDoc]:
    """Factory for ApiDoc instances sharing the test loader."""

    def _make(config: DocsConfig | None = None) -> ApiDoc:
        return ApiDoc(config or docs_config, loader=loader)

    return _make


@pytest.fixture
def apidoc(make_apidoc: Callable[..., ApiDoc]) -> ApiDoc:
    return make_apidoc()


@pytest.fixture
def application(apidoc: ApiDoc) -> FastAPI:
    """Bare FastAPI app with the doc routes installed."""
    app = FastAPI()
    apidoc.install(app)
    return app


@pytest.fixture
async def async_client(application: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client for async tests."""
    transport = ASGITransport(app=application)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
