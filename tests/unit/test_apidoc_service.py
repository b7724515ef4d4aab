"""Unit tests for the ApiDoc composition root."""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import pytest
from fastapi import APIRouter, FastAPI

from apidoc.core.exceptions import (
    DoubleInitError,
    EntryValidationError,
    InvalidReferenceError,
    InvalidSpecError,
    MissingNodeError,
)
from apidoc.core.settings import DocsConfig
from apidoc.schemas.field_meta import JsonTag
from apidoc.schemas.response_schema import SuccessResp
from apidoc.services.apidoc_service import ApiDoc
from apidoc.services.entry_builder import OperationSpec
from tests.conftest import USERS_YAML, CountingLoader


@dataclass
class UserQuery:
    page: Annotated[int, JsonTag("page")]


def _spec(**kwargs: object) -> OperationSpec:
    defaults: dict[str, object] = {
        "response_data": SuccessResp,
        "summary": "List users",
        "tags": ["users"],
    }
    defaults.update(kwargs)
    return OperationSpec(**defaults)  # type: ignore[arg-type]


class TestRegisterTyped:
    """Typed registration tests."""

    def test_group_prefix_loses_base_path(self, apidoc: ApiDoc) -> None:
        router = APIRouter(prefix="/api/v1/users")
        apidoc.register_typed(router, "/list", "get", _spec(query_data=UserQuery))
        entry = apidoc.registry.get("/users/list", "get")
        assert entry is not None
        assert entry.parameters[0].name == "page"

    def test_string_group(self, apidoc: ApiDoc) -> None:
        apidoc.register_typed("/api/v1", "status", "GET", _spec())
        assert "/status" in apidoc.registry

    def test_invalid_spec_raises(self, apidoc: ApiDoc) -> None:
        with pytest.raises(InvalidSpecError):
            apidoc.register_typed("", "/users", "get", _spec(tags=[]))
        assert len(apidoc.registry) == 0

    def test_invalid_method_raises(self, apidoc: ApiDoc) -> None:
        with pytest.raises(InvalidSpecError):
            apidoc.register_typed("", "/users", "trace", _spec())


class TestRegisterFromDoc:
    """Doc-file registration tests."""

    def test_register_from_doc(self, apidoc: ApiDoc, loader: CountingLoader) -> None:
        apidoc.register_from_doc("/api/v1/users", "/", "post", "users.yaml:create")
        apidoc.register_from_doc("/api/v1/users", "/", "get", "users.yaml:list")
        snapshot = apidoc.registry.snapshot()
        assert list(snapshot["/users/"]) == ["post", "get"]
        assert loader.calls == ["users.yaml"]

    def test_doc_entry_is_validated(self, apidoc: ApiDoc) -> None:
        with pytest.raises(EntryValidationError) as exc_info:
            apidoc.register_from_doc("", "/users", "get", "users.yaml:untagged")
        assert exc_info.value.field == "tags"

    def test_doc_path_ignored_outside_debug(
        self, tmp_path: Path, make_apidoc: Callable[..., ApiDoc], loader: CountingLoader
    ) -> None:
        apidoc = make_apidoc(DocsConfig(doc_file_path=tmp_path, debug=False))
        apidoc.register_from_doc("", "/users", "get", "users.yaml:list")
        assert loader.calls == ["users.yaml"]

    def test_doc_path_used_in_debug(
        self, tmp_path: Path, make_apidoc: Callable[..., ApiDoc], loader: CountingLoader
    ) -> None:
        (tmp_path / "users.yaml").write_bytes(USERS_YAML)
        apidoc = make_apidoc(DocsConfig(doc_file_path=tmp_path, debug=True))
        apidoc.register_from_doc("", "/users", "get", "users.yaml:list")
        assert loader.calls == []


class TestBatch:
    """Error aggregation tests."""

    def test_errors_collected(self, apidoc: ApiDoc) -> None:
        with pytest.raises(ExceptionGroup) as exc_info:
            with apidoc.batch():
                apidoc.register_typed("", "/a", "get", _spec(tags=[]))
                apidoc.register_typed("", "/b", "get", _spec())
                apidoc.register_from_doc("", "/c", "get", "users.yaml")
                apidoc.register_from_doc("", "/d", "get", "users.yaml:nope")
        errors = exc_info.value.exceptions
        assert [type(e) for e in errors] == [
            InvalidSpecError,
            InvalidReferenceError,
            MissingNodeError,
        ]
        assert "/b" in apidoc.registry
        assert "/a" not in apidoc.registry

    def test_clean_batch(self, apidoc: ApiDoc) -> None:
        with apidoc.batch() as doc:
            doc.register_typed("", "/a", "get", _spec())
        assert "/a" in apidoc.registry

    def test_nested_batch_reports_once(self, apidoc: ApiDoc) -> None:
        with pytest.raises(ExceptionGroup) as exc_info:
            with apidoc.batch():
                with apidoc.batch():
                    apidoc.register_typed("", "/a", "get", _spec(tags=[]))
                apidoc.register_typed("", "/b", "get", _spec(summary=""))
        assert len(exc_info.value.exceptions) == 2

    def test_foreign_error_keeps_collected_errors(self, apidoc: ApiDoc) -> None:
        with pytest.raises(TypeError) as exc_info:
            with apidoc.batch():
                apidoc.register_typed("", "/a", "get", _spec(tags=[]))
                OperationSpec(unknown=1)  # type: ignore[call-arg]
        notes = exc_info.value.__notes__
        assert len(notes) == 1
        assert "INVALID_SPEC" in notes[0]
        with pytest.raises(InvalidSpecError):
            apidoc.register_typed("", "/b", "get", _spec(tags=[]))

    def test_errors_raised_immediately_outside_batch(self, apidoc: ApiDoc) -> None:
        with apidoc.batch():
            pass
        with pytest.raises(InvalidSpecError):
            apidoc.register_typed("", "/a", "get", _spec(tags=[]))


class TestBuildDocument:
    """Aggregate document tests."""

    def test_document_shape(self, apidoc: ApiDoc) -> None:
        apidoc.register_typed("", "/health", "get", _spec())
        document = apidoc.build_document()
        assert document["swagger"] == "2.0"
        assert document["basePath"] == "/api/v1"
        assert document["info"] == {
            "description": "Test API description",
            "title": "Test API",
            "version": "1.2.3",
        }
        assert document["definition"] == {}
        assert list(document["paths"]) == ["/health"]
        assert document["securityDefinitions"] == {
            "Authorization": {
                "description": "Bearer token",
                "type": "apiKey",
                "in": "header",
                "name": "Authorization",
            }
        }

    def test_response_serialized(self, apidoc: ApiDoc) -> None:
        apidoc.register_typed("", "/health", "get", _spec())
        response = apidoc.build_document()["paths"]["/health"]["get"]["responses"][200]
        assert response == {
            "description": "OK",
            "schema": {
                "type": "object",
                "properties": {
                    "message": {"description": "human readable message", "type": "string"},
                    "result": {"description": "0 on success", "type": "integer"},
                },
                "required": ["result"],
            },
        }

    def test_security_definition_key(self, make_apidoc: Callable[..., ApiDoc]) -> None:
        from apidoc.core.settings import SecurityHeader

        apidoc = make_apidoc(
            DocsConfig(security_headers=(SecurityHeader(name="X-Token", key="token"),))
        )
        assert apidoc.build_document()["securityDefinitions"] == {
            "token": {"type": "apiKey", "in": "header", "name": "X-Token"}
        }


class TestInstall:
    """Route installation tests."""

    def test_install_sets_state(self, apidoc: ApiDoc) -> None:
        app = FastAPI()
        apidoc.install(app)
        assert app.state.apidoc is apidoc
        paths = {route.path for route in app.routes}  # type: ignore[attr-defined]
        assert {"/apidoc", "/apidoc/spec"} <= paths

    def test_install_twice(self, apidoc: ApiDoc) -> None:
        apidoc.install(FastAPI())
        with pytest.raises(DoubleInitError):
            apidoc.install(FastAPI())

    def test_second_apidoc_on_same_app(self, make_apidoc: Callable[..., ApiDoc]) -> None:
        app = FastAPI()
        make_apidoc().install(app)
        with pytest.raises(DoubleInitError):
            make_apidoc().install(app)
