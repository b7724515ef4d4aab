"""Composition root tying builder, validator, registry and doc files together."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from fastapi import APIRouter, FastAPI

from apidoc.core.exceptions import ApiDocError, DoubleInitError
from apidoc.core.settings import DocsConfig
from apidoc.schemas.document_schema import (
    DocumentInfo,
    SecurityDefinition,
    SpecDocument,
)
from apidoc.schemas.operation_schema import OperationDescriptor
from apidoc.services.doc_resolver import DocFileResolver, DocLoader
from apidoc.services.entry_builder import OperationSpec, build_entry
from apidoc.services.entry_validator import validate_entry
from apidoc.services.spec_registry import SpecRegistry, normalize_path

logger = structlog.get_logger()

RouteGroup = APIRouter | str


class ApiDoc:
    """Collects operation descriptions and serves them as one document.

    Create one per application, register operations while building the
    routers, then ``install`` it on the FastAPI app.
    """

    def __init__(self, config: DocsConfig, loader: DocLoader | None = None) -> None:
        self._config = config
        self._registry = SpecRegistry()
        self._resolver = DocFileResolver(config.effective_doc_path, loader)
        self._installed = False
        self._pending_errors: list[ApiDocError] | None = None

    @property
    def config(self) -> DocsConfig:
        return self._config

    @property
    def registry(self) -> SpecRegistry:
        return self._registry

    @property
    def resolver(self) -> DocFileResolver:
        return self._resolver

    # --- Registration ---

    def register_typed(
        self,
        group: RouteGroup,
        path: str,
        method: str,
        spec: OperationSpec,
    ) -> None:
        """Describe an operation from typed request/response structures."""
        with self._collecting():
            entry = build_entry(spec)
            self._finish(self._real_path(group, path), method, entry, source="typed")

    def register_from_doc(
        self,
        group: RouteGroup,
        path: str,
        method: str,
        reference: str,
    ) -> None:
        """Describe an operation from a ``file:node`` doc reference."""
        with self._collecting():
            entry = self._resolver.resolve(reference)
            self._finish(self._real_path(group, path), method, entry, source=reference)

    @contextmanager
    def batch(self) -> Iterator["ApiDoc"]:
        """Collect registration errors and raise them together on exit.

        Raises ExceptionGroup when any registration inside the block failed.
        Any other exception escaping the block carries the collected errors
        as notes.
        """
        if self._pending_errors is not None:
            yield self
            return

        pending: list[ApiDocError] = []
        self._pending_errors = pending
        try:
            yield self
        except Exception as exc:
            for error in pending:
                logger.error("Invalid operation", code=error.code, error=error.message)
                exc.add_note(f"apidoc registration failed: [{error.code}] {error.message}")
            raise
        finally:
            self._pending_errors = None
        if pending:
            for error in pending:
                logger.error("Invalid operation", code=error.code, error=error.message)
            raise ExceptionGroup(f"{len(pending)} apidoc registration(s) failed", pending)

    @contextmanager
    def _collecting(self) -> Iterator[None]:
        try:
            yield
        except ApiDocError as exc:
            if self._pending_errors is None:
                raise
            self._pending_errors.append(exc)

    def _real_path(self, group: RouteGroup, path: str) -> str:
        prefix = group if isinstance(group, str) else group.prefix
        return normalize_path(prefix, path, self._config.base_path)

    def _finish(
        self,
        path: str,
        method: str,
        entry: OperationDescriptor,
        source: str,
    ) -> None:
        validate_entry(entry)
        self._registry.register(path, method, entry)
        logger.info("Registered operation", path=path, method=method.lower(), source=source)

    # --- Document ---

    def security_definitions(self) -> dict[str, SecurityDefinition]:
        """Header API-key definitions keyed by their definition key."""
        return {
            header.definition_key: SecurityDefinition(
                description=header.description,
                name=header.name,
            )
            for header in self._config.security_headers
        }

    def build_document(self) -> dict[str, Any]:
        """Assemble the aggregate Swagger 2.0 document."""
        document = SpecDocument(
            base_path=self._config.base_path,
            info=DocumentInfo(
                description=self._config.description,
                title=self._config.title,
                version=self._config.version,
            ),
            paths=self._registry.snapshot(),
            security_definitions=self.security_definitions(),
        )
        return document.to_dict()

    # --- HTTP wiring ---

    def install(self, app: FastAPI) -> None:
        """Expose the doc endpoints on ``app``; only allowed once."""
        if self._installed or getattr(app.state, "apidoc", None) is not None:
            raise DoubleInitError()

        from apidoc.api.apidoc_router import build_router

        app.state.apidoc = self
        app.include_router(build_router(self._config))
        self._installed = True
        logger.info(
            "Installed apidoc routes",
            spec_route=self._config.spec_route,
            ui_route=self._config.ui_route,
        )
