"""Swagger document configuration."""

from pathlib import Path

from pydantic import BaseModel, Field


class SecurityHeader(BaseModel, frozen=True):
    """Header accepted by the Swagger UI authorize dialog."""

    name: str = Field(..., min_length=1)
    description: str = ""
    key: str | None = None

    @property
    def definition_key(self) -> str:
        """Key under securityDefinitions; defaults to the header name."""
        return self.key or self.name


class DocsConfig(BaseModel, frozen=True):
    """Settings for the generated document and its endpoints."""

    base_path: str = ""
    title: str = "Swagger Document"
    description: str = "Swagger Document Description"
    version: str = "0.0.1"
    ui_url: str = "http://petstore.swagger.io/"
    url_prefix: str = "apidoc"
    doc_file_path: Path | None = None
    security_headers: tuple[SecurityHeader, ...] = ()
    debug: bool = False

    @property
    def effective_doc_path(self) -> Path | None:
        """Doc directory used for file loading, only honoured in debug mode."""
        if not self.debug or self.doc_file_path is None:
            return None
        return self.doc_file_path.resolve()

    @property
    def ui_route(self) -> str:
        """Route redirecting to the hosted Swagger UI."""
        return "/" + self.url_prefix.strip("/")

    @property
    def spec_route(self) -> str:
        """Route serving the aggregate document."""
        return self.ui_route + "/spec"
