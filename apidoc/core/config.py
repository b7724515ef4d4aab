"""Application configuration using Pydantic Settings V2."""

from functools import cached_property
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from apidoc.core.settings import AppConfig, DocsConfig, SecurityHeader, ServerConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Flat fields are loaded directly from environment variables.
    Domain properties provide grouped access (e.g. settings.docs.title).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = Field(
        default="apidoc",
        description="Application name",
    )
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode, enables loading doc files from disk",
    )

    # Swagger document
    swagger_base_path: str = Field(
        default="",
        description="API prefix, e.g. /api/v1",
    )
    swagger_doc_title: str = Field(
        default="Swagger Document",
        description="Document title",
    )
    swagger_doc_desc: str = Field(
        default="Swagger Document Description",
        description="Document description",
    )
    swagger_doc_version: str = Field(
        default="0.0.1",
        description="Document version",
    )
    swagger_url_prefix: str = Field(
        default="apidoc",
        min_length=1,
        description="URL path prefix of the doc endpoints",
    )
    swagger_ui_url: str = Field(
        default="http://petstore.swagger.io/",
        description="Hosted Swagger UI address",
    )
    swagger_doc_file_path: Path | None = Field(
        default=None,
        description="Directory of YAML doc files, used in debug mode only",
    )
    swagger_security_headers: list[SecurityHeader] = Field(
        default_factory=list,
        description="JSON list of headers offered by the UI authorize dialog",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="Server host",
    )
    port: int = Field(
        default=8004,
        ge=1,
        le=65535,
        description="Server port",
    )

    # --- Domain properties ---

    @cached_property
    def app(self) -> AppConfig:
        """Application environment configuration."""
        return AppConfig(
            name=self.app_name,
            env=self.app_env,
            debug=self.debug,
        )

    @cached_property
    def docs(self) -> DocsConfig:
        """Swagger document configuration."""
        return DocsConfig(
            base_path=self.swagger_base_path,
            title=self.swagger_doc_title,
            description=self.swagger_doc_desc,
            version=self.swagger_doc_version,
            ui_url=self.swagger_ui_url,
            url_prefix=self.swagger_url_prefix,
            doc_file_path=self.swagger_doc_file_path,
            security_headers=tuple(self.swagger_security_headers),
            debug=self.debug,
        )

    @cached_property
    def server(self) -> ServerConfig:
        """Server configuration."""
        return ServerConfig(
            host=self.host,
            port=self.port,
            reload=self.debug,
        )


# Global settings instance
settings = Settings()
