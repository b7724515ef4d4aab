"""Domain-specific configuration models."""

from apidoc.core.settings.app_config import AppConfig
from apidoc.core.settings.docs_config import DocsConfig, SecurityHeader
from apidoc.core.settings.server_config import ServerConfig

__all__ = [
    "AppConfig",
    "DocsConfig",
    "SecurityHeader",
    "ServerConfig",
]
