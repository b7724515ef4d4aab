"""Hosting application configuration."""

from typing import Literal

from pydantic import BaseModel


class AppConfig(BaseModel, frozen=True):
    """Identity and mode of the application serving the API document.

    ``debug`` also lets doc files be read from disk instead of package data.
    """

    name: str
    env: Literal["development", "staging", "production"]
    debug: bool

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def cors_origins(self) -> list[str]:
        """Origins allowed to call the app; any origin while developing."""
        return ["*"] if self.is_development else []
