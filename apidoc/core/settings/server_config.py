"""uvicorn serving configuration."""

from pydantic import BaseModel


class ServerConfig(BaseModel, frozen=True):
    """Where ``apidoc-serve`` listens; ``reload`` follows the debug flag."""

    host: str
    port: int
    reload: bool = False

    @property
    def bind(self) -> str:
        return f"{self.host}:{self.port}"
