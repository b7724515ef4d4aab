"""Aggregate Swagger 2.0 document schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SWAGGER_VERSION = "2.0"


class SecurityDefinition(BaseModel):
    """Header-based API key definition."""

    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    type: Literal["apiKey"] = "apiKey"
    in_: Literal["header"] = Field(default="header", alias="in")
    name: str

    def to_dict(self) -> dict[str, Any]:
        """Serialize with ``description`` omitted when empty."""
        data: dict[str, Any] = {}
        if self.description:
            data["description"] = self.description
        data.update({"type": self.type, "in": self.in_, "name": self.name})
        return data


class DocumentInfo(BaseModel):
    """The ``info`` block."""

    description: str
    title: str
    version: str


class SpecDocument(BaseModel):
    """Top-level document served by the spec endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    base_path: str = Field(default="", alias="basePath")
    swagger: str = SWAGGER_VERSION
    info: DocumentInfo
    definition: dict[str, Any] = Field(default_factory=dict)
    paths: dict[str, Any] = Field(default_factory=dict)
    security_definitions: dict[str, SecurityDefinition] = Field(
        default_factory=dict, alias="securityDefinitions"
    )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with document key names."""
        data = self.model_dump(by_alias=True, exclude={"security_definitions"})
        data["securityDefinitions"] = {
            key: definition.to_dict()
            for key, definition in self.security_definitions.items()
        }
        return data
