"""Operation, parameter and per-path schemas of a Swagger 2.0 document."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from apidoc.core.exceptions import InvalidSpecError
from apidoc.schemas.schema_node import SchemaNode

HTTP_METHODS: tuple[str, ...] = ("post", "get", "put", "delete", "patch")


class ParameterDescriptor(BaseModel):
    """One operation input."""

    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    in_: str = Field(..., alias="in")
    name: str
    required: bool = False
    type: str = ""
    schema_: SchemaNode | None = Field(default=None, alias="schema")

    def to_dict(self) -> dict[str, Any]:
        """Serialize; ``in``, ``name``, ``required`` and ``type`` are always present."""
        data: dict[str, Any] = {}
        if self.description:
            data["description"] = self.description
        data["in"] = self.in_
        data["name"] = self.name
        data["required"] = self.required
        data["type"] = self.type
        if self.schema_ is not None:
            data["schema"] = self.schema_.to_dict()
        return data


class OperationDescriptor(BaseModel):
    """One HTTP method on one path; also the node type of doc files."""

    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    summary: str = ""
    tags: list[str] = Field(default_factory=list)
    parameters: list[ParameterDescriptor] = Field(default_factory=list)
    produces: list[str] = Field(default_factory=list)
    responses: dict[int, SchemaNode] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the document shape."""
        data: dict[str, Any] = {}
        if self.description:
            data["description"] = self.description
        data["summary"] = self.summary
        data["tags"] = list(self.tags)
        data["parameters"] = [p.to_dict() for p in self.parameters]
        if self.produces:
            data["produces"] = list(self.produces)
        data["responses"] = {
            code: node.to_dict() for code, node in self.responses.items()
        }
        return data


class PathEntry(BaseModel):
    """Operations registered on one path, at most one per method."""

    post: OperationDescriptor | None = None
    get: OperationDescriptor | None = None
    put: OperationDescriptor | None = None
    delete: OperationDescriptor | None = None
    patch: OperationDescriptor | None = None

    def set_method(self, method: str, entry: OperationDescriptor) -> None:
        """Install ``entry`` for ``method``, replacing any previous one."""
        name = method.lower()
        if name not in HTTP_METHODS:
            raise InvalidSpecError(f"Invalid swagger method '{method}'")
        setattr(self, name, entry)

    def get_method(self, method: str) -> OperationDescriptor | None:
        """Return the operation registered for ``method``, if any."""
        name = method.lower()
        if name not in HTTP_METHODS:
            return None
        return getattr(self, name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize present methods in post, get, put, delete, patch order."""
        result: dict[str, Any] = {}
        for name in HTTP_METHODS:
            entry = getattr(self, name)
            if entry is not None:
                result[name] = entry.to_dict()
        return result
