"""JSON-Schema-shaped node used for bodies, responses and properties."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SchemaNode(BaseModel):
    """One node of a schema tree.

    ``items`` is only set for arrays and ``properties`` only for objects;
    ``required`` names a subset of ``properties``.
    """

    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    type: str = ""
    items: "SchemaNode | None" = None
    properties: "dict[str, SchemaNode] | None" = None
    required: list[str] = Field(default_factory=list)
    schema_: "SchemaNode | None" = Field(default=None, alias="schema")

    def to_dict(self) -> dict[str, Any]:
        """Serialize with empty values omitted."""
        data: dict[str, Any] = {}
        if self.description:
            data["description"] = self.description
        if self.type:
            data["type"] = self.type
        if self.items is not None:
            data["items"] = self.items.to_dict()
        if self.properties:
            data["properties"] = {
                name: node.to_dict() for name, node in self.properties.items()
            }
        if self.required:
            data["required"] = list(self.required)
        if self.schema_ is not None:
            data["schema"] = self.schema_.to_dict()
        return data


SchemaNode.model_rebuild()
