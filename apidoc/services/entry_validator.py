"""Structural checks applied to every operation before registration."""

from apidoc.core.exceptions import EntryValidationError
from apidoc.schemas.operation_schema import OperationDescriptor

ALLOWED_LOCATIONS = frozenset({"query", "path", "formData", "body", "header"})
ALLOWED_TYPES = frozenset(
    {"string", "integer", "number", "boolean", "array", "object", "file"}
)
MAX_NAME_LENGTH = 100


def validate_entry(entry: OperationDescriptor) -> None:
    """Raise EntryValidationError naming the first offending field."""
    if not entry.tags:
        raise EntryValidationError("tags", "at least one tag is required")
    for index, tag in enumerate(entry.tags):
        if not tag:
            raise EntryValidationError(f"tags[{index}]", "tag must not be empty")

    for index, parameter in enumerate(entry.parameters):
        prefix = f"parameters[{index}]"
        if parameter.in_ not in ALLOWED_LOCATIONS:
            raise EntryValidationError(
                f"{prefix}.in",
                f"'{parameter.in_}' is not one of {sorted(ALLOWED_LOCATIONS)}",
            )
        if not parameter.name:
            raise EntryValidationError(f"{prefix}.name", "name must not be empty")
        if len(parameter.name) > MAX_NAME_LENGTH:
            raise EntryValidationError(
                f"{prefix}.name",
                f"name longer than {MAX_NAME_LENGTH} characters",
            )
        if parameter.type not in ALLOWED_TYPES:
            raise EntryValidationError(
                f"{prefix}.type",
                f"'{parameter.type}' is not one of {sorted(ALLOWED_TYPES)}",
            )

    if not entry.responses:
        raise EntryValidationError("responses", "at least one response is required")
