"""Assemble operation descriptions from typed request/response structures."""

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from apidoc.core.exceptions import InvalidSpecError
from apidoc.schemas.operation_schema import OperationDescriptor, ParameterDescriptor
from apidoc.schemas.schema_node import SchemaNode
from apidoc.services.introspector import (
    TYPE_ARRAY,
    TYPE_OBJECT,
    introspect,
    is_record,
)

IN_BODY = "body"
IN_FORM = "formData"
IN_QUERY = "query"
IN_PATH = "path"

BODY_PARAMETER_NAME = "body"
BODY_PARAMETER_DESCRIPTION = "JSON body"

_NON_SCALAR_TYPES = frozenset({TYPE_ARRAY, TYPE_OBJECT})


@dataclass
class OperationSpec:
    """Typed description of one operation.

    ``json_data``/``form_data``/``query_data``/``path_data`` are record
    types; ``json_data`` and ``form_data`` exclude each other.
    """

    response_data: Any = None
    json_data: Any = None
    form_data: Any = None
    query_data: Any = None
    path_data: Any = None
    description: str = ""
    summary: str = ""
    tags: list[str] = field(default_factory=list)
    produces: list[str] = field(default_factory=list)


def _require_record(tp: Any, channel: str) -> None:
    if not is_record(tp):
        raise InvalidSpecError(f"{channel} must be a record type, got {tp!r}")


def _flatten_parameters(tp: Any, location: str) -> list[ParameterDescriptor]:
    """One scalar parameter per top-level property of a record."""
    obj = introspect(tp)
    if obj.type != TYPE_OBJECT:
        raise InvalidSpecError(f"{location} data must introspect to an object")

    parameters = []
    for name, prop in (obj.properties or {}).items():
        if prop.type in _NON_SCALAR_TYPES:
            raise InvalidSpecError(
                f"{location} parameter '{name}' has non-scalar type '{prop.type}'"
            )
        parameters.append(
            ParameterDescriptor(
                description=prop.description,
                in_=location,
                name=name,
                required=name in obj.required,
                type=prop.type,
            )
        )
    return parameters


def build_entry(spec: OperationSpec | None) -> OperationDescriptor:
    """Build an operation description, raising InvalidSpecError on misuse."""
    if spec is None:
        raise InvalidSpecError("Operation spec must exist")
    if not spec.tags:
        raise InvalidSpecError("At least one tag is required")
    if not spec.description and not spec.summary:
        raise InvalidSpecError("Description or summary is required")
    if spec.response_data is None:
        raise InvalidSpecError("Response data is required")
    if spec.json_data is not None and spec.form_data is not None:
        raise InvalidSpecError("Form data and JSON data cannot be combined")

    for channel, tp in (
        ("json_data", spec.json_data),
        ("form_data", spec.form_data),
        ("query_data", spec.query_data),
        ("path_data", spec.path_data),
    ):
        if tp is not None:
            _require_record(tp, channel)

    entry = OperationDescriptor(
        description=spec.description,
        summary=spec.summary,
        tags=list(spec.tags),
        produces=list(spec.produces),
        responses={
            HTTPStatus.OK.value: SchemaNode(
                description=HTTPStatus.OK.phrase,
                schema_=introspect(spec.response_data),
            )
        },
    )

    if spec.json_data is not None:
        entry.parameters.append(
            ParameterDescriptor(
                description=BODY_PARAMETER_DESCRIPTION,
                in_=IN_BODY,
                name=BODY_PARAMETER_NAME,
                required=True,
                type=TYPE_OBJECT,
                schema_=introspect(spec.json_data),
            )
        )
    if spec.form_data is not None:
        entry.parameters.extend(_flatten_parameters(spec.form_data, IN_FORM))
    if spec.query_data is not None:
        entry.parameters.extend(_flatten_parameters(spec.query_data, IN_QUERY))
    if spec.path_data is not None:
        entry.parameters.extend(_flatten_parameters(spec.path_data, IN_PATH))
    return entry
