"""Reflection of Python type annotations into SchemaNode trees.

Mapping rules:

- ``bool`` -> boolean, ``int`` -> integer, ``float``/``Decimal`` -> number,
  ``str``, date/time values and ``UUID`` -> string.
- ``bytes``-like values are opaque strings, never arrays.
- Sequences and sets -> array with ``items`` for the element type.
- Mappings -> object with a single ``.*`` property for the value type.
- Dataclasses, pydantic models and TypedDicts -> object with one property
  per field; ``Inline`` fields are flattened into the parent.
- ``Optional[T]`` is transparent.
- Types exposing a ``describe()`` classmethod supply their own node.
- Anything else has an empty type.
"""

import dataclasses
import datetime
import decimal
import types
import typing
import uuid
from collections.abc import Mapping, Sequence, Set
from typing import Annotated, Any, NamedTuple, NotRequired, Required, Union

from pydantic import BaseModel

from apidoc.core.exceptions import SchemaError
from apidoc.schemas.field_meta import Doc, Inline, JsonTag
from apidoc.schemas.schema_node import SchemaNode
from apidoc.services.tag_parser import SKIP, resolve_field

TYPE_BOOLEAN = "boolean"
TYPE_INTEGER = "integer"
TYPE_NUMBER = "number"
TYPE_STRING = "string"
TYPE_ARRAY = "array"
TYPE_OBJECT = "object"

MAP_WILDCARD = ".*"

# bool precedes int since bool is an int subclass
_SCALARS: tuple[tuple[type, str], ...] = (
    (bool, TYPE_BOOLEAN),
    (int, TYPE_INTEGER),
    (float, TYPE_NUMBER),
    (decimal.Decimal, TYPE_NUMBER),
    (str, TYPE_STRING),
    (bytes, TYPE_STRING),
    (bytearray, TYPE_STRING),
    (memoryview, TYPE_STRING),
    (datetime.date, TYPE_STRING),
    (datetime.time, TYPE_STRING),
    (uuid.UUID, TYPE_STRING),
)

_SEQUENCES: tuple[type, ...] = (list, tuple, set, frozenset, Sequence, Set)


class _Field(NamedTuple):
    name: str
    annotation: Any
    tag: str
    doc: str
    inline: bool
    skip: bool = False
    omittable: bool = False


def _strip_annotated(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Remove Annotated/Required/NotRequired wrappers, returning the metadata."""
    metadata: tuple[Any, ...] = ()
    while True:
        origin = typing.get_origin(tp)
        if origin is Annotated:
            metadata += tp.__metadata__
            tp = tp.__origin__
        elif origin in (Required, NotRequired):
            tp = typing.get_args(tp)[0]
        else:
            return tp, metadata


def _deref_optional(tp: Any) -> Any:
    """Return ``T`` for ``Optional[T]``, otherwise ``tp`` unchanged."""
    if typing.get_origin(tp) not in (Union, types.UnionType):
        return tp
    args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
    if len(args) == 1:
        return args[0]
    return tp


def _unwrap(tp: Any) -> Any:
    while True:
        stripped, _ = _strip_annotated(tp)
        inner = _deref_optional(stripped)
        if inner is stripped:
            return stripped
        tp = inner


def _is_class(tp: Any) -> bool:
    return isinstance(tp, type) and typing.get_origin(tp) is None


def _is_describable(tp: Any) -> bool:
    return _is_class(tp) and callable(getattr(tp, "describe", None))


def _is_record_class(tp: Any) -> bool:
    if not _is_class(tp):
        return False
    if typing.is_typeddict(tp):
        return True
    if dataclasses.is_dataclass(tp):
        return True
    return issubclass(tp, BaseModel)


def is_record(tp: Any) -> bool:
    """Check whether ``tp`` introspects to a structured record."""
    tp = _unwrap(tp)
    if _is_describable(tp):
        node = tp.describe()
        return (
            isinstance(node, SchemaNode)
            and node.type == TYPE_OBJECT
            and MAP_WILDCARD not in (node.properties or {})
        )
    return _is_record_class(tp)


def schema_type(tp: Any) -> str:
    """Return the schema type name of ``tp`` without walking into it."""
    tp = _unwrap(tp)
    if _is_describable(tp):
        node = tp.describe()
        return node.type if isinstance(node, SchemaNode) else ""
    if _is_record_class(tp):
        return TYPE_OBJECT
    base = typing.get_origin(tp) or tp
    if not isinstance(base, type):
        return ""
    for scalar, name in _SCALARS:
        if issubclass(base, scalar):
            return name
    if issubclass(base, Mapping):
        return TYPE_OBJECT
    if issubclass(base, _SEQUENCES):
        return TYPE_ARRAY
    return ""


def _element_type(tp: Any) -> Any:
    args = typing.get_args(tp)
    if not args:
        return None
    if typing.get_origin(tp) is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        if all(arg == args[0] for arg in args):
            return args[0]
        return None
    return args[0]


def _markers(metadata: tuple[Any, ...]) -> tuple[str | None, str | None, bool]:
    tag: str | None = None
    doc: str | None = None
    inline = False
    for item in metadata:
        if isinstance(item, JsonTag):
            tag = item.tag
        elif isinstance(item, Doc):
            doc = item.text
        elif item is Inline:
            inline = True
    return tag, doc, inline


def _type_hints(tp: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(tp, include_extras=True)
    except (NameError, TypeError) as exc:
        raise SchemaError(f"Cannot resolve annotations of {tp.__qualname__}: {exc}") from exc


def _record_fields(tp: type) -> list[_Field]:
    if typing.is_typeddict(tp):
        hints = _type_hints(tp)
        names = list(hints)
        optional_keys = getattr(tp, "__optional_keys__", frozenset())
    elif issubclass(tp, BaseModel):
        return _model_fields(tp)
    else:
        hints = _type_hints(tp)
        names = [f.name for f in dataclasses.fields(tp)]
        optional_keys = frozenset()

    result = []
    for name in names:
        if name.startswith("_"):
            continue
        annotation, metadata = _strip_annotated(hints[name])
        tag, doc, inline = _markers(metadata)
        result.append(
            _Field(
                name=name,
                annotation=annotation,
                tag=tag or "",
                doc=doc or "",
                inline=inline,
                omittable=name in optional_keys,
            )
        )
    return result


def _model_fields(tp: type[BaseModel]) -> list[_Field]:
    result = []
    for name, info in tp.model_fields.items():
        tag, doc, inline = _markers(tuple(info.metadata))
        result.append(
            _Field(
                name=name,
                annotation=info.annotation,
                tag=tag if tag is not None else (info.alias or ""),
                doc=doc if doc is not None else (info.description or ""),
                inline=inline,
                skip=info.exclude is True,
                omittable=not info.is_required(),
            )
        )
    return result


class _Reader:
    """Single introspection pass; tracks records being expanded."""

    def __init__(self) -> None:
        self._stack: list[type] = []

    def read(self, tp: Any, doc: str) -> SchemaNode:
        tp, _ = _strip_annotated(tp)
        inner = _deref_optional(tp)
        if inner is not tp:
            return self.read(inner, doc)

        if _is_describable(tp):
            return self._describe(tp, doc)

        node = SchemaNode(description=doc, type=schema_type(tp))
        if _is_record_class(tp):
            self._read_record(node, tp)
        elif node.type == TYPE_ARRAY:
            self._read_sequence(node, tp)
        elif node.type == TYPE_OBJECT:
            self._read_map(node, tp)
        return node

    def _describe(self, tp: type, doc: str) -> SchemaNode:
        node = tp.describe()
        if not isinstance(node, SchemaNode):
            raise SchemaError(
                f"{tp.__qualname__}.describe() must return SchemaNode, "
                f"got {type(node).__name__}"
            )
        node = node.model_copy(deep=True)
        if doc:
            node.description = doc
        return node

    def _read_sequence(self, node: SchemaNode, tp: Any) -> None:
        element = _element_type(tp)
        if element is None or not schema_type(element):
            return
        node.items = self.read(element, "")

    def _read_map(self, node: SchemaNode, tp: Any) -> None:
        args = typing.get_args(tp)
        if len(args) != 2 or not schema_type(args[1]):
            # untyped object
            return
        node.properties = {MAP_WILDCARD: self.read(args[1], "")}

    def _read_record(self, node: SchemaNode, tp: type) -> None:
        if tp in self._stack:
            chain = " -> ".join(t.__qualname__ for t in [*self._stack, tp])
            raise SchemaError(f"Cyclic type reference: {chain}")

        properties = node.properties if node.properties is not None else {}
        node.properties = properties
        self._stack.append(tp)
        try:
            for field in _record_fields(tp):
                if field.inline:
                    self._read_inline(node, field)
                    continue
                if field.skip:
                    continue

                name, omittable = resolve_field(field.name, field.tag)
                if name == SKIP:
                    continue

                properties[name] = self.read(field.annotation, field.doc)
                if name in node.required:
                    node.required.remove(name)
                if not (omittable or field.omittable):
                    node.required.append(name)
        finally:
            self._stack.pop()

    def _read_inline(self, node: SchemaNode, field: _Field) -> None:
        target = _unwrap(field.annotation)
        if not _is_record_class(target):
            raise SchemaError(
                f"Inline field '{field.name}' must be a record type, got {target!r}"
            )
        self._read_record(node, target)


def introspect(tp: Any, doc: str = "") -> SchemaNode:
    """Build the schema tree of ``tp``; ``doc`` becomes the root description.

    Raises SchemaError for cyclic record types.
    """
    return _Reader().read(tp, doc)
