"""Per-field metadata markers used with ``typing.Annotated``.

    @dataclass
    class CreateUser:
        name: Annotated[str, JsonTag("name"), Doc("display name")]
        email: Annotated[str | None, JsonTag("email,omitempty")]
        audit: Annotated[AuditFields, Inline]
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class JsonTag:
    """Serialization tag: ``"name,option,key=value"``."""

    tag: str


@dataclass(frozen=True)
class Doc:
    """Documentation attached as the property description."""

    text: str


class _InlineMarker:
    """Flattens an embedded record into its parent."""

    def __repr__(self) -> str:
        return "Inline"


Inline = _InlineMarker()
