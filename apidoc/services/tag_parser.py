"""Serialization tag parsing and field name resolution.

A tag is a comma-separated string: the first segment overrides the field
name, the remaining segments are flags (``omitempty``) or ``key=value``
pairs. A name of ``-`` drops the field.
"""

from dataclasses import dataclass, field

SKIP = "-"
OMIT_EMPTY = "omitempty"


@dataclass(frozen=True)
class TagOptions:
    """Structured form of a serialization tag."""

    name: str = ""
    flags: tuple[str, ...] = ()
    values: dict[str, str] = field(default_factory=dict)

    def contains(self, option: str) -> bool:
        """Check whether ``option`` is set as a flag."""
        return option in self.flags

    def get(self, key: str) -> str | None:
        """Return the value of a ``key=value`` option."""
        return self.values.get(key)


def parse_tag(tag: str) -> TagOptions:
    """Parse ``"name,flag,key=value"`` into TagOptions."""
    name, _, rest = tag.partition(",")
    flags: list[str] = []
    values: dict[str, str] = {}
    for option in rest.split(",") if rest else []:
        if not option:
            continue
        if "=" in option:
            key, _, value = option.partition("=")
            # malformed pairs like "a=b=c" are ignored
            if key and "=" not in value:
                values[key] = value
            continue
        flags.append(option)
    return TagOptions(name=name, flags=tuple(flags), values=values)


def resolve_field(raw_name: str, tag: str) -> tuple[str, bool]:
    """Return the exposed name and whether the field may be omitted.

    The exposed name is ``SKIP`` when the field should be dropped.
    """
    options = parse_tag(tag)
    name = options.name or raw_name
    return name, options.contains(OMIT_EMPTY)
