"""Registry of operation descriptions keyed by path and method."""

from typing import Any

from apidoc.schemas.operation_schema import OperationDescriptor, PathEntry


def normalize_path(group_prefix: str, path: str, base_path: str = "") -> str:
    """Return ``path`` as exposed relative to ``base_path``.

    The route group prefix loses its leading ``base_path``; ``path`` is
    rooted with ``/`` and appended.
    """
    prefix = group_prefix
    if base_path and prefix.startswith(base_path):
        prefix = prefix[len(base_path):]
    if not path.startswith("/"):
        path = "/" + path
    return prefix + path


class SpecRegistry:
    """Path -> PathEntry mapping filled during start-up.

    Not thread-safe; registrations are expected to run sequentially before
    the spec endpoint starts serving.
    """

    def __init__(self) -> None:
        self._paths: dict[str, PathEntry] = {}

    def register(self, path: str, method: str, entry: OperationDescriptor) -> None:
        """Install ``entry`` for (path, method); the last registration wins."""
        path_entry = self._paths.get(path) or PathEntry()
        path_entry.set_method(method, entry)
        self._paths[path] = path_entry

    def get(self, path: str, method: str) -> OperationDescriptor | None:
        """Return the operation registered for (path, method), if any."""
        path_entry = self._paths.get(path)
        if path_entry is None:
            return None
        return path_entry.get_method(method)

    def snapshot(self) -> dict[str, Any]:
        """Serialize all registered paths."""
        return {path: entry.to_dict() for path, entry in self._paths.items()}

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths
