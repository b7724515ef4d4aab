"""Resolution of ``file:node`` references into pre-authored operations."""

from collections.abc import Callable
from importlib import resources
from pathlib import Path

import structlog
import yaml
from pydantic import TypeAdapter, ValidationError

from apidoc.core.exceptions import (
    DocLoadError,
    InvalidReferenceError,
    MissingNodeError,
)
from apidoc.schemas.operation_schema import OperationDescriptor

logger = structlog.get_logger()

DocLoader = Callable[[str], bytes]
DocFile = dict[str, OperationDescriptor]

_doc_file_adapter: TypeAdapter[DocFile] = TypeAdapter(DocFile)


def package_loader(package: str) -> DocLoader:
    """Loader reading doc files shipped as package data of ``package``."""
    root = resources.files(package)

    def load(file: str) -> bytes:
        return root.joinpath(file).read_bytes()

    return load


def parse_reference(reference: str) -> tuple[str, str]:
    """Split ``file:node`` on the first colon into two non-empty halves."""
    file, sep, node = reference.partition(":")
    if not sep:
        raise InvalidReferenceError(reference)
    if not file:
        raise InvalidReferenceError(reference, "invalid file")
    if not node:
        raise InvalidReferenceError(reference, "invalid node")
    return file, node


def parse_doc_file(file: str, raw: bytes) -> DocFile:
    """Parse YAML bytes into a node name -> operation mapping."""
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise DocLoadError(file, f"invalid YAML: {exc}") from exc
    if data is None:
        return {}
    try:
        return _doc_file_adapter.validate_python(data)
    except ValidationError as exc:
        raise DocLoadError(file, f"invalid document shape: {exc}") from exc


class DocFileResolver:
    """Loads doc files once and serves their nodes from a cache.

    Files come from ``doc_path`` when set, otherwise from ``loader``.
    """

    def __init__(
        self,
        doc_path: Path | None = None,
        loader: DocLoader | None = None,
    ) -> None:
        self._doc_path = doc_path
        self._loader = loader
        self._cache: dict[str, DocFile] = {}

    @property
    def cached_files(self) -> list[str]:
        """Keys of the files loaded so far."""
        return list(self._cache)

    def resolve(self, reference: str) -> OperationDescriptor:
        """Return the operation named by ``reference``."""
        file, node = parse_reference(reference)
        doc_file = self._cache.get(file)
        if doc_file is None:
            doc_file = parse_doc_file(file, self._load(file))
            self._cache[file] = doc_file
            logger.info("Loaded doc file", file=file, nodes=len(doc_file))

        entry = doc_file.get(node)
        if entry is None:
            raise MissingNodeError(file, node)
        return entry.model_copy(deep=True)

    def _load(self, file: str) -> bytes:
        if self._doc_path is not None:
            try:
                return (self._doc_path / file).read_bytes()
            except OSError as exc:
                raise DocLoadError(file, str(exc)) from exc
        if self._loader is None:
            raise DocLoadError(file, "no doc path or loader configured")
        try:
            return self._loader(file)
        except Exception as exc:
            raise DocLoadError(file, f"loader failed: {exc}") from exc
