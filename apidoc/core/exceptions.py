"""Registration-time exception classes."""


class ApiDocError(Exception):
    """Base apidoc exception."""

    def __init__(self, message: str, code: str) -> None:
        self.message = message
        self.code = code
        super().__init__(message)


# --- Typed registration ---


class InvalidSpecError(ApiDocError):
    """Malformed registration input."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="INVALID_SPEC")


class SchemaError(ApiDocError):
    """A type cannot be represented as a schema tree."""

    def __init__(self, message: str) -> None:
        super().__init__(message=message, code="SCHEMA_ERROR")


class EntryValidationError(ApiDocError):
    """Operation description fails structural constraints."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message=f"{field}: {message}", code="ENTRY_INVALID")


# --- Doc files ---


class InvalidReferenceError(ApiDocError):
    """Malformed 'file:node' reference."""

    def __init__(self, reference: str, reason: str = "expected 'file:node'") -> None:
        self.reference = reference
        super().__init__(
            message=f"Invalid doc reference '{reference}', {reason}",
            code="INVALID_REFERENCE",
        )


class DocLoadError(ApiDocError):
    """Doc file could not be read or parsed."""

    def __init__(self, file: str, reason: str) -> None:
        self.file = file
        super().__init__(
            message=f"Failed to load doc file '{file}': {reason}",
            code="DOC_LOAD_FAILED",
        )


class MissingNodeError(ApiDocError):
    """Referenced node is absent from a loaded doc file."""

    def __init__(self, file: str, node: str) -> None:
        self.file = file
        self.node = node
        super().__init__(
            message=f"Doc file '{file}' has no entry '{node}'",
            code="MISSING_NODE",
        )


# --- Lifecycle ---


class DoubleInitError(ApiDocError):
    """Doc routes installed twice."""

    def __init__(self) -> None:
        super().__init__(
            message="apidoc routes are already installed",
            code="DOUBLE_INIT",
        )
