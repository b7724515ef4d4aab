"""Runtime Swagger 2.0 document synthesis for FastAPI services."""

from apidoc.schemas.field_meta import Doc, Inline, JsonTag
from apidoc.services.apidoc_service import ApiDoc
from apidoc.services.entry_builder import OperationSpec

__all__ = ["ApiDoc", "Doc", "Inline", "JsonTag", "OperationSpec"]
