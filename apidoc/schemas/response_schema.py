"""Common response records."""

from dataclasses import dataclass
from typing import Annotated

from apidoc.schemas.field_meta import Doc, JsonTag


@dataclass
class SuccessResp:
    """Generic acknowledgement body."""

    message: Annotated[str, JsonTag("message,omitempty"), Doc("human readable message")] = ""
    result: Annotated[int, JsonTag("result"), Doc("0 on success")] = 0
