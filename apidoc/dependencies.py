"""Global dependencies for the doc endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from apidoc.services.apidoc_service import ApiDoc


def get_apidoc(request: Request) -> ApiDoc:
    """Get the ApiDoc installed on the running application."""
    apidoc: ApiDoc = request.app.state.apidoc
    return apidoc


ApiDocDep = Annotated[ApiDoc, Depends(get_apidoc)]
