"""Swagger document and UI redirect endpoints."""

from urllib.parse import quote_plus

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from apidoc.core.settings import DocsConfig
from apidoc.dependencies import ApiDocDep


def build_router(config: DocsConfig) -> APIRouter:
    """Create the router serving ``config.spec_route`` and ``config.ui_route``."""
    router = APIRouter(tags=["apidoc"], include_in_schema=False)

    @router.get(config.spec_route)
    async def get_spec(apidoc: ApiDocDep) -> JSONResponse:
        """Serve the aggregate Swagger 2.0 document."""
        return JSONResponse(
            content=apidoc.build_document(),
            headers={"Access-Control-Allow-Origin": "*"},
        )

    @router.get(config.ui_route)
    async def redirect_to_ui(request: Request, apidoc: ApiDocDep) -> RedirectResponse:
        """Redirect to the hosted Swagger UI pointed at the spec endpoint."""
        scheme = "https" if request.url.scheme == "https" else "http"
        host = request.headers.get("host", request.url.netloc)
        spec_url = f"{scheme}://{host}{apidoc.config.spec_route}"
        return RedirectResponse(
            url=f"{apidoc.config.ui_url}?url={quote_plus(spec_url)}",
            status_code=status.HTTP_302_FOUND,
        )

    return router
