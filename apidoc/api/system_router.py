"""Health and service information endpoints."""

from fastapi import APIRouter, Request

from apidoc.dependencies import ApiDocDep
from apidoc.schemas.response_schema import SuccessResp

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check() -> SuccessResp:
    """Health check endpoint."""
    return SuccessResp(message="healthy", result=0)


@router.get("/")
async def root(request: Request, apidoc: ApiDocDep) -> dict:
    """Root endpoint."""
    return {
        "app": request.app.title,
        "version": apidoc.config.version,
        "docs": apidoc.config.ui_route,
    }
