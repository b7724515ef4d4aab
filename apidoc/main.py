"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apidoc.api.system_router import router as system_router
from apidoc.core.config import Settings, settings
from apidoc.schemas.response_schema import SuccessResp
from apidoc.services.apidoc_service import ApiDoc
from apidoc.services.doc_resolver import package_loader
from apidoc.services.entry_builder import OperationSpec

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    apidoc: ApiDoc = app.state.apidoc
    logger.info(
        "Starting application",
        app_name=app.title,
        spec_route=apidoc.config.spec_route,
        paths=len(apidoc.registry),
    )
    yield
    logger.info("Shutting down application")


def register_docs(apidoc: ApiDoc) -> None:
    """Describe the system endpoints."""
    with apidoc.batch():
        apidoc.register_typed(
            system_router,
            "/health",
            "get",
            OperationSpec(
                response_data=SuccessResp,
                summary="Health check",
                tags=["system"],
                produces=["application/json"],
            ),
        )
        apidoc.register_from_doc(system_router, "/", "get", "system.yaml:root")


def create_app(app_settings: Settings = settings) -> FastAPI:
    """Build the application with its API document installed."""
    application = FastAPI(
        title=app_settings.app.name,
        description=app_settings.docs.description,
        version=app_settings.docs.version,
        lifespan=lifespan,
        debug=app_settings.app.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.include_router(system_router)

    apidoc = ApiDoc(app_settings.docs, loader=package_loader("apidoc.docs"))
    register_docs(apidoc)
    apidoc.install(application)
    return application


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    server = settings.server
    logger.info("Serving application", bind=server.bind, reload=server.reload)
    uvicorn.run(
        "apidoc.main:app",
        host=server.host,
        port=server.port,
        reload=server.reload,
    )


if __name__ == "__main__":
    run()
