"""
FastAPI Application
==================

Main FastAPI application serving rendered template pages.
"""

from contextlib import asynccontextmanager
import uuid
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from src.config.settings import get_settings, Settings
from src.config.logging import get_logger
from src.core.view.exceptions import TemplateRenderError
from src.core.view.image_service import get_image_compressor
from src.core.view.renderer import ViewRenderer, close_view_renderer, get_view_renderer
from src.models.schemas import ErrorResponse

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory.

    Args:
        settings: Settings for a dedicated renderer; the global renderer is
            used when omitted

    Returns:
        FastAPI application instance
    """
    app_settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info("Starting view renderer", template_root=str(app_settings.template_root))

        if settings is None:
            renderer = get_view_renderer()
        else:
            renderer = ViewRenderer(settings, image_compressor=get_image_compressor(settings))
        app.state.renderer = renderer

        try:
            yield
        finally:
            logger.info("Shutting down view renderer")
            try:
                if settings is None:
                    await close_view_renderer()
                elif renderer.image_compressor is not None:
                    await renderer.image_compressor.close()
            except Exception as e:
                logger.error("Error closing image service client", error=str(e))

    app = FastAPI(
        title=app_settings.app_name,
        description="Server-side rendering of template pages",
        version=app_settings.app_version,
        lifespan=lifespan,
        docs_url="/docs" if app_settings.debug else None,
        redoc_url="/redoc" if app_settings.debug else None,
    )
    app.state.settings = app_settings

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    # Request ID middleware
    @app.middleware("http")
    async def add_request_id(request: Request, call_next):  # type: ignore
        """Add request ID to all requests."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response

    # Exception handlers
    @app.exception_handler(TemplateRenderError)
    async def template_render_exception_handler(
        request: Request, exc: TemplateRenderError
    ) -> JSONResponse:
        """Handle template engine failures."""
        error_response = ErrorResponse(
            error="Template rendering failed",
            error_code="TEMPLATE_RENDER_ERROR",
            details={"message": str(exc), "template": exc.template} if app_settings.debug else None,
            request_id=getattr(request.state, "request_id", None),
        )

        logger.error(
            "Template rendering error",
            template=exc.template,
            error_message=str(exc),
            request_id=error_response.request_id,
        )

        return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """General exception handler for unexpected errors."""
        error_response = ErrorResponse(
            error="Internal server error",
            error_code="INTERNAL_ERROR",
            details={"exception": str(exc)} if app_settings.debug else None,
            request_id=getattr(request.state, "request_id", None),
        )

        logger.error(
            "Unhandled exception",
            exception=str(exc),
            request_id=error_response.request_id,
            exc_info=True,
        )

        return JSONResponse(status_code=500, content=error_response.model_dump(mode="json"))

    from src.api.routes.health import router as health_router
    from src.api.routes.pages import router as pages_router

    app.include_router(health_router)
    # Catch-all page routes go last
    app.include_router(pages_router)

    return app


app = create_app()


# Development server runner
def run_development_server() -> None:
    """Run development server with auto-reload."""
    settings = get_settings()
    uvicorn.run(
        "src.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


if __name__ == "__main__":
    run_development_server()
