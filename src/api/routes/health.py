"""
Health Routes
=============

FastAPI routes for health check endpoints.
"""

from fastapi import APIRouter, Depends

from src.api.routes.pages import get_renderer
from src.core.view.renderer import ViewRenderer
from src.models.schemas import HealthStatus

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthStatus)
async def health_check(renderer: ViewRenderer = Depends(get_renderer)) -> HealthStatus:
    """Report renderer configuration and template root availability."""
    settings = renderer.settings
    root_exists = renderer.root.is_dir()

    return HealthStatus(
        status="healthy" if root_exists else "unhealthy",
        version=settings.app_version,
        template_root=str(renderer.root),
        template_root_exists=root_exists,
        layout=renderer.layout,
        lazyload=settings.view_lazyload,
        compressor=settings.view_compressor,
        image_service=renderer.image_compressor is not None,
    )
