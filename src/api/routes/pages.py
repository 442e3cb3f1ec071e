"""
Page Routes
===========

FastAPI routes rendering templates of the active template set. Query
parameters are passed to the template as variables.
"""

from fastapi import APIRouter, Depends, Request, Response

from src.core.view.renderer import ViewRenderer

router = APIRouter(tags=["Pages"])

INDEX_TEMPLATE = "index"


def get_renderer(request: Request) -> ViewRenderer:
    """Dependency returning the application's view renderer."""
    return request.app.state.renderer


@router.get("/fragments/{name:path}")
async def fetch_fragment(
    name: str, request: Request, renderer: ViewRenderer = Depends(get_renderer)
) -> Response:
    """Render an embeddable fragment; status stays 200 even for missing templates."""
    return await renderer.fetch(Response(), name, dict(request.query_params))


@router.get("/{name:path}")
async def render_page(
    name: str, request: Request, renderer: ViewRenderer = Depends(get_renderer)
) -> Response:
    """Render a full page; missing templates answer with the 404 page."""
    return await renderer.render(Response(), name or INDEX_TEMPLATE, dict(request.query_params))
