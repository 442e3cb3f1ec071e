"""
View Renderer
=============

Render orchestration: resolve the template, build the variable context,
render with the template engine, then apply lazy-load rewriting and HTML
compression.

Entry points:
- render: full page, sets status (200/404) and content type on the response
- fetch: embedded rendering, writes the body and leaves the status alone
- get_html: direct string render without resolution or post-processing
- get_html_from_content: render arbitrary template source via a temporary file
"""

import uuid
from typing import Any, List, Mapping, Optional

from fastapi import Response

from src.config.logging import get_logger
from src.config.settings import Settings, get_settings
from src.core.view.compressor import compress_html
from src.core.view.context import build_context
from src.core.view.engine import BaseTemplateEngine, Jinja2TemplateEngine, TemplateFunctionRegistry
from src.core.view.exceptions import ViewError
from src.core.view.image_service import BaseImageCompressor, get_image_compressor
from src.core.view.lazyload import BaseElementMatcher, ElementRewriter, LazyloadTransformer
from src.core.view.resolver import TemplateResolver, with_extension
from src.models.schemas import ElementKind, RenderResult, RenderStage

logger = get_logger(__name__)

CONTENT_TYPE = "text/html"


class ViewRenderer:
    """Render templates of the active template set into HTML documents."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        engine: Optional[BaseTemplateEngine] = None,
        image_compressor: Optional[BaseImageCompressor] = None,
        registry: Optional[TemplateFunctionRegistry] = None,
        matcher: Optional[BaseElementMatcher] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.root = self.settings.template_root
        self.logger: Any = logger.bind(component="view_renderer", root=str(self.root))
        self.resolver = TemplateResolver(self.root)
        self.image_compressor = image_compressor

        self.registry = registry or TemplateFunctionRegistry()
        for name, plugin in self.settings.template_plugins.items():
            self.registry.register_plugin(name, plugin)
        self.engine = engine or Jinja2TemplateEngine(self.root, registry=self.registry, view=self)

        rewriter = ElementRewriter(
            image_compressor,
            width=self.settings.image_target_width,
            timeout=self.settings.image_service_timeout,
        )
        self.lazyload = LazyloadTransformer(rewriter, matcher)

        self._layout: Optional[str] = None
        self.set_layout(self.settings.template_layout)

    @property
    def layout(self) -> Optional[str]:
        """Active layout template name, including extension."""
        return self._layout

    def set_layout(self, layout: str = "") -> None:
        """Switch layout; a layout that does not exist keeps the current one."""
        self._layout = self.resolver.resolve_layout(layout, self._layout)

    async def post_process(self, content: str, stages: Optional[List[RenderStage]] = None) -> str:
        """Apply the enabled lazy-load and compression stages to a document."""
        stages = stages if stages is not None else []

        if self.settings.view_lazyload:
            content = await self.lazyload.transform(content, ElementKind.IMG)
            content = await self.lazyload.transform(content, ElementKind.SOURCE)
            stages.append(RenderStage.LAZYLOADED)

        if self.settings.view_compressor:
            content = compress_html(content)
            stages.append(RenderStage.COMPRESSED)

        return content

    async def render_result(
        self,
        template: str = "",
        data: Optional[Mapping[str, Any]] = None,
    ) -> RenderResult:
        """
        Run the render pipeline.

        Args:
            template: Logical template name
            data: Template variables supplied by the caller

        Returns:
            Render result with document, status and reached stages

        Raises:
            TemplateRenderError: If the template engine fails
        """
        stages: List[RenderStage] = []

        reference, status = self.resolver.resolve(template)
        stages.append(RenderStage.RESOLVED)

        context = build_context(data, layout=self.layout)
        content = await self.engine.render_to_string(reference.name, context)
        stages.append(RenderStage.RENDERED)

        content = await self.post_process(content, stages)
        stages.append(RenderStage.DONE)

        self.logger.info(
            "View rendered",
            template=reference.name,
            status=int(status),
            html_length=len(content),
        )
        return RenderResult(content=content, status=status, template=reference, stages=stages)

    @staticmethod
    def _write(response: Response, content: str) -> None:
        response.body = response.render(content)
        response.headers["content-length"] = str(len(response.body))

    async def render(
        self, response: Response, template: str = "", data: Optional[Mapping[str, Any]] = None
    ) -> Response:
        """
        Render a page into ``response``.

        Missing templates render the 404 error template with status 404.
        """
        result = await self.render_result(template, data)
        self._write(response, result.content)
        response.status_code = int(result.status)
        response.headers["Content-Type"] = CONTENT_TYPE
        return response

    async def fetch(
        self, response: Response, template: str = "", data: Optional[Mapping[str, Any]] = None
    ) -> Response:
        """
        Render an embedded fragment into ``response``.

        The response status is not touched, so a missing template yields the
        404 document body with the response's existing status.
        """
        result = await self.render_result(template, data)
        self._write(response, result.content)
        return response

    async def get_html(self, template: str = "", data: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render a template straight to a string.

        The active layout is exposed as ``layout``; error templates always
        get the configured error layout instead.

        Raises:
            TemplateRenderError: If the template does not exist or fails to render
        """
        name = with_extension(template, self.resolver.file_type)
        layout = self.layout
        if "error" in name:
            layout = with_extension(self.settings.error_layout, self.resolver.file_type)
        context = build_context(data, layout=layout)
        return await self.engine.render_to_string(name, context)

    async def get_html_from_content(
        self,
        content: str,
        data: Optional[Mapping[str, Any]] = None,
        tmp_path: Optional[str] = None,
    ) -> str:
        """
        Render raw template source.

        The source is written to a uniquely named temporary template under
        the template root, rendered with ``get_html`` and removed afterwards.

        Raises:
            ViewError: If ``tmp_path`` points outside the template root
            TemplateRenderError: If the source fails to render
        """
        tmp_path = self.settings.tmp_template_path if tmp_path is None else tmp_path
        template = f"{tmp_path}tmp_{uuid.uuid4().hex}"
        path = self.resolver.path_for(template)
        if not self.resolver.contains(path):
            self.logger.error("Temporary template outside template root", tmp_path=tmp_path)
            raise ViewError(f"Temporary template path outside template root: {tmp_path}")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        try:
            return await self.get_html(template, data)
        finally:
            path.unlink(missing_ok=True)


# Global renderer instance
_view_renderer: Optional[ViewRenderer] = None


def get_view_renderer() -> ViewRenderer:
    """Get or create the global view renderer."""
    global _view_renderer
    if _view_renderer is None:
        settings = get_settings()
        _view_renderer = ViewRenderer(settings, image_compressor=get_image_compressor(settings))
    return _view_renderer


async def close_view_renderer() -> None:
    """Close the global view renderer and its image compression client."""
    global _view_renderer
    if _view_renderer is not None:
        if _view_renderer.image_compressor is not None:
            await _view_renderer.image_compressor.close()
        _view_renderer = None
