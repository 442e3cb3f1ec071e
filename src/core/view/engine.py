"""
Template Engine
===============

Jinja2 template engine wrapper and the registry of functions exposed to
templates.
"""

import importlib
import inspect
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

import jinja2

from src.config.logging import get_logger
from src.core.view.exceptions import TemplateRenderError

logger = get_logger(__name__)

PluginSpec = Union[str, type]


def _accepts_view(plugin_class: type) -> bool:
    try:
        return "view" in inspect.signature(plugin_class).parameters
    except (TypeError, ValueError):
        return False


class TemplateFunctionRegistry:
    """
    Startup-time registry of template functions.

    Plain callables are exposed under their name. Plugins are classes with a
    ``process`` method; one instance is created per registry installation and
    its ``process`` is exposed under the plugin name. A plugin whose
    constructor accepts ``view`` receives the renderer it is installed for.

    The registry is frozen once installed into an engine.
    """

    def __init__(self) -> None:
        self._functions: Dict[str, Callable[..., Any]] = {}
        self._plugins: Dict[str, PluginSpec] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _check_open(self) -> None:
        if self._frozen:
            raise RuntimeError("Template function registry is already installed")

    def register_function(self, func: Callable[..., Any], name: Optional[str] = None) -> None:
        """Register a plain callable, by default under its ``__name__``."""
        self._check_open()
        self._functions[name or func.__name__] = func

    def register_plugin(self, name: str, plugin: PluginSpec) -> None:
        """Register a plugin class or its dotted import path."""
        self._check_open()
        self._plugins[name] = plugin

    def _load_plugin_class(self, name: str, plugin: PluginSpec) -> Optional[type]:
        if isinstance(plugin, type):
            return plugin

        module_name, _, class_name = plugin.rpartition(".")
        try:
            module = importlib.import_module(module_name)
            return getattr(module, class_name)
        except (ImportError, AttributeError, ValueError):
            logger.warning("Template plugin not found, skipping", plugin=name, path=plugin)
            return None

    def build(self, view: Any = None) -> Dict[str, Callable[..., Any]]:
        """Instantiate plugins and return the name -> callable mapping."""
        functions = dict(self._functions)

        for name, plugin in self._plugins.items():
            plugin_class = self._load_plugin_class(name, plugin)
            if plugin_class is None:
                continue
            if _accepts_view(plugin_class):
                instance = plugin_class(view=view)
            else:
                instance = plugin_class()
            functions[name] = instance.process

        return functions

    def install(self, env: jinja2.Environment, view: Any = None) -> None:
        """Expose the registered functions as template globals and freeze."""
        env.globals.update(self.build(view))
        self._frozen = True


class BaseTemplateEngine(ABC):
    """Abstract base class for template engines."""

    @abstractmethod
    async def render_to_string(self, template: str, context: Mapping[str, Any]) -> str:
        """Render a template file with the given variables."""
        pass


class Jinja2TemplateEngine(BaseTemplateEngine):
    """Jinja2-based template engine implementation."""

    def __init__(
        self,
        root: Path,
        registry: Optional[TemplateFunctionRegistry] = None,
        view: Any = None,
    ) -> None:
        self.root = Path(root)
        self.logger: Any = logger.bind(engine="jinja2")  # structlog.BoundLoggerBase
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(self.root)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
            enable_async=True,
        )
        if registry is not None:
            registry.install(self.env, view)

    async def render_to_string(self, template: str, context: Mapping[str, Any]) -> str:
        """
        Render a template to a string.

        Args:
            template: Template name relative to the template root
            context: Template variables

        Returns:
            Rendered document

        Raises:
            TemplateRenderError: If the template is missing or fails to render
        """
        try:
            compiled = self.env.get_template(template)
            return await compiled.render_async(context)
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("Template rendering failed", template=template, error=str(e))
            raise TemplateRenderError(error_msg, template=template) from e
