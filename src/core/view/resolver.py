"""
Template Resolver
=================

Map logical template names to template files under the template root.
Unknown page templates fall back to the 404 error template; unknown layouts
are ignored so deployments without a custom layout keep the previous one.
"""

from pathlib import Path
from typing import Any, Optional, Tuple

from src.config.logging import get_logger
from src.models.schemas import RenderStatus, TemplateReference

logger = get_logger(__name__)

FILE_TYPE = ".html"
ERROR_TEMPLATE = "error/404"


def with_extension(name: str, file_type: str = FILE_TYPE) -> str:
    """Append the template extension unless the name already carries it."""
    if name.endswith(file_type):
        return name
    return name + file_type


class TemplateResolver:
    """Resolve template and layout names against a template root."""

    def __init__(self, root: Path, file_type: str = FILE_TYPE) -> None:
        self.root = Path(root)
        self.file_type = file_type
        self.logger: Any = logger.bind(component="template_resolver")

    def path_for(self, name: str) -> Path:
        """Filesystem path of a template name relative to the root."""
        return self.root / with_extension(name, self.file_type)

    def contains(self, path: Path) -> bool:
        """Whether ``path`` lies inside the template root once resolved."""
        try:
            return path.resolve().is_relative_to(self.root.resolve())
        except (OSError, ValueError):
            # Unresolvable names, e.g. an embedded NUL byte
            return False

    def exists(self, name: str) -> bool:
        """
        Check whether a template file exists inside the template root.

        Names that escape the root (absolute paths, ``..`` segments) or cannot
        be resolved never exist.
        """
        path = self.path_for(name)
        if not self.contains(path):
            self.logger.warning("Template outside template root", template=name)
            return False
        try:
            return path.resolve().is_file()
        except (OSError, ValueError):
            return False

    def resolve(self, name: str = "") -> Tuple[TemplateReference, RenderStatus]:
        """
        Resolve a page template.

        Args:
            name: Logical template name, with or without extension

        Returns:
            Template reference and render status. Missing templates resolve to
            the error template with ``RenderStatus.NOT_FOUND``.
        """
        if name and self.exists(name):
            reference = TemplateReference(name=with_extension(name, self.file_type))
            self.logger.debug("Template resolved", template=reference.name)
            return reference, RenderStatus.OK

        self.logger.info("Template not found", template=name)
        reference = TemplateReference(
            name=ERROR_TEMPLATE + self.file_type, status=RenderStatus.NOT_FOUND
        )
        return reference, RenderStatus.NOT_FOUND

    def resolve_layout(self, name: str, current: Optional[str] = None) -> Optional[str]:
        """
        Resolve a layout template.

        Returns the layout name with extension when the file exists, otherwise
        ``current`` unchanged.
        """
        layout = with_extension(name or "", self.file_type)
        if name and self.exists(layout):
            return layout

        self.logger.warning("Layout not found, keeping current layout", layout=layout, current=current)
        return current
