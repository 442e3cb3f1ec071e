"""
View Exceptions
===============

Errors raised by the render pipeline. A missing page template is not an
error: it resolves to the 404 template instead.
"""


class ViewError(Exception):
    """Base exception for view rendering errors."""

    pass


class TemplateRenderError(ViewError):
    """Exception raised when the template engine fails to render a template."""

    def __init__(self, message: str, template: str = "") -> None:
        super().__init__(message)
        self.template = template


class ImageCompressionError(ViewError):
    """Exception raised when the image compression service fails."""

    pass
