"""
Pydantic Models and Schemas
===========================

Core data models for template resolution, lazy-load rewriting, render results
and API responses.
"""

from typing import Optional, List, Dict, Any, Literal, NamedTuple
from datetime import datetime, timezone
from enum import Enum, IntEnum

from pydantic import BaseModel, ConfigDict, Field


# Enums
class RenderStatus(IntEnum):
    """HTTP-style outcome of a render."""
    OK = 200
    NOT_FOUND = 404


class RenderStage(str, Enum):
    """Stages of the render pipeline, in the order they are reached."""
    RESOLVED = "resolved"
    RENDERED = "rendered"
    LAZYLOADED = "lazyloaded"
    COMPRESSED = "compressed"
    DONE = "done"


class ElementKind(str, Enum):
    """Element kinds recognized by the lazy-load transformer."""
    IMG = "img"
    SOURCE = "source"


# Element kind -> attribute carrying the resource URL
LAZYLOAD_POLICY: Dict[ElementKind, str] = {
    ElementKind.IMG: "src",
    ElementKind.SOURCE: "srcset",
}


# Template Models
class TemplateReference(BaseModel):
    """Resolved template file, relative to the template root."""
    name: str = Field(..., description="Template name including the file extension")
    status: RenderStatus = Field(RenderStatus.OK, description="Resolution outcome")

    model_config = ConfigDict(frozen=True)

    @property
    def found(self) -> bool:
        return self.status == RenderStatus.OK


# Lazy-load Models
class AttributeMatch(NamedTuple):
    """One ``name="value"`` occurrence inside an element."""
    occurrence: str
    value: str


class ElementMatch(BaseModel):
    """A located element plus its extracted attributes."""
    markup: str = Field(..., description="Literal element text as found in the document")
    kind: ElementKind
    resource: Optional[str] = Field(None, description="Raw resource attribute value")
    css_class: Optional[str] = Field(None, description="Raw class attribute value")

    model_config = ConfigDict(frozen=True)


# Render Models
class RenderResult(BaseModel):
    """Final document of one render together with its status."""
    content: str = Field(..., description="Rendered document")
    status: RenderStatus = Field(..., description="Render status")
    template: TemplateReference = Field(..., description="Template that was rendered")
    stages: List[RenderStage] = Field(default_factory=list, description="Stages reached")


# Health Check Models
class HealthStatus(BaseModel):
    """Health check status."""
    status: Literal["healthy", "unhealthy", "degraded"] = Field(..., description="Overall status")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Check timestamp"
    )
    version: str = Field(..., description="Application version")

    template_root: str = Field(..., description="Active template root")
    template_root_exists: bool = Field(..., description="Template root is present")
    layout: Optional[str] = Field(None, description="Active layout template")
    lazyload: bool = Field(..., description="Lazy-load rewriting enabled")
    compressor: bool = Field(..., description="HTML compression enabled")
    image_service: bool = Field(..., description="Image compression service configured")


# Error Models
class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), description="Error timestamp"
    )
    request_id: Optional[str] = Field(None, description="Request identifier for tracking")
