"""
Application Settings
===================

View renderer settings and environment configuration using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Dict, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    app_name: str = Field(default="View Renderer", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    debug: bool = Field(default=True, description="Debug mode")

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # Template Configuration
    template_path: Path = Field(
        default=Path("./templates"), description="Directory holding the template sets"
    )
    template_name: str = Field(default="default", description="Active template set")
    template_layout: str = Field(default="layout/main", description="Default layout template")
    error_layout: str = Field(
        default="layout/main", description="Layout forced when rendering error templates"
    )
    tmp_template_path: str = Field(
        default="tmp/", description="Template sub-directory for rendering raw content"
    )
    template_plugins: Dict[str, str] = Field(
        default_factory=dict, description="Template plugins: function name -> dotted class path"
    )

    # View post-processing
    view_lazyload: bool = Field(default=True, description="Rewrite images for lazy loading")
    view_compressor: bool = Field(default=True, description="Compress rendered HTML")

    # Image compression service
    image_service_url: Optional[str] = Field(
        default=None, description="Image compression service URL"
    )
    image_service_timeout: float = Field(
        default=5.0, description="Image compression timeout in seconds"
    )
    image_target_width: int = Field(default=600, description="Compressed image width")

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional log file path")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("image_service_url")
    @classmethod
    def strip_service_url(cls, v: Optional[str]) -> Optional[str]:
        """Normalize the image service URL; blank disables the service."""
        if v is None or not v.strip():
            return None
        return v.strip().rstrip("/")

    @property
    def template_root(self) -> Path:
        """Directory the active template set is loaded from."""
        return self.template_path / self.template_name

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="VIEW_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
