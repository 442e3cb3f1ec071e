"""
Test Configuration
==================

Pytest configuration with fixtures for all test types.
Provides a throwaway template tree, test settings and renderer instances.
"""

import pytest
from pathlib import Path
from typing import Dict

from src.config.settings import Settings
from src.core.view.renderer import ViewRenderer


TEMPLATES: Dict[str, str] = {
    "layout/main.html": (
        "<!DOCTYPE html>\n<html>\n<head><title>{{ title | default('Test') }}</title></head>\n"
        "<body>\n    <!-- layout -->\n    {% block content %}{% endblock %}\n</body>\n</html>\n"
    ),
    "layout/alt.html": '<div class="alt-layout">{% block content %}{% endblock %}</div>',
    "error/404.html": (
        "{% extends layout %}\n{% block content %}\n    <h1>Not Found</h1>\n{% endblock %}\n"
    ),
    "index.html": (
        "{% extends layout %}\n{% block content %}\n    <h1>{{ title }}</h1>\n{% endblock %}\n"
    ),
    "gallery.html": (
        "{% extends layout %}\n{% block content %}\n"
        "    <picture>\n"
        '        <source srcset="{{ image }}.webp" type="image/webp">\n'
        '        <img src="{{ image }}.jpg" class="photo" alt="">\n'
        "    </picture>\n"
        "{% endblock %}\n"
    ),
    "show_layout.html": "{{ layout }}",
    "partials/card.html": "<p>{{ message }}</p>",
    "broken.html": "{% if %}",
}


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    """Template directory holding a ``default`` template set."""
    root = tmp_path / "templates" / "default"
    for name, source in TEMPLATES.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
    return tmp_path / "templates"


@pytest.fixture
def template_root(template_path: Path) -> Path:
    """Root of the active template set."""
    return template_path / "default"


@pytest.fixture
def test_settings(template_path: Path) -> Settings:
    """Test settings pointing at the temporary template tree."""
    return Settings(
        environment="testing",
        template_path=template_path,
        template_name="default",
        template_layout="layout/main",
        error_layout="layout/alt",
        view_lazyload=True,
        view_compressor=True,
        image_service_url=None,
        log_level="DEBUG",
    )


@pytest.fixture
def renderer(test_settings: Settings) -> ViewRenderer:
    """View renderer without an image compression collaborator."""
    return ViewRenderer(test_settings)
