"""
View Renderer
=============

Server-side HTML view rendering for Jinja2 template sets.

This package provides:
- Template resolution with a 404 fallback and layout handling
- Lazy-load rewriting of <img> and <source> elements
- HTML compression of rendered documents
- FastAPI endpoints serving rendered pages
"""

__version__ = "1.0.0"
__author__ = "View Renderer Team"
