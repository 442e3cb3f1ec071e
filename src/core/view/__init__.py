"""
View Module
===========

Template rendering pipeline.

Components:
- resolver: template and layout resolution with 404 fallback
- context: variable context construction
- engine: Jinja2 template engine and template function registry
- lazyload: <img>/<source> lazy-load rewriting
- compressor: HTML compression
- image_service: optional image compression collaborator
- renderer: render orchestration and entry points
"""
