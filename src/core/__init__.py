"""
Core Business Logic
==================

Core business logic for server-side view rendering.

Modules:
- view: template resolution, rendering, lazy-load rewriting and HTML compression
"""
