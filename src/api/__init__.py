"""
FastAPI Endpoints
=================

HTTP access to rendered template pages.

Endpoints:
- GET /health: Health check endpoint
- GET /fragments/{name}: Embedded fragment rendering (status always 200)
- GET /{name}: Page rendering with 404 fallback
"""
