"""
Data Models
===========

Pydantic models for templates, lazy-load matches, render results and API payloads.
"""
