"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Template locations, feature flags and service settings
- logging: Structured logging configuration
"""
