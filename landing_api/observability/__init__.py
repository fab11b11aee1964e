"""Observability helpers.

Request IDs + structlog contextvars, JSON log rendering, and access logs.
"""
