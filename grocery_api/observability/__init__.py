"""Lightweight observability helpers.

Request IDs + structlog contextvars, repository call timing, and an in-memory
metrics snapshot endpoint for local development.
"""
