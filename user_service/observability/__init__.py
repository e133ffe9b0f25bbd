"""Observability helpers for the user service.

Request IDs + structlog contextvars, an in-memory metrics snapshot, store call
instrumentation and an optional tracing annotation hook.
"""
