"""Observability helpers: structlog JSON logging and the per-request toolbar middleware."""

from debug_toolbar.observability.logging import configure_logging

__all__ = ["configure_logging"]
