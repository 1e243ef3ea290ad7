# src/glickoladder/middleware/__init__.py

"""Middleware components for the GlickoLadder API."""

from .logging import REQUEST_ID_HEADER, RequestLoggingMiddleware

__all__ = ["REQUEST_ID_HEADER", "RequestLoggingMiddleware"]
