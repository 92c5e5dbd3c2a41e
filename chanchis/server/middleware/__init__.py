"""
Middleware modules for the Chanchis server.
"""

from .request_tracing import RequestTracingMiddleware

__all__ = ["RequestTracingMiddleware"]
