"""
Middleware package for the ccql API.
"""

from .security import setup_security, SecurityHeadersMiddleware, RequestTracingMiddleware

__all__ = ["setup_security", "SecurityHeadersMiddleware", "RequestTracingMiddleware"]
