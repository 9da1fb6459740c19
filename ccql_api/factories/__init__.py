"""
Service factories for the ccql API.
"""

from .service_factory import ServiceContainer, ServiceFactory

__all__ = ["ServiceContainer", "ServiceFactory"]
