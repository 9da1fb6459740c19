"""
API routers for ccql.
"""

from .health import router as health_router
from .duplicates import router as duplicates_router

__all__ = ["health_router", "duplicates_router"]
