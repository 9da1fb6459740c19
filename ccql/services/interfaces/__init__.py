"""
Service interfaces for dependency injection and testability.
"""

from .similarity_interface import ISimilarityService

__all__ = [
    "ISimilarityService",
]
