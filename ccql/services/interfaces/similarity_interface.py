# ccql/services/interfaces/similarity_interface.py
"""
Protocol interface for similarity services.

Defines the contract the clustering service depends on, so alternative
scorers (or test doubles) can be injected.

Example usage:
    def my_function(similarity: ISimilarityService) -> bool:
        return similarity.is_similar("continue", "contnue")
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class ISimilarityService(Protocol):
    """
    Protocol defining the similarity service interface.

    similarity() returns a value between 0.0 (no match) and 1.0
    (identical); is_similar() applies the service's threshold.
    """

    threshold: float

    def similarity(self, a: str, b: str) -> float:
        """
        Compute similarity between two strings.

        Args:
            a: First string
            b: Second string

        Returns:
            Similarity score between 0.0 and 1.0
        """
        ...

    def is_similar(self, a: str, b: str) -> bool:
        """
        Check if two strings meet the similarity threshold.

        Args:
            a: First string
            b: Second string

        Returns:
            True if similarity >= threshold
        """
        ...
