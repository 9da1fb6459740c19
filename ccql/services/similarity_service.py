# ccql/services/similarity_service.py
"""
Service for scoring how close two normalized prompts are.

Similarity is normalized edit distance:

    1 - distance(a, b) / max(len(a), len(b))

computed by RapidFuzz. A cheap length-ratio check runs first: strings more
than 2x apart in length are never near-duplicates, and skipping them bounds
the cost of the distance computation.
"""
from typing import Union

from rapidfuzz.distance import OSA, Levenshtein

from ..config import DEFAULT_SIMILARITY_THRESHOLD, EditMetric, validate_threshold

# Pairs whose shorter/longer length ratio is below this are rejected
# without computing edit distance.
MIN_LENGTH_RATIO = 0.5

_DISTANCES = {
    EditMetric.OSA: OSA.distance,
    EditMetric.LEVENSHTEIN: Levenshtein.distance,
}


def length_ratio(a: str, b: str) -> float:
    """
    Ratio of the shorter string's length to the longer one's.

    Returns 1.0 for two empty strings.
    """
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return min(len(a), len(b)) / longest


class EditDistanceSimilarityService:
    """
    Similarity service using RapidFuzz edit distances.

    The threshold is fixed at construction and reused for every comparison;
    the service keeps no other state, so one instance can be shared by
    concurrent callers.
    """

    def __init__(
        self,
        threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
        metric: Union[EditMetric, str] = EditMetric.OSA
    ):
        """
        Initialize with similarity threshold.

        Args:
            threshold: Minimum normalized similarity for a match (0.0 to 1.0)
            metric: Edit distance to use ("osa" or "levenshtein")

        Raises:
            ValueError: If threshold is outside [0.0, 1.0] or metric is unknown
        """
        self.threshold = validate_threshold(threshold)
        self.metric = EditMetric(metric)
        self._distance = _DISTANCES[self.metric]

    def distance(self, a: str, b: str) -> int:
        """Raw edit distance between two strings."""
        return self._distance(a, b)

    def similarity(self, a: str, b: str) -> float:
        """
        Compute normalized similarity.

        Args:
            a: First string
            b: Second string

        Returns:
            Similarity score between 0.0 and 1.0 (1.0 for identical strings)
        """
        if a == b:
            return 1.0
        longest = max(len(a), len(b))
        return 1.0 - (self._distance(a, b) / longest)

    def is_similar(self, a: str, b: str) -> bool:
        """
        Check if two strings are near-duplicates.

        Exact matches short-circuit to True; pairs failing the length-ratio
        check short-circuit to False regardless of threshold.

        Args:
            a: First string
            b: Second string

        Returns:
            True if similarity >= threshold
        """
        if a == b:
            return True

        if length_ratio(a, b) < MIN_LENGTH_RATIO:
            return False

        return self.similarity(a, b) >= self.threshold

    def __repr__(self) -> str:
        return f"{type(self).__name__}(threshold={self.threshold}, metric={self.metric.value!r})"


def is_similar(
    a: str,
    b: str,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD,
    metric: Union[EditMetric, str] = EditMetric.OSA
) -> bool:
    """
    One-off similarity check.

    Prefer an EditDistanceSimilarityService instance when comparing many pairs.
    """
    return EditDistanceSimilarityService(threshold=threshold, metric=metric).is_similar(a, b)


def create_similarity_service(
    method: Union[EditMetric, str] = EditMetric.OSA,
    threshold: float = DEFAULT_SIMILARITY_THRESHOLD
) -> EditDistanceSimilarityService:
    """
    Factory function to create a similarity service.

    Args:
        method: "osa" or "levenshtein"
        threshold: Similarity threshold

    Returns:
        EditDistanceSimilarityService instance
    """
    return EditDistanceSimilarityService(threshold=threshold, metric=method)
