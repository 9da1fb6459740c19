# ccql/services/occurrence_service.py
"""
Service for collapsing exact duplicate prompts into ranked occurrence counts.
"""
from collections import Counter
from typing import Iterable, List, Mapping, Optional

from ..domain.cluster import OccurrencePair
from ..logging_config import get_logger
from ..utils.text_normalization import NoiseMatch, normalize_prompt

logger = get_logger('occurrence_service')

# Normalized prompts shorter than this are dropped before clustering.
# Independent of any caller-side minimum length.
MIN_NORMALIZED_LENGTH = 4


class OccurrenceCounter:
    """
    Normalizes raw prompts and counts exact duplicates.

    The ranked output is the processing order for clustering: highest
    count first, ties in first-seen order, so identical input always
    produces identical clusters.
    """

    def __init__(self, noise_signatures: Optional[Mapping[str, NoiseMatch]] = None):
        """
        Args:
            noise_signatures: Optional replacement for the default noise table
        """
        self.noise_signatures = noise_signatures

    def normalize(self, raw: str) -> str:
        """Normalize one prompt with this counter's noise table."""
        return normalize_prompt(raw, self.noise_signatures)

    def tally(self, raws: Iterable[str]) -> Counter:
        """
        Count normalized prompts, skipping discarded and too-short ones.

        The Counter preserves first-seen insertion order.
        """
        counts: Counter = Counter()
        seen = 0
        for raw in raws:
            seen += 1
            text = self.normalize(raw)
            if not text or len(text) < MIN_NORMALIZED_LENGTH:
                continue
            counts[text] += 1

        kept = sum(counts.values())
        logger.debug(
            f"Normalized {seen} prompts: {kept} kept, {seen - kept} discarded, "
            f"{len(counts)} distinct"
        )
        return counts

    def count(self, raws: Iterable[str]) -> List[OccurrencePair]:
        """
        Build the ranked occurrence list.

        Args:
            raws: Raw prompt strings

        Returns:
            OccurrencePair list sorted by count descending, ties in first-seen order
        """
        counts = self.tally(raws)
        # sorted() is stable, so equal counts keep insertion (first-seen) order
        ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
        return [OccurrencePair(text, count) for text, count in ranked]
