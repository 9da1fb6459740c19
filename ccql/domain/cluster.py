"""
Domain models for groups of near-duplicate prompts.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, NamedTuple


class OccurrencePair(NamedTuple):
    """A distinct normalized prompt and how often it occurred in the batch."""
    text: str
    count: int


@dataclass
class PromptCluster:
    """
    Represents a group of near-duplicate prompts.

    Attributes:
        canonical: Representative text; the first normalized text assigned
            to the cluster. Never changes after creation.
        variants: Every distinct normalized text assigned to the cluster, in
            assignment order. variants[0] == canonical.
        count: Sum of the occurrence counts of all variants.
    """
    canonical: str
    variants: List[str] = field(default_factory=list)
    count: int = 0

    def __post_init__(self):
        """Seed the variant list with the canonical text."""
        if not self.variants:
            self.variants = [self.canonical]
        elif self.variants[0] != self.canonical:
            raise ValueError("First variant must equal the canonical text")

    @classmethod
    def from_pair(cls, pair: OccurrencePair) -> "PromptCluster":
        """Start a new cluster led by a single occurrence pair."""
        return cls(canonical=pair.text, variants=[pair.text], count=pair.count)

    def add_variant(self, text: str, count: int) -> None:
        """Absorb a distinct normalized text and its occurrence count."""
        self.variants.append(text)
        self.count += count

    @property
    def is_singleton(self) -> bool:
        """True if only the canonical text is in the cluster."""
        return len(self.variants) == 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'canonical': self.canonical,
            'variants': list(self.variants),
            'count': self.count,
        }
