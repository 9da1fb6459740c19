"""
Unit tests for OccurrenceCounter.
"""

import pytest
from ccql.domain.cluster import OccurrencePair
from ccql.services.occurrence_service import MIN_NORMALIZED_LENGTH, OccurrenceCounter
from ccql.utils.text_normalization import NoiseMatch


@pytest.fixture
def counter():
    return OccurrenceCounter()


class TestOccurrenceCounter:
    """Tests for normalization, counting and ranking."""

    def test_empty_input(self, counter):
        assert counter.count([]) == []

    def test_counts_and_ranks(self, counter, typo_prompts):
        """Exact duplicates are merged and ranked by count."""
        pairs = counter.count(typo_prompts)

        assert pairs[0] == OccurrencePair("continue", 2)
        assert sorted(pairs[1:]) == sorted([
            OccurrencePair("cotninue", 1),
            OccurrencePair("contnue", 1),
            OccurrencePair("fix it", 1),
            OccurrencePair("fix this", 1),
        ])

    def test_ties_keep_first_seen_order(self, counter):
        """Equal counts are ordered by first appearance."""
        pairs = counter.count(["b text", "a text", "c text", "a text", "b text", "d text"])

        assert [p.text for p in pairs] == ["b text", "a text", "c text", "d text"]
        assert [p.count for p in pairs] == [2, 2, 1, 1]

    def test_case_and_whitespace_variants_merge(self, counter):
        pairs = counter.count(["Continue", "CONTINUE ", "  continue"])
        assert pairs == [OccurrencePair("continue", 3)]

    def test_length_floor(self, counter):
        """Normalized texts of three characters or fewer are dropped."""
        assert MIN_NORMALIZED_LENGTH == 4
        pairs = counter.count(["abc", "  ab  ", "yes", "abcd", "?!"])
        assert pairs == [OccurrencePair("abcd", 1)]

    def test_length_floor_applies_after_trim(self, counter):
        assert counter.count(["   ok    "]) == []

    def test_noise_and_short_input_yield_nothing(self, counter):
        assert counter.count(["ab", "import x", ""]) == []

    def test_tally_preserves_first_seen_order(self, counter):
        counts = counter.tally(["second one", "first one", "second one"])
        assert list(counts) == ["second one", "first one"]
        assert counts["second one"] == 2

    def test_accepts_generators(self, counter):
        pairs = counter.count(p for p in ["continue", "continue"])
        assert pairs == [OccurrencePair("continue", 2)]

    def test_custom_noise_table(self):
        """A counter can be built with its own noise markers."""
        counter = OccurrenceCounter(noise_signatures={"/": NoiseMatch.PREFIX})
        pairs = counter.count(["/compact", "/compact", "import os"])
        assert pairs == [OccurrencePair("import os", 1)]

    def test_deterministic(self, counter, noisy_prompts):
        assert counter.count(noisy_prompts) == counter.count(list(noisy_prompts))
