# ccql/utils/text_normalization.py
"""
Prompt normalization for duplicate detection.

Normalization only trims and lower-cases, then rejects structural noise
(code fragments, stack frames, markup) that ends up in prompt history when
users paste snippets. Punctuation and unicode are left as typed.
"""
from enum import Enum
from typing import Dict, Mapping, Optional


class NoiseMatch(str, Enum):
    """How a noise marker is tested against the normalized text."""
    SUBSTRING = "substring"
    PREFIX = "prefix"


# Sentinel returned for discarded input
DISCARD = ""

# marker -> match kind. Markers are compared against the trimmed,
# lower-cased text.
NOISE_SIGNATURES: Mapping[str, NoiseMatch] = {
    # Source code
    "import ": NoiseMatch.SUBSTRING,
    "export ": NoiseMatch.SUBSTRING,
    "const ": NoiseMatch.SUBSTRING,
    "function ": NoiseMatch.SUBSTRING,
    "interface ": NoiseMatch.SUBSTRING,
    # Stack frames and bundler output
    ".js:": NoiseMatch.SUBSTRING,
    ".ts:": NoiseMatch.SUBSTRING,
    ".tsx:": NoiseMatch.SUBSTRING,
    "chunk-": NoiseMatch.SUBSTRING,
    "requestanimationframe": NoiseMatch.SUBSTRING,
    "installhook": NoiseMatch.SUBSTRING,
    # Comments, fences, JSON and markup
    "//": NoiseMatch.PREFIX,
    "/*": NoiseMatch.PREFIX,
    "```": NoiseMatch.PREFIX,
    "[": NoiseMatch.PREFIX,
    "{": NoiseMatch.PREFIX,
    "<": NoiseMatch.PREFIX,
}


def match_noise(
    text: str,
    signatures: Optional[Mapping[str, NoiseMatch]] = None
) -> Optional[str]:
    """
    Find the first noise marker that matches already-normalized text.

    Args:
        text: Trimmed, lower-cased text
        signatures: Marker table (defaults to NOISE_SIGNATURES)

    Returns:
        The matching marker, or None if the text looks like prose
    """
    table = NOISE_SIGNATURES if signatures is None else signatures
    for marker, kind in table.items():
        if kind == NoiseMatch.PREFIX:
            if text.startswith(marker):
                return marker
        elif marker in text:
            return marker
    return None


def is_noise(text: str, signatures: Optional[Mapping[str, NoiseMatch]] = None) -> bool:
    """Check whether normalized text matches any noise marker."""
    return match_noise(text, signatures) is not None


def normalize_prompt(
    raw: str,
    signatures: Optional[Mapping[str, NoiseMatch]] = None
) -> str:
    """
    Map a raw prompt to its comparison form.

    Args:
        raw: Prompt text as extracted from history
        signatures: Optional replacement noise table

    Returns:
        Trimmed, lower-cased text, or DISCARD ("") for noise
    """
    if not raw:
        return DISCARD

    text = raw.strip().lower()
    if is_noise(text, signatures):
        return DISCARD
    return text


def with_signatures(extra: Dict[str, NoiseMatch]) -> Dict[str, NoiseMatch]:
    """
    Build a noise table extending the defaults.

    Args:
        extra: Additional marker -> match kind entries

    Returns:
        New table; NOISE_SIGNATURES itself is left untouched
    """
    table = dict(NOISE_SIGNATURES)
    table.update({marker.lower(): NoiseMatch(kind) for marker, kind in extra.items()})
    return table
