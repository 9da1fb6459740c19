# Utils module for ccql
from .text_normalization import (
    DISCARD,
    NOISE_SIGNATURES,
    NoiseMatch,
    is_noise,
    match_noise,
    normalize_prompt,
    with_signatures,
)
from .timing import Timer

__all__ = [
    'DISCARD',
    'NOISE_SIGNATURES',
    'NoiseMatch',
    'is_noise',
    'match_noise',
    'normalize_prompt',
    'with_signatures',
    'Timer',
]
