# Domain models for ccql
from .cluster import OccurrencePair, PromptCluster
from .prompt import PromptRecord

__all__ = [
    'OccurrencePair',
    'PromptCluster',
    'PromptRecord',
]
