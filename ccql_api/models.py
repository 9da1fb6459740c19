# ccql_api/models.py
"""
Pydantic models for request validation and response serialization.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ccql.config import (
    DEFAULT_SIMILARITY_THRESHOLD,
    AssignmentStrategy,
    EditMetric,
    SortOrder,
)


class DuplicatesRequest(BaseModel):
    """Prompts to analyse plus clustering and report settings"""

    prompts: List[str] = Field(
        ...,
        max_length=200_000,
        description="Raw prompt texts"
    )

    threshold: float = Field(
        default=DEFAULT_SIMILARITY_THRESHOLD,
        ge=0.0,
        le=1.0,
        description="Similarity threshold (0.0-1.0)"
    )

    min_count: int = Field(
        default=2,
        ge=0,
        description="Minimum cluster count to report"
    )

    limit: int = Field(
        default=50,
        ge=0,
        le=10_000,
        description="Maximum clusters to return (0 for all)"
    )

    min_length: int = Field(
        default=4,
        ge=0,
        description="Minimum canonical prompt length"
    )

    show_variants: bool = Field(
        default=False,
        description="Include the variants of each cluster"
    )

    sort: SortOrder = Field(
        default=SortOrder.COUNT,
        description="Order by count or latest use"
    )

    strategy: AssignmentStrategy = Field(
        default=AssignmentStrategy.FIRST_MATCH,
        description="Cluster assignment strategy"
    )

    metric: EditMetric = Field(
        default=EditMetric.OSA,
        description="Edit distance metric"
    )

    @field_validator('prompts')
    @classmethod
    def validate_prompts(cls, v):
        """Reject oversized individual prompts"""
        for prompt in v:
            if len(prompt) > 100_000:
                raise ValueError('Prompt too long (max 100000 characters)')
        return v


class ClusterModel(BaseModel):
    canonical: str
    count: int
    latest: Optional[str] = None
    variants: List[str] = []


class DuplicatesResponse(BaseModel):
    total_prompts: int
    total_clusters: int
    statistics: Dict[str, Any]
    clusters: List[ClusterModel]


class SimilarityRequest(BaseModel):
    """Two strings to compare"""
    a: str = Field(..., max_length=100_000)
    b: str = Field(..., max_length=100_000)
    threshold: float = Field(default=DEFAULT_SIMILARITY_THRESHOLD, ge=0.0, le=1.0)
    metric: EditMetric = EditMetric.OSA
    normalize: bool = Field(
        default=True,
        description="Trim and lower-case both strings before comparing"
    )


class SimilarityResponse(BaseModel):
    similarity: float
    length_ratio: float
    is_similar: bool
