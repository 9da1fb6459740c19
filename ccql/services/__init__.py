# Services module for ccql
from .similarity_service import (
    EditDistanceSimilarityService,
    create_similarity_service,
    is_similar,
    length_ratio,
)
from .occurrence_service import OccurrenceCounter, MIN_NORMALIZED_LENGTH
from .clustering_service import PromptClusteringService
from .ingestion_service import IngestionService, IngestionError, prompts_from_strings
from .report_service import DuplicateReport, DuplicateReportRow, DuplicateReportService

__all__ = [
    'EditDistanceSimilarityService',
    'create_similarity_service',
    'is_similar',
    'length_ratio',
    'OccurrenceCounter',
    'MIN_NORMALIZED_LENGTH',
    'PromptClusteringService',
    'IngestionService',
    'IngestionError',
    'prompts_from_strings',
    'DuplicateReport',
    'DuplicateReportRow',
    'DuplicateReportService',
]
