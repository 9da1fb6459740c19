"""
Duplicate prompt analysis endpoints.
"""

from fastapi import APIRouter

from ccql.logging_config import get_logger
from ccql.services.ingestion_service import prompts_from_strings
from ccql.services.similarity_service import EditDistanceSimilarityService, length_ratio
from ccql_api.factories import ServiceFactory
from ccql_api.models import (
    DuplicatesRequest,
    DuplicatesResponse,
    SimilarityRequest,
    SimilarityResponse,
)

router = APIRouter(tags=["Duplicates"])
logger = get_logger("api.duplicates")

factory = ServiceFactory()


# Plain def: clustering is CPU bound, FastAPI runs it in the threadpool
@router.post("/duplicates", response_model=DuplicatesResponse)
def find_duplicates(request: DuplicatesRequest) -> DuplicatesResponse:
    """
    Cluster near-duplicate prompts and return the filtered report.
    """
    services = factory.for_request(request)
    report = services.report.build(prompts_from_strings(request.prompts))
    logger.info(f"Duplicates request: {len(request.prompts)} prompts -> {len(report.rows)} clusters")
    return DuplicatesResponse(**report.to_dict())


@router.post("/similarity", response_model=SimilarityResponse)
def compare(request: SimilarityRequest) -> SimilarityResponse:
    """
    Score a single pair of strings.
    """
    a, b = request.a, request.b
    if request.normalize:
        a, b = a.strip().lower(), b.strip().lower()

    service = EditDistanceSimilarityService(threshold=request.threshold, metric=request.metric)
    return SimilarityResponse(
        similarity=service.similarity(a, b),
        length_ratio=length_ratio(a, b),
        is_similar=service.is_similar(a, b),
    )
