"""
Service factory for creating and configuring deduplication services.

Centralizes the wiring between request settings, configuration and
services so routes stay thin and tests can build the same stack.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from ccql.config import AppConfig, load_config
from ccql.logging_config import get_logger
from ccql.services.clustering_service import PromptClusteringService
from ccql.services.report_service import DuplicateReportService

from ccql_api.models import DuplicatesRequest

logger = get_logger("factory")


@dataclass
class ServiceContainer:
    """Services instantiated for one request."""
    config: AppConfig
    clustering: PromptClusteringService
    report: DuplicateReportService


class ServiceFactory:
    """
    Factory for creating and configuring service instances.
    """

    def __init__(self, base_config: Optional[AppConfig] = None) -> None:
        self.base_config = base_config or load_config()

    def create_config(self, request: DuplicatesRequest) -> AppConfig:
        """
        Apply request settings on top of the base configuration.

        Args:
            request: Validated duplicates request

        Returns:
            New AppConfig; the base config is not modified
        """
        dedup = replace(
            self.base_config.dedup,
            similarity_threshold=request.threshold,
            metric=request.metric,
            strategy=request.strategy,
        )
        report = replace(
            self.base_config.report,
            min_count=request.min_count,
            limit=request.limit,
            min_length=request.min_length,
            sort=request.sort,
            show_variants=request.show_variants,
        )
        return replace(self.base_config, dedup=dedup, report=report)

    def create_services(self, config: AppConfig) -> ServiceContainer:
        """
        Create the services for a configured request.

        Args:
            config: The configured AppConfig

        Returns:
            ServiceContainer with clustering and report services
        """
        clustering = PromptClusteringService(config.dedup)
        report = DuplicateReportService(clustering_service=clustering, config=config.report)
        logger.debug(
            f"Created services (threshold={config.dedup.similarity_threshold}, "
            f"metric={config.dedup.metric.value}, strategy={config.dedup.strategy.value})"
        )
        return ServiceContainer(config=config, clustering=clustering, report=report)

    def for_request(self, request: DuplicatesRequest) -> ServiceContainer:
        return self.create_services(self.create_config(request))
