# ccql/services/report_service.py
"""
Service for turning clusters into a duplicate-prompt report.

The clustering engine returns every cluster ordered by count; this layer
applies the user-facing choices on top: minimum count, minimum length,
sort order, result limit and whether to show variants.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..config import ReportConfig, SortOrder
from ..domain.cluster import PromptCluster
from ..domain.prompt import PromptRecord
from ..logging_config import get_logger
from .clustering_service import PromptClusteringService
from .occurrence_service import MIN_NORMALIZED_LENGTH

logger = get_logger('report_service')


@dataclass
class DuplicateReportRow:
    """One reported cluster."""
    canonical: str
    count: int
    latest: Optional[datetime] = None
    variants: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'canonical': self.canonical,
            'count': self.count,
            'latest': self.latest.isoformat() if self.latest else None,
            'variants': list(self.variants),
        }


@dataclass
class DuplicateReport:
    """
    Result of a duplicate-prompt analysis.

    Attributes:
        rows: Clusters that passed the report filters, in display order
        total_prompts: Number of raw prompts analysed
        total_clusters: Number of clusters before filtering
        statistics: Clustering statistics over all clusters
    """
    rows: List[DuplicateReportRow]
    total_prompts: int
    total_clusters: int
    statistics: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_prompts': self.total_prompts,
            'total_clusters': self.total_clusters,
            'statistics': dict(self.statistics),
            'clusters': [row.to_dict() for row in self.rows],
        }


class DuplicateReportService:
    """
    Builds DuplicateReports from prompt records.
    """

    def __init__(
        self,
        clustering_service: Optional[PromptClusteringService] = None,
        config: Optional[ReportConfig] = None
    ):
        self.clustering_service = clustering_service or PromptClusteringService()
        self.config = config or ReportConfig()

        if self.config.min_length < MIN_NORMALIZED_LENGTH:
            logger.warning(
                f"min_length={self.config.min_length} is below the engine's fixed floor of "
                f"{MIN_NORMALIZED_LENGTH} characters; shorter prompts are still discarded"
            )

    def build(self, records: List[PromptRecord]) -> DuplicateReport:
        """
        Cluster prompts and apply report filters.

        Args:
            records: Prompts to analyse

        Returns:
            DuplicateReport (rows may be empty)
        """
        clusters = self.clustering_service.cluster(record.text for record in records)
        statistics = self.clustering_service.get_cluster_statistics(clusters)

        latest_by_text = self._latest_by_text(records)

        rows = [
            DuplicateReportRow(
                canonical=cluster.canonical,
                count=cluster.count,
                latest=self._cluster_latest(cluster, latest_by_text),
                variants=list(cluster.variants) if self.config.show_variants else [],
            )
            for cluster in self.filter_clusters(clusters)
        ]

        if self.config.sort == SortOrder.LATEST:
            rows = self.sort_by_latest(rows)

        if self.config.limit:
            rows = rows[:self.config.limit]

        logger.info(
            f"Report: {len(rows)} of {len(clusters)} clusters "
            f"(min_count={self.config.min_count}, min_length={self.config.min_length})"
        )

        return DuplicateReport(
            rows=rows,
            total_prompts=len(records),
            total_clusters=len(clusters),
            statistics=statistics,
        )

    def filter_clusters(self, clusters: List[PromptCluster]) -> List[PromptCluster]:
        """Drop clusters below the minimum count or minimum canonical length."""
        return [
            cluster for cluster in clusters
            if cluster.count >= self.config.min_count
            and len(cluster.canonical) >= self.config.min_length
        ]

    @staticmethod
    def sort_by_latest(rows: List[DuplicateReportRow]) -> List[DuplicateReportRow]:
        """Newest first; rows without a timestamp go last, keeping count order."""
        dated = [row for row in rows if row.latest is not None]
        undated = [row for row in rows if row.latest is None]
        dated.sort(key=lambda row: row.latest, reverse=True)
        return dated + undated

    def _latest_by_text(self, records: List[PromptRecord]) -> Dict[str, datetime]:
        latest: Dict[str, datetime] = {}
        normalize = self.clustering_service.occurrence_counter.normalize
        for record in records:
            if record.timestamp is None:
                continue
            text = normalize(record.text)
            if not text:
                continue
            current = latest.get(text)
            if current is None or record.timestamp > current:
                latest[text] = record.timestamp
        return latest

    @staticmethod
    def _cluster_latest(
        cluster: PromptCluster,
        latest_by_text: Dict[str, datetime]
    ) -> Optional[datetime]:
        stamps = [latest_by_text[text] for text in cluster.variants if text in latest_by_text]
        return max(stamps) if stamps else None
