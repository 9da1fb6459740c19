# ccql/services/clustering_service.py
"""
Service for grouping near-duplicate prompts.

Greedy single-pass clustering over ranked occurrence counts:
1. Normalize prompts and collapse exact duplicates (OccurrenceCounter)
2. Walk the distinct texts from most to least frequent
3. Each text joins the first cluster whose canonical text it is similar to,
   or starts a new cluster
4. Return clusters ordered by total count

First-match assignment is order dependent and costs O(P x C) comparisons
for P distinct texts and C clusters. BEST_MATCH is available as an opt-in
alternative and produces different output on the same input.
"""
from typing import Callable, Iterable, List, Optional

from ..config import AppConfig, AssignmentStrategy, DedupConfig
from ..domain.cluster import OccurrencePair, PromptCluster
from ..logging_config import get_logger
from ..utils.timing import Timer
from .interfaces import ISimilarityService
from .occurrence_service import OccurrenceCounter
from .similarity_service import EditDistanceSimilarityService

logger = get_logger('clustering_service')


class PromptClusteringService:
    """
    Groups near-duplicate prompts into PromptClusters.

    The service is stateless between calls apart from its similarity
    threshold; every cluster() call works on its own cluster list.
    """

    def __init__(
        self,
        config: Optional[DedupConfig] = None,
        similarity_service: Optional[ISimilarityService] = None,
        occurrence_counter: Optional[OccurrenceCounter] = None
    ):
        """
        Initialize the clustering service.

        Args:
            config: Deduplication settings (threshold, metric, strategy)
            similarity_service: Service deciding whether two texts match
            occurrence_counter: Normalizer/counter for raw prompts

        Raises:
            ValueError: If the configured threshold is outside [0.0, 1.0]
        """
        self.config = config or DedupConfig()
        self.strategy = AssignmentStrategy(self.config.strategy)
        self.occurrence_counter = occurrence_counter or OccurrenceCounter()

        if similarity_service is None:
            self.similarity_service = EditDistanceSimilarityService(
                threshold=self.config.similarity_threshold,
                metric=self.config.metric
            )
        else:
            self.similarity_service = similarity_service

    @classmethod
    def from_app_config(cls, config: AppConfig) -> "PromptClusteringService":
        return cls(config.dedup)

    @property
    def threshold(self) -> float:
        return self.similarity_service.threshold

    def cluster(self, raws: Iterable[str]) -> List[PromptCluster]:
        """
        Cluster raw prompts.

        Args:
            raws: Raw prompt strings

        Returns:
            Clusters sorted by count descending (ties in creation order).
            Empty if every prompt was noise or too short.
        """
        with Timer("Count occurrences") as count_timer:
            pairs = self.occurrence_counter.count(raws)

        with Timer("Assign clusters") as assign_timer:
            clusters = self.assign(pairs)

        logger.info(
            f"Clustered {len(pairs)} distinct prompts into {len(clusters)} clusters "
            f"(threshold={self.threshold}, strategy={self.strategy.value}, "
            f"{count_timer.elapsed + assign_timer.elapsed:.3f}s)"
        )
        return clusters

    def assign(
        self,
        pairs: Iterable[OccurrencePair],
        progress_callback: Optional[Callable[[int], None]] = None
    ) -> List[PromptCluster]:
        """
        Assign ranked occurrence pairs to clusters.

        Args:
            pairs: Occurrence pairs in processing order
            progress_callback: Optional callback receiving the number of
                pairs processed so far

        Returns:
            Clusters sorted by count descending (stable)
        """
        if self.strategy == AssignmentStrategy.BEST_MATCH:
            find_cluster = self._find_best_match
        else:
            find_cluster = self._find_first_match

        clusters: List[PromptCluster] = []

        for i, pair in enumerate(pairs, start=1):
            match = find_cluster(pair.text, clusters)
            if match is not None:
                match.add_variant(pair.text, pair.count)
            else:
                clusters.append(PromptCluster.from_pair(pair))

            if progress_callback:
                progress_callback(i)

        # Stable: equal counts keep creation order
        clusters.sort(key=lambda c: c.count, reverse=True)
        return clusters

    def _find_first_match(self, text: str, clusters: List[PromptCluster]) -> Optional[PromptCluster]:
        for cluster in clusters:
            if self.similarity_service.is_similar(text, cluster.canonical):
                return cluster
        return None

    def _find_best_match(self, text: str, clusters: List[PromptCluster]) -> Optional[PromptCluster]:
        best: Optional[PromptCluster] = None
        best_score = -1.0
        for cluster in clusters:
            if not self.similarity_service.is_similar(text, cluster.canonical):
                continue
            score = self.similarity_service.similarity(text, cluster.canonical)
            if score > best_score:
                best, best_score = cluster, score
                if score >= 1.0:
                    break
        return best

    def get_cluster_statistics(self, clusters: List[PromptCluster]) -> dict:
        """
        Compute statistics about the clustering results.

        Args:
            clusters: List of clusters

        Returns:
            Dictionary with statistics
        """
        if not clusters:
            return {
                'total_clusters': 0,
                'total_prompts': 0,
                'distinct_prompts': 0,
                'avg_count': 0,
                'max_count': 0,
                'singletons': 0
            }

        counts = [c.count for c in clusters]

        return {
            'total_clusters': len(clusters),
            'total_prompts': sum(counts),
            'distinct_prompts': sum(len(c.variants) for c in clusters),
            'avg_count': sum(counts) / len(counts),
            'max_count': max(counts),
            'singletons': sum(1 for c in clusters if c.is_singleton)
        }
