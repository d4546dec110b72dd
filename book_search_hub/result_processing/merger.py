"""Result merger: deduplicate, rank and page results from both providers."""

import time
from collections.abc import Mapping
from typing import Any

from ..config.settings import SearchSettings
from ..models.results import SearchResultItem
from ..utils.logging import get_logger
from .deduplication import remove_duplicates
from .ranker import sort_results

logger = get_logger(__name__)


class BookResultMerger:
    """Merges and ranks normalized results from multiple providers."""

    def __init__(self, settings: SearchSettings | None = None):
        """Initialize the merger with search settings."""
        self.settings = settings or SearchSettings()
        self.metrics = self._empty_metrics()

    @staticmethod
    def _empty_metrics() -> dict[str, Any]:
        return {
            "total_merges": 0,
            "total_input_results": 0,
            "total_output_results": 0,
            "avg_merge_time_ms": 0.0,
            "avg_deduplication_ratio": 0.0,
            "last_merge_time": None,
        }

    def merge_results(
        self,
        provider_results: Mapping[str, list[SearchResultItem]],
        limit: int | None = None,
        offset: int = 0,
    ) -> list[SearchResultItem]:
        """Merge results from multiple providers into one ranked page.

        Args:
            provider_results: Normalized items keyed by provider name, in the
                order the providers should be considered
            limit: Page size (defaults to the configured default)
            offset: Number of ranked results to skip

        Returns:
            Deduplicated, sorted results truncated to ``limit`` from ``offset``
        """
        start_time = time.time()

        if limit is None:
            limit = self.settings.default_limit

        all_results: list[SearchResultItem] = []
        for results in provider_results.values():
            all_results.extend(results)

        deduplicated = remove_duplicates(all_results)
        ranked = sort_results(deduplicated)
        page = ranked[offset : offset + limit]

        self._update_metrics(
            total_input_results=len(all_results),
            deduplicated_count=len(deduplicated),
            final_count=len(page),
            duration=time.time() - start_time,
        )

        if len(deduplicated) < len(all_results):
            logger.debug(
                f"Merged {len(all_results)} results into {len(deduplicated)} unique books"
            )

        return page

    def _update_metrics(
        self,
        total_input_results: int,
        deduplicated_count: int,
        final_count: int,
        duration: float,
    ) -> None:
        """Update merger metrics."""
        self.metrics["total_merges"] += 1
        self.metrics["total_input_results"] += total_input_results
        self.metrics["total_output_results"] += final_count
        self.metrics["last_merge_time"] = time.time()

        merges = self.metrics["total_merges"]

        if total_input_results > 0:
            dedup_ratio = 1.0 - (deduplicated_count / total_input_results)

            # Update with moving average
            prev_avg = self.metrics["avg_deduplication_ratio"]
            self.metrics["avg_deduplication_ratio"] = (
                prev_avg * (merges - 1) + dedup_ratio
            ) / merges

        prev_avg = self.metrics["avg_merge_time_ms"]
        self.metrics["avg_merge_time_ms"] = (
            prev_avg * (merges - 1) + duration * 1000
        ) / merges

    def get_metrics(self) -> dict[str, Any]:
        """Get merger metrics."""
        metrics = dict(self.metrics)

        if self.metrics["total_merges"] > 0:
            metrics["avg_results_per_merge"] = (
                self.metrics["total_output_results"] / self.metrics["total_merges"]
            )

        return metrics

    def reset_metrics(self) -> None:
        """Reset all metrics."""
        self.metrics = self._empty_metrics()
