"""Combined book search across Google Books and Open Library.

``CombinedBookSearch`` is the glue between the HTTP layer and the
result-fusion pipeline: it validates the query, consults the cache, fans out
to both provider fetchers concurrently, and runs the fetched records through
normalization, deduplication, ranking and truncation.
"""

import asyncio
import math
import time
from collections.abc import Mapping
from typing import Any

from .config.settings import AppSettings, SearchSettings, get_settings
from .models.providers import BookFetcher, ProviderPage
from .models.query import BookSearchQuery, SearchSource, parse_search_params
from .models.results import (
    CombinedSearchResult,
    SearchResultItem,
    SourceAvailability,
    SourceSummary,
)
from .result_processing.merger import BookResultMerger
from .result_processing.normalizers import (
    normalize_google_book,
    normalize_open_library_book,
)
from .utils.cache import SearchCache
from .utils.errors import ProviderServiceError, ProviderTimeoutError
from .utils.logging import configure_logging, get_logger, log_query, log_results

logger = get_logger(__name__)


class CombinedBookSearch:
    """Searches both providers and returns one ranked, deduplicated page."""

    def __init__(
        self,
        google: BookFetcher | None = None,
        open_library: BookFetcher | None = None,
        cache: SearchCache | None = None,
        settings: SearchSettings | None = None,
        merger: BookResultMerger | None = None,
    ):
        """Initialize the search service.

        Args:
            google: Fetcher for Google Books, or None if not configured
            open_library: Fetcher for Open Library, or None if not configured
            cache: Cache for combined results, or None to disable caching
            settings: Search bounds, timeouts and cache TTL
            merger: Result merger (created from ``settings`` if omitted)
        """
        self.settings = settings or SearchSettings()
        self.fetchers: dict[SearchSource, BookFetcher | None] = {
            SearchSource.GOOGLE: google,
            SearchSource.OPEN_LIBRARY: open_library,
        }
        self.cache = cache
        self.merger = merger or BookResultMerger(self.settings)

    @classmethod
    def from_settings(
        cls,
        app_settings: AppSettings | None = None,
        google: BookFetcher | None = None,
        open_library: BookFetcher | None = None,
    ) -> "CombinedBookSearch":
        """Build a search service from application settings.

        Configures logging and creates the Redis cache when it is enabled.
        """
        app_settings = app_settings or get_settings()
        configure_logging(app_settings.log_level)

        cache = None
        if app_settings.cache.enabled:
            cache = SearchCache(
                redis_url=app_settings.cache.redis_url,
                prefix=app_settings.cache.prefix,
            )

        return cls(
            google=google,
            open_library=open_library,
            cache=cache,
            settings=app_settings.search,
        )

    async def close(self) -> None:
        """Release the cache connection, if any."""
        if self.cache:
            await self.cache.close()

    async def search(self, params: Mapping[str, Any]) -> CombinedSearchResult:
        """Run a combined search, serving from cache when possible.

        Args:
            params: Raw query parameters, validated against this service's
                settings

        Returns:
            The combined search result

        Raises:
            QueryValidationError: If the parameters fail validation
        """
        query = parse_search_params(params, self.settings)

        cache_key = self.cache.generate_key(query) if self.cache else None
        if self.cache and cache_key:
            cached = await self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Combined search cache hit for '{query.query_text}'")
                return cached

        log_query(logger, query.model_dump(mode="json"))
        result = await self.search_both_sources(query)

        if self.cache and cache_key:
            await self.cache.set(cache_key, result, ttl=self.settings.cache_ttl)

        log_results(
            logger,
            {
                "result_count": len(result.items),
                "google_count": result.sources.google.count,
                "openlib_count": result.sources.openlib.count,
            },
        )
        return result

    async def search_both_sources(self, query: BookSearchQuery) -> CombinedSearchResult:
        """Fetch both providers concurrently and fuse their records."""
        start_time = time.time()
        limit = query.limit or self.settings.default_limit
        both = query.source == SearchSource.ALL

        # Over-fetch when both are searched to make up for deduplication
        per_source_limit = (
            math.ceil(limit * self.settings.overfetch_factor) if both else limit
        )
        per_source_offset = query.offset // 2 if both else query.offset

        google_page, open_library_page = await asyncio.gather(
            self._fetch(
                SearchSource.GOOGLE,
                query,
                min(per_source_limit, self.settings.google_max_results),
                per_source_offset,
            ),
            self._fetch(
                SearchSource.OPEN_LIBRARY,
                query,
                min(per_source_limit, self.settings.open_library_max_results),
                per_source_offset,
            ),
        )

        provider_results: dict[str, list[SearchResultItem]] = {}
        if google_page is not None:
            provider_results[SearchSource.GOOGLE.value] = [
                normalize_google_book(book) for book in google_page.items
            ]
        if open_library_page is not None:
            provider_results[SearchSource.OPEN_LIBRARY.value] = [
                normalize_open_library_book(book) for book in open_library_page.items
            ]

        # Providers already applied the offset, so the merged page starts at 0
        items = self.merger.merge_results(provider_results, limit=limit)

        # The providers overlap, so the larger total is the better estimate
        total_items = max(
            google_page.total_items if google_page else 0,
            open_library_page.total_items if open_library_page else 0,
        )

        logger.debug(
            f"Combined search for '{query.query_text}' took "
            f"{(time.time() - start_time) * 1000:.1f}ms"
        )

        return CombinedSearchResult(
            total_items=total_items,
            items=items,
            offset=query.offset,
            limit=limit,
            has_more=query.offset + len(items) < total_items,
            query=query.query_text,
            sources=SourceSummary(
                google=self._availability(google_page),
                openlib=self._availability(open_library_page),
            ),
        )

    async def _fetch(
        self,
        source: SearchSource,
        query: BookSearchQuery,
        limit: int,
        offset: int,
    ) -> ProviderPage | None:
        """Call one provider, absorbing failures as "no records".

        Returns:
            The provider's page, or None if it was not searched or failed
        """
        fetcher = self.fetchers.get(source)
        if fetcher is None or not query.searches(source):
            return None

        timeout = self.settings.provider_timeout
        try:
            page = await asyncio.wait_for(
                fetcher(
                    query.query_text,
                    limit=limit,
                    offset=offset,
                    language=query.language,
                ),
                timeout=timeout,
            )
            if not isinstance(page, ProviderPage):
                page = ProviderPage.model_validate(page)
            return page
        except asyncio.TimeoutError:
            error = ProviderTimeoutError(source.value, timeout=timeout)
            logger.warning(
                f"{error.message} (query: '{query.query_text}')",
                extra={"error": error.to_dict()},
            )
        except Exception as e:
            error = ProviderServiceError.from_exception(
                e,
                message=f"{source.value} search failed: {e}",
                provider=source.value,
            )
            logger.warning(
                f"{error.message} (query: '{query.query_text}')",
                extra={"error": error.to_dict()},
            )
        return None

    @staticmethod
    def _availability(page: ProviderPage | None) -> SourceAvailability:
        if page is None:
            return SourceAvailability(available=False, count=0)
        return SourceAvailability(available=True, count=len(page.items))
