"""Data models for the book search hub."""

from .providers import BookFetcher, ProviderPage
from .query import BookSearchQuery, SearchSource, parse_search_params
from .results import (
    BookSource,
    CombinedSearchResult,
    SearchResultItem,
    SourceAvailability,
    SourceSummary,
)

__all__ = [
    "BookFetcher",
    "BookSearchQuery",
    "BookSource",
    "CombinedSearchResult",
    "ProviderPage",
    "SearchResultItem",
    "SearchSource",
    "SourceAvailability",
    "SourceSummary",
    "parse_search_params",
]
