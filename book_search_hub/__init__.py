"""Book Search Hub: fused Google Books and Open Library search results."""

from .config import AppSettings, SearchSettings, get_settings
from .models import BookSearchQuery, CombinedSearchResult, SearchResultItem
from .search import CombinedBookSearch

__version__ = "0.1.0"

__all__ = [
    "AppSettings",
    "BookSearchQuery",
    "CombinedBookSearch",
    "CombinedSearchResult",
    "SearchResultItem",
    "SearchSettings",
    "get_settings",
]
