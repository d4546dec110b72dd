"""Result processing package for book search results.

This package contains the result-fusion pipeline:
- normalizers: Map Google Books and Open Library records to one item shape
- deduplication: Identity keys and the merge policy for duplicate books
- ranker: Completeness scoring and display ordering
- merger: Deduplicate, rank and page results from both providers
"""

from .deduplication import completeness_count, get_dedup_key, remove_duplicates
from .merger import BookResultMerger
from .normalizers import (
    normalize_google_book,
    normalize_open_library_book,
    parse_google_volume,
    parse_open_library_doc,
)
from .ranker import score_item, sort_results

__all__ = [
    "BookResultMerger",
    "completeness_count",
    "get_dedup_key",
    "normalize_google_book",
    "normalize_open_library_book",
    "parse_google_volume",
    "parse_open_library_doc",
    "remove_duplicates",
    "score_item",
    "sort_results",
]
