"""Duplicate removal keyed on ISBN or normalized title and author."""

import re

from ..models.results import SearchResultItem
from ..utils.logging import get_logger

logger = get_logger(__name__)

# Optional scalar fields counted towards completeness when merging duplicates
COMPLETENESS_FIELDS = (
    "description",
    "cover_image",
    "isbn10",
    "isbn13",
    "page_count",
    "publisher",
    "publish_year",
    "average_rating",
    "ratings_count",
    "preview_link",
    "language",
)

_NON_ISBN_CHARS = re.compile(r"[^0-9X]")


def strip_isbn(isbn: str) -> str:
    """Drop separators from an ISBN, keeping digits and the X check digit."""
    return _NON_ISBN_CHARS.sub("", isbn.upper())


def normalize_text(value: str) -> str:
    """Lowercase, trim and collapse internal whitespace runs."""
    return " ".join(value.lower().split())


def get_dedup_key(item: SearchResultItem) -> str:
    """Derive the identity key used to detect duplicate books.

    ISBN-13 wins over ISBN-10; without either, title and first author are
    compared up to case and whitespace.
    """
    for isbn in (item.isbn13, item.isbn10):
        if isbn:
            stripped = strip_isbn(isbn)
            if stripped:
                return f"isbn:{stripped}"

    first_author = item.authors[0] if item.authors else ""
    return f"title:{normalize_text(item.title)}|author:{normalize_text(first_author)}"


def completeness_count(item: SearchResultItem) -> int:
    """Count populated optional fields, plus one each for authors and categories."""
    count = sum(1 for name in COMPLETENESS_FIELDS if getattr(item, name) is not None)
    if item.authors:
        count += 1
    if item.categories:
        count += 1
    return count


def remove_duplicates(results: list[SearchResultItem]) -> list[SearchResultItem]:
    """Collapse duplicate books, keeping the most complete record of each.

    A later duplicate replaces the kept record only when its completeness
    count is strictly greater. The surviving record is one whole candidate,
    never a field-level composite, and it takes the position where its key
    first appeared.
    """
    if not results:
        return []

    best: dict[str, SearchResultItem] = {}
    best_counts: dict[str, int] = {}

    for result in results:
        key = get_dedup_key(result)
        count = completeness_count(result)

        if key not in best:
            best[key] = result
            best_counts[key] = count
        elif count > best_counts[key]:
            logger.debug(
                f"Replacing {best[key].id} with more complete duplicate {result.id}"
            )
            best[key] = result
            best_counts[key] = count

    return list(best.values())
