"""Normalization of provider records into ``SearchResultItem``.

Two independent mappings converge on one output type:

- ``normalize_google_book``: Google Books volume metadata
- ``normalize_open_library_book``: Open Library work metadata

Both are total. A missing or malformed optional field becomes absent
(``None``) and never raises. ``parse_google_volume`` and
``parse_open_library_doc`` turn raw API payloads into the metadata shape the
normalizers consume.
"""

import re
from collections.abc import Mapping
from typing import Any

from ..models.results import BookSource, SearchResultItem

UNKNOWN_TITLE = "Unknown Title"

OPEN_LIBRARY_COVER_BASE = "https://covers.openlibrary.org"

# Fallback order when the preferred Google Books image size is missing
IMAGE_SIZE_PRIORITIES = {
    "small": ["small", "thumbnail", "smallThumbnail", "medium", "large", "extraLarge"],
    "medium": ["medium", "large", "small", "thumbnail", "extraLarge", "smallThumbnail"],
    "large": ["large", "extraLarge", "medium", "small", "thumbnail", "smallThumbnail"],
}

_LEADING_YEAR = re.compile(r"(\d{4})(?!\d)")
_ISBN_SEPARATORS = re.compile(r"[-\s]")


# Field coercion helpers


def _first(value: Any) -> Any:
    """Collapse an array-valued field to its first element."""
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _text(value: Any) -> str | None:
    """Return a non-empty string or None."""
    value = _first(value)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _non_negative_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int) and value >= 0:
        return value
    return None


def _rating(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if 0 <= value <= 5:
        return float(value)
    return None


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


def _author_names(value: Any) -> list[str]:
    """Extract author names, keeping one entry per author."""
    if not isinstance(value, (list, tuple)):
        return []

    names = []
    for author in value:
        if isinstance(author, str):
            names.append(author)
        elif isinstance(author, Mapping):
            name = author.get("name")
            names.append(name if isinstance(name, str) else "")
        else:
            names.append("")
    return names


def parse_year(date_string: Any) -> int | None:
    """Extract the leading 4-digit year from a free-form date string.

    "2019-09-13" and "2019" give 2019; "September 2019" and "19" give None.
    """
    if not isinstance(date_string, str):
        return None
    match = _LEADING_YEAR.match(date_string.strip())
    if not match:
        return None
    return int(match.group(1))


def _external_id(value: Any) -> str:
    if isinstance(value, bool) or value is None:
        return ""
    if isinstance(value, (str, int)):
        return str(value)
    return ""


def _title(value: Any) -> str:
    return value if isinstance(value, str) and value.strip() else UNKNOWN_TITLE


# Cover images


def get_best_image_url(image_links: Any, preferred_size: str = "medium") -> str | None:
    """Pick the best Google Books image link for the preferred size."""
    if not isinstance(image_links, Mapping):
        return None

    for size in IMAGE_SIZE_PRIORITIES.get(preferred_size, []):
        url = _text(image_links.get(size))
        if url:
            return url
    return None


def get_open_library_cover_url(cover_id: int | str, size: str = "M") -> str:
    """Build an Open Library cover URL from a numeric cover id."""
    return f"{OPEN_LIBRARY_COVER_BASE}/b/id/{cover_id}-{size}.jpg"


def _open_library_cover_id(raw: Mapping[str, Any]) -> int | None:
    cover_id = raw.get("coverIds")
    if cover_id is None:
        cover_id = raw.get("coverId")
    cover_id = _first(cover_id)
    if isinstance(cover_id, str) and cover_id.isdigit():
        cover_id = int(cover_id)
    # Open Library uses -1 for "no cover"
    cover_id = _non_negative_int(cover_id)
    return cover_id if cover_id else None


def _description(value: Any) -> str | None:
    """Read a description given as a string or as ``{"value": ...}``."""
    if isinstance(value, Mapping):
        value = value.get("value")
    return _text(value)


# Normalizers


def normalize_google_book(raw: Mapping[str, Any]) -> SearchResultItem:
    """Normalize Google Books volume metadata to a ``SearchResultItem``."""
    fields: dict[str, Any] = {
        "id": f"{BookSource.GOOGLE.value}:{_external_id(raw.get('id'))}",
        "source": BookSource.GOOGLE,
        "title": _title(raw.get("title")),
        "authors": _author_names(raw.get("authors")),
        "categories": _string_list(raw.get("categories")),
        "subtitle": _text(raw.get("subtitle")),
        "description": _text(raw.get("description")),
        "publish_year": parse_year(raw.get("publishedDate")),
        "publisher": _text(raw.get("publisher")),
        "isbn10": _text(raw.get("isbn10")),
        "isbn13": _text(raw.get("isbn13")),
        "page_count": _non_negative_int(raw.get("pageCount")) or None,
        "language": _text(raw.get("language")),
        "average_rating": _rating(raw.get("averageRating")),
        "ratings_count": _non_negative_int(raw.get("ratingsCount")),
        "preview_link": _text(raw.get("previewLink")),
        "cover_image": get_best_image_url(raw.get("imageLinks"), "medium"),
    }
    return SearchResultItem(**fields)


def normalize_open_library_book(raw: Mapping[str, Any]) -> SearchResultItem:
    """Normalize Open Library work metadata to a ``SearchResultItem``."""
    publish_year = _non_negative_int(raw.get("firstPublishYear"))
    if publish_year is None:
        publish_year = parse_year(raw.get("firstPublishDate") or raw.get("publishDate"))

    categories = raw.get("subjects")
    if categories is None:
        categories = raw.get("categories")

    cover_id = _open_library_cover_id(raw)

    fields: dict[str, Any] = {
        "id": f"{BookSource.OPEN_LIBRARY.value}:{_external_id(raw.get('workId'))}",
        "source": BookSource.OPEN_LIBRARY,
        "title": _title(raw.get("title")),
        "authors": _author_names(raw.get("authors")),
        "categories": _string_list(categories),
        "subtitle": _text(raw.get("subtitle")),
        "description": _description(raw.get("description")),
        "publish_year": publish_year,
        "publisher": _text(raw.get("publishers") or raw.get("publisher")),
        "isbn10": _text(raw.get("isbn10")),
        "isbn13": _text(raw.get("isbn13")),
        "page_count": _non_negative_int(raw.get("pageCount")) or None,
        "language": _text(raw.get("languages") or raw.get("language")),
        "average_rating": _rating(raw.get("averageRating")),
        "ratings_count": _non_negative_int(raw.get("ratingsCount")),
        "has_full_text": True if raw.get("hasFullText") is True else None,
        "is_public_domain": True if raw.get("isPublicDomain") is True else None,
        "cover_image": get_open_library_cover_url(cover_id) if cover_id else None,
    }
    return SearchResultItem(**fields)


# Raw API payload parsers


def _upgrade_image_url(url: Any) -> str | None:
    """Upgrade a Google Books image URL to HTTPS and the zoom=1 rendition."""
    url = _text(url)
    if url is None:
        return None
    upgraded = re.sub(r"^http:", "https:", url)
    return re.sub(r"&zoom=\d", "&zoom=1", upgraded)


def parse_google_volume(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map a raw Google Books API volume to volume metadata."""
    volume_info = raw.get("volumeInfo")
    if not isinstance(volume_info, Mapping):
        volume_info = {}

    metadata: dict[str, Any] = {
        "id": raw.get("id"),
        "title": _title(volume_info.get("title")),
        "authors": _string_list(volume_info.get("authors")),
        "categories": _string_list(volume_info.get("categories")),
    }

    identifiers = volume_info.get("industryIdentifiers")
    if isinstance(identifiers, list):
        for identifier in identifiers:
            if not isinstance(identifier, Mapping):
                continue
            kind = identifier.get("type")
            if kind == "ISBN_10" and "isbn10" not in metadata:
                metadata["isbn10"] = identifier.get("identifier")
            elif kind == "ISBN_13" and "isbn13" not in metadata:
                metadata["isbn13"] = identifier.get("identifier")

    for key in (
        "subtitle",
        "publisher",
        "publishedDate",
        "description",
        "pageCount",
        "averageRating",
        "ratingsCount",
        "language",
        "previewLink",
    ):
        if volume_info.get(key) is not None:
            metadata[key] = volume_info[key]

    image_links = volume_info.get("imageLinks")
    if isinstance(image_links, Mapping):
        links = {}
        for size, url in image_links.items():
            upgraded = _upgrade_image_url(url)
            if upgraded:
                links[size] = upgraded
        if links:
            metadata["imageLinks"] = links

    return metadata


def _isbns_of_length(isbns: Any, length: int) -> list[str]:
    return [
        isbn
        for isbn in _string_list(isbns)
        if len(_ISBN_SEPARATORS.sub("", isbn)) == length
    ]


def parse_open_library_doc(raw: Mapping[str, Any]) -> dict[str, Any]:
    """Map a raw Open Library search document to work metadata."""
    key = raw.get("key")
    work_id = key.rsplit("/", 1)[-1] if isinstance(key, str) else key

    names = _string_list(raw.get("author_name"))
    author_keys = _string_list(raw.get("author_key"))
    authors = [
        {
            "id": author_keys[i] if i < len(author_keys) else f"unknown-{i}",
            "name": name,
        }
        for i, name in enumerate(names)
        if name
    ]

    metadata: dict[str, Any] = {
        "workId": work_id,
        "title": _title(raw.get("title")),
        "authors": authors,
    }

    mapping = {
        "subtitle": "subtitle",
        "first_publish_year": "firstPublishYear",
        "number_of_pages_median": "pageCount",
        "ratings_average": "averageRating",
        "ratings_count": "ratingsCount",
        "public_scan_b": "isPublicDomain",
        "has_fulltext": "hasFullText",
    }
    for raw_key, key_name in mapping.items():
        if raw.get(raw_key) is not None:
            metadata[key_name] = raw[raw_key]

    for raw_key, key_name in (
        ("publisher", "publishers"),
        ("subject", "subjects"),
        ("language", "languages"),
    ):
        values = _string_list(raw.get(raw_key))
        if values:
            metadata[key_name] = values

    isbn10 = _isbns_of_length(raw.get("isbn"), 10)
    isbn13 = _isbns_of_length(raw.get("isbn"), 13)
    if isbn10:
        metadata["isbn10"] = isbn10
    if isbn13:
        metadata["isbn13"] = isbn13

    if raw.get("cover_i") is not None:
        metadata["coverIds"] = [raw["cover_i"]]

    return metadata
