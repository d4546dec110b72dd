"""Test configuration for Book Search Hub."""

import pytest

from book_search_hub.config import SearchSettings, get_settings
from book_search_hub.models.results import SearchResultItem


@pytest.fixture
def mock_env(monkeypatch):
    """Mock environment variables for testing."""
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SEARCH__MAX_LIMIT", "20")
    monkeypatch.setenv("SEARCH__CACHE_TTL", "60")

    # Clear lru_cache to ensure it picks up the new env vars
    get_settings.cache_clear()

    yield

    # Clean up
    get_settings.cache_clear()


@pytest.fixture
def search_settings():
    """Search settings with the default boundary values."""
    return SearchSettings()


@pytest.fixture
def make_item():
    """Factory for normalized search result items."""

    def _make_item(item_id: str = "google:abc", **fields) -> SearchResultItem:
        source = item_id.split(":", 1)[0]
        fields.setdefault("title", "Clean Code")
        fields.setdefault("authors", ["Robert C. Martin"])
        return SearchResultItem(id=item_id, source=source, **fields)

    return _make_item


@pytest.fixture
def google_book():
    """Google Books volume metadata."""
    return {
        "id": "xyz789",
        "title": "The Pragmatic Programmer",
        "subtitle": "Your Journey to Mastery",
        "authors": ["David Thomas", "Andrew Hunt"],
        "publisher": "Addison-Wesley Professional",
        "publishedDate": "2019-09-13",
        "description": "A classic book on software craftsmanship.",
        "isbn10": "0135957052",
        "isbn13": "9780135957059",
        "pageCount": 352,
        "categories": ["Computers"],
        "averageRating": 4.5,
        "ratingsCount": 120,
        "language": "en",
        "previewLink": "https://books.google.com/books?id=xyz789",
        "imageLinks": {
            "thumbnail": "https://books.google.com/thumb.jpg",
            "medium": "https://books.google.com/medium.jpg",
        },
    }


@pytest.fixture
def open_library_book():
    """Open Library work metadata."""
    return {
        "workId": "OL17930368W",
        "title": "The Pragmatic Programmer",
        "authors": [
            {"id": "OL2653686A", "name": "David Thomas"},
            {"id": "OL236174A", "name": "Andrew Hunt"},
        ],
        "firstPublishYear": 1999,
        "publishers": ["Addison-Wesley", "Pearson"],
        "isbn10": ["020161622X"],
        "isbn13": ["9780135957059", "9780201616224"],
        "pageCount": 321,
        "subjects": ["Computer programming"],
        "coverIds": [8091016],
        "languages": ["eng"],
        "hasFullText": True,
        "isPublicDomain": False,
        "ratingsCount": 42,
    }
