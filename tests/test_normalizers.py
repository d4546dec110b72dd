"""Test normalization of provider records."""

import pytest

from book_search_hub.result_processing.normalizers import (
    UNKNOWN_TITLE,
    get_best_image_url,
    get_open_library_cover_url,
    normalize_google_book,
    normalize_open_library_book,
    parse_google_volume,
    parse_open_library_doc,
    parse_year,
)


def test_normalize_google_book_end_to_end():
    """Test the minimal Google-shaped record from the search box."""
    item = normalize_google_book(
        {
            "id": "xyz789",
            "title": "The Pragmatic Programmer",
            "publishedDate": "2019-09-13",
            "isbn13": "9780135957059",
            "imageLinks": {"medium": "https://books.google.com/medium.jpg"},
        }
    )

    assert item.id == "google:xyz789"
    assert item.source == "google"
    assert item.publish_year == 2019
    assert item.isbn13 == "9780135957059"
    assert item.cover_image == "https://books.google.com/medium.jpg"


def test_normalize_google_book_full(google_book):
    """Test that every populated Google field is carried over."""
    item = normalize_google_book(google_book)

    assert item.title == "The Pragmatic Programmer"
    assert item.subtitle == "Your Journey to Mastery"
    assert item.authors == ["David Thomas", "Andrew Hunt"]
    assert item.categories == ["Computers"]
    assert item.publisher == "Addison-Wesley Professional"
    assert item.isbn10 == "0135957052"
    assert item.page_count == 352
    assert item.average_rating == 4.5
    assert item.ratings_count == 120
    assert item.language == "en"
    assert item.preview_link == "https://books.google.com/books?id=xyz789"
    # Medium is preferred over the thumbnail
    assert item.cover_image == "https://books.google.com/medium.jpg"
    assert item.has_full_text is None
    assert item.is_public_domain is None


def test_normalize_google_book_omits_missing_fields():
    """Test that absent fields are left out of the serialized record."""
    item = normalize_google_book({"id": "abc", "title": "Bare"})
    data = item.to_dict()

    assert data == {
        "id": "google:abc",
        "source": "google",
        "title": "Bare",
        "authors": [],
        "categories": [],
    }


def test_normalize_google_book_empty_strings_are_absent():
    """Test that empty strings never survive normalization."""
    item = normalize_google_book(
        {
            "id": "abc",
            "title": "Bare",
            "description": "",
            "publisher": "   ",
            "isbn13": "",
            "language": "",
        }
    )

    assert item.description is None
    assert item.publisher is None
    assert item.isbn13 is None
    assert item.language is None


def test_normalize_google_book_malformed_fields_degrade():
    """Test that malformed optional fields become absent instead of raising."""
    item = normalize_google_book(
        {
            "id": "abc",
            "title": "Malformed",
            "publishedDate": "circa 2001",
            "pageCount": "many",
            "averageRating": 9.5,
            "ratingsCount": -3,
            "imageLinks": "not-a-dict",
            "authors": "Single Author",
            "categories": None,
        }
    )

    assert item.publish_year is None
    assert item.page_count is None
    assert item.average_rating is None
    assert item.ratings_count is None
    assert item.cover_image is None
    assert item.authors == []
    assert item.categories == []


def test_normalize_google_book_missing_title():
    """Test that a missing title falls back to a placeholder."""
    assert normalize_google_book({"id": "abc"}).title == UNKNOWN_TITLE
    assert normalize_google_book({"id": "abc", "title": "  "}).title == UNKNOWN_TITLE


def test_normalize_google_book_zero_ratings_count_kept():
    """Test that a zero ratings count is a populated value."""
    item = normalize_google_book({"id": "abc", "title": "T", "ratingsCount": 0})
    assert item.ratings_count == 0


def test_normalize_open_library_book(open_library_book):
    """Test Open Library normalization."""
    item = normalize_open_library_book(open_library_book)

    assert item.id == "openlib:OL17930368W"
    assert item.source == "openlib"
    assert item.authors == ["David Thomas", "Andrew Hunt"]
    assert item.categories == ["Computer programming"]
    assert item.publish_year == 1999
    # Array fields collapse to their first element
    assert item.publisher == "Addison-Wesley"
    assert item.isbn10 == "020161622X"
    assert item.isbn13 == "9780135957059"
    assert item.language == "eng"
    assert item.cover_image == "https://covers.openlibrary.org/b/id/8091016-M.jpg"
    assert item.has_full_text is True
    assert item.ratings_count == 42


def test_normalize_open_library_public_domain_only_when_true(open_library_book):
    """Test that a false public-domain flag reads as absent."""
    item = normalize_open_library_book(open_library_book)
    assert item.is_public_domain is None
    assert "isPublicDomain" not in item.to_dict()

    open_library_book["isPublicDomain"] = True
    item = normalize_open_library_book(open_library_book)
    assert item.is_public_domain is True


def test_normalize_open_library_empty_arrays_are_absent():
    """Test that empty arrays collapse to absent, not to empty strings."""
    item = normalize_open_library_book(
        {
            "workId": "OL1W",
            "title": "Empty",
            "authors": [],
            "publishers": [],
            "isbn10": [],
            "isbn13": [],
            "languages": [],
            "coverIds": [],
        }
    )

    assert item.publisher is None
    assert item.isbn10 is None
    assert item.isbn13 is None
    assert item.language is None
    assert item.cover_image is None
    assert item.categories == []


def test_normalize_open_library_author_names_keep_length():
    """Test that authors without a name become empty strings."""
    item = normalize_open_library_book(
        {
            "workId": "OL1W",
            "title": "Anonymous",
            "authors": [{"id": "OL1A", "name": "Known"}, {"id": "OL2A"}, {"name": ""}],
        }
    )

    assert item.authors == ["Known", "", ""]


def test_normalize_open_library_description_object():
    """Test that {"value": ...} descriptions are unwrapped."""
    item = normalize_open_library_book(
        {"workId": "OL1W", "title": "T", "description": {"value": "Text"}}
    )
    assert item.description == "Text"


def test_normalize_open_library_publish_date_fallback():
    """Test that a free-form publish date is parsed without a numeric year."""
    item = normalize_open_library_book(
        {"workId": "OL1W", "title": "T", "publishDate": "1984, June"}
    )
    assert item.publish_year == 1984


def test_normalize_open_library_null_lists_fall_back():
    """Test that null list fields fall back to their singular keys."""
    item = normalize_open_library_book(
        {
            "workId": "OL1W",
            "title": "T",
            "publishers": None,
            "publisher": "Pearson",
            "languages": None,
            "language": "eng",
        }
    )
    assert item.publisher == "Pearson"
    assert item.language == "eng"


def test_item_id_is_immutable(google_book):
    """Test that the item id cannot be reassigned."""
    item = normalize_google_book(google_book)
    with pytest.raises(ValueError):
        item.id = "google:other"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2019-09-13", 2019),
        ("2019", 2019),
        (" 2003-01 ", 2003),
        ("September 2019", None),
        ("19", None),
        ("20190", None),
        ("", None),
        (None, None),
        (2019, None),
    ],
)
def test_parse_year(value, expected):
    """Test leading-year extraction from free-form dates."""
    assert parse_year(value) == expected


def test_get_best_image_url_fallback_order():
    """Test image size preference and fallback."""
    links = {"thumbnail": "t.jpg", "large": "l.jpg"}
    assert get_best_image_url(links, "medium") == "l.jpg"
    assert get_best_image_url({"smallThumbnail": "s.jpg"}) == "s.jpg"
    assert get_best_image_url({}) is None
    assert get_best_image_url(None) is None


def test_get_open_library_cover_url():
    """Test cover URL template."""
    assert (
        get_open_library_cover_url(123, "L")
        == "https://covers.openlibrary.org/b/id/123-L.jpg"
    )


def test_parse_google_volume():
    """Test mapping a raw Google Books API volume."""
    metadata = parse_google_volume(
        {
            "kind": "books#volume",
            "id": "vol1",
            "volumeInfo": {
                "title": "Clean Code",
                "authors": ["Robert C. Martin"],
                "publishedDate": "2008-08-01",
                "industryIdentifiers": [
                    {"type": "ISBN_10", "identifier": "0132350882"},
                    {"type": "ISBN_13", "identifier": "9780132350884"},
                    {"type": "OTHER", "identifier": "UOM:39015"},
                ],
                "imageLinks": {
                    "thumbnail": "http://books.google.com/x?id=vol1&zoom=5&source=gbs"
                },
                "pageCount": 431,
                "infoLink": "https://books.google.com/books?id=vol1",
            },
            "accessInfo": {"accessViewStatus": "SAMPLE"},
        }
    )

    assert metadata["id"] == "vol1"
    assert metadata["isbn10"] == "0132350882"
    assert metadata["isbn13"] == "9780132350884"
    assert metadata["imageLinks"]["thumbnail"] == (
        "https://books.google.com/x?id=vol1&zoom=1&source=gbs"
    )
    assert "infoLink" not in metadata
    assert "isTextReadable" not in metadata

    item = normalize_google_book(metadata)
    assert item.id == "google:vol1"
    assert item.publish_year == 2008
    assert item.page_count == 431
    assert item.cover_image.startswith("https://")


def test_parse_google_volume_without_volume_info():
    """Test that a bare volume still parses."""
    metadata = parse_google_volume({"id": "vol2"})
    assert metadata == {
        "id": "vol2",
        "title": UNKNOWN_TITLE,
        "authors": [],
        "categories": [],
    }


def test_parse_open_library_doc():
    """Test mapping a raw Open Library search document."""
    metadata = parse_open_library_doc(
        {
            "key": "/works/OL17930368W",
            "title": "The Pragmatic Programmer",
            "author_name": ["Andrew Hunt", "David Thomas"],
            "author_key": ["OL236174A"],
            "first_publish_year": 1999,
            "publish_year": [1999, 2019, 2000],
            "publisher": ["Addison-Wesley"],
            "isbn": ["020161622X", "978-0-201-61622-4", "bogus"],
            "number_of_pages_median": 321,
            "cover_i": 8091016,
            "language": ["eng"],
            "public_scan_b": False,
            "has_fulltext": True,
            "subject": ["Computer programming"],
            "edition_count": 12,
            "ia": ["pragmaticprogra00hunt"],
        }
    )

    assert metadata["workId"] == "OL17930368W"
    assert metadata["authors"] == [
        {"id": "OL236174A", "name": "Andrew Hunt"},
        {"id": "unknown-1", "name": "David Thomas"},
    ]
    assert metadata["isbn10"] == ["020161622X"]
    assert metadata["isbn13"] == ["978-0-201-61622-4"]
    assert metadata["firstPublishYear"] == 1999
    assert metadata["publishers"] == ["Addison-Wesley"]
    assert not {"publishYear", "editionCount", "iaIds"} & set(metadata)
    assert metadata["coverIds"] == [8091016]

    item = normalize_open_library_book(metadata)
    assert item.id == "openlib:OL17930368W"
    assert item.publish_year == 1999
    assert item.isbn13 == "978-0-201-61622-4"
    assert item.is_public_domain is None
    assert item.has_full_text is True
