"""Result ranking utilities."""

from ..models.results import SearchResultItem

# Completeness weights; description and cover outweigh any single identifier
SCORE_WEIGHTS = {
    "description": 3.0,
    "cover_image": 3.0,
    "isbn13": 1.0,
    "isbn10": 1.0,
    "publisher": 1.0,
    "publish_year": 1.0,
    "page_count": 1.0,
    "language": 1.0,
    "average_rating": 1.0,
    "ratings_count": 1.0,
    "preview_link": 1.0,
    "subtitle": 0.5,
}

FULL_TEXT_BONUS = 2.0
PUBLIC_DOMAIN_BONUS = 0.5
AUTHORS_WEIGHT = 0.5
CATEGORIES_WEIGHT = 0.5


def score_item(item: SearchResultItem) -> float:
    """
    Score a result by the completeness of its data.

    Adding a previously absent field never lowers the score.

    Args:
        item: Normalized search result

    Returns:
        Completeness score (higher is more complete)
    """
    score = sum(
        weight
        for name, weight in SCORE_WEIGHTS.items()
        if getattr(item, name) is not None
    )

    if item.has_full_text:
        score += FULL_TEXT_BONUS
    if item.is_public_domain:
        score += PUBLIC_DOMAIN_BONUS
    if item.authors:
        score += AUTHORS_WEIGHT
    if item.categories:
        score += CATEGORIES_WEIGHT

    return score


def sort_results(results: list[SearchResultItem]) -> list[SearchResultItem]:
    """
    Order results for display.

    Items with a cover come first, then higher score, then more ratings.
    The sort is stable, so remaining ties keep their input order.

    Args:
        results: Deduplicated search results

    Returns:
        New list in display order
    """
    return sorted(
        results,
        key=lambda x: (
            x.cover_image is None,
            -score_item(x),
            -(x.ratings_count or 0),
        ),
    )
