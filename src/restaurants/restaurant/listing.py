"""Review queries — paged, sorted listing and single-review lookup.

Reviews are read straight off the Restaurant aggregate and sorted and paged
in memory. Without an explicit sort the newest reviews come first.
"""

from dataclasses import dataclass
from operator import attrgetter

from protean.exceptions import ValidationError

from restaurants.restaurant.lookup import load_restaurant

DEFAULT_PAGE_SIZE = 20

# Accepted sort keys mapped to Review attributes
_SORT_KEYS = {
    "datePosted": "date_posted",
    "date_posted": "date_posted",
    "rating": "rating",
}
_DEFAULT_SORT_KEY = "date_posted"

_DIRECTIONS = ("asc", "desc")


@dataclass(frozen=True)
class ReviewPage:
    """One page of a restaurant's reviews."""

    items: list
    total: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return -(-self.total // self.page_size)

    @property
    def has_next(self) -> bool:
        return (self.page + 1) * self.page_size < self.total


def sort_reviews(reviews, sort_by=None, direction=None):
    """Return ``reviews`` as a new sorted list.

    Unknown sort keys fall back to the posting date. With no sort key the
    order is newest first; with a sort key but no direction it is ascending.
    Equal keys keep their current relative order. A direction other than
    "asc" or "desc" is rejected.
    """
    if direction is not None and direction.lower() not in _DIRECTIONS:
        raise ValidationError({"direction": ["Sort direction must be one of: asc, desc"]})

    if sort_by is None:
        attribute, descending = _DEFAULT_SORT_KEY, True
    else:
        attribute = _SORT_KEYS.get(sort_by, _DEFAULT_SORT_KEY)
        descending = (direction or "asc").lower() == "desc"

    return sorted(reviews, key=attrgetter(attribute), reverse=descending)


def paginate(reviews, page, page_size):
    """Slice an already sorted list of reviews into a ReviewPage."""
    if page < 0:
        raise ValidationError({"page": ["Page index must not be negative"]})
    if page_size < 1:
        raise ValidationError({"page_size": ["Page size must be at least 1"]})

    total = len(reviews)
    start = page * page_size
    if start >= total:
        return ReviewPage(items=[], total=total, page=page, page_size=page_size)

    end = min(start + page_size, total)
    return ReviewPage(items=list(reviews[start:end]), total=total, page=page, page_size=page_size)


def list_reviews(restaurant_id, page=0, page_size=DEFAULT_PAGE_SIZE, sort_by=None, direction=None):
    """List a restaurant's reviews, sorted and paged."""
    restaurant = load_restaurant(restaurant_id)
    ordered = sort_reviews(restaurant.reviews, sort_by=sort_by, direction=direction)
    return paginate(ordered, page, page_size)


def get_review(restaurant_id, review_id):
    """Return a single review, or None if the restaurant has no such review."""
    return load_restaurant(restaurant_id).find_review(review_id)
