"""Domain exceptions for the restaurants context.

Each error extends the matching protean exception so callers and adapters
that already handle protean's hierarchy keep working.
"""

from protean.exceptions import ObjectNotFoundError, ValidationError


class RestaurantNotFoundError(ObjectNotFoundError):
    """The referenced restaurant does not exist."""


class ReviewNotAllowedError(ValidationError):
    """A review action breaks a business rule.

    Raised for duplicate reviews by the same author, updates by anyone other
    than the author, updates outside the edit window, and updates or deletes
    of a review that does not exist.
    """


class ReviewRetrievalError(Exception):
    """A review that was just saved cannot be found in the persisted restaurant."""
