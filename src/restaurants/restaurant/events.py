"""Domain events for the Restaurant aggregate.

Each event records a change to a restaurant's reviews together with the
average rating that resulted from it.
"""

from protean.fields import DateTime, Float, Identifier, Integer

from restaurants.domain import restaurants


@restaurants.event(part_of="Restaurant")
class ReviewPosted:
    """A user posted a review of a restaurant."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    photo_count = Integer(default=0)
    average_rating = Float(required=True)
    posted_at = DateTime(required=True)


@restaurants.event(part_of="Restaurant")
class ReviewUpdated:
    """The author of a review changed its content, rating or photos."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    average_rating = Float(required=True)
    updated_at = DateTime(required=True)


@restaurants.event(part_of="Restaurant")
class ReviewDeleted:
    """A review was removed from a restaurant."""

    __version__ = 1

    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    rating = Integer(required=True)
    average_rating = Float(required=True)
    deleted_at = DateTime(required=True)
