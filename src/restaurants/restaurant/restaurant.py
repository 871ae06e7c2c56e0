"""Restaurant aggregate — a restaurant and the reviews written about it.

Reviews are entities inside the Restaurant aggregate rather than aggregates of
their own: a review write and the recomputation of the restaurant's average
rating always happen together, in one load and one save.

Review lifecycle:
    (none) → posted → updated* → deleted

Updates are allowed only for the author, and only within EDIT_WINDOW of the
original posting date.
"""

from datetime import UTC, datetime, timedelta

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Integer,
    List,
    String,
    Text,
    ValueObject,
)

from restaurants.domain import restaurants
from restaurants.exceptions import ReviewNotAllowedError
from restaurants.restaurant.events import ReviewDeleted, ReviewPosted, ReviewUpdated

# Measured from date_posted, never from last_updated
EDIT_WINDOW = timedelta(hours=48)


def _as_utc(value):
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _stamped_photos(photo_ids, uploaded_at):
    return [Photo(url=url, upload_date=uploaded_at) for url in photo_ids or []]


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@restaurants.value_object(part_of="Restaurant")
class Author:
    """The user who wrote a review, built from the caller's identity claims.

    Only ``user_id`` takes part in authorship checks; the name fields are
    display attributes.
    """

    user_id = String(required=True, max_length=255)
    username = String(max_length=255)
    given_name = String(max_length=255)
    family_name = String(max_length=255)


@restaurants.value_object(part_of="Restaurant")
class Photo:
    """A photo attached to a review. ``upload_date`` is stamped when attached."""

    url = Text(required=True)
    upload_date = DateTime(required=True)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@restaurants.entity(part_of="Restaurant")
class Review:
    """A single user's review of a restaurant."""

    content = Text(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    photos = List(content_type=ValueObject(Photo), default=list)
    date_posted = DateTime(required=True)
    last_updated = DateTime(required=True)
    written_by = ValueObject(Author, required=True)

    def is_written_by(self, user_id):
        return str(self.written_by.user_id) == str(user_id)

    def is_editable(self, now=None):
        now = now or datetime.now(UTC)
        return _as_utc(now) <= _as_utc(self.date_posted) + EDIT_WINDOW


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@restaurants.aggregate
class Restaurant:
    """A restaurant together with its reviews and their average rating.

    ``average_rating`` is derived: it is recomputed from the current reviews
    every time the review collection changes, and is 0 when there are none.
    """

    name = String(max_length=255)
    reviews = HasMany(Review)
    average_rating = Float(default=0.0)

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def one_review_per_author(self):
        authors = [str(review.written_by.user_id) for review in self.reviews]
        if len(authors) != len(set(authors)):
            raise ValidationError({"reviews": ["A user can review a restaurant only once"]})

    # -------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------
    def find_review(self, review_id):
        """Return the review with the given id, or None."""
        return next((r for r in self.reviews if str(r.id) == str(review_id)), None)

    def review_by(self, user_id):
        """Return the review written by the given user, or None."""
        return next((r for r in self.reviews if r.is_written_by(user_id)), None)

    # -------------------------------------------------------------------
    # Rating
    # -------------------------------------------------------------------
    def recalculate_average_rating(self):
        ratings = [review.rating for review in self.reviews]
        self.average_rating = sum(ratings) / len(ratings) if ratings else 0.0

    # -------------------------------------------------------------------
    # Review lifecycle
    # -------------------------------------------------------------------
    def post_review(self, author, content, rating, photo_ids=None, now=None):
        """Add a new review by ``author``. A user can review a restaurant only once."""
        if self.review_by(author.user_id) is not None:
            raise ReviewNotAllowedError({"review": ["User has already reviewed this restaurant"]})

        now = now or datetime.now(UTC)

        review = Review(
            content=content,
            rating=rating,
            photos=_stamped_photos(photo_ids, now),
            date_posted=now,
            last_updated=now,
            written_by=author,
        )

        with atomic_change(self):
            self.add_reviews(review)
            self.recalculate_average_rating()

        self.raise_(
            ReviewPosted(
                restaurant_id=str(self.id),
                review_id=str(review.id),
                user_id=str(author.user_id),
                rating=rating,
                photo_count=len(photo_ids) if photo_ids else 0,
                average_rating=self.average_rating,
                posted_at=now,
            )
        )

        return review

    def update_review(self, review_id, user_id, content, rating, photo_ids=None, now=None):
        """Replace a review's content, rating and photos.

        Photos are replaced wholesale; each is stamped with a fresh upload date.
        """
        review = self.find_review(review_id)
        if review is None:
            raise ReviewNotAllowedError({"review_id": [f"Review {review_id} not found"]})

        if not review.is_written_by(user_id):
            raise ReviewNotAllowedError({"user_id": ["Only the review author can update this review"]})

        now = now or datetime.now(UTC)

        if not review.is_editable(now):
            hours = int(EDIT_WINDOW.total_seconds() // 3600)
            raise ReviewNotAllowedError({"review": [f"Reviews can only be updated within {hours} hours of posting"]})

        with atomic_change(self):
            review.content = content
            review.rating = rating
            review.photos = _stamped_photos(photo_ids, now)
            review.last_updated = now
            self.recalculate_average_rating()

        self.raise_(
            ReviewUpdated(
                restaurant_id=str(self.id),
                review_id=str(review.id),
                user_id=str(user_id),
                rating=rating,
                average_rating=self.average_rating,
                updated_at=now,
            )
        )

        return review

    def delete_review(self, review_id, now=None):
        """Remove exactly the review with ``review_id``; all other reviews stay."""
        review = self.find_review(review_id)
        if review is None:
            raise ReviewNotAllowedError({"review_id": [f"Review {review_id} not found"]})

        now = now or datetime.now(UTC)
        rating = review.rating

        with atomic_change(self):
            self.remove_reviews(review)
            self.recalculate_average_rating()

        self.raise_(
            ReviewDeleted(
                restaurant_id=str(self.id),
                review_id=str(review_id),
                rating=rating,
                average_rating=self.average_rating,
                deleted_at=now,
            )
        )
