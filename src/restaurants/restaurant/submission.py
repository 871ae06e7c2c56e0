"""CreateReview — a user posts a review of a restaurant.

One review per user per restaurant. The handler returns the review as read
back from the saved restaurant, not the in-memory copy it built.
"""

import json

from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from restaurants.domain import restaurants
from restaurants.exceptions import ReviewNotAllowedError, ReviewRetrievalError
from restaurants.restaurant.lookup import load_restaurant
from restaurants.restaurant.restaurant import Author, Restaurant
from restaurants.utils.logging import get_logger, review_log_context

logger = get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class CreateReview:
    restaurant_id = Identifier(required=True)
    user_id = Identifier(required=True)
    username = String(max_length=255)
    given_name = String(max_length=255)
    family_name = String(max_length=255)
    content = Text(required=True)
    rating = Integer(required=True)
    photo_ids = Text()  # JSON array of photo URLs


@restaurants.command_handler(part_of=Restaurant)
class CreateReviewHandler:
    @handle(CreateReview)
    def create_review(self, command):
        with review_log_context(command.restaurant_id, user_id=command.user_id):
            repo = current_domain.repository_for(Restaurant)
            restaurant = load_restaurant(command.restaurant_id)

            author = Author(
                user_id=str(command.user_id),
                username=command.username,
                given_name=command.given_name,
                family_name=command.family_name,
            )

            try:
                review = restaurant.post_review(
                    author=author,
                    content=command.content,
                    rating=command.rating,
                    photo_ids=json.loads(command.photo_ids) if command.photo_ids else [],
                )
            except ReviewNotAllowedError:
                logger.warning("Duplicate review rejected")
                raise

            repo.add(restaurant)

            # Hand back what was committed, not the object we built
            stored = load_restaurant(command.restaurant_id).find_review(review.id)
            if stored is None:
                logger.error("Created review missing from saved restaurant", review_id=str(review.id))
                raise ReviewRetrievalError(f"Error retrieving created review {review.id}")

            logger.info("Review created", review_id=str(stored.id), average_rating=restaurant.average_rating)
            return stored
