"""UpdateReview — the author revises their review.

Only the original author can update, and only within 48 hours of the date
the review was first posted. Photos are replaced wholesale.
"""

import json

from protean.fields import Identifier, Integer, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from restaurants.domain import restaurants
from restaurants.exceptions import ReviewNotAllowedError
from restaurants.restaurant.lookup import load_restaurant
from restaurants.restaurant.restaurant import Restaurant
from restaurants.utils.logging import get_logger, review_log_context

logger = get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class UpdateReview:
    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)  # Must match original author
    content = Text(required=True)
    rating = Integer(required=True)
    photo_ids = Text()  # JSON array of photo URLs


@restaurants.command_handler(part_of=Restaurant)
class UpdateReviewHandler:
    @handle(UpdateReview)
    def update_review(self, command):
        with review_log_context(command.restaurant_id, review_id=command.review_id, user_id=command.user_id):
            repo = current_domain.repository_for(Restaurant)
            restaurant = load_restaurant(command.restaurant_id)

            try:
                review = restaurant.update_review(
                    review_id=command.review_id,
                    user_id=command.user_id,
                    content=command.content,
                    rating=command.rating,
                    photo_ids=json.loads(command.photo_ids) if command.photo_ids else [],
                )
            except ReviewNotAllowedError as exc:
                logger.warning("Review update rejected", reason=exc.messages)
                raise

            repo.add(restaurant)

            logger.info("Review updated", average_rating=restaurant.average_rating)
            return review
