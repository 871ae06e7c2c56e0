"""DeleteReview — remove a review from a restaurant.

Removes exactly the named review and recomputes the restaurant's rating.
"""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from restaurants.domain import restaurants
from restaurants.exceptions import ReviewNotAllowedError
from restaurants.restaurant.lookup import load_restaurant
from restaurants.restaurant.restaurant import Restaurant
from restaurants.utils.logging import get_logger, review_log_context

logger = get_logger(__name__)


@restaurants.command(part_of="Restaurant")
class DeleteReview:
    restaurant_id = Identifier(required=True)
    review_id = Identifier(required=True)


@restaurants.command_handler(part_of=Restaurant)
class DeleteReviewHandler:
    @handle(DeleteReview)
    def delete_review(self, command):
        with review_log_context(command.restaurant_id, review_id=command.review_id):
            repo = current_domain.repository_for(Restaurant)
            restaurant = load_restaurant(command.restaurant_id)

            try:
                restaurant.delete_review(command.review_id)
            except ReviewNotAllowedError:
                logger.warning("Delete of unknown review rejected")
                raise

            repo.add(restaurant)

            logger.info("Review deleted", average_rating=restaurant.average_rating)
