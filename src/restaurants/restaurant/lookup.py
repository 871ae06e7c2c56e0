"""Restaurant lookup shared by the review commands and queries."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from restaurants.exceptions import RestaurantNotFoundError
from restaurants.restaurant.restaurant import Restaurant


def load_restaurant(restaurant_id):
    """Fetch a restaurant aggregate, raising RestaurantNotFoundError if it does not exist."""
    repo = current_domain.repository_for(Restaurant)
    try:
        return repo.get(restaurant_id)
    except ObjectNotFoundError:
        raise RestaurantNotFoundError(
            {"restaurant_id": [f"Restaurant with id not found: {restaurant_id}"]}
        ) from None
