"""Restaurants bounded context — restaurant reviews and derived ratings.

Reviews live inside the Restaurant aggregate, so every review write and the
restaurant's average rating change together in one unit of work.
"""

from protean.domain import Domain

from restaurants.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

restaurants = Domain(name="restaurants")
