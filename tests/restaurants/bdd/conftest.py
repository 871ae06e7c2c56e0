"""Shared BDD fixtures and step definitions for restaurant reviews."""

import pytest
from pytest_bdd import given, parsers, then, when
from restaurants.exceptions import ReviewNotAllowedError
from restaurants.restaurant.events import ReviewDeleted, ReviewPosted, ReviewUpdated
from restaurants.restaurant.restaurant import Author, Restaurant

_REVIEW_EVENT_CLASSES = {
    "ReviewPosted": ReviewPosted,
    "ReviewUpdated": ReviewUpdated,
    "ReviewDeleted": ReviewDeleted,
}


@pytest.fixture()
def error():
    """Container for captured business rule violations."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a restaurant without reviews", target_fixture="restaurant")
def restaurant_without_reviews():
    return Restaurant(name="Trattoria BDD")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('user "{user_id}" posts a review with rating {rating:d}'))
def user_posts_review(restaurant, user_id, rating, error):
    try:
        restaurant.post_review(
            author=Author(user_id=user_id, username=user_id),
            content=f"{user_id} was here",
            rating=rating,
        )
    except ReviewNotAllowedError as exc:
        error["exc"] = exc


@when(parsers.cfparse('the review by "{user_id}" is deleted'))
def review_deleted(restaurant, user_id):
    review = restaurant.review_by(user_id)
    restaurant.delete_review(review.id)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the restaurant average rating is {rating:f}"))
def average_rating_is(restaurant, rating):
    assert restaurant.average_rating == pytest.approx(rating)


@then(parsers.cfparse("the restaurant has {count:d} reviews"))
def restaurant_has_n_reviews(restaurant, count):
    assert len(restaurant.reviews) == count


@then("the review action is not allowed")
def review_action_not_allowed(error):
    assert error["exc"] is not None, "Expected the action to be rejected"
    assert isinstance(error["exc"], ReviewNotAllowedError)


@then(parsers.cfparse("a {event_type} event is raised"))
def review_event_raised(restaurant, event_type):
    event_cls = _REVIEW_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in restaurant._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in restaurant._events]}"
