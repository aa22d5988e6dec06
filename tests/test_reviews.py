import pytest

from campsite_booking import models
from campsite_booking.errors import NotFoundError, ValidationError
from campsite_booking.services.reviews import ReviewAggregate


@pytest.fixture
def reviews(db_session, locks):
    return ReviewAggregate(db_session, locks)


def test_no_reviews_average_is_zero(reviews, spot):
    result = reviews.get_reviews(spot.id)

    assert result["average_rating"] == 0
    assert result["reviews"] == []

def test_average_of_three_and_five_is_four(reviews, make_user, spot):
    reviews.upsert_review(make_user().id, spot.id, 3, "ok")
    reviews.upsert_review(make_user().id, spot.id, 5, "great")

    assert reviews.get_reviews(spot.id)["average_rating"] == 4

def test_resubmission_overwrites(db_session, reviews, renter, spot):
    assert reviews.upsert_review(renter.id, spot.id, 2, "muddy") is True
    assert reviews.upsert_review(renter.id, spot.id, 5, "dried out nicely") is False

    rows = db_session.query(models.Review).filter(
        models.Review.user_id == renter.id, models.Review.spot_id == spot.id
    ).all()
    assert len(rows) == 1
    assert rows[0].rating == 5
    assert rows[0].comment == "dried out nicely"

def test_reviews_are_newest_first_with_reviewer_name(reviews, make_user, spot):
    early, late = make_user(name="Early Bird"), make_user(name="Night Owl")
    reviews.upsert_review(early.id, spot.id, 4, "first")
    reviews.upsert_review(late.id, spot.id, 2, "second")

    listed = reviews.get_reviews(spot.id)["reviews"]
    assert [r["reviewer"] for r in listed] == ["Night Owl", "Early Bird"]

def test_updating_moves_review_to_the_top(reviews, make_user, spot):
    first, second = make_user(name="First"), make_user(name="Second")
    reviews.upsert_review(first.id, spot.id, 4, "")
    reviews.upsert_review(second.id, spot.id, 4, "")
    reviews.upsert_review(first.id, spot.id, 1, "changed my mind")

    listed = reviews.get_reviews(spot.id)["reviews"]
    assert listed[0]["reviewer"] == "First"
    assert listed[0]["comment"] == "changed my mind"

def test_missing_comment_is_stored_empty(reviews, renter, spot):
    reviews.upsert_review(renter.id, spot.id, 3)

    assert reviews.get_reviews(spot.id)["reviews"][0]["comment"] == ""

@pytest.mark.parametrize("rating", [0, 6, -1, 4.5, "5", True, None])
def test_rating_must_be_integer_between_one_and_five(reviews, renter, spot, rating):
    with pytest.raises(ValidationError):
        reviews.upsert_review(renter.id, spot.id, rating, "")

def test_review_for_missing_spot(reviews, renter):
    with pytest.raises(NotFoundError):
        reviews.upsert_review(renter.id, 4242, 5, "")
