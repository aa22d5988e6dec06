import pytest
from sqlalchemy.exc import OperationalError

from campsite_booking import models
from campsite_booking.errors import NotFoundError, PermissionDenied, StorageError
from campsite_booking.services.availability import AvailabilityCalendar
from campsite_booking.services.cascade import CascadeManager
from campsite_booking.services.resolver import ConflictResolver
from campsite_booking.services.reviews import ReviewAggregate


@pytest.fixture
def cascade(db_session, locks):
    return CascadeManager(db_session, locks)

@pytest.fixture
def book(db_session, locks):
    resolver = ConflictResolver(db_session, locks)
    return lambda user, spot, start, end: resolver.create_booking(user.id, spot.id, start, end)


def count(db_session, model, **filters):
    query = db_session.query(model)
    for name, value in filters.items():
        query = query.filter(getattr(model, name) == value)
    return query.count()


def test_delete_spot_removes_dependents(db_session, locks, cascade, book, owner, renter, spot):
    book(renter, spot, "2025-07-01", "2025-07-02")
    AvailabilityCalendar(db_session).set_availability(spot.id, owner.id, [{"date": "2025-07-05", "is_available": False}])
    ReviewAggregate(db_session, locks).upsert_review(renter.id, spot.id, 5, "lovely")

    cascade.delete_spot(spot.id, owner.id)

    assert count(db_session, models.CampingSpot) == 0
    assert count(db_session, models.Booking) == 0
    assert count(db_session, models.AvailabilityEntry) == 0
    assert count(db_session, models.Review) == 0
    assert count(db_session, models.User) == 2

def test_delete_spot_leaves_other_spots_alone(db_session, cascade, book, owner, make_user, make_spot):
    doomed, kept = make_spot(owner), make_spot(owner, title="Keeper")
    book(make_user(), doomed, "2025-07-01", "2025-07-02")
    book(make_user(), kept, "2025-07-01", "2025-07-02")

    cascade.delete_spot(doomed.id, owner.id)

    assert count(db_session, models.Booking, spot_id=kept.id) == 1

def test_renter_cannot_delete_spot(db_session, cascade, renter, spot):
    with pytest.raises(PermissionDenied):
        cascade.delete_spot(spot.id, renter.id)
    assert count(db_session, models.CampingSpot) == 1

def test_other_owner_cannot_delete_spot(db_session, cascade, make_user, spot):
    with pytest.raises(NotFoundError):
        cascade.delete_spot(spot.id, make_user(is_owner=True).id)
    assert count(db_session, models.CampingSpot) == 1

def test_delete_user_is_complete(db_session, locks, cascade, book, make_user, make_spot):
    host = make_user(is_owner=True)
    other_host = make_user(is_owner=True)
    guest = make_user()
    hosts_spot = make_spot(host)
    other_spot = make_spot(other_host)

    # host rents elsewhere, guest rents from host, both review
    book(host, other_spot, "2025-07-01", "2025-07-02")
    book(guest, hosts_spot, "2025-07-01", "2025-07-02")
    book(guest, other_spot, "2025-07-10", "2025-07-12")
    AvailabilityCalendar(db_session).set_availability(hosts_spot.id, host.id, [{"date": "2025-08-01", "is_available": False}])
    ReviewAggregate(db_session, locks).upsert_review(guest.id, hosts_spot.id, 4, "")
    ReviewAggregate(db_session, locks).upsert_review(host.id, other_spot.id, 3, "")
    host_id, hosts_spot_id = host.id, hosts_spot.id

    cascade.delete_user(host_id)

    assert count(db_session, models.User, id=host_id) == 0
    assert count(db_session, models.Booking, user_id=host_id) == 0
    assert count(db_session, models.CampingSpot, owner_id=host_id) == 0
    assert count(db_session, models.Booking, spot_id=hosts_spot_id) == 0
    assert count(db_session, models.AvailabilityEntry, spot_id=hosts_spot_id) == 0
    assert count(db_session, models.Review, user_id=host_id) == 0
    assert count(db_session, models.Review, spot_id=hosts_spot_id) == 0
    # unrelated data survives
    assert count(db_session, models.Booking, user_id=guest.id, spot_id=other_spot.id) == 1
    assert count(db_session, models.CampingSpot, id=other_spot.id) == 1

def test_delete_renter_without_spots(db_session, cascade, book, renter, spot):
    book(renter, spot, "2025-07-01", "2025-07-02")

    cascade.delete_user(renter.id)

    assert count(db_session, models.Booking) == 0
    assert count(db_session, models.CampingSpot) == 1

def test_delete_unknown_user(cascade):
    with pytest.raises(NotFoundError):
        cascade.delete_user(12345)

def test_failed_cascade_leaves_no_partial_writes(db_session, cascade, book, owner, renter, make_user, make_spot, monkeypatch):
    spot = make_spot(owner)
    elsewhere = make_spot(make_user(is_owner=True))
    book(owner, elsewhere, "2025-07-01", "2025-07-02")
    book(renter, spot, "2025-07-01", "2025-07-02")

    original = CascadeManager._purge_spot_children

    def purge_then_fail(self, spot_ids):
        original(self, spot_ids)
        raise OperationalError("DELETE FROM camping_spots", {}, Exception("disk I/O error"))

    monkeypatch.setattr(CascadeManager, "_purge_spot_children", purge_then_fail)

    with pytest.raises(StorageError):
        cascade.delete_user(owner.id)

    assert count(db_session, models.User, id=owner.id) == 1
    assert count(db_session, models.Booking) == 2
    assert count(db_session, models.CampingSpot, id=spot.id) == 1
