from datetime import date

import pytest

from campsite_booking import models
from campsite_booking.errors import PermissionDenied, ValidationError
from campsite_booking.services.availability import AvailabilityCalendar


@pytest.fixture
def calendar(db_session):
    return AvailabilityCalendar(db_session)


def entry_count(db_session):
    return db_session.query(models.AvailabilityEntry).count()


def test_set_and_get_normalizes_flags(calendar, owner, spot):
    calendar.set_availability(spot.id, owner.id, [
        {"date": "2025-07-02", "is_available": 0},
        {"date": "2025-07-01", "is_available": 1},
        {"date": "2025-07-03", "is_available": "false"},
    ])

    assert calendar.get_availability(spot.id) == [
        {"date": date(2025, 7, 1), "is_available": True},
        {"date": date(2025, 7, 2), "is_available": False},
        {"date": date(2025, 7, 3), "is_available": False},
    ]

def test_upsert_overwrites_existing_day(db_session, calendar, owner, spot):
    calendar.set_availability(spot.id, owner.id, [{"date": "2025-07-01", "is_available": True}])
    calendar.set_availability(spot.id, owner.id, [{"date": "2025-07-01", "is_available": False}])

    assert entry_count(db_session) == 1
    assert calendar.get_availability(spot.id) == [{"date": date(2025, 7, 1), "is_available": False}]

def test_setting_same_entries_twice_is_idempotent(db_session, calendar, owner, spot):
    entries = [
        {"date": "2025-07-01", "is_available": True},
        {"date": "2025-07-02", "is_available": False},
    ]
    calendar.set_availability(spot.id, owner.id, entries)
    once = calendar.get_availability(spot.id)
    calendar.set_availability(spot.id, owner.id, entries)

    assert calendar.get_availability(spot.id) == once
    assert entry_count(db_session) == 2

def test_repeated_date_in_batch_keeps_last_flag(calendar, owner, spot):
    calendar.set_availability(spot.id, owner.id, [
        {"date": "2025-07-01", "is_available": True},
        {"date": "2025-07-01", "is_available": False},
    ])

    assert calendar.get_availability(spot.id) == [{"date": date(2025, 7, 1), "is_available": False}]

def test_entries_must_be_a_list(calendar, owner, spot):
    with pytest.raises(ValidationError) as exc:
        calendar.set_availability(spot.id, owner.id, {"date": "2025-07-01", "is_available": True})
    assert exc.value.message == "Dates must be an array"

def test_bad_entry_rejects_whole_batch(db_session, calendar, owner, spot):
    with pytest.raises(ValidationError):
        calendar.set_availability(spot.id, owner.id, [
            {"date": "2025-07-01", "is_available": True},
            {"date": "not-a-date", "is_available": True},
        ])

    assert entry_count(db_session) == 0

def test_renter_cannot_set_availability(db_session, calendar, renter, spot):
    with pytest.raises(PermissionDenied):
        calendar.set_availability(spot.id, renter.id, [{"date": "2025-07-01", "is_available": False}])
    assert entry_count(db_session) == 0

def test_owner_of_another_spot_cannot_set_availability(db_session, calendar, make_user, spot):
    other_owner = make_user(is_owner=True)

    with pytest.raises(PermissionDenied) as exc:
        calendar.set_availability(spot.id, other_owner.id, [{"date": "2025-07-01", "is_available": False}])

    assert exc.value.message == "You do not own this spot"
    assert entry_count(db_session) == 0

def test_permission_is_checked_before_input_shape(calendar, renter, spot):
    with pytest.raises(PermissionDenied):
        calendar.set_availability(spot.id, renter.id, "not a list")

def test_blocked_dates_only_lists_explicit_blocks_in_range(calendar, owner, spot):
    calendar.set_availability(spot.id, owner.id, [
        {"date": "2025-07-01", "is_available": False},
        {"date": "2025-07-02", "is_available": True},
        {"date": "2025-07-05", "is_available": False},
    ])

    assert calendar.blocked_dates(spot.id, date(2025, 7, 1), date(2025, 7, 4)) == [date(2025, 7, 1)]

def test_calendars_are_per_spot(calendar, owner, spot, make_spot):
    other = make_spot(owner, title="Hilltop")
    calendar.set_availability(spot.id, owner.id, [{"date": "2025-07-01", "is_available": False}])

    assert calendar.get_availability(other.id) == []
