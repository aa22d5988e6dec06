# campsite_booking/dates.py
from datetime import date, datetime

from campsite_booking.errors import ValidationError


def parse_date(value, field: str = "date") -> date:
    """Accept a ``date`` or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid {field}: expected YYYY-MM-DD")
