"""Camping spot booking backend: spots, availability, bookings and reviews."""

__version__ = "1.0.0"
