"""
models/reservation.py
---------------------
Domain model for a guest's stay at a property.
"""

from dataclasses import dataclass
from datetime import date

from models.property import Property


@dataclass
class Reservation:
    """
    Represents a reservation joined with the reserved property.

    Attributes:
        id: Reservation primary key.
        guest_id: ID of the user staying at the property.
        start_date: First night (inclusive).
        end_date: Check-out date.
        listing: The reserved property, including its average rating.
    """
    id: int
    guest_id: int
    start_date: date
    end_date: date
    listing: Property

    @classmethod
    def from_row(cls, row: dict) -> "Reservation":
        """
        Build a Reservation from a ``reservations.*, properties.*`` row.

        Both tables have an ``id`` column and the property's wins in the
        result set, so the reservation key is selected as ``reservation_id``.
        """
        return cls(
            id=row["reservation_id"],
            guest_id=row["guest_id"],
            start_date=row["start_date"],
            end_date=row["end_date"],
            listing=Property.from_row(row),
        )

    @property
    def nights(self) -> int:
        return (self.end_date - self.start_date).days

    @property
    def total_cost(self) -> float:
        """Total price of the stay in whole currency units."""
        return self.nights * self.listing.price

    def __str__(self) -> str:
        return f"#{self.id} | {self.listing.title} | {self.start_date} → {self.end_date}"
