"""
repositories/reservation_repo.py
--------------------------------
Data access layer for reservations.
"""

from config import DEFAULT_SEARCH_LIMIT
from db.connection import Database
from models.filters import validate_limit
from models.reservation import Reservation
from utils.logger import get_logger

logger = get_logger(__name__)


class ReservationRepository:
    """Repository for reading reservations together with their properties."""

    def __init__(self, db: Database):
        self.db = db

    def get_upcoming_for_guest(
        self, guest_id: int, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[Reservation]:
        """
        Fetch a guest's reservations that have not started yet.

        Each reservation carries its property and that property's average
        rating. As in property search, properties without reviews drop out.

        Args:
            guest_id: The guest's user id.
            limit: Maximum number of reservations returned.

        Returns:
            List of Reservation objects ordered by start date.

        Raises:
            ValidationError: If the limit is not a positive integer.
            QueryFailure: If the database call fails.
        """
        validate_limit(limit)
        sql = """
            SELECT reservations.*, properties.*,
                   reservations.id AS reservation_id,
                   avg(rating) AS average_rating
            FROM reservations
            JOIN properties ON properties.id = reservations.property_id
            JOIN property_reviews ON properties.id = property_reviews.property_id
            WHERE reservations.guest_id = $1
            AND reservations.start_date >= now()
            GROUP BY properties.id, reservations.id
            ORDER BY reservations.start_date ASC, reservations.id ASC
            LIMIT $2;
        """
        rows = self.db.execute(sql, [guest_id, limit])
        return [Reservation.from_row(row) for row in rows]
