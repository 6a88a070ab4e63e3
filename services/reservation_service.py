"""
services/reservation_service.py
-------------------------------
Business logic for listing a guest's upcoming reservations.
"""

from config import CURRENCY_SYMBOL
from repositories.reservation_repo import ReservationRepository
from repositories.user_repo import UserRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class ReservationService:
    """Looks a guest up by email and formats their upcoming stays."""

    def __init__(self, user_repo: UserRepository, reservation_repo: ReservationRepository):
        self.user_repo = user_repo
        self.reservation_repo = reservation_repo

    def upcoming_for_email(self, email: str) -> str:
        """
        Get a summary of the upcoming reservations of a guest.

        Returns:
            User-friendly message listing the reservations.

        Raises:
            QueryFailure: If a database call fails.
        """
        user = self.user_repo.get_by_email(email)
        if user is None:
            return f"⚠️ No user is registered with {email}."

        reservations = self.reservation_repo.get_upcoming_for_guest(user.id)
        if not reservations:
            return f"📭 {user.name} has no upcoming reservations."

        lines = [f"📅 Upcoming reservations for {user.name}:\n"]
        for r in reservations:
            lines.append(
                f"  • {r.listing.title} ({r.listing.city})\n"
                f"    {r.start_date} → {r.end_date} | {r.nights} nights | "
                f"{CURRENCY_SYMBOL}{r.total_cost:.2f}"
            )
        return "\n".join(lines)
