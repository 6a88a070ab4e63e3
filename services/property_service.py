"""
services/property_service.py
----------------------------
Business logic for property search.
Turns bot command arguments into PropertyFilters and formats results.
"""

from decimal import Decimal, InvalidOperation

from config import CURRENCY_SYMBOL, DEFAULT_SEARCH_LIMIT, MAX_SEARCH_LIMIT
from models.filters import PropertyFilters, validate_limit
from models.property import Property
from repositories.property_repo import PropertyRepository
from utils.errors import ValidationError
from utils.logger import get_logger

logger = get_logger(__name__)

# Accepted argument keys → PropertyFilters field (or "limit")
_ARG_KEYS = {
    "city": "city",
    "owner": "owner_id",
    "owner_id": "owner_id",
    "min_price": "minimum_price_per_night",
    "max_price": "maximum_price_per_night",
    "rating": "minimum_rating",
    "min_rating": "minimum_rating",
    "limit": "limit",
}


def _to_cents(key: str, raw: str) -> int:
    """Convert a price typed in whole currency units (e.g. '120.50') to cents."""
    try:
        return int((Decimal(raw) * 100).to_integral_value())
    except (InvalidOperation, ValueError, OverflowError):
        raise ValidationError(f"{key} must be a number, got '{raw}'") from None


def _to_int(key: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{key} must be a whole number, got '{raw}'") from None


def _to_float(key: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ValidationError(f"{key} must be a number, got '{raw}'") from None


class PropertyService:
    """
    Handles property search requests coming from the bot.

    Workflow:
        1. Parse ``key=value`` arguments into filters and a limit.
        2. Validate them.
        3. Run the search through the repository.
        4. Return a user-friendly response.
    """

    def __init__(self, repo: PropertyRepository):
        self.repo = repo

    @staticmethod
    def parse_search_args(args: list[str]) -> tuple[PropertyFilters, int]:
        """
        Parse ``/search`` arguments.

        Prices are given in whole currency units and converted to cents.
        A word without ``=`` continues the previous value, so
        ``city=North Vancouver`` works without quotes.

        Args:
            args: Whitespace-split words after the command.

        Returns:
            Tuple of (filters, limit). The limit is capped at MAX_SEARCH_LIMIT.

        Raises:
            ValidationError: On an unknown key, a malformed value or an
                out-of-range filter.
        """
        raw: dict[str, str] = {}
        last_key = None
        for word in args:
            if "=" in word:
                key, _, value = word.partition("=")
                key = key.strip().lower()
                if key not in _ARG_KEYS:
                    raise ValidationError(f"Unknown search option '{key}'")
                last_key = _ARG_KEYS[key]
                raw[last_key] = value.strip()
            elif last_key is not None:
                raw[last_key] = f"{raw[last_key]} {word}".strip()
            else:
                raise ValidationError(f"Expected key=value, got '{word}'")

        values: dict = {}
        if raw.get("city"):
            values["city"] = raw["city"]
        if "owner_id" in raw:
            values["owner_id"] = _to_int("owner", raw["owner_id"])
        if "minimum_price_per_night" in raw:
            values["minimum_price_per_night"] = _to_cents("min_price", raw["minimum_price_per_night"])
        if "maximum_price_per_night" in raw:
            values["maximum_price_per_night"] = _to_cents("max_price", raw["maximum_price_per_night"])
        if "minimum_rating" in raw:
            values["minimum_rating"] = _to_float("rating", raw["minimum_rating"])

        limit = DEFAULT_SEARCH_LIMIT
        if "limit" in raw:
            limit = min(validate_limit(_to_int("limit", raw["limit"])), MAX_SEARCH_LIMIT)

        return PropertyFilters(**values).validate(), limit

    def search(self, args: list[str]) -> str:
        """
        Run a search from command arguments.

        Returns:
            Formatted result list, or a warning if the arguments are invalid.

        Raises:
            QueryFailure: If the database call fails.
        """
        try:
            filters, limit = self.parse_search_args(args)
        except ValidationError as e:
            logger.info(f"Rejected search arguments {args}: {e}")
            return f"⚠️ {e}"

        properties = self.repo.search(filters, limit)
        if not properties:
            # Search only returns reviewed properties
            if filters.is_empty():
                return "📭 No reviewed properties are listed yet."
            return "📭 No properties match your search."

        return self.format_results(properties)

    @staticmethod
    def format_results(properties: list[Property]) -> str:
        lines = [f"🏠 Found {len(properties)} propert{'y' if len(properties) == 1 else 'ies'}:\n"]
        for prop in properties:
            lines.append(
                f"  • #{prop.id} {prop.title} ({prop.city})\n"
                f"    💵 {CURRENCY_SYMBOL}{prop.price:.2f}/night | ⭐ {prop.average_rating:.2f} | "
                f"🛏 {prop.number_of_bedrooms} 🛁 {prop.number_of_bathrooms} 🚗 {prop.parking_spaces}"
            )
        return "\n".join(lines)
