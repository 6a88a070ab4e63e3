"""
models/filters.py
-----------------
Search criteria for property lookups.
"""

from dataclasses import dataclass
from typing import Optional

from utils.errors import ValidationError

MIN_RATING = 0
MAX_RATING = 5


@dataclass(frozen=True)
class PropertyFilters:
    """
    Optional constraints for a property search.

    Every field is independent; None means "no constraint".
    Prices are in cents, the unit of ``properties.cost_per_night``.

    Attributes:
        city: Substring the city must contain (case-sensitive).
        owner_id: Only properties listed by this user.
        minimum_price_per_night: Inclusive lower price bound.
        maximum_price_per_night: Inclusive upper price bound.
        minimum_rating: Inclusive lower bound on the average review rating.
    """
    city: Optional[str] = None
    owner_id: Optional[int] = None
    minimum_price_per_night: Optional[int] = None
    maximum_price_per_night: Optional[int] = None
    minimum_rating: Optional[float] = None

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (
                self.city,
                self.owner_id,
                self.minimum_price_per_night,
                self.maximum_price_per_night,
                self.minimum_rating,
            )
        )

    def validate(self) -> "PropertyFilters":
        """
        Check value types and ranges before anything is sent to the database.

        Returns:
            self, so calls can be chained.

        Raises:
            ValidationError: On a wrongly typed value, a negative price, an
                inverted price range, a rating outside 0..5 or a
                non-positive owner id.
        """
        self._check_types()

        if self.owner_id is not None and self.owner_id <= 0:
            raise ValidationError(f"owner_id must be positive, got {self.owner_id}")

        for name in ("minimum_price_per_night", "maximum_price_per_night"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ValidationError(f"{name} must not be negative, got {value}")

        if (
            self.minimum_price_per_night is not None
            and self.maximum_price_per_night is not None
            and self.minimum_price_per_night > self.maximum_price_per_night
        ):
            raise ValidationError(
                "minimum_price_per_night is above maximum_price_per_night "
                f"({self.minimum_price_per_night} > {self.maximum_price_per_night})"
            )

        if self.minimum_rating is not None and not MIN_RATING <= self.minimum_rating <= MAX_RATING:
            raise ValidationError(
                f"minimum_rating must be between {MIN_RATING} and {MAX_RATING}, got {self.minimum_rating}"
            )
        return self

    def _check_types(self) -> None:
        if self.city is not None and not isinstance(self.city, str):
            raise ValidationError(f"city must be a string, got {self.city!r}")

        for name in ("owner_id", "minimum_price_per_night", "maximum_price_per_night"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValidationError(f"{name} must be an integer, got {value!r}")

        rating = self.minimum_rating
        if rating is not None and (isinstance(rating, bool) or not isinstance(rating, (int, float))):
            raise ValidationError(f"minimum_rating must be a number, got {rating!r}")


def validate_limit(limit) -> int:
    """
    Check that a result limit is a positive integer.

    Raises:
        ValidationError: If it is not.
    """
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise ValidationError(f"limit must be a positive integer, got {limit!r}")
    return limit
