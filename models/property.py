"""
models/property.py
------------------
Domain model for rental listings.
"""

from dataclasses import dataclass, fields
from typing import Optional

from config import CURRENCY_SYMBOL


@dataclass
class Property:
    """
    Represents a single rental property.

    Attributes:
        owner_id: ID of the user who lists the property.
        title: Listing headline.
        cost_per_night: Nightly price in cents.
        average_rating: Mean review rating, filled in by search queries only.
        id: Database primary key (None for new records).
    """
    owner_id: int
    title: str
    description: Optional[str]
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    street: str
    city: str
    province: str
    post_code: str
    country: str
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    active: bool = True
    id: Optional[int] = None
    average_rating: Optional[float] = None

    # Column order of the INSERT statement in PropertyRepository.add
    INSERT_COLUMNS = (
        "owner_id", "title", "description", "thumbnail_photo_url", "cover_photo_url",
        "cost_per_night", "street", "city", "province", "post_code", "country",
        "parking_spaces", "number_of_bathrooms", "number_of_bedrooms",
    )

    @classmethod
    def from_row(cls, row: dict) -> "Property":
        """
        Build a Property from a result row.

        Columns the dataclass does not know about (e.g. from a joined table)
        are ignored; ``average_rating`` arrives as a Decimal and is converted.
        """
        known = {f.name for f in fields(cls)}
        data = {key: value for key, value in row.items() if key in known}
        if data.get("average_rating") is not None:
            data["average_rating"] = float(data["average_rating"])
        return cls(**data)

    def insert_values(self) -> list:
        """Values for the INSERT statement, in INSERT_COLUMNS order."""
        return [getattr(self, column) for column in self.INSERT_COLUMNS]

    @property
    def price(self) -> float:
        """Nightly price in whole currency units."""
        return self.cost_per_night / 100

    def __str__(self) -> str:
        rating = f"{self.average_rating:.2f}★" if self.average_rating is not None else "no reviews"
        return f"{self.title} | {self.city} | {CURRENCY_SYMBOL}{self.price:.2f}/night | {rating}"
