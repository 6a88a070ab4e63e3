"""
repositories/property_repo.py
-----------------------------
Data access layer for rental properties.
All SQL queries related to the `properties` table live here.
"""

from config import DEFAULT_SEARCH_LIMIT
from db.connection import Database
from models.filters import PropertyFilters
from models.property import Property
from repositories.query_builder import build_property_search
from utils.errors import QueryFailure
from utils.logger import get_logger

logger = get_logger(__name__)


class PropertyRepository:
    """Repository for searching and creating properties."""

    def __init__(self, db: Database):
        self.db = db

    # ── CREATE ────────────────────────────────────────────

    def add(self, prop: Property) -> Property:
        """
        Insert a new property.

        Args:
            prop: The Property to persist (its id is ignored).

        Returns:
            A new Property built from the stored row, with its id.

        Raises:
            QueryFailure: If the insert fails (e.g. unknown owner).
        """
        columns = ", ".join(Property.INSERT_COLUMNS)
        placeholders = ", ".join(f"${n}" for n in range(1, len(Property.INSERT_COLUMNS) + 1))
        sql = f"""
            INSERT INTO properties ({columns})
            VALUES ({placeholders})
            RETURNING *;
        """
        row = self.db.execute_one(sql, prop.insert_values())
        if row is None:
            raise QueryFailure("INSERT INTO properties returned no row")
        saved = Property.from_row(row)
        logger.info(f"Added property #{saved.id} for owner {saved.owner_id}")
        return saved

    # ── READ ──────────────────────────────────────────────

    def search(
        self, filters: PropertyFilters | None = None, limit: int = DEFAULT_SEARCH_LIMIT
    ) -> list[Property]:
        """
        Find properties matching the filters, cheapest first.

        Each result carries its ``average_rating``. Properties with no
        reviews are never returned.

        Args:
            filters: Search constraints; None or empty means no constraint.
            limit: Maximum number of properties returned.

        Returns:
            List of Property objects ordered by cost_per_night ascending.

        Raises:
            ValidationError: If a filter value or the limit is invalid.
            QueryFailure: If the database call fails.
        """
        sql, params = build_property_search(filters or PropertyFilters(), limit)
        rows = self.db.execute(sql, params)
        logger.debug(f"Property search matched {len(rows)} rows")
        return [Property.from_row(row) for row in rows]
