"""
repositories/query_builder.py
-----------------------------
Assembles parameterized SELECT statements from optional clauses.

Fragments are stored as templates with a ``{}`` slot for their
placeholder, next to the value that will fill it. Placeholders
(``$1``, ``$2``, ...) are only numbered in ``render()``, in the order the
clauses appear in the text, so placeholder numbers always match the
position of their value in the parameter list. Values are never
written into the SQL text.
"""

from typing import Any, Optional

from config import DEFAULT_SEARCH_LIMIT
from models.filters import PropertyFilters, validate_limit

PROPERTY_SEARCH_BASE = """
SELECT properties.*, avg(rating) AS average_rating
FROM properties
JOIN property_reviews ON properties.id = property_reviews.property_id
"""


class SearchQueryBuilder:
    """
    Builds one SELECT statement and its ordered parameter list.

    Usage:
        sql, params = (
            SearchQueryBuilder("SELECT * FROM properties")
            .where("city LIKE {}", "%van%")
            .order_by("cost_per_night ASC")
            .limit(5)
            .render()
        )
        # sql    -> "SELECT * FROM properties\\nWHERE city LIKE $1\\n..."
        # params -> ["%van%", 5]
    """

    def __init__(self, base_sql: str):
        self.base_sql = base_sql.strip()
        self._where: list[tuple[str, Any]] = []
        self._group_by: Optional[str] = None
        self._having: list[tuple[str, Any]] = []
        self._order_by: Optional[str] = None
        self._limit: Optional[Any] = None
        self._has_limit = False

    def where(self, template: str, value: Any) -> "SearchQueryBuilder":
        """Add a row-level predicate; ``template`` holds one ``{}`` slot."""
        self._where.append((template, value))
        return self

    def group_by(self, columns: str) -> "SearchQueryBuilder":
        self._group_by = columns
        return self

    def having(self, template: str, value: Any) -> "SearchQueryBuilder":
        """Add a predicate on aggregated values; ``template`` holds one ``{}`` slot."""
        self._having.append((template, value))
        return self

    def order_by(self, clause: str) -> "SearchQueryBuilder":
        self._order_by = clause
        return self

    def limit(self, value: Any) -> "SearchQueryBuilder":
        self._limit = value
        self._has_limit = True
        return self

    def render(self) -> tuple[str, list]:
        """
        Produce the final statement text and its parameter list.

        The first WHERE predicate opens with ``WHERE`` and every later one
        with ``AND``; HAVING predicates follow the same rule after
        ``GROUP BY``. The LIMIT value is always the last parameter.
        """
        params: list = []

        def bind(value: Any) -> str:
            params.append(value)
            return f"${len(params)}"

        lines = [self.base_sql]
        for position, (template, value) in enumerate(self._where):
            keyword = "WHERE" if position == 0 else "AND"
            lines.append(f"{keyword} {template.format(bind(value))}")

        if self._group_by:
            lines.append(f"GROUP BY {self._group_by}")

        for position, (template, value) in enumerate(self._having):
            keyword = "HAVING" if position == 0 else "AND"
            lines.append(f"{keyword} {template.format(bind(value))}")

        if self._order_by:
            lines.append(f"ORDER BY {self._order_by}")

        if self._has_limit:
            lines.append(f"LIMIT {bind(self._limit)}")

        return "\n".join(lines) + ";", params


def build_property_search(
    filters: PropertyFilters, limit: int = DEFAULT_SEARCH_LIMIT
) -> tuple[str, list]:
    """
    Build the property search statement for a set of filters.

    Predicates are added in a fixed order (city, owner, minimum price,
    maximum price) and only for fields that are set. The rating bound
    applies to the aggregate, so it goes into HAVING. Properties without
    any review never match because of the inner join.

    Args:
        filters: Search constraints; unset fields add nothing.
        limit: Maximum number of rows to return.

    Returns:
        Tuple of (sql, params) using ``$n`` placeholders.

    Raises:
        ValidationError: If a filter value or the limit is out of range.
    """
    filters.validate()
    validate_limit(limit)

    query = SearchQueryBuilder(PROPERTY_SEARCH_BASE)
    if filters.city is not None:
        query.where("city LIKE {}", f"%{filters.city}%")
    if filters.owner_id is not None:
        query.where("owner_id = {}", filters.owner_id)
    if filters.minimum_price_per_night is not None:
        query.where("cost_per_night >= {}", filters.minimum_price_per_night)
    if filters.maximum_price_per_night is not None:
        query.where("cost_per_night <= {}", filters.maximum_price_per_night)

    query.group_by("properties.id")

    if filters.minimum_rating is not None:
        query.having("avg(rating) >= {}", filters.minimum_rating)

    # properties.id breaks price ties so repeated searches return the same order
    query.order_by("cost_per_night ASC, properties.id ASC")
    query.limit(limit)
    return query.render()
