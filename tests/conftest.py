from datetime import date
from decimal import Decimal

import pytest

from security import rate_limiter


class FakeDatabase:
    """Stands in for db.connection.Database: records statements, replays canned rows."""

    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    def execute(self, sql, params=()):
        self.calls.append((sql, list(params)))
        if self.error is not None:
            raise self.error
        return [dict(row) for row in self.rows]

    def execute_one(self, sql, params=()):
        rows = self.execute(sql, params)
        return rows[0] if rows else None

    @property
    def last_sql(self):
        return self.calls[-1][0]

    @property
    def last_params(self):
        return self.calls[-1][1]


def property_row(**overrides):
    row = {
        "id": 1,
        "owner_id": 3,
        "title": "Speed lamp",
        "description": "description",
        "thumbnail_photo_url": "https://images.example.com/1-small.jpg",
        "cover_photo_url": "https://images.example.com/1.jpg",
        "cost_per_night": 9348,
        "parking_spaces": 6,
        "number_of_bathrooms": 4,
        "number_of_bedrooms": 8,
        "country": "Canada",
        "street": "536 Namsub Highway",
        "city": "Sotboske",
        "province": "Quebec",
        "post_code": "28142",
        "active": True,
        "average_rating": Decimal("4.25"),
    }
    row.update(overrides)
    return row


def reservation_row(**overrides):
    row = property_row(id=7)
    row.update({
        "reservation_id": 41,
        "guest_id": 2,
        "property_id": 7,
        "start_date": date(2030, 3, 1),
        "end_date": date(2030, 3, 4),
    })
    row.update(overrides)
    return row


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    rate_limiter._user_timestamps.clear()
    yield
    rate_limiter._user_timestamps.clear()
