from datetime import date

import pytest

from conftest import FakeDatabase, reservation_row
from repositories.reservation_repo import ReservationRepository
from utils.errors import QueryFailure, ValidationError


def test_get_upcoming_for_guest_maps_reservation_and_property():
    db = FakeDatabase(rows=[reservation_row()])

    reservations = ReservationRepository(db).get_upcoming_for_guest(2)

    assert len(reservations) == 1
    reservation = reservations[0]
    assert reservation.id == 41
    assert reservation.guest_id == 2
    assert reservation.listing.id == 7
    assert reservation.listing.average_rating == 4.25
    assert reservation.nights == 3
    assert reservation.total_cost == pytest.approx(280.44)
    assert str(reservation) == f"#41 | Speed lamp | {date(2030, 3, 1)} → {date(2030, 3, 4)}"
    assert db.last_params == [2, 10]


def test_statement_filters_upcoming_and_limits_last(fake_db):
    ReservationRepository(fake_db).get_upcoming_for_guest(2, limit=3)

    sql = fake_db.last_sql
    assert "reservations.guest_id = $1" in sql
    assert "start_date >= now()" in sql
    assert "GROUP BY properties.id, reservations.id" in sql
    assert "LIMIT $2" in sql
    assert fake_db.last_params == [2, 3]


def test_invalid_limit_is_rejected(fake_db):
    with pytest.raises(ValidationError):
        ReservationRepository(fake_db).get_upcoming_for_guest(2, limit=0)

    assert fake_db.calls == []


def test_failure_propagates():
    repo = ReservationRepository(FakeDatabase(error=QueryFailure("relation does not exist")))

    with pytest.raises(QueryFailure):
        repo.get_upcoming_for_guest(2)
