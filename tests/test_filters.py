import pytest

from models.filters import PropertyFilters, validate_limit
from repositories.query_builder import build_property_search
from utils.errors import ValidationError


def test_empty_filters_are_valid():
    filters = PropertyFilters()

    assert filters.is_empty()
    assert filters.validate() is filters


def test_zero_is_not_empty():
    assert not PropertyFilters(minimum_price_per_night=0).is_empty()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"minimum_price_per_night": -1},
        {"maximum_price_per_night": -100},
        {"minimum_price_per_night": 300, "maximum_price_per_night": 200},
        {"minimum_rating": 5.5},
        {"minimum_rating": -0.1},
        {"owner_id": 0},
    ],
)
def test_out_of_range_values_raise(kwargs):
    with pytest.raises(ValidationError):
        PropertyFilters(**kwargs).validate()


def test_equal_price_bounds_are_allowed():
    PropertyFilters(minimum_price_per_night=100, maximum_price_per_night=100).validate()


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        PropertyFilters(minimum_rating=9).validate()


def test_filters_are_immutable():
    filters = PropertyFilters(city="van")

    with pytest.raises(AttributeError):
        filters.city = "tor"


def test_validate_limit_returns_value():
    assert validate_limit(3) == 3


@pytest.mark.parametrize(
    "kwargs",
    [
        {"owner_id": "3"},
        {"owner_id": True},
        {"owner_id": 3.0},
        {"minimum_price_per_night": "100"},
        {"maximum_price_per_night": 99.5},
        {"minimum_rating": "4"},
        {"minimum_rating": False},
        {"city": 42},
    ],
)
def test_wrongly_typed_values_raise_validation_error(kwargs):
    with pytest.raises(ValidationError):
        PropertyFilters(**kwargs).validate()


def test_wrongly_typed_values_are_rejected_before_building_sql():
    for filters in (
        PropertyFilters(owner_id="3"),
        PropertyFilters(minimum_rating="4"),
        PropertyFilters(minimum_price_per_night="100"),
    ):
        with pytest.raises(ValidationError):
            build_property_search(filters, 5)


def test_integer_rating_is_accepted():
    PropertyFilters(minimum_rating=4).validate()
