"""Тесты приведения проверенных полей к колонкам таблиц."""
from datetime import datetime
from decimal import Decimal

import pytest

from vehicle_tracker.db.models import FuelPurchase, User
from vehicle_tracker.errors import InvalidDatetimeError, TypeMismatchError
from vehicle_tracker.fields import Resource
from vehicle_tracker.repositories import _to_columns


def test_password_passes_through_without_own_column() -> None:
    values = _to_columns(
        Resource.USER,
        User,
        {"username": "demo", "password": "password123", "email": "demo@demo.com", "name": "Demo"},
    )
    assert values["password"] == "password123"
    assert "password_hash" not in values


def test_server_fields_are_dropped() -> None:
    values = _to_columns(Resource.USER, User, {"name": "Demo", "user_id": 5, "created_on": "2020-01-01"})
    assert values == {"name": "Demo"}


def test_fuel_purchase_values_are_coerced() -> None:
    values = _to_columns(
        Resource.FUEL_PURCHASE,
        FuelPurchase,
        {"vehicle_id": 2.0, "price": 3.49, "date_of_fill_up": "2020-09-14T10:30:00"},
    )
    assert values["vehicle_id"] == 2
    assert isinstance(values["vehicle_id"], int)
    assert values["price"] == Decimal("3.49")
    assert values["date_of_fill_up"] == datetime(2020, 9, 14, 10, 30)


@pytest.mark.parametrize("value", [None, "yes", 1])
def test_not_null_boolean_rejects_non_boolean(value) -> None:
    with pytest.raises(TypeMismatchError) as excinfo:
        _to_columns(Resource.USER, User, {"onboarding": value})
    assert excinfo.value.status_code == 422
    assert excinfo.value.expected == "boolean"


def test_nullable_boolean_accepts_null() -> None:
    assert _to_columns(Resource.FUEL_PURCHASE, FuelPurchase, {"partial_tank": None}) == {"partial_tank": None}


@pytest.mark.parametrize("value", [None, "yesterday"])
def test_required_datetime_rejects_null_and_garbage(value) -> None:
    with pytest.raises(InvalidDatetimeError):
        _to_columns(Resource.FUEL_PURCHASE, FuelPurchase, {"date_of_fill_up": value})
