"""
Описание полей ресурсов (user, vehicle, fuel-purchase).

Только данные: какие ключи допустимы во входном JSON, какие обязательны
при создании, какие можно менять, их тип и ограничения длины.
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class Resource(str, Enum):
    USER = "user"
    VEHICLE = "vehicle"
    FUEL_PURCHASE = "fuel-purchase"


class Operation(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class FieldKind(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATETIME = "datetime"


class SizeBounds(BaseModel):
    """Ограничения длины строки в символах."""

    model_config = ConfigDict(frozen=True)

    min: Optional[int] = None
    max: Optional[int] = None


class FieldSpec(BaseModel):
    """Описание одного поля ресурса."""

    model_config = ConfigDict(frozen=True)

    name: str
    kind: FieldKind
    required: bool = False
    updateable: bool = False
    size: Optional[SizeBounds] = None

    @property
    def writable(self) -> bool:
        """Поле приходит от клиента; остальные заполняет сервер."""
        return self.required or self.updateable


def _number(name: str, *, required: bool = False, updateable: bool = False) -> FieldSpec:
    return FieldSpec(name=name, kind=FieldKind.NUMBER, required=required, updateable=updateable)


def _string(
    name: str, min_length: int, max_length: int, *, required: bool = False, updateable: bool = False
) -> FieldSpec:
    return FieldSpec(
        name=name,
        kind=FieldKind.STRING,
        required=required,
        updateable=updateable,
        size=SizeBounds(min=min_length, max=max_length),
    )


def _boolean(name: str, *, updateable: bool = False) -> FieldSpec:
    return FieldSpec(name=name, kind=FieldKind.BOOLEAN, updateable=updateable)


def _datetime(name: str, *, required: bool = False, updateable: bool = False) -> FieldSpec:
    return FieldSpec(name=name, kind=FieldKind.DATETIME, required=required, updateable=updateable)


_USER_FIELDS = [
    _number("user_id"),
    _string("username", 1, 35, required=True),
    _string("password", 8, 72, required=True, updateable=True),
    _string("email", 3, 70, required=True, updateable=True),
    _string("name", 1, 70, required=True, updateable=True),
    _boolean("onboarding", updateable=True),
    _number("selected_vehicle_id", updateable=True),
    _datetime("last_login"),
    _datetime("created_on"),
    _datetime("modified_on"),
    _string("reset_token", 1, 255),
    _number("reset_token_expiration"),
]

_VEHICLE_FIELDS = [
    _number("vehicle_id"),
    _number("user_id"),
    _string("name", 1, 35, required=True, updateable=True),
    _number("vehicle_year", updateable=True),
    _number("type_id", updateable=True),
    _number("make_id", updateable=True),
    _number("model_id", updateable=True),
    _number("sub_model_id", updateable=True),
    _number("transmission_id", updateable=True),
    _number("drive_type_id", updateable=True),
    _number("body_type_id", updateable=True),
    _number("bed_type_id", updateable=True),
    _string("vin", 1, 20, updateable=True),
    _string("license_plate", 1, 20, updateable=True),
    _string("insurance_number", 1, 50, updateable=True),
    _number("oil_change_frequency", updateable=True),
    _number("default_energy_type_id", updateable=True),
    _number("default_fuel_grade_id", updateable=True),
    _string("note", 1, 255, updateable=True),
]

_FUEL_PURCHASE_FIELDS = [
    _number("fuel_purchase_id"),
    _number("user_id"),
    _number("vehicle_id", required=True, updateable=True),
    _number("fuel_type_id", required=True, updateable=True),
    _string("fuel_grade", 1, 25, updateable=True),
    _number("odometer", required=True, updateable=True),
    _number("amount", required=True, updateable=True),
    _number("price", required=True, updateable=True),
    _string("fuel_brand", 1, 50, updateable=True),
    _string("fuel_station", 1, 50, updateable=True),
    _boolean("partial_tank", updateable=True),
    _boolean("missed_prev_fill_up", updateable=True),
    _string("note", 1, 255, updateable=True),
    _datetime("date_of_fill_up", required=True, updateable=True),
]

REGISTRY: Dict[Resource, Dict[str, FieldSpec]] = {
    Resource.USER: {spec.name: spec for spec in _USER_FIELDS},
    Resource.VEHICLE: {spec.name: spec for spec in _VEHICLE_FIELDS},
    Resource.FUEL_PURCHASE: {spec.name: spec for spec in _FUEL_PURCHASE_FIELDS},
}


def field_specs(resource: Resource) -> List[FieldSpec]:
    """Все поля ресурса в порядке объявления."""
    return list(REGISTRY[resource].values())


def valid_field_names(resource: Resource) -> List[str]:
    return list(REGISTRY[resource])


def required_fields_for(resource: Resource, operation: Operation) -> List[str]:
    """
    Обязательные поля для операции.

    При обновлении обязательных полей нет, любое подмножество
    изменяемых полей допустимо.
    """
    if operation is not Operation.CREATE:
        return []
    return [spec.name for spec in REGISTRY[resource].values() if spec.required]


def updateable_field_names(resource: Resource) -> List[str]:
    return [spec.name for spec in REGISTRY[resource].values() if spec.updateable]


def field_spec(resource: Resource, name: str) -> Optional[FieldSpec]:
    """Возвращает описание поля или None, если ресурс такого поля не знает."""
    return REGISTRY[resource].get(name)
