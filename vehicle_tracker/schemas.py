"""Схемы запросов/ответов сервиса."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    """Тело запроса логина."""

    username: str
    password: str


class TokenResponse(BaseModel):
    """Ответ с JWT токеном."""

    authToken: str
    token_type: str = "bearer"
    expires_in: int


class MessageResponse(BaseModel):
    message: str


class Principal(BaseModel):
    """
    Аутентифицированный пользователь запроса.

    Собирается заново из токена на каждый запрос и нигде не сохраняется.
    Дополнительные поля заполнены, только если принципал построен
    по актуальной записи из БД.
    """

    user_id: int
    username: str
    email: str
    name: Optional[str] = None
    onboarding: Optional[bool] = None
    selected_vehicle_id: Optional[int] = None


class UserResponse(BaseModel):
    """Пользователь без секретных полей."""

    model_config = ConfigDict(from_attributes=True)

    user_id: int
    username: str
    email: str
    name: str
    onboarding: bool
    selected_vehicle_id: int
    last_login: Optional[datetime] = None
    created_on: datetime
    modified_on: datetime


class VehicleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    vehicle_id: int
    user_id: int
    name: str
    vehicle_year: Optional[int] = None
    type_id: Optional[int] = None
    make_id: Optional[int] = None
    model_id: Optional[int] = None
    sub_model_id: Optional[int] = None
    transmission_id: Optional[int] = None
    drive_type_id: Optional[int] = None
    body_type_id: Optional[int] = None
    bed_type_id: Optional[int] = None
    vin: Optional[str] = None
    license_plate: Optional[str] = None
    insurance_number: Optional[str] = None
    oil_change_frequency: Optional[int] = None
    default_energy_type_id: Optional[int] = None
    default_fuel_grade_id: Optional[int] = None
    note: Optional[str] = None
    created_on: datetime
    modified_on: datetime


class FuelPurchaseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fuel_purchase_id: int
    user_id: int
    vehicle_id: int
    fuel_type_id: int
    fuel_grade: Optional[str] = None
    odometer: Decimal
    amount: Decimal
    price: Decimal
    fuel_brand: Optional[str] = None
    fuel_station: Optional[str] = None
    partial_tank: Optional[bool] = None
    missed_prev_fill_up: Optional[bool] = None
    note: Optional[str] = None
    date_of_fill_up: datetime
    created_on: datetime
    modified_on: datetime
