"""SQLAlchemy модели (async) для пользователей, автомобилей и заправок."""
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Базовый класс для моделей с общей metadata."""


class User(Base):
    """Пользователь приложения."""

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(35), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(String(70), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(70), nullable=False)
    selected_vehicle_id: Mapped[int] = mapped_column(Integer, nullable=False, server_default=text("0"))
    onboarding: Mapped[bool] = mapped_column(Boolean, nullable=False, server_default=text("true"))
    reset_token: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reset_token_expiration: Mapped[int | None] = mapped_column(Integer, nullable=True)
    last_login: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    modified_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )


class Vehicle(Base):
    """Автомобиль, принадлежит одному пользователю."""

    __tablename__ = "vehicles"
    __table_args__ = (Index("idx_vehicles_user_name", "user_id", "name"),)

    vehicle_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(35), nullable=False)
    vehicle_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    type_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    make_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    model_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sub_model_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    transmission_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    drive_type_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    body_type_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    bed_type_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    vin: Mapped[str | None] = mapped_column(String(20), nullable=True)
    license_plate: Mapped[str | None] = mapped_column(String(20), nullable=True)
    insurance_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    oil_change_frequency: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_energy_type_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    default_fuel_grade_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    note: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    modified_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )


class FuelPurchase(Base):
    """Заправка автомобиля."""

    __tablename__ = "fuel_purchases"
    __table_args__ = (
        Index("idx_fuel_purchases_user_created", "user_id", "created_on"),
        Index("idx_fuel_purchases_vehicle", "vehicle_id"),
    )

    fuel_purchase_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
    )
    vehicle_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("vehicles.vehicle_id", ondelete="CASCADE"),
        nullable=False,
    )
    fuel_type_id: Mapped[int] = mapped_column(Integer, nullable=False)
    fuel_grade: Mapped[str | None] = mapped_column(String(25), nullable=True)
    odometer: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False)
    fuel_brand: Mapped[str | None] = mapped_column(String(50), nullable=True)
    fuel_station: Mapped[str | None] = mapped_column(String(50), nullable=True)
    partial_tank: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    missed_prev_fill_up: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    note: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_of_fill_up: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    modified_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
