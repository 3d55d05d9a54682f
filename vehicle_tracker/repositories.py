"""
Репозитории ресурсов: перевод проверенных данных в запросы к БД.

Репозитории автомобилей и заправок создаются на конкретного пользователя,
и каждый их запрос фильтруется по ``user_id`` владельца.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional, Type

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import Integer, Numeric, delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .db.models import Base, FuelPurchase, User, Vehicle
from .errors import (
    DuplicateAccountError,
    FieldValidationError,
    InvalidDatetimeError,
    ResourceNotFoundError,
    TypeMismatchError,
)
from .fields import FieldKind, FieldSpec, Resource, field_spec
from .security import hash_password

logger = logging.getLogger(__name__)

_datetime_adapter = TypeAdapter(datetime)


def _reject_value(spec: FieldSpec) -> FieldValidationError:
    if spec.kind is FieldKind.DATETIME:
        return InvalidDatetimeError(spec.name)
    return TypeMismatchError(spec.name, spec.kind.value)


def _to_columns(resource: Resource, model: Type[Base], fields: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Оставляет только поля, которые клиент вправе записывать, и приводит
    значения к типам колонок (даты из строк, целые числа из 2020.0).

    Булевы значения и даты валидатор не проверяет, поэтому их тип и null
    для NOT NULL колонок проверяются здесь, до запроса к БД. Поля без
    своей колонки (``password``) передаются как есть.
    """
    columns = model.__table__.columns
    values: Dict[str, Any] = {}
    for name, value in fields.items():
        spec = field_spec(resource, name)
        if spec is None or not spec.writable:
            continue
        column = columns.get(name)
        if value is None:
            if column is not None and not column.nullable:
                raise _reject_value(spec)
        elif spec.kind is FieldKind.DATETIME:
            try:
                value = _datetime_adapter.validate_python(value)
            except PydanticValidationError:
                raise InvalidDatetimeError(name) from None
        elif spec.kind is FieldKind.BOOLEAN:
            if not isinstance(value, bool):
                raise TypeMismatchError(name, "boolean")
        elif column is not None and isinstance(column.type, Integer) and isinstance(value, float):
            if not value.is_integer():
                raise TypeMismatchError(name, "whole number")
            value = int(value)
        elif column is not None and isinstance(column.type, Numeric) and isinstance(value, float):
            value = Decimal(str(value))
        values[name] = value
    return values


class UserRepository:
    """Доступ к учетным записям пользователей."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_credential_by_username(self, username: str) -> Optional[User]:
        stmt = select(User).where(User.username == username)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def get_by_identity(self, user_id: int, username: str) -> Optional[User]:
        stmt = select(User).where(User.user_id == user_id, User.username == username)
        return (await self.session.execute(stmt)).scalar_one_or_none()

    async def account_exists(self, user_id: int, username: str) -> bool:
        return await self.get_by_identity(user_id, username) is not None

    async def get(self, user_id: int) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise ResourceNotFoundError("user", user_id)
        return user

    async def _email_or_username_taken(
        self, *, username: str | None, email: str | None, exclude_user_id: int | None = None
    ) -> bool:
        conditions = []
        if username is not None:
            conditions.append(User.username == username)
        if email is not None:
            conditions.append(User.email == email)
        if not conditions:
            return False
        stmt = select(func.count()).select_from(User).where(or_(*conditions))
        if exclude_user_id is not None:
            stmt = stmt.where(User.user_id != exclude_user_id)
        return (await self.session.execute(stmt)).scalar_one() > 0

    async def create(self, fields: Mapping[str, Any]) -> User:
        """
        Создает пользователя из проверенных полей.

        Пароль сохраняется только в виде bcrypt-хеша. Занятый username
        или email дает ``DuplicateAccountError``.
        """
        values = _to_columns(Resource.USER, User, fields)
        if await self._email_or_username_taken(username=values["username"], email=values["email"]):
            raise DuplicateAccountError()
        values["password_hash"] = hash_password(values.pop("password"))

        user = User(**values)
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateAccountError() from None
        await self.session.refresh(user)
        return user

    async def update(self, user_id: int, fields: Mapping[str, Any]) -> User:
        values = _to_columns(Resource.USER, User, fields)
        if "email" in values and await self._email_or_username_taken(
            username=None, email=values["email"], exclude_user_id=user_id
        ):
            raise DuplicateAccountError()
        if "password" in values:
            values["password_hash"] = hash_password(values.pop("password"))
        values["modified_on"] = func.now()

        stmt = (
            update(User)
            .where(User.user_id == user_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise DuplicateAccountError() from None
        if result.rowcount == 0:
            raise ResourceNotFoundError("user", user_id)
        return await self._reload(user_id)

    async def record_login(self, user_id: int) -> None:
        stmt = (
            update(User)
            .where(User.user_id == user_id)
            .values(last_login=func.now())
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def delete(self, user_id: int) -> None:
        stmt = (
            delete(User)
            .where(User.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("user", user_id)
        logger.info("Удален пользователь %s", user_id)

    async def _reload(self, user_id: int) -> User:
        # после UPDATE перечитываем запись, чтобы получить серверные значения
        stmt = select(User).where(User.user_id == user_id).execution_options(populate_existing=True)
        return (await self.session.execute(stmt)).scalar_one()


class VehicleRepository:
    """Автомобили одного пользователя."""

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.session = session
        self.user_id = user_id

    async def list_all(self) -> List[Vehicle]:
        stmt = (
            select(Vehicle)
            .where(Vehicle.user_id == self.user_id)
            .order_by(Vehicle.name, Vehicle.vehicle_id)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def get(self, vehicle_id: int) -> Vehicle:
        stmt = select(Vehicle).where(
            Vehicle.user_id == self.user_id,
            Vehicle.vehicle_id == vehicle_id,
        )
        vehicle = (await self.session.execute(stmt)).scalar_one_or_none()
        if vehicle is None:
            raise ResourceNotFoundError("vehicle", vehicle_id)
        return vehicle

    async def create(self, fields: Mapping[str, Any]) -> Vehicle:
        values = _to_columns(Resource.VEHICLE, Vehicle, fields)
        vehicle = Vehicle(user_id=self.user_id, **values)
        self.session.add(vehicle)
        await self.session.commit()
        await self.session.refresh(vehicle)
        return vehicle

    async def update(self, vehicle_id: int, fields: Mapping[str, Any]) -> Vehicle:
        values = _to_columns(Resource.VEHICLE, Vehicle, fields)
        values["modified_on"] = func.now()
        stmt = (
            update(Vehicle)
            .where(Vehicle.user_id == self.user_id, Vehicle.vehicle_id == vehicle_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("vehicle", vehicle_id)
        return await self._reload(vehicle_id)

    async def delete(self, vehicle_id: int) -> None:
        stmt = delete(Vehicle).where(
            Vehicle.user_id == self.user_id,
            Vehicle.vehicle_id == vehicle_id,
        ).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("vehicle", vehicle_id)

    async def _reload(self, vehicle_id: int) -> Vehicle:
        stmt = (
            select(Vehicle)
            .where(Vehicle.vehicle_id == vehicle_id)
            .execution_options(populate_existing=True)
        )
        return (await self.session.execute(stmt)).scalar_one()


class FuelPurchaseRepository:
    """
    Заправки одного пользователя.

    ``vehicle_id`` в новой или измененной заправке должен ссылаться
    на автомобиль этого же пользователя.
    """

    def __init__(self, session: AsyncSession, user_id: int) -> None:
        self.session = session
        self.user_id = user_id
        self.vehicles = VehicleRepository(session, user_id)

    async def list_all(self) -> List[FuelPurchase]:
        stmt = (
            select(FuelPurchase)
            .where(FuelPurchase.user_id == self.user_id)
            .order_by(FuelPurchase.created_on, FuelPurchase.fuel_purchase_id)
        )
        return list((await self.session.execute(stmt)).scalars().all())

    async def get(self, fuel_purchase_id: int) -> FuelPurchase:
        stmt = select(FuelPurchase).where(
            FuelPurchase.user_id == self.user_id,
            FuelPurchase.fuel_purchase_id == fuel_purchase_id,
        )
        purchase = (await self.session.execute(stmt)).scalar_one_or_none()
        if purchase is None:
            raise ResourceNotFoundError("fuel_purchase", fuel_purchase_id)
        return purchase

    async def create(self, fields: Mapping[str, Any]) -> FuelPurchase:
        values = _to_columns(Resource.FUEL_PURCHASE, FuelPurchase, fields)
        await self.vehicles.get(values["vehicle_id"])

        purchase = FuelPurchase(user_id=self.user_id, **values)
        self.session.add(purchase)
        await self.session.commit()
        await self.session.refresh(purchase)
        return purchase

    async def update(self, fuel_purchase_id: int, fields: Mapping[str, Any]) -> FuelPurchase:
        values = _to_columns(Resource.FUEL_PURCHASE, FuelPurchase, fields)
        if "vehicle_id" in values:
            await self.vehicles.get(values["vehicle_id"])
        values["modified_on"] = func.now()

        stmt = (
            update(FuelPurchase)
            .where(
                FuelPurchase.user_id == self.user_id,
                FuelPurchase.fuel_purchase_id == fuel_purchase_id,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("fuel_purchase", fuel_purchase_id)
        return await self._reload(fuel_purchase_id)

    async def delete(self, fuel_purchase_id: int) -> None:
        stmt = delete(FuelPurchase).where(
            FuelPurchase.user_id == self.user_id,
            FuelPurchase.fuel_purchase_id == fuel_purchase_id,
        ).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        await self.session.commit()
        if result.rowcount == 0:
            raise ResourceNotFoundError("fuel_purchase", fuel_purchase_id)

    async def _reload(self, fuel_purchase_id: int) -> FuelPurchase:
        stmt = (
            select(FuelPurchase)
            .where(FuelPurchase.fuel_purchase_id == fuel_purchase_id)
            .execution_options(populate_existing=True)
        )
        return (await self.session.execute(stmt)).scalar_one()
