"""Эндпоинты заправок текущего пользователя."""
from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from ..dependencies import get_fuel_purchase_repository
from ..fields import Operation, Resource
from ..repositories import FuelPurchaseRepository
from ..schemas import FuelPurchaseResponse, MessageResponse
from ..validation import validate_payload

router = APIRouter(prefix="/api/fuel_purchase", tags=["fuel_purchase"])


@router.get("", response_model=List[FuelPurchaseResponse])
async def list_fuel_purchases(
    purchases: Annotated[FuelPurchaseRepository, Depends(get_fuel_purchase_repository)],
) -> List[FuelPurchaseResponse]:
    """Заправки пользователя в порядке добавления."""
    return [FuelPurchaseResponse.model_validate(item) for item in await purchases.list_all()]


@router.get("/{fuel_purchase_id}", response_model=FuelPurchaseResponse)
async def get_fuel_purchase(
    fuel_purchase_id: int,
    purchases: Annotated[FuelPurchaseRepository, Depends(get_fuel_purchase_repository)],
) -> FuelPurchaseResponse:
    return FuelPurchaseResponse.model_validate(await purchases.get(fuel_purchase_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=FuelPurchaseResponse)
async def create_fuel_purchase(
    response: Response,
    purchases: Annotated[FuelPurchaseRepository, Depends(get_fuel_purchase_repository)],
    payload: Dict[str, Any] = Body(...),
) -> FuelPurchaseResponse:
    """
    Добавляет заправку.

    ``vehicle_id`` должен принадлежать текущему пользователю, иначе 404.
    """
    fields = validate_payload(Resource.FUEL_PURCHASE, Operation.CREATE, payload)
    purchase = await purchases.create(fields)
    response.headers["Location"] = f"{router.prefix}/{purchase.fuel_purchase_id}"
    return FuelPurchaseResponse.model_validate(purchase)


@router.put("/{fuel_purchase_id}", response_model=FuelPurchaseResponse)
async def update_fuel_purchase(
    fuel_purchase_id: int,
    purchases: Annotated[FuelPurchaseRepository, Depends(get_fuel_purchase_repository)],
    payload: Dict[str, Any] = Body(...),
) -> FuelPurchaseResponse:
    fields = validate_payload(Resource.FUEL_PURCHASE, Operation.UPDATE, payload)
    return FuelPurchaseResponse.model_validate(await purchases.update(fuel_purchase_id, fields))


@router.delete("/{fuel_purchase_id}", response_model=MessageResponse)
async def delete_fuel_purchase(
    fuel_purchase_id: int,
    purchases: Annotated[FuelPurchaseRepository, Depends(get_fuel_purchase_repository)],
) -> MessageResponse:
    await purchases.delete(fuel_purchase_id)
    return MessageResponse(message="Fuel purchase deleted.")
