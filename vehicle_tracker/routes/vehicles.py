"""Эндпоинты автомобилей текущего пользователя."""
from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Body, Depends, Response, status

from ..dependencies import get_vehicle_repository
from ..fields import Operation, Resource
from ..repositories import VehicleRepository
from ..schemas import MessageResponse, VehicleResponse
from ..validation import validate_payload

router = APIRouter(prefix="/api/vehicle", tags=["vehicle"])


@router.get("", response_model=List[VehicleResponse])
async def list_vehicles(
    vehicles: Annotated[VehicleRepository, Depends(get_vehicle_repository)],
) -> List[VehicleResponse]:
    """Автомобили пользователя, отсортированные по имени."""
    return [VehicleResponse.model_validate(vehicle) for vehicle in await vehicles.list_all()]


@router.get("/{vehicle_id}", response_model=VehicleResponse)
async def get_vehicle(
    vehicle_id: int,
    vehicles: Annotated[VehicleRepository, Depends(get_vehicle_repository)],
) -> VehicleResponse:
    return VehicleResponse.model_validate(await vehicles.get(vehicle_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=VehicleResponse)
async def create_vehicle(
    response: Response,
    vehicles: Annotated[VehicleRepository, Depends(get_vehicle_repository)],
    payload: Dict[str, Any] = Body(...),
) -> VehicleResponse:
    fields = validate_payload(Resource.VEHICLE, Operation.CREATE, payload)
    vehicle = await vehicles.create(fields)
    response.headers["Location"] = f"{router.prefix}/{vehicle.vehicle_id}"
    return VehicleResponse.model_validate(vehicle)


@router.put("/{vehicle_id}", response_model=VehicleResponse)
async def update_vehicle(
    vehicle_id: int,
    vehicles: Annotated[VehicleRepository, Depends(get_vehicle_repository)],
    payload: Dict[str, Any] = Body(...),
) -> VehicleResponse:
    fields = validate_payload(Resource.VEHICLE, Operation.UPDATE, payload)
    return VehicleResponse.model_validate(await vehicles.update(vehicle_id, fields))


@router.delete("/{vehicle_id}", response_model=MessageResponse)
async def delete_vehicle(
    vehicle_id: int,
    vehicles: Annotated[VehicleRepository, Depends(get_vehicle_repository)],
) -> MessageResponse:
    """Удаляет автомобиль вместе с его заправками."""
    await vehicles.delete(vehicle_id)
    return MessageResponse(message="Vehicle deleted.")
