"""Интеграционные тесты /api/vehicle."""
from typing import Dict

from fastapi.testclient import TestClient

from conftest import login, register_user


def create_vehicle(client: TestClient, headers: Dict[str, str], **fields) -> dict:
    payload = {"name": "Jeep"}
    payload.update(fields)
    resp = client.post("/api/vehicle", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_vehicle(client: TestClient, auth_headers: Dict[str, str]) -> None:
    resp = client.post("/api/vehicle", json={"name": "Jeep", "vehicle_year": 2020}, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    data = resp.json()
    assert data["name"] == "Jeep"
    assert data["vehicle_year"] == 2020
    assert data["vin"] is None
    assert resp.headers["Location"] == f"/api/vehicle/{data['vehicle_id']}"

    me = client.get("/api/user/me", headers=auth_headers).json()
    assert data["user_id"] == me["user_id"]


def test_create_vehicle_validation(client: TestClient, auth_headers: Dict[str, str]) -> None:
    resp = client.post("/api/vehicle", json={"name": ""}, headers=auth_headers)
    assert resp.status_code == 422
    assert resp.json() == {"status": 422, "message": "Field: 'name' must be at least 1 character long."}

    resp = client.post("/api/vehicle", json={"name": "Jeep", "vehicle_year": "2020"}, headers=auth_headers)
    assert resp.status_code == 422
    assert resp.json()["message"] == "Field: 'vehicle_year' must be a number."

    resp = client.post("/api/vehicle", json={"name": "Jeep", "vehicle_year": 2020.5}, headers=auth_headers)
    assert resp.status_code == 422
    assert resp.json()["message"] == "Field: 'vehicle_year' must be a whole number."

    resp = client.post("/api/vehicle", json={"vehicle_year": 2020}, headers=auth_headers)
    assert resp.status_code == 422
    assert resp.json()["message"] == "Missing 'name' in request body."

    resp = client.post("/api/vehicle", json={"name": "Jeep", "color": "red"}, headers=auth_headers)
    assert resp.status_code == 400
    assert resp.json()["message"] == "color is not a valid field."


def test_list_vehicles_sorted_by_name(client: TestClient, auth_headers: Dict[str, str]) -> None:
    for name in ("Truck", "Beetle", "Mustang"):
        create_vehicle(client, auth_headers, name=name)

    resp = client.get("/api/vehicle", headers=auth_headers)
    assert resp.status_code == 200
    assert [v["name"] for v in resp.json()] == ["Beetle", "Mustang", "Truck"]


def test_get_update_delete_vehicle(client: TestClient, auth_headers: Dict[str, str]) -> None:
    vehicle = create_vehicle(client, auth_headers)
    url = f"/api/vehicle/{vehicle['vehicle_id']}"

    resp = client.get(url, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Jeep"

    resp = client.put(url, json={"name": "Wrangler", "license_plate": "ABC123"}, headers=auth_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Wrangler"
    assert resp.json()["license_plate"] == "ABC123"

    resp = client.delete(url, headers=auth_headers)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Vehicle deleted."}

    resp = client.get(url, headers=auth_headers)
    assert resp.status_code == 404
    assert resp.json() == {
        "status": 404,
        "message": f"Could not find vehicle with vehicle_id: {vehicle['vehicle_id']}.",
    }


def test_update_vehicle_rejects_identity_fields(client: TestClient, auth_headers: Dict[str, str]) -> None:
    vehicle = create_vehicle(client, auth_headers)
    resp = client.put(
        f"/api/vehicle/{vehicle['vehicle_id']}",
        json={"vehicle_id": 99},
        headers=auth_headers,
    )
    assert resp.status_code == 400
    assert resp.json()["message"] == "'vehicle_id' is not an updateable field."


def test_missing_vehicle(client: TestClient, auth_headers: Dict[str, str]) -> None:
    assert client.get("/api/vehicle/999", headers=auth_headers).status_code == 404
    assert client.put("/api/vehicle/999", json={"name": "X"}, headers=auth_headers).status_code == 404
    assert client.delete("/api/vehicle/999", headers=auth_headers).status_code == 404


def test_other_users_vehicle_is_not_visible(client: TestClient, auth_headers: Dict[str, str]) -> None:
    """Чужой автомобиль для пользователя выглядит как несуществующий."""
    vehicle = create_vehicle(client, auth_headers)
    register_user(client, "other")
    other_headers = login(client, "other")
    url = f"/api/vehicle/{vehicle['vehicle_id']}"

    assert client.get("/api/vehicle", headers=other_headers).json() == []
    assert client.get(url, headers=other_headers).status_code == 404
    assert client.put(url, json={"name": "Stolen"}, headers=other_headers).status_code == 404
    assert client.delete(url, headers=other_headers).status_code == 404

    assert client.get(url, headers=auth_headers).json()["name"] == "Jeep"


def test_vehicle_endpoints_require_token(client: TestClient) -> None:
    resp = client.get("/api/vehicle")
    assert resp.status_code == 401
    assert resp.json()["name"] == "AuthenticationError"
    assert client.post("/api/vehicle", json={"name": "Jeep"}).status_code == 401


def test_deleting_user_removes_vehicles(client: TestClient, auth_headers: Dict[str, str]) -> None:
    create_vehicle(client, auth_headers)
    assert client.delete("/api/user/delete", headers=auth_headers).status_code == 200

    register_user(client)
    headers = login(client)
    assert client.get("/api/vehicle", headers=headers).json() == []
