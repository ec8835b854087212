"""Integration tests for the dashboard flow over HTTP"""

import pytest
from httpx import AsyncClient
from uuid import uuid4

from app.models.restaurant import StaffRole

from conftest import auth_headers


async def register_and_login(client: AsyncClient, email: str) -> dict:
    response = await client.post(
        "/auth/register",
        json={"email": email, "password": "supersecret", "full_name": "Pat Example"},
    )
    assert response.status_code == 201

    response = await client.post(
        "/auth/login",
        data={"username": email, "password": "supersecret"},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.mark.asyncio
async def test_full_order_flow(client: AsyncClient):
    """
    Integration test simulating a restaurant going live:
    1. Register and create a restaurant
    2. Build a menu
    3. Place an order
    4. Read it back from the order history
    """
    headers = await register_and_login(client, "pat@example.com")

    # Step 1: Restaurant
    response = await client.post(
        "/restaurants",
        headers=headers,
        json={
            "name": "Pat's Place",
            "type": "Diner",
            "address": "9 Elm St",
            "phone": "5559876543",
            "email": "pats@example.com",
        },
    )
    assert response.status_code == 201
    restaurant = response.json()
    assert restaurant["role"] == "owner"

    # Step 2: Menu, section, item, modifier
    response = await client.post(
        f"/restaurants/{restaurant['id']}/menus", headers=headers, json={"name": "All Day"}
    )
    assert response.status_code == 201
    menu_id = response.json()["id"]

    response = await client.post(f"/menus/{menu_id}/sections", headers=headers, json={"name": "Breakfast"})
    assert response.status_code == 201
    section_id = response.json()["id"]

    response = await client.post(
        f"/sections/{section_id}/items",
        headers=headers,
        json={"name": "Pancakes", "price_cents": 895},
    )
    assert response.status_code == 201
    item_id = response.json()["id"]

    response = await client.post(
        f"/items/{item_id}/modifiers",
        headers=headers,
        json={"name": "Blueberries", "price_adjustment_cents": 150},
    )
    assert response.status_code == 201
    modifier_id = response.json()["id"]

    response = await client.get(f"/menus/{menu_id}", headers=headers)
    assert response.status_code == 200
    assert response.headers["X-Staff-Role"] == "owner"
    sections = response.json()["sections"]
    assert sections[0]["items"][0]["modifiers"][0]["name"] == "Blueberries"

    # Step 3: Order
    line = {"menu_item_id": item_id, "modifier_ids": [modifier_id]}
    response = await client.post(
        f"/restaurants/{restaurant['id']}/orders",
        headers=headers,
        json={"location": "table", "table_number": 3, "items": [line, line]},
    )
    assert response.status_code == 201
    order = response.json()
    assert order["total_cents"] == 2090
    assert order["total_display"] == "20.90"
    assert order["summary"] == "2 × Pancakes (Blueberries)"
    assert order["staff"]["email"] == "pat@example.com"

    # Step 4: History
    response = await client.get(f"/restaurants/{restaurant['id']}/orders", headers=headers)
    assert response.status_code == 200
    history = response.json()
    assert [found["id"] for found in history] == [order["id"]]
    assert history[0]["items"][0]["line_total_cents"] == 1045


@pytest.mark.asyncio
async def test_invalid_order_error_shape(client: AsyncClient, test_restaurant, test_menu, owner):
    response = await client.post(
        f"/restaurants/{test_restaurant.id}/orders",
        headers=auth_headers(owner),
        json={
            "location": "to_go",
            "name": "Sam",
            "items": [{"menu_item_id": str(test_menu["items"]["soup"].id)}],
        },
    )

    assert response.status_code == 422
    body = response.json()
    assert body["error_code"] == "UNPROCESSABLE_CONTENT"
    assert body["detail"] == "if location to_go, must have name and phone"
    assert body["path"] == f"/restaurants/{test_restaurant.id}/orders"


@pytest.mark.asyncio
async def test_missing_item_is_not_found(client: AsyncClient, owner):
    response = await client.get(f"/items/{uuid4()}", headers=auth_headers(owner))

    assert response.status_code == 404
    assert response.json()["detail"] == "Menu item not found"


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient, test_restaurant):
    response = await client.get(f"/restaurants/{test_restaurant.id}")

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_other_restaurants_are_hidden(client: AsyncClient, test_restaurant, test_menu, outsider):
    headers = auth_headers(outsider)

    response = await client.get("/restaurants", headers=headers)
    assert response.json() == []

    for path in (
        f"/restaurants/{test_restaurant.id}",
        f"/restaurants/{test_restaurant.id}/menus",
        f"/menus/{test_menu['menu'].id}",
        f"/items/{test_menu['items']['burger'].id}",
        f"/restaurants/{test_restaurant.id}/orders",
    ):
        response = await client.get(path, headers=headers)
        assert response.status_code == 403, path
        assert response.json()["error_code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_server_reads_menu_but_cannot_edit(client: AsyncClient, test_menu, staff_user):
    server = await staff_user(StaffRole.SERVER)
    headers = auth_headers(server)
    section_id = test_menu["sections"]["mains"].id

    response = await client.get(f"/menus/{test_menu['menu'].id}", headers=headers)
    assert response.status_code == 200
    assert response.headers["X-Staff-Role"] == "server"
    assert [section["name"] for section in response.json()["sections"]] == ["Starters", "Mains"]

    response = await client.put(f"/sections/{section_id}", headers=headers, json={"name": "Big Plates"})
    assert response.status_code == 403
    assert response.json()["detail"] == "You don't have permission to perform this action"


@pytest.mark.asyncio
async def test_staff_endpoints(client: AsyncClient, test_restaurant, owner, outsider):
    headers = auth_headers(owner)

    response = await client.post(
        f"/restaurants/{test_restaurant.id}/staff",
        headers=headers,
        json={"email": outsider.email, "role": "kitchen", "activated": False},
    )
    assert response.status_code == 201
    staff_id = response.json()["id"]

    response = await client.get(f"/restaurants/{test_restaurant.id}", headers=auth_headers(outsider))
    assert response.status_code == 403

    response = await client.put(f"/staff/{staff_id}", headers=headers, json={"activated": True})
    assert response.status_code == 200
    assert response.json()["activated"] is True

    response = await client.get(f"/restaurants/{test_restaurant.id}", headers=auth_headers(outsider))
    assert response.status_code == 200
    assert response.json()["role"] == "kitchen"
