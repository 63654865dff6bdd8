# backend/modules/orders/tests/test_order_routes.py

"""
Tests for order placement, visibility and live status updates.
"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, patch

from modules.orders.enums import OrderStatus
from modules.orders.services.order_service import OrderService
from tests.factories import OrderFactory, UserFactory

MANAGER = "modules.orders.services.order_service.manager"


class TestOrderRoutes:
    def test_place_order(self, client, customer, auth_headers):
        response = client.post(
            "/orders", json={"totalAmount": "18.40"}, headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["userId"] == customer.id
        assert data["paid"] is False
        assert data["status"] == "placed"
        assert [s["step"] for s in data["steps"]] == ["placed"]

    def test_place_order_rejects_non_positive_total(self, client, auth_headers):
        response = client.post("/orders", json={"totalAmount": 0}, headers=auth_headers)

        assert response.status_code == 422

    def test_list_only_own_orders(self, client, customer, auth_headers):
        mine = OrderFactory(user=customer)
        OrderFactory()

        response = client.get("/orders", headers=auth_headers)

        assert [o["id"] for o in response.json()] == [mine.id]

    def test_get_other_users_order_forbidden(self, client, auth_headers):
        order = OrderFactory(user=UserFactory())

        response = client.get(f"/orders/{order.id}", headers=auth_headers)

        assert response.status_code == 403

    def test_admin_sees_any_order(self, client, admin_headers):
        order = OrderFactory()

        response = client.get(f"/orders/{order.id}", headers=admin_headers)

        assert response.status_code == 200

    def test_missing_order(self, client, auth_headers):
        response = client.get("/orders/404", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "order not found"

    def test_status_update_admin_only(self, client, auth_headers):
        order = OrderFactory()

        response = client.put(
            f"/orders/{order.id}/status",
            json={"status": "preparing"},
            headers=auth_headers,
        )

        assert response.status_code == 403

    def test_status_update_broadcasts(self, client, admin_headers):
        order = OrderFactory()

        with patch(f"{MANAGER}.broadcast_order_update", new_callable=AsyncMock) as push:
            response = client.put(
                f"/orders/{order.id}/status",
                json={"status": "preparing"},
                headers=admin_headers,
            )

        assert response.status_code == 200
        assert response.json()["status"] == "preparing"
        assert [s["step"] for s in response.json()["steps"]] == ["placed", "preparing"]
        push.assert_awaited_once()

    def test_status_update_unknown_status(self, client, admin_headers):
        order = OrderFactory()

        response = client.put(
            f"/orders/{order.id}/status",
            json={"status": "teleported"},
            headers=admin_headers,
        )

        assert response.status_code == 422


class TestDriverUpdates:
    @pytest.mark.asyncio
    async def test_assign_driver_stores_and_broadcasts(self, db_session):
        order = OrderFactory()
        driver = {"name": "Sam", "phone": "555-0100"}

        with patch(f"{MANAGER}.broadcast_driver_assigned", new_callable=AsyncMock) as push:
            updated = await OrderService(db_session).assign_driver(order.id, driver)

        assert updated.driver == driver
        push.assert_awaited_once_with(order.id, driver)

    @pytest.mark.asyncio
    async def test_driver_location_is_relayed(self, db_session):
        order = OrderFactory()

        with patch(f"{MANAGER}.broadcast_driver_location", new_callable=AsyncMock) as push:
            payload = await OrderService(db_session).update_driver_location(
                order.id, {"latitude": 40.7, "longitude": -74.0}
            )

        assert payload["latitude"] == 40.7
        assert "timestamp" in payload
        push.assert_awaited_once_with(order.id, payload)

    def test_driver_location_route(self, client, admin_headers):
        order = OrderFactory()

        with patch(f"{MANAGER}.broadcast_driver_location", new_callable=AsyncMock):
            response = client.post(
                f"/orders/{order.id}/driver/location",
                json={"latitude": 95, "longitude": 0},
                headers=admin_headers,
            )

        assert response.status_code == 422

    def test_assign_driver_route(self, client, admin_headers):
        order = OrderFactory(total_amount=Decimal("9.99"))

        with patch(f"{MANAGER}.broadcast_driver_assigned", new_callable=AsyncMock):
            response = client.post(
                f"/orders/{order.id}/driver",
                json={"name": "Sam", "vehicle": "Bike"},
                headers=admin_headers,
            )

        assert response.status_code == 200
        assert response.json()["driver"] == {"name": "Sam", "vehicle": "Bike"}
