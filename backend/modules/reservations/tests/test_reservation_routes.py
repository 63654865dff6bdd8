# backend/modules/reservations/tests/test_reservation_routes.py

"""
Tests for the public booking form and reservation administration.
"""

import pytest
from datetime import datetime, timedelta

from modules.reservations.models import Reservation, ReservationStatus
from tests.factories import ReservationFactory


def future(days=2):
    return (datetime.utcnow() + timedelta(days=days)).isoformat()


@pytest.fixture
def booking():
    return {
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "reservationDate": future(),
        "totalPeople": 2,
        "message": "Anniversary dinner",
    }


class TestCreateReservation:
    def test_create_is_public(self, client, db_session, booking):
        response = client.post("/reservations", json=booking)

        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Reservation created successfully"
        assert data["reservation"]["status"] == "pending"
        assert data["reservation"]["totalPeople"] == 2
        assert db_session.query(Reservation).count() == 1

    @pytest.mark.parametrize("missing", ["name", "email", "reservationDate", "totalPeople"])
    def test_missing_field(self, client, booking, missing):
        del booking[missing]

        response = client.post("/reservations", json=booking)

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Missing required fields: name, email, reservationDate, totalPeople"
        )

    @pytest.mark.parametrize("people", [0, -3])
    def test_party_size(self, client, booking, people):
        booking["totalPeople"] = people

        response = client.post("/reservations", json=booking)

        assert response.status_code == 400
        assert response.json()["detail"] == "Total people must be at least 1"

    def test_past_date(self, client, booking):
        booking["reservationDate"] = future(days=-1)

        response = client.post("/reservations", json=booking)

        assert response.status_code == 400
        assert response.json()["detail"] == "Reservation date must be in the future"

    def test_timezone_aware_date_stored_as_utc(self, client, db_session, booking):
        booking["reservationDate"] = "2999-01-01T20:00:00+02:00"

        assert client.post("/reservations", json=booking).status_code == 201

        stored = db_session.query(Reservation).one()
        assert stored.reservation_date == datetime(2999, 1, 1, 18, 0)

    def test_invalid_email(self, client, booking):
        booking["email"] = "not-an-email"

        assert client.post("/reservations", json=booking).status_code == 422


class TestAdminReservations:
    def test_list_newest_first(self, client, admin_headers):
        older = ReservationFactory()
        newer = ReservationFactory()

        response = client.get("/reservations", headers=admin_headers)

        assert response.status_code == 200
        assert [r["id"] for r in response.json()] == [newer.id, older.id]

    def test_list_requires_token(self, client):
        assert client.get("/reservations").status_code == 401

    def test_list_forbidden_for_customers(self, client, auth_headers):
        response = client.get("/reservations", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "forbidden"

    def test_get_one(self, client, admin_headers):
        reservation = ReservationFactory(name="Grace")

        response = client.get(f"/reservations/{reservation.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["name"] == "Grace"

    def test_get_missing(self, client, admin_headers):
        response = client.get("/reservations/999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Reservation not found"

    def test_update_status(self, client, db_session, admin_headers):
        reservation = ReservationFactory()

        response = client.put(
            f"/reservations/{reservation.id}/status",
            json={"status": "confirmed"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["message"] == "Reservation status updated successfully"
        db_session.refresh(reservation)
        assert reservation.status == ReservationStatus.CONFIRMED

    @pytest.mark.parametrize("payload", [{"status": "seated"}, {}])
    def test_update_invalid_status(self, client, admin_headers, payload):
        reservation = ReservationFactory()

        response = client.put(
            f"/reservations/{reservation.id}/status",
            json=payload,
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["detail"] == (
            "Invalid status. Must be one of: pending, confirmed, cancelled"
        )

    def test_update_missing_reservation(self, client, admin_headers):
        response = client.put(
            "/reservations/999/status",
            json={"status": "cancelled"},
            headers=admin_headers,
        )

        assert response.status_code == 404

    def test_delete(self, client, db_session, admin_headers):
        reservation = ReservationFactory()

        response = client.delete(f"/reservations/{reservation.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Reservation deleted successfully"}
        assert db_session.query(Reservation).count() == 0

    def test_delete_forbidden_for_customers(self, client, auth_headers):
        reservation = ReservationFactory()

        response = client.delete(f"/reservations/{reservation.id}", headers=auth_headers)

        assert response.status_code == 403


def test_routes_mounted_under_reservations():
    from app.main import app

    assert app.url_path_for("create_reservation") == "/reservations"
    assert app.url_path_for("delete_reservation", reservation_id=1) == "/reservations/1"
