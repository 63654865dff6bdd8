# backend/modules/auth/tests/test_auth_routes.py

"""
Tests for registration, login and token refresh.
"""

import pytest

from core.auth import verify_token
from modules.auth.models import User
from modules.auth.services.auth_service import AuthService
from tests.factories import DEFAULT_PASSWORD


class TestRegister:
    def test_register_creates_customer(self, client, db_session):
        response = client.post("/auth/register", json={
            "name": "Jane Doe",
            "email": "Jane@Example.com",
            "password": "long-enough-password",
        })

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["email"] == "jane@example.com"
        assert data["user"]["role"] == "customer"
        assert data["user"]["loyaltyTier"] == "Bronze"
        assert len(data["user"]["referralCode"]) == 8
        assert verify_token(data["accessToken"]).user_id == data["user"]["id"]
        assert "refresh_token" in response.cookies

    def test_register_duplicate_email(self, client, customer):
        response = client.post("/auth/register", json={
            "name": "Copy",
            "email": customer.email,
            "password": "long-enough-password",
        })

        assert response.status_code == 409
        assert response.json()["detail"] == "Email already registered"

    def test_register_with_referral_code(self, client, db_session, customer):
        response = client.post("/auth/register", json={
            "name": "Friend",
            "email": "friend@example.com",
            "password": "long-enough-password",
            "referralCode": customer.referral_code,
        })

        assert response.status_code == 201
        assert response.json()["user"]["loyaltyPoints"] == 200

        db_session.refresh(customer)
        assert customer.loyalty_points == 500
        new_user = db_session.query(User).filter_by(email="friend@example.com").one()
        assert new_user.referred_by == customer.id

    def test_register_with_unknown_referral_code(self, client, db_session):
        response = client.post("/auth/register", json={
            "name": "Friend",
            "email": "friend@example.com",
            "password": "long-enough-password",
            "referralCode": "NOPE0000",
        })

        assert response.status_code == 404
        assert db_session.query(User).count() == 0

    def test_register_short_password(self, client):
        response = client.post("/auth/register", json={
            "name": "Jane", "email": "jane@example.com", "password": "short",
        })

        assert response.status_code == 422


class TestLoginAndRefresh:
    def test_login_sets_refresh_cookie(self, client, customer):
        response = client.post("/auth/login", json={
            "email": customer.email, "password": DEFAULT_PASSWORD,
        })

        assert response.status_code == 200
        assert response.json()["user"]["id"] == customer.id
        assert verify_token(response.json()["accessToken"]).user_id == customer.id
        assert "refresh_token" in response.cookies

    def test_login_wrong_password(self, client, customer):
        response = client.post("/auth/login", json={
            "email": customer.email, "password": "wrong-password",
        })

        assert response.status_code == 401

    def test_refresh_returns_new_access_token(self, client, customer):
        client.post("/auth/login", json={
            "email": customer.email, "password": DEFAULT_PASSWORD,
        })

        response = client.post("/auth/refresh")

        assert response.status_code == 200
        assert verify_token(response.json()["accessToken"]).user_id == customer.id

    def test_refresh_without_cookie(self, client):
        response = client.post("/auth/refresh")

        assert response.status_code == 401

    def test_refresh_rejects_access_token(self, db_session, auth_headers):
        access_token = auth_headers["Authorization"].split()[1]

        assert AuthService(db_session).refresh_access_token(access_token) is None

    def test_logout_clears_cookie(self, client, customer):
        client.post("/auth/login", json={
            "email": customer.email, "password": DEFAULT_PASSWORD,
        })

        assert client.post("/auth/logout").status_code == 204
        assert client.post("/auth/refresh").status_code == 401
