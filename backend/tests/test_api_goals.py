"""Tests for monthly spending goal API endpoints."""

from datetime import datetime


class TestMonthlyGoalAPI:

    def test_goal_lifecycle(self, client, auth_headers, make_transaction):
        make_transaction("250.00", datetime(2025, 3, 4))
        params = {"month": 3, "year": 2025}

        empty = client.get("/api/v1/goals", headers=auth_headers, params=params).json()["data"]
        assert empty["goal"] is None
        assert empty["spent"] == 250.0
        assert empty["remaining"] is None

        created = client.post("/api/v1/goals", headers=auth_headers, json={**params, "amount": 1000})
        assert created.status_code == 200
        assert created.json()["data"]["amount"] == 1000.0

        status = client.get("/api/v1/goals", headers=auth_headers, params=params).json()["data"]
        assert status["goal"]["amount"] == 1000.0
        assert status["remaining"] == 750.0
        assert status["percentage"] == 25.0

        assert client.delete("/api/v1/goals", headers=auth_headers, params=params).status_code == 200
        missing = client.delete("/api/v1/goals", headers=auth_headers, params=params)
        assert missing.status_code == 404
        assert missing.json()["message"] == "Meta mensal não encontrada"

    def test_amount_must_be_positive(self, client, auth_headers):
        response = client.post("/api/v1/goals", headers=auth_headers, json={"month": 3, "year": 2025, "amount": 0})
        assert response.status_code == 400
        assert "amount" in response.json()["errors"]

    def test_delete_requires_period(self, client, auth_headers):
        response = client.delete("/api/v1/goals", headers=auth_headers)
        assert response.status_code == 400
        assert response.json()["message"] == "Dados inválidos"

    def test_requires_token(self, client):
        assert client.get("/api/v1/goals").status_code == 401
