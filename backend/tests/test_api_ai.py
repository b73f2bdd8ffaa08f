"""Tests for the AI summary endpoint, with the model call stubbed out."""

from datetime import datetime

from kaptal.models import TransactionType
from kaptal.services import ai_service


class FakeClient:
    def __init__(self, reply="Bom mês.", configured=True, error=None):
        self.reply = reply
        self.is_configured = configured
        self.error = error
        self.prompts = []

    async def complete(self, system_prompt, user_prompt, **kwargs):
        self.prompts.append(user_prompt)
        if self.error:
            raise self.error
        return self.reply


class TestAISummaryAPI:

    def test_summary(self, client, auth_headers, sample_rule, make_transaction, monkeypatch):
        fake = FakeClient(reply="  Você gastou dentro do planejado.  ")
        monkeypatch.setattr(ai_service, "get_ai_client", lambda: fake)
        make_transaction("5000.00", datetime(2025, 3, 5), type=TransactionType.INCOME)
        make_transaction("800.00", datetime(2025, 3, 6), income_rule_id=sample_rule.id)

        response = client.post("/api/v1/ai/summary", headers=auth_headers, json={"month": 3, "year": 2025})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["summary"] == "Você gastou dentro do planejado."
        assert data["totals"] == {"income": 5000.0, "expenses": 800.0, "balance": 4200.0}
        assert "Custo Fixo" in fake.prompts[0]

    def test_not_configured(self, client, auth_headers, monkeypatch):
        monkeypatch.setattr(ai_service, "get_ai_client", lambda: FakeClient(configured=False))

        response = client.post("/api/v1/ai/summary", headers=auth_headers, json={"month": 3, "year": 2025})
        assert response.status_code == 503
        assert response.json()["message"] == "Serviço de IA não configurado"

    def test_provider_failure(self, client, auth_headers, monkeypatch):
        monkeypatch.setattr(ai_service, "get_ai_client", lambda: FakeClient(error=RuntimeError("timeout")))

        response = client.post("/api/v1/ai/summary", headers=auth_headers, json={"month": 3, "year": 2025})
        assert response.status_code == 502
        assert response.json()["success"] is False
