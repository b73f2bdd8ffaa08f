"""Tests for income rule API endpoints."""

from datetime import datetime


class TestIncomeRulesAPI:
    """Test income rule endpoints."""

    def test_summary_for_month(self, client, auth_headers, sample_rule, make_transaction):
        make_transaction("700.00", datetime(2025, 3, 10), income_rule_id=sample_rule.id)

        response = client.get("/api/v1/income-rules", headers=auth_headers, params={"month": 3, "year": 2025})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["usingFallback"] is False
        assert data["baseIncome"] == 5000.0
        assert data["totalPercentage"] == 35.0
        [rule] = data["rules"]
        assert rule["budgetAmount"] == 1750.0
        assert rule["spent"] == 700.0
        assert rule["percentageUsed"] == 40.0
        assert rule["isOverBudget"] is False
        assert rule["items"][0]["name"] == "Conta de água"

    def test_summary_uses_fallback(self, client, auth_headers, sample_rule):
        response = client.get("/api/v1/income-rules", headers=auth_headers, params={"month": 5, "year": 2025})
        data = response.json()["data"]
        assert data["usingFallback"] is True
        assert (data["month"], data["year"]) == (3, 2025)
        assert (data["requestedMonth"], data["requestedYear"]) == (5, 2025)

    def test_create_rule(self, client, auth_headers):
        response = client.post("/api/v1/income-rules", headers=auth_headers, json={
            "name": "Metas",
            "percentage": 10,
            "month": 3,
            "year": 2025,
            "baseIncome": 5000,
        })
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["name"] == "Metas"
        assert data["baseIncome"] == 5000.0
        assert data["items"] == []

    def test_create_rule_over_limit(self, client, auth_headers, sample_rule):
        response = client.post("/api/v1/income-rules", headers=auth_headers, json={
            "name": "Demais",
            "percentage": 70,
            "month": 3,
            "year": 2025,
        })
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Porcentagem total excederia 100%. Disponível: 65.00%",
        }

    def test_create_rule_percentage_out_of_range(self, client, auth_headers):
        response = client.post("/api/v1/income-rules", headers=auth_headers, json={
            "name": "Demais",
            "percentage": 120,
            "month": 3,
            "year": 2025,
        })
        assert response.status_code == 400
        assert "percentage" in response.json()["errors"]

    def test_update_rule(self, client, auth_headers, sample_rule):
        response = client.put(f"/api/v1/income-rules/{sample_rule.id}", headers=auth_headers, json={
            "percentage": 40,
            "baseIncome": 6000,
        })
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["percentage"] == 40.0
        assert data["baseIncome"] == 6000.0
        assert data["name"] == "Custo Fixo"

    def test_reset(self, client, auth_headers, sample_rule):
        response = client.post("/api/v1/income-rules/reset", headers=auth_headers, json={
            "month": 3,
            "year": 2025,
            "baseIncome": 5000,
        })
        assert response.status_code == 200
        rules = response.json()["data"]
        assert len(rules) == 6
        assert sum(r["percentage"] for r in rules) == 100.0

    def test_copy(self, client, auth_headers, sample_rule):
        response = client.post("/api/v1/income-rules/copy", headers=auth_headers, json={
            "fromMonth": 3,
            "fromYear": 2025,
            "toMonth": 4,
            "toYear": 2025,
        })
        assert response.status_code == 201
        [rule] = response.json()["data"]
        assert rule["month"] == 4
        assert [i["name"] for i in rule["items"]] == ["Conta de água"]

    def test_copy_into_month_with_rules(self, client, auth_headers, sample_rule):
        response = client.post("/api/v1/income-rules/copy", headers=auth_headers, json={
            "fromMonth": 3,
            "fromYear": 2025,
            "toMonth": 3,
            "toYear": 2025,
        })
        assert response.status_code == 400

    def test_item_lifecycle(self, client, auth_headers, sample_rule):
        base = f"/api/v1/income-rules/{sample_rule.id}/items"

        created = client.post(base, headers=auth_headers, json={"name": "Internet", "amount": 120})
        assert created.status_code == 201
        item_id = created.json()["data"]["id"]
        assert created.json()["data"]["ruleId"] == sample_rule.id

        updated = client.put(f"{base}/{item_id}", headers=auth_headers, json={"amount": 99.9})
        assert updated.status_code == 200
        assert updated.json()["data"]["amount"] == 99.9
        assert updated.json()["data"]["name"] == "Internet"

        assert client.delete(f"{base}/{item_id}", headers=auth_headers).status_code == 200
        missing = client.delete(f"{base}/{item_id}", headers=auth_headers)
        assert missing.status_code == 404
        assert missing.json()["message"] == "Item não encontrado"

    def test_spending_endpoints(self, client, auth_headers, sample_rule, make_transaction):
        item_id = sample_rule.items[0].id
        make_transaction("90.00", datetime(2025, 3, 10), rule_item_id=item_id)

        rule_detail = client.get(f"/api/v1/income-rules/{sample_rule.id}/spending", headers=auth_headers)
        assert rule_detail.status_code == 200
        assert rule_detail.json()["data"]["spent"] == 90.0
        assert rule_detail.json()["data"]["transactions"][0]["ruleItemId"] == item_id

        item_detail = client.get(
            f"/api/v1/income-rules/{sample_rule.id}/items/{item_id}/spending", headers=auth_headers
        )
        assert item_detail.status_code == 200
        assert item_detail.json()["data"]["isOverBudget"] is True

    def test_delete_rule(self, client, auth_headers, sample_rule):
        assert client.delete(f"/api/v1/income-rules/{sample_rule.id}", headers=auth_headers).status_code == 200
        response = client.delete(f"/api/v1/income-rules/{sample_rule.id}", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["message"] == "Regra não encontrada"

    def test_rules_are_user_scoped(self, client, other_auth_headers, sample_rule):
        response = client.get("/api/v1/income-rules", headers=other_auth_headers, params={"month": 3, "year": 2025})
        assert response.json()["data"]["rules"] == []

        response = client.put(f"/api/v1/income-rules/{sample_rule.id}", headers=other_auth_headers, json={"name": "X"})
        assert response.status_code == 404
