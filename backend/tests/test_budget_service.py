"""Tests for category budget aggregation."""

import pytest
from datetime import datetime
from decimal import Decimal

from kaptal.exceptions import NotFoundError
from kaptal.models import Category, CategoryBudget, TransactionType
from kaptal.services.budget_service import (
    compute_category_budgets,
    delete_category_budget,
    get_spending_by_category,
    set_category_budget,
)
from kaptal.services.periods import month_window, usage_percentage


class TestMonthWindow:
    """Tests for month boundaries."""

    def test_window_covers_whole_month(self):
        """The window ends on the last second of the last day."""
        start, end = month_window(2, 2024)
        assert start == datetime(2024, 2, 1)
        assert end == datetime(2024, 2, 29, 23, 59, 59)

    def test_december_window(self):
        start, end = month_window(12, 2025)
        assert end == datetime(2025, 12, 31, 23, 59, 59)

    def test_usage_percentage_zero_budget(self):
        """A zero budget never divides."""
        assert usage_percentage(Decimal("300"), Decimal("0")) == Decimal("0.00")

    def test_usage_percentage_rounds_to_cents(self):
        assert usage_percentage(Decimal("1"), Decimal("3")) == Decimal("33.33")


class TestSpendingByCategory:
    """Tests for get_spending_by_category."""

    def test_sums_only_expenses_in_month(self, db_session, user_id, sample_category, make_transaction):
        """Income, other months and uncategorized rows are left out."""
        make_transaction("100.00", datetime(2025, 3, 1, 0, 0, 0), category_id=sample_category.id)
        make_transaction("50.50", datetime(2025, 3, 31, 23, 59, 59), category_id=sample_category.id)
        make_transaction("999.00", datetime(2025, 4, 1), category_id=sample_category.id)
        make_transaction("999.00", datetime(2025, 2, 28, 23, 59, 59), category_id=sample_category.id)
        make_transaction("80.00", datetime(2025, 3, 10), type=TransactionType.INCOME, category_id=sample_category.id)
        make_transaction("70.00", datetime(2025, 3, 10))

        spending = get_spending_by_category(db_session, user_id, 3, 2025)

        assert spending == {sample_category.id: Decimal("150.50")}

    def test_other_users_are_ignored(self, db_session, user_id, sample_category, make_transaction):
        make_transaction("40.00", datetime(2025, 3, 5), category_id=sample_category.id, user_id="someone-else")

        assert get_spending_by_category(db_session, user_id, 3, 2025) == {}


class TestComputeCategoryBudgets:
    """Tests for compute_category_budgets."""

    def test_budget_line_and_totals(self, db_session, user_id, sample_category, sample_budget, make_transaction):
        make_transaction("200.00", datetime(2025, 3, 3), category_id=sample_category.id)
        make_transaction("400.00", datetime(2025, 3, 20), category_id=sample_category.id)

        result = compute_category_budgets(db_session, user_id, 3, 2025)

        assert result["month"] == 3
        assert result["year"] == 2025
        [line] = result["budgets"]
        assert line["category_name"] == "Mercado"
        assert line["budget"] == Decimal("800.00")
        assert line["spent"] == Decimal("600.00")
        assert line["remaining"] == Decimal("200.00")
        assert line["percentage"] == Decimal("75.00")
        assert result["totals"] == {
            "total_budget": Decimal("800.00"),
            "total_spent": Decimal("600.00"),
            "percentage": Decimal("75.00"),
            "savings": Decimal("200.00"),
        }

    def test_overspent_budget_goes_negative(self, db_session, user_id, sample_category, sample_budget, make_transaction):
        make_transaction("1000.00", datetime(2025, 3, 3), category_id=sample_category.id)

        line = compute_category_budgets(db_session, user_id, 3, 2025)["budgets"][0]

        assert line["remaining"] == Decimal("-200.00")
        assert line["percentage"] == Decimal("125.00")

    def test_zero_budget_reports_zero_percentage(self, db_session, user_id, sample_category, make_transaction):
        """Spending against a zero budget reports 0% rather than failing."""
        db_session.add(CategoryBudget(
            user_id=user_id, category_id=sample_category.id, month=3, year=2025, amount=Decimal("0"),
        ))
        db_session.commit()
        make_transaction("300.00", datetime(2025, 3, 3), category_id=sample_category.id)

        result = compute_category_budgets(db_session, user_id, 3, 2025)

        assert result["budgets"][0]["percentage"] == Decimal("0.00")
        assert result["budgets"][0]["spent"] == Decimal("300.00")
        assert result["totals"]["percentage"] == Decimal("0.00")

    def test_categories_without_budget_are_omitted(self, db_session, user_id, sample_budget, make_transaction):
        other = Category(user_id=user_id, name="Transporte")
        db_session.add(other)
        db_session.commit()
        make_transaction("90.00", datetime(2025, 3, 8), category_id=other.id)

        result = compute_category_budgets(db_session, user_id, 3, 2025)

        assert [line["category_name"] for line in result["budgets"]] == ["Mercado"]
        assert result["totals"]["total_spent"] == Decimal("0")

    def test_empty_month(self, db_session, user_id):
        result = compute_category_budgets(db_session, user_id, 7, 2025)

        assert result["budgets"] == []
        assert result["totals"]["percentage"] == Decimal("0.00")

    def test_reading_is_idempotent(self, db_session, user_id, sample_budget, make_transaction):
        """Computing twice gives the same answer and writes nothing."""
        first = compute_category_budgets(db_session, user_id, 3, 2025)
        second = compute_category_budgets(db_session, user_id, 3, 2025)

        assert first == second
        assert db_session.query(CategoryBudget).count() == 1


class TestSetCategoryBudget:
    """Tests for set_category_budget and delete_category_budget."""

    def test_upsert_replaces_amount(self, db_session, user_id, sample_category, sample_budget):
        budget = set_category_budget(db_session, user_id, sample_category.id, 3, 2025, Decimal("950.00"))

        assert budget.id == sample_budget.id
        assert budget.amount == Decimal("950.00")
        assert db_session.query(CategoryBudget).count() == 1

    def test_new_month_creates_row(self, db_session, user_id, sample_category, sample_budget):
        set_category_budget(db_session, user_id, sample_category.id, 4, 2025, Decimal("500.00"))

        assert db_session.query(CategoryBudget).count() == 2

    def test_unknown_category(self, db_session, user_id):
        with pytest.raises(NotFoundError):
            set_category_budget(db_session, user_id, "missing", 3, 2025, Decimal("10"))

    def test_delete(self, db_session, user_id, sample_category, sample_budget):
        delete_category_budget(db_session, user_id, sample_category.id, 3, 2025)

        assert db_session.query(CategoryBudget).count() == 0
        with pytest.raises(NotFoundError):
            delete_category_budget(db_session, user_id, sample_category.id, 3, 2025)
