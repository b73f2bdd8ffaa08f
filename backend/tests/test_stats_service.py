"""Tests for spending statistics."""

from datetime import date, datetime
from decimal import Decimal

from kaptal.models import Category, TransactionType
from kaptal.services.periods import shift_month
from kaptal.services.stats_service import (
    get_category_stats,
    get_insights,
    get_monthly_history,
    get_overview,
    savings_streak,
)

INCOME = TransactionType.INCOME


class TestShiftMonth:

    def test_backwards_across_year(self):
        assert shift_month(1, 2025, -1) == (12, 2024)
        assert shift_month(3, 2025, -14) == (1, 2024)

    def test_forwards(self):
        assert shift_month(12, 2024, 1) == (1, 2025)


class TestOverview:

    def test_month_totals_and_recent(self, db_session, user_id, make_transaction):
        make_transaction("5000.00", datetime(2025, 3, 1), type=INCOME)
        for day in range(2, 8):
            make_transaction("100.00", datetime(2025, 3, day), description=f"Dia {day}")
        make_transaction("999.00", datetime(2025, 2, 28))

        overview = get_overview(db_session, user_id, today=date(2025, 3, 20))

        assert overview["income"] == Decimal("5000.00")
        assert overview["expense"] == Decimal("600.00")
        assert overview["balance"] == Decimal("4400.00")
        assert [t.description for t in overview["recent_transactions"]] == [
            "Dia 7", "Dia 6", "Dia 5", "Dia 4", "Dia 3",
        ]
        assert overview["period"] == {
            "start": datetime(2025, 3, 1),
            "end": datetime(2025, 3, 31, 23, 59, 59),
        }


class TestCategoryStats:

    def test_groups_largest_first(self, db_session, user_id, sample_category, make_transaction):
        child = Category(user_id=user_id, name="Feira", parent_id=sample_category.id)
        db_session.add(child)
        db_session.commit()
        make_transaction("100.00", datetime(2025, 3, 2), category_id=sample_category.id)
        make_transaction("400.00", datetime(2025, 3, 3), category_id=child.id)
        make_transaction("50.00", datetime(2025, 3, 4))
        make_transaction("3000.00", datetime(2025, 3, 5), type=INCOME, category_id=sample_category.id)

        result = get_category_stats(db_session, user_id, today=date(2025, 3, 20))

        assert [s["category_name"] for s in result["stats"]] == ["Feira", "Mercado", "Sem categoria"]
        feira, mercado, uncategorized = result["stats"]
        assert feira["parent_id"] == sample_category.id
        assert feira["parent_name"] == "Mercado"
        assert mercado["parent_name"] is None
        assert uncategorized["category_id"] is None
        assert uncategorized["category_color"] == "#9ca3af"
        assert result["total"] == Decimal("550.00")

    def test_custom_range(self, db_session, user_id, sample_category, make_transaction):
        make_transaction("100.00", datetime(2025, 1, 10), category_id=sample_category.id)
        make_transaction("200.00", datetime(2025, 2, 10), category_id=sample_category.id)

        result = get_category_stats(
            db_session, user_id, start=datetime(2025, 1, 1), end=datetime(2025, 2, 28, 23, 59, 59),
        )

        assert result["total"] == Decimal("300.00")
        assert result["period"]["start"] == datetime(2025, 1, 1)


class TestMonthlyHistory:

    def test_oldest_first_including_current_month(self, db_session, user_id, make_transaction):
        make_transaction("3000.00", datetime(2024, 11, 5), type=INCOME)
        make_transaction("700.00", datetime(2024, 12, 24))
        make_transaction("80.00", datetime(2025, 1, 2))

        history = get_monthly_history(db_session, user_id, 3, today=date(2025, 1, 15))

        assert [(m["month"], m["year"]) for m in history] == [(11, 2024), (12, 2024), (1, 2025)]
        assert history[0]["income"] == Decimal("3000.00")
        assert history[1]["expense"] == Decimal("700.00")
        assert history[2]["expense"] == Decimal("80.00")


class TestInsights:

    def test_burn_rate_and_projection(self, db_session, user_id, make_transaction):
        make_transaction("3000.00", datetime(2025, 3, 1), type=INCOME)
        make_transaction("1000.00", datetime(2025, 3, 8))

        insights = get_insights(db_session, user_id, today=date(2025, 3, 10))

        assert insights["balance"] == Decimal("2000.00")
        assert insights["daily_average"] == Decimal("100.00")
        assert insights["days_until_broke"] == 20
        assert insights["end_of_month_projection"] == {
            "projected": Decimal("3100.00"),
            "current": Decimal("1000.00"),
            "days_remaining": 21,
        }

    def test_negative_balance_is_already_broke(self, db_session, user_id, make_transaction):
        make_transaction("10.00", datetime(2025, 3, 2))

        assert get_insights(db_session, user_id, today=date(2025, 3, 10))["days_until_broke"] == 0

    def test_income_without_spending_never_runs_out(self, db_session, user_id, make_transaction):
        make_transaction("10.00", datetime(2025, 3, 2), type=INCOME)

        assert get_insights(db_session, user_id, today=date(2025, 3, 10))["days_until_broke"] is None

    def test_savings_streak_skips_current_month(self, db_session, user_id, make_transaction):
        for month, year, expense in [(2, 2025, "1000.00"), (1, 2025, "2000.00"), (12, 2024, "4000.00"), (11, 2024, "10.00")]:
            make_transaction("3000.00", datetime(year, month, 1), type=INCOME)
            make_transaction(expense, datetime(year, month, 2))
        make_transaction("9999.00", datetime(2025, 3, 2))

        streak = get_insights(db_session, user_id, today=date(2025, 3, 10))["savings_streak"]

        assert streak == {"current": 2, "best": 2, "last_month_result": "success"}


class TestSavingsStreak:

    @staticmethod
    def month(income, expense):
        return {"income": Decimal(income), "expense": Decimal(expense)}

    def test_best_streak_in_the_past(self):
        history = [self.month(0, 0), self.month(100, 200)] + [self.month(100, 50)] * 3 + [self.month(0, 0)]

        assert savings_streak(history) == {"current": 0, "best": 3, "last_month_result": "fail"}

    def test_last_month_without_income_is_pending(self):
        history = [self.month(0, 0), self.month(0, 20), self.month(100, 50)]

        assert savings_streak(history)["last_month_result"] == "pending"
