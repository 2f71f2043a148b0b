"""
Items, expense categories, expenses and the dashboard totals.
"""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError

from jewelbox.exceptions import BackendError, ConflictError, NotFoundError, ValidationError
from jewelbox.models import Category
from jewelbox.schemas.catalog import CategoryCreate, CategoryUpdate, ItemCreate, ItemUpdate
from jewelbox.schemas.expense import ExpenseCreate, ExpenseUpdate
from jewelbox.services import catalog_service, expense_service, gold_rate_service

REF_DAY = date(2026, 6, 30)


class TestItems:

    def test_create_uppercases_abbreviation(self, db):
        item = catalog_service.create_item(db, ItemCreate(name="  Bangle ", abbreviation="bg"))
        assert item.name == "Bangle"
        assert item.abbreviation == "BG"

    def test_name_required(self, db):
        with pytest.raises(ValidationError):
            catalog_service.create_item(db, ItemCreate(name="   "))

    def test_update_only_sent_fields(self, db, item):
        updated = catalog_service.update_item(db, item.id, ItemUpdate(name="Ladies ring"))
        assert updated.name == "Ladies ring"
        assert updated.abbreviation == "RG"
        cleared = catalog_service.update_item(db, item.id, ItemUpdate(abbreviation=None))
        assert cleared.abbreviation is None

    def test_list_ordered_by_name(self, db, item):
        catalog_service.create_item(db, ItemCreate(name="Anklet"))
        assert [i.name for i in catalog_service.list_items(db)] == ["Anklet", "Ring"]

    def test_get_missing(self, db):
        with pytest.raises(NotFoundError):
            catalog_service.get_item(db, uuid4())


class TestCategories:

    def test_names_unique_case_insensitive(self, db, category):
        with pytest.raises(ValidationError):
            catalog_service.create_category(db, CategoryCreate(name="rent"))

    def test_rename(self, db, category):
        renamed = catalog_service.update_category(db, category.id, CategoryUpdate(name="Shop rent"))
        assert renamed.name == "Shop rent"

    def test_delete_unused(self, db, category):
        catalog_service.delete_category(db, category.id)
        assert db.query(Category).count() == 0

    def test_delete_in_use_is_restricted(self, db, category):
        expense_service.create_expense(
            db, ExpenseCreate(description="June rent", amount=Decimal("1000"), category_id=category.id),
        )
        with pytest.raises(ConflictError):
            catalog_service.delete_category(db, category.id)
        assert catalog_service.get_category(db, category.id).name == "Rent"


class TestExpenses:

    def test_create_defaults_date_to_today(self, db, category):
        expense = expense_service.create_expense(
            db,
            ExpenseCreate(description="Polish", amount=Decimal("250.50"), category_id=category.id),
            user_id=uuid4(),
        )
        assert expense.expense_date == date.today()
        assert expense.category.name == "Rent"
        assert expense.amount == Decimal("250.50")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-1")])
    def test_amount_must_be_positive(self, db, amount):
        with pytest.raises(ValidationError) as exc:
            expense_service.create_expense(db, ExpenseCreate(description="x", amount=amount))
        assert exc.value.field == "amount"

    def test_unknown_category(self, db):
        with pytest.raises(ValidationError) as exc:
            expense_service.create_expense(
                db, ExpenseCreate(description="x", amount=Decimal("1"), category_id=uuid4()),
            )
        assert exc.value.field == "category_id"

    def test_update_and_delete(self, db):
        expense = expense_service.create_expense(db, ExpenseCreate(description="Tea", amount=Decimal("20")))
        updated = expense_service.update_expense(db, expense.id, ExpenseUpdate(amount=Decimal("25")))
        assert updated.amount == Decimal("25")
        assert updated.description == "Tea"
        expense_service.delete_expense(db, expense.id)
        with pytest.raises(NotFoundError):
            expense_service.get_expense(db, expense.id)

    def test_list_filters_and_order(self, db, category):
        for days, cat in ((0, category.id), (3, None), (10, category.id)):
            expense_service.create_expense(
                db,
                ExpenseCreate(
                    description=f"d{days}",
                    amount=Decimal("1"),
                    category_id=cat,
                    expense_date=REF_DAY - timedelta(days=days),
                ),
            )
        assert [e.description for e in expense_service.list_expenses(db)] == ["d0", "d3", "d10"]
        in_range = expense_service.list_expenses(db, start_date=REF_DAY - timedelta(days=5), end_date=REF_DAY)
        assert [e.description for e in in_range] == ["d0", "d3"]
        by_cat = expense_service.list_expenses(db, category_id=category.id)
        assert [e.description for e in by_cat] == ["d0", "d10"]


class TestExpenseSummary:

    def _add(self, db, amount, days_ago):
        expense_service.create_expense(
            db,
            ExpenseCreate(
                description="e",
                amount=Decimal(amount),
                expense_date=REF_DAY - timedelta(days=days_ago),
            ),
        )

    def test_windows(self, db):
        self._add(db, "100", 0)
        self._add(db, "10", 40)
        summary = expense_service.expense_summary(db, today=REF_DAY)
        assert summary["today"] == Decimal("100")
        assert summary["week"] == Decimal("100")
        assert summary["month"] == Decimal("100")
        assert summary["three_months"] == Decimal("110")
        assert summary["total"] == Decimal("110")

    def test_window_edges_inclusive(self, db):
        self._add(db, "1", 7)
        self._add(db, "2", 30)
        self._add(db, "4", 91)
        summary = expense_service.expense_summary(db, today=REF_DAY)
        assert summary["today"] == Decimal("0")
        assert summary["week"] == Decimal("1")
        assert summary["month"] == Decimal("3")
        assert summary["three_months"] == Decimal("3")
        assert summary["total"] == Decimal("7")

    def test_future_dated_only_in_total(self, db):
        self._add(db, "5", -1)
        summary = expense_service.expense_summary(db, today=REF_DAY)
        assert summary["today"] == Decimal("0")
        assert summary["total"] == Decimal("5")


class TestGoldRates:

    def test_record_and_latest(self, db):
        earlier = gold_rate_service.record_rate(db, "5800")
        earlier.created_at = datetime(2026, 1, 1, tzinfo=timezone.utc)
        db.commit()
        latest = gold_rate_service.record_rate(db, Decimal("6000"))
        assert gold_rate_service.latest_rate(db).id == latest.id
        table = gold_rate_service.karat_table(latest)
        assert table[0] == {"karat": 24, "rate": Decimal("6000.00")}
        assert table[2] == {"karat": 22, "rate": Decimal("5500.00")}
        assert table[-1] == {"karat": 1, "rate": Decimal("250.00")}
        assert len(gold_rate_service.rate_history(db)) == 2

    @pytest.mark.parametrize("rate", ["0", "-1", "abc", None])
    def test_rejects_invalid_rate(self, db, rate):
        with pytest.raises(ValidationError):
            gold_rate_service.record_rate(db, rate)

    def test_empty_table_without_snapshot(self, db):
        assert gold_rate_service.latest_rate(db) is None
        assert gold_rate_service.karat_table(None) == []


class TestAmountPrecision:

    def test_expense_amount_rounding_to_zero_rejected(self, db):
        with pytest.raises(ValidationError) as exc:
            expense_service.create_expense(db, ExpenseCreate(description="x", amount=Decimal("0.004")))
        assert exc.value.field == "amount"

    def test_expense_amount_stored_in_cents(self, db):
        expense = expense_service.create_expense(db, ExpenseCreate(description="x", amount=Decimal("12.345")))
        assert expense.amount == Decimal("12.35")

    def test_gold_rate_rounding_to_zero_rejected(self, db):
        with pytest.raises(ValidationError):
            gold_rate_service.record_rate(db, "0.004")


class TestGuardedReads:

    @pytest.fixture
    def lost_connection(self, db, monkeypatch):
        def lost(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(db, "query", lost)

    def test_category_name_check(self, db, lost_connection):
        with pytest.raises(BackendError):
            catalog_service.create_category(db, CategoryCreate(name="Salaries"))

    def test_expense_category_check(self, db, lost_connection):
        with pytest.raises(BackendError):
            expense_service.create_expense(
                db, ExpenseCreate(description="x", amount=Decimal("1"), category_id=uuid4()),
            )

    def test_category_usage_count(self, db, lost_connection):
        with pytest.raises(BackendError):
            catalog_service._expense_count(db, uuid4())
