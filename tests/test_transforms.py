from datetime import date, datetime

from tracker.domain import Budget, Category, Transaction
from tracker.transforms import (
    add_budget,
    add_category,
    add_transaction,
    delete_budget,
    delete_category,
    delete_transaction,
    load_records,
    update_category,
)
from tracker.aggregation import monthly_stats

NOW = datetime(2024, 3, 20, 9, 30)


def make_tx(id, amount, type_="expense", date_="2024-03-15", category="Food", description="Lunch"):
    return Transaction(id, amount, description, category, type_, date_, "2024-03-15T12:00:00")


def valid_input(**overrides):
    data = {
        "amount": 50000,
        "description": "Groceries",
        "category": "Food",
        "type": "expense",
        "date": "2024-03-18",
    }
    data.update(overrides)
    return data


def test_add_transaction_prepends():
    existing = (make_tx("t1", 1000),)
    result = add_transaction(existing, valid_input(), now=NOW, tx_id="new")

    assert len(result) == 2
    head = result[0]
    assert head.id == "new"
    assert head.amount == 50000
    assert head.description == "Groceries"
    assert head.category == "Food"
    assert head.type == "expense"
    assert head.date == "2024-03-18"
    assert head.created_at == NOW.isoformat()
    assert result[1] is existing[0]


def test_add_transaction_assigns_fresh_ids():
    first = add_transaction((), valid_input(), now=NOW)
    second = add_transaction(first, valid_input(), now=NOW)
    assert first[0].id
    assert second[0].id != second[1].id


def test_add_transaction_then_monthly_stats_reflects_amount():
    trans = add_transaction((), valid_input(amount=75000), now=NOW)
    stats = monthly_stats(trans, "2024-03")
    assert stats.expenses == 75000
    assert stats.transaction_count == 1


def test_add_transaction_accepts_numeric_string():
    result = add_transaction((), valid_input(amount="1500.5"), now=NOW)
    assert result[0].amount == 1500.5


def test_add_transaction_defaults_date_to_today():
    data = valid_input()
    del data["date"]
    result = add_transaction((), data, now=NOW)
    assert result[0].date == "2024-03-20"


def test_add_transaction_immutability():
    trans = (make_tx("t1", 1000),)
    new_trans = add_transaction(trans, valid_input(), now=NOW)
    assert new_trans is not trans
    assert len(trans) == 1


def test_add_transaction_rejects_missing_fields():
    trans = (make_tx("t1", 1000),)
    assert add_transaction(trans, valid_input(amount=""), now=NOW) is trans
    assert add_transaction(trans, valid_input(description=""), now=NOW) is trans
    assert add_transaction(trans, valid_input(category=""), now=NOW) is trans
    assert add_transaction(trans, valid_input(amount=0), now=NOW) is trans


def test_add_transaction_rejects_bad_amount_and_type():
    trans = ()
    assert add_transaction(trans, valid_input(amount="abc"), now=NOW) == ()
    assert add_transaction(trans, valid_input(amount=-10), now=NOW) == ()
    assert add_transaction(trans, valid_input(type="transfer"), now=NOW) == ()


def test_delete_transaction_is_idempotent():
    trans = (make_tx("t1", 1), make_tx("t2", 2), make_tx("t3", 3))
    once = delete_transaction(trans, "t2")
    twice = delete_transaction(once, "t2")
    assert [t.id for t in once] == ["t1", "t3"]
    assert once == twice
    assert delete_transaction(trans, "missing") == trans


def test_add_category_appends_with_placeholder_icon():
    cats = (Category("1", "Food", "#EC4899", "expense"),)
    result = add_category(cats, {"name": "Pets", "color": "#10B981", "type": "expense"}, cat_id="c2")
    assert len(result) == 2
    assert result[-1] == Category("c2", "Pets", "#10B981", "expense", "Circle")


def test_add_category_rejects_blank_name():
    cats = ()
    assert add_category(cats, {"name": "   ", "color": "#fff", "type": "income"}) is cats


def test_add_category_allows_duplicate_names():
    cats = (Category("1", "Food", "#EC4899", "expense"),)
    result = add_category(cats, {"name": "Food", "color": "#fff", "type": "expense"})
    assert [c.name for c in result] == ["Food", "Food"]


def test_update_category_keeps_id_and_icon():
    cats = (
        Category("1", "Food", "#EC4899", "expense", "Utensils"),
        Category("2", "Salary", "#10B981", "income"),
    )
    result = update_category(cats, "1", {"name": "Meals", "color": "#000000", "type": "expense"})
    assert result[0] == Category("1", "Meals", "#000000", "expense", "Utensils")
    assert result[1] is cats[1]
    assert cats[0].name == "Food"


def test_update_category_missing_id_is_noop():
    cats = (Category("1", "Food", "#EC4899", "expense"),)
    assert update_category(cats, "nope", {"name": "X", "color": "#fff", "type": "expense"}) is cats


def test_rename_category_does_not_cascade():
    cats = (Category("1", "Food", "#EC4899", "expense"),)
    trans = (make_tx("t1", 100, category="Food"),)
    update_category(cats, "1", {"name": "Meals", "color": "#EC4899", "type": "expense"})
    assert trans[0].category == "Food"


def test_delete_category_is_idempotent():
    cats = (Category("1", "Food", "#EC4899", "expense"), Category("2", "Bills", "#000", "expense"))
    once = delete_category(cats, "1")
    assert delete_category(once, "1") == once
    assert [c.id for c in once] == ["2"]


def test_add_budget_appends_with_zero_spent():
    result = add_budget((), {"category": "Food", "limit": "100000", "month": "2024-03"}, budget_id="b1")
    assert result == (Budget("b1", "Food", 100000.0, "2024-03", 0),)


def test_add_budget_defaults_month():
    result = add_budget((), {"category": "Food", "limit": 5000}, today=date(2024, 7, 2))
    assert result[0].month == "2024-07"


def test_add_budget_rejects_missing_fields():
    budgets = (Budget("b1", "Food", 100, "2024-03"),)
    assert add_budget(budgets, {"category": "", "limit": 100, "month": "2024-03"}) is budgets
    assert add_budget(budgets, {"category": "Food", "limit": "", "month": "2024-03"}) is budgets


def test_delete_budget_is_idempotent():
    budgets = (Budget("b1", "Food", 100, "2024-03"), Budget("b2", "Bills", 100, "2024-03"))
    once = delete_budget(budgets, "b1")
    assert delete_budget(once, "b1") == once
    assert len(once) == 1


def test_load_records_from_persisted_shape():
    data = {
        "transactions": [{
            "id": "1", "amount": 100, "description": "x", "category": "Food",
            "type": "expense", "date": "2024-03-01", "createdAt": "2024-03-01T10:00:00",
        }],
        "categories": [{"id": "5", "name": "Food", "color": "#F472B6", "icon": "Circle", "type": "expense"}],
        "budgets": [{"id": "b", "category": "Food", "limit": 10, "spent": 0, "month": "2024-03"}],
    }
    transactions, categories, budgets = load_records(data)
    assert transactions[0].created_at == "2024-03-01T10:00:00"
    assert categories[0].name == "Food"
    assert budgets[0].limit == 10.0
