import logging
from datetime import date, datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from uuid import uuid4

from tracker.domain import Budget, Category, Transaction
from tracker.defaults import DEFAULT_ICON
from tracker.functional import (
    validate_budget_input,
    validate_category_input,
    validate_transaction_input,
)

logger = logging.getLogger(__name__)


def new_id() -> str:
    return uuid4().hex


def load_records(
    data: Mapping[str, Iterable[Dict[str, Any]]],
) -> Tuple[
    Tuple[Transaction, ...],
    Tuple[Category, ...],
    Tuple[Budget, ...],
]:
    transactions = _from_records(Transaction, "transactions", data.get("transactions", ()))
    categories = _from_records(Category, "categories", data.get("categories", ()))
    budgets = _from_records(Budget, "budgets", data.get("budgets", ()))

    return transactions, categories, budgets


def _from_records(cls, key: str, records: Iterable[Dict[str, Any]]) -> tuple:
    # one bad record must not hide the rest of the collection
    items = []
    for position, record in enumerate(records):
        try:
            items.append(cls.from_dict(record))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("store_record_skipped: key=%s index=%d error=%r", key, position, exc)
    return tuple(items)


def add_transaction(
    trans: Tuple[Transaction, ...],
    data: Mapping[str, Any],
    *,
    now: Optional[datetime] = None,
    tx_id: Optional[str] = None,
) -> Tuple[Transaction, ...]:
    """Prepend a new transaction; invalid input returns ``trans`` unchanged."""
    now = now or datetime.now()
    result = validate_transaction_input(data, today=now.date())
    if result.is_left():
        logger.debug("transaction_rejected: %s", result.get_error()["message"])
        return trans

    fields = result.get_or_else({})
    t = Transaction(id=tx_id or new_id(), created_at=now.isoformat(), **fields)
    logger.info("transaction_added: id=%s type=%s amount=%s", t.id, t.type, t.amount)
    return (t,) + trans


def delete_transaction(
    trans: Tuple[Transaction, ...], tx_id: str
) -> Tuple[Transaction, ...]:
    return tuple(filter(lambda t: t.id != tx_id, trans))


def add_category(
    cats: Tuple[Category, ...],
    data: Mapping[str, Any],
    *,
    cat_id: Optional[str] = None,
) -> Tuple[Category, ...]:
    result = validate_category_input(data)
    if result.is_left():
        logger.debug("category_rejected: %s", result.get_error()["message"])
        return cats

    c = Category(id=cat_id or new_id(), icon=DEFAULT_ICON, **result.get_or_else({}))
    logger.info("category_added: id=%s name=%s", c.id, c.name)
    return cats + (c,)


def update_category(
    cats: Tuple[Category, ...], cat_id: str, data: Mapping[str, Any]
) -> Tuple[Category, ...]:
    """Replace name, color and type in place. Transactions keep the old name."""
    result = validate_category_input(data)
    if result.is_left() or not any(c.id == cat_id for c in cats):
        logger.debug("category_update_skipped: id=%s", cat_id)
        return cats

    fields = result.get_or_else({})
    return tuple(
        Category(id=c.id, icon=c.icon, **fields) if c.id == cat_id else c
        for c in cats
    )


def delete_category(
    cats: Tuple[Category, ...], cat_id: str
) -> Tuple[Category, ...]:
    return tuple(filter(lambda c: c.id != cat_id, cats))


def add_budget(
    budgets: Tuple[Budget, ...],
    data: Mapping[str, Any],
    *,
    today: Optional[date] = None,
    budget_id: Optional[str] = None,
) -> Tuple[Budget, ...]:
    result = validate_budget_input(data, today=today)
    if result.is_left():
        logger.debug("budget_rejected: %s", result.get_error()["message"])
        return budgets

    b = Budget(id=budget_id or new_id(), spent=0, **result.get_or_else({}))
    logger.info("budget_added: id=%s category=%s month=%s", b.id, b.category, b.month)
    return budgets + (b,)


def delete_budget(
    budgets: Tuple[Budget, ...], budget_id: str
) -> Tuple[Budget, ...]:
    return tuple(filter(lambda b: b.id != budget_id, budgets))
