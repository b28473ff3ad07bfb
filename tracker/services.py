import logging
from datetime import date, datetime
from typing import Any, Callable, List, Mapping, Optional, Tuple

from tracker import aggregation, transforms
from tracker.aggregation import BudgetStatus, MonthlyStats, Trend
from tracker.domain import Budget, Category, Transaction, EXPENSE
from tracker.events import (
    BUDGET_ALERT,
    BUDGETS_CHANGED,
    CATEGORIES_CHANGED,
    TRANSACTION_ADDED,
    TRANSACTION_DELETED,
    EventBus,
    check_budget_handler,
)
from tracker.filters import ALL_CATEGORIES
from tracker.storage import BUDGETS, CATEGORIES, TRANSACTIONS, load_collections, save_collection

logger = logging.getLogger(__name__)


class FinanceTracker:
    """Facade that owns the collections and their load/save lifecycle.

    store: object with ``load(key, default)`` and ``save(key, value)``
    bus: event bus notified after every persisted mutation
    clock: callable returning the current datetime (injected for tests)
    """

    def __init__(
        self,
        store,
        bus: Optional[EventBus] = None,
        clock: Callable[[], datetime] = datetime.now,
        warning_threshold: float = aggregation.WARNING_THRESHOLD,
    ):
        self.store = store
        self.bus = bus or EventBus()
        self.clock = clock
        self.warning_threshold = warning_threshold
        self.last_alerts: List[dict] = []
        self.transactions, self.categories, self.budgets = load_collections(store)
        logger.info(
            "tracker_loaded: transactions=%d categories=%d budgets=%d",
            len(self.transactions), len(self.categories), len(self.budgets),
        )

    @classmethod
    def with_default_handlers(cls, store, **kwargs) -> "FinanceTracker":
        tracker = cls(store, **kwargs)
        tracker.bus.subscribe(BUDGET_ALERT, check_budget_handler)
        return tracker

    def today(self) -> date:
        return self.clock().date()

    def current_month(self) -> str:
        return self.today().strftime("%Y-%m")

    def _commit(self, key: str, attr: str, new_items: tuple, event: str, payload: dict) -> bool:
        if new_items == getattr(self, attr):
            return False
        setattr(self, attr, new_items)
        save_collection(self.store, key, new_items)
        self.bus.publish(event, payload)
        return True

    # --- mutations

    def add_transaction(self, data: Mapping[str, Any]) -> Optional[Transaction]:
        self.last_alerts = []
        new_items = transforms.add_transaction(self.transactions, data, now=self.clock())
        payload = new_items[0].to_dict() if new_items is not self.transactions else {}
        if not self._commit(TRANSACTIONS, "transactions", new_items, TRANSACTION_ADDED, payload):
            return None
        added = self.transactions[0]
        if added.type == EXPENSE:
            self.last_alerts = self._publish_budget_alerts(added)
        return added

    def delete_transaction(self, tx_id: str) -> bool:
        new_items = transforms.delete_transaction(self.transactions, tx_id)
        return self._commit(TRANSACTIONS, "transactions", new_items, TRANSACTION_DELETED, {"id": tx_id})

    def add_category(self, data: Mapping[str, Any]) -> bool:
        new_items = transforms.add_category(self.categories, data)
        return self._commit(CATEGORIES, "categories", new_items, CATEGORIES_CHANGED, {"action": "add"})

    def update_category(self, cat_id: str, data: Mapping[str, Any]) -> bool:
        new_items = transforms.update_category(self.categories, cat_id, data)
        return self._commit(CATEGORIES, "categories", new_items, CATEGORIES_CHANGED,
                            {"action": "update", "id": cat_id})

    def delete_category(self, cat_id: str) -> bool:
        new_items = transforms.delete_category(self.categories, cat_id)
        return self._commit(CATEGORIES, "categories", new_items, CATEGORIES_CHANGED,
                            {"action": "delete", "id": cat_id})

    def add_budget(self, data: Mapping[str, Any]) -> bool:
        new_items = transforms.add_budget(self.budgets, data, today=self.today())
        return self._commit(BUDGETS, "budgets", new_items, BUDGETS_CHANGED, {"action": "add"})

    def delete_budget(self, budget_id: str) -> bool:
        new_items = transforms.delete_budget(self.budgets, budget_id)
        return self._commit(BUDGETS, "budgets", new_items, BUDGETS_CHANGED,
                            {"action": "delete", "id": budget_id})

    def _publish_budget_alerts(self, t: Transaction) -> List[dict]:
        affected = tuple(
            b for b in self.budgets
            if b.category == t.category and t.date.startswith(b.month)
        )
        alerts = []
        for s in aggregation.budget_status(affected, self.transactions, self.warning_threshold):
            alerts.extend(self.bus.publish(BUDGET_ALERT, {
                "category": s.budget.category,
                "month": s.budget.month,
                "spent": s.spent,
                "limit": s.budget.limit,
                "status": s.status,
            }))
        return [a for a in alerts if a]

    # --- derived views

    def monthly_stats(self, period_key: Optional[str] = None) -> MonthlyStats:
        return aggregation.monthly_stats(self.transactions, period_key or self.current_month())

    def search(self, search_term: str = "", category_filter: str = ALL_CATEGORIES) -> Tuple[Transaction, ...]:
        return aggregation.filtered_transactions(self.transactions, search_term, category_filter)

    def budget_status(self) -> Tuple[BudgetStatus, ...]:
        return aggregation.budget_status(self.budgets, self.transactions, self.warning_threshold)

    def trend(self, reference: Optional[date] = None) -> Trend:
        return aggregation.six_month_trend(self.transactions, reference or self.today())

    def categories_of(self, type_: Optional[str] = None) -> Tuple[Category, ...]:
        return aggregation.category_options(self.categories, type_)

    def category_for(self, name: str) -> Category:
        return aggregation.resolve_category(self.categories, name)

    def budgets_for(self, month: str) -> Tuple[Budget, ...]:
        return tuple(b for b in self.budgets if b.month == month)
