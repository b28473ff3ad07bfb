import logging
from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

from tracker.aggregation import EXCEEDED, WARNING

__all__ = [
    'Event', 'EventBus',
    'TRANSACTION_ADDED', 'TRANSACTION_DELETED', 'CATEGORIES_CHANGED',
    'BUDGETS_CHANGED', 'BUDGET_ALERT', 'check_budget_handler',
]

logger = logging.getLogger(__name__)


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


Handler = Callable[[Event, dict], dict]


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Handler]] = {}

    def subscribe(self, name: str, handler: Handler) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        if name not in self._subscribers:
            return []

        event = Event(
            name=name,
            ts=datetime.now().isoformat(),
            payload=payload
        )
        logger.debug("event_published: name=%s subscribers=%d", name, len(self._subscribers[name]))

        return [handler(event, payload) for handler in list(self._subscribers[name])]

    def unsubscribe(self, name: str, handler: Handler) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


TRANSACTION_ADDED = "TRANSACTION_ADDED"
TRANSACTION_DELETED = "TRANSACTION_DELETED"
CATEGORIES_CHANGED = "CATEGORIES_CHANGED"
BUDGETS_CHANGED = "BUDGETS_CHANGED"
BUDGET_ALERT = "BUDGET_ALERT"


def check_budget_handler(event: Event, payload: dict) -> dict:
    status = payload.get("status")
    if status not in (WARNING, EXCEEDED):
        return {}

    category = payload.get("category", "")
    spent = payload.get("spent", 0)
    limit = payload.get("limit", 0)
    verb = "exceeded" if status == EXCEEDED else "nearly reached"
    return {
        "alert": f"Budget {verb} for {category} ({payload.get('month', '')}): {spent:,.0f} / {limit:,.0f}",
        "category": category,
        "status": status,
        "spent": spent,
        "limit": limit,
    }
