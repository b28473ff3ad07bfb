from datetime import datetime

from tracker.events import (
    Event, EventBus,
    TRANSACTION_ADDED, BUDGET_ALERT,
    check_budget_handler,
)


def test_event_bus_subscribe_and_publish():
    bus = EventBus()
    collected = []

    def handler(event: Event, payload: dict) -> dict:
        collected.append(event.name)
        return {"processed": True}

    bus.subscribe(TRANSACTION_ADDED, handler)
    results = bus.publish(TRANSACTION_ADDED, {"amount": 50})

    assert results == [{"processed": True}]
    assert collected == [TRANSACTION_ADDED]


def test_publish_without_subscribers():
    assert EventBus().publish(BUDGET_ALERT, {}) == []


def test_event_bus_unsubscribe():
    bus = EventBus()
    calls = []

    def handler(event: Event, payload: dict) -> dict:
        calls.append(payload)
        return {}

    bus.subscribe(TRANSACTION_ADDED, handler)
    bus.publish(TRANSACTION_ADDED, {"amount": 100})
    bus.unsubscribe(TRANSACTION_ADDED, handler)
    bus.unsubscribe(TRANSACTION_ADDED, handler)
    bus.publish(TRANSACTION_ADDED, {"amount": 200})

    assert len(calls) == 1


def _event(payload):
    return Event(name=BUDGET_ALERT, ts=datetime.now().isoformat(), payload=payload)


def test_check_budget_handler_exceeded():
    payload = {"category": "Food", "month": "2024-03", "spent": 120000, "limit": 100000, "status": "exceeded"}
    result = check_budget_handler(_event(payload), payload)

    assert "Budget exceeded for Food" in result["alert"]
    assert "120,000 / 100,000" in result["alert"]
    assert result["status"] == "exceeded"
    assert payload["spent"] == 120000


def test_check_budget_handler_warning_and_good():
    warning = {"category": "Food", "spent": 85, "limit": 100, "status": "warning"}
    assert "nearly reached" in check_budget_handler(_event(warning), warning)["alert"]

    good = {"category": "Food", "spent": 10, "limit": 100, "status": "good"}
    assert check_budget_handler(_event(good), good) == {}
