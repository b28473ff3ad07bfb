import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Generic, Mapping, Optional, TypeVar

from tracker.domain import Category, EXPENSE, TRANSACTION_TYPES
from tracker.defaults import COLOR_OPTIONS

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')


class Maybe(Generic[T]):
    """Result of a lookup that may find nothing."""

    def get_or_else(self, default: T) -> T:
        raise NotImplementedError

    def is_some(self) -> bool:
        return isinstance(self, Some)

    def is_none(self) -> bool:
        return not self.is_some()


@dataclass(frozen=True)
class Some(Maybe[T]):
    value: T

    def get_or_else(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Nothing(Maybe[T]):

    def get_or_else(self, default: T) -> T:
        return default


class Either(Generic[E, T]):
    """Validation outcome: ``Right(value)`` or ``Left(error dict)``."""

    def is_right(self) -> bool:
        return isinstance(self, Right)

    def is_left(self) -> bool:
        return isinstance(self, Left)


@dataclass(frozen=True)
class Right(Either[E, T]):
    value: T

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self.value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self.value)

    def get_or_else(self, default: T) -> T:
        return self.value

    def get_error(self) -> E:
        raise ValueError("Right carries no error")


@dataclass(frozen=True)
class Left(Either[E, T]):
    error: E

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return self

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return self

    def get_or_else(self, default: T) -> T:
        return default

    def get_error(self) -> E:
        return self.error


def find_category(
    cats: tuple[Category, ...], name: str, type: Optional[str] = None
) -> Maybe[Category]:
    """First category whose name matches; duplicates resolve to the earliest."""
    for cat in cats:
        if cat.name == name and (type is None or cat.type == type):
            return Some(cat)
    return Nothing()


def _missing(field: str) -> Left:
    return Left({
        "error": "missing_field",
        "message": f"Field '{field}' is required",
        "field": field,
    })


def parse_amount(value: Any, field: str = "amount") -> Either[dict, float]:
    """Accept a positive number or numeric string (as typed into a form)."""
    if not value:
        return _missing(field)
    if isinstance(value, bool):
        return Left({
            "error": "invalid_amount",
            "message": f"Field '{field}' is not a number: {value!r}",
            "field": field,
        })
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return Left({
            "error": "invalid_amount",
            "message": f"Field '{field}' is not a number: {value!r}",
            "field": field,
        })
    if not math.isfinite(amount) or amount <= 0:
        return Left({
            "error": "invalid_amount",
            "message": f"Field '{field}' must be positive, got {amount}",
            "field": field,
        })
    return Right(amount)


def _check_type(type_: str) -> Either[dict, str]:
    if type_ not in TRANSACTION_TYPES:
        return Left({
            "error": "invalid_type",
            "message": f"Type must be one of {TRANSACTION_TYPES}, got {type_!r}",
            "field": "type",
        })
    return Right(type_)


def validate_transaction_input(
    data: Mapping[str, Any], today: Optional[date] = None
) -> Either[dict, Dict[str, Any]]:
    if not data.get("description"):
        return _missing("description")
    if not data.get("category"):
        return _missing("category")

    def _build(amount: float) -> Either[dict, Dict[str, Any]]:
        return _check_type(data.get("type") or EXPENSE).map(lambda type_: {
            "amount": amount,
            "description": data["description"],
            "category": data["category"],
            "type": type_,
            "date": data.get("date") or (today or date.today()).isoformat(),
        })

    return parse_amount(data.get("amount")).bind(_build)


def validate_category_input(data: Mapping[str, Any]) -> Either[dict, Dict[str, Any]]:
    name = data.get("name") or ""
    if not name.strip():
        return _missing("name")
    return _check_type(data.get("type") or EXPENSE).map(lambda type_: {
        "name": name,
        "color": data.get("color") or COLOR_OPTIONS[0],
        "type": type_,
    })


def validate_budget_input(
    data: Mapping[str, Any], today: Optional[date] = None
) -> Either[dict, Dict[str, Any]]:
    if not data.get("category"):
        return _missing("category")
    return parse_amount(data.get("limit"), field="limit").map(lambda limit: {
        "category": data["category"],
        "limit": limit,
        "month": data.get("month") or (today or date.today()).strftime("%Y-%m"),
    })
