"""Derived views over the raw collections.

Every function here is pure: it reads the tuples it is given, returns new
values and never touches the store. Empty input gives zero-valued results.
"""

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Tuple

from tracker.defaults import PLACEHOLDER_CATEGORY
from tracker.domain import Budget, Category, Transaction, EXPENSE, INCOME
from tracker.filters import (
    ALL_CATEGORIES,
    all_of,
    by_category,
    by_month,
    by_search_term,
    by_type,
    iter_transactions,
)
from tracker.formatting import short_month
from tracker.functional import find_category

WARNING_THRESHOLD = 80
EXCEEDED_THRESHOLD = 100

TREND_MONTHS = 6
MIN_CHART_SCALE = 1_000_000

GOOD = "good"
WARNING = "warning"
EXCEEDED = "exceeded"


@dataclass(frozen=True)
class MonthlyStats:
    income: float
    expenses: float
    balance: float
    transaction_count: int


@dataclass(frozen=True)
class BudgetStatus:
    budget: Budget
    spent: float
    percentage: float
    remaining: float
    status: str
    progress: float  # percentage capped at 100, for progress bars

    @property
    def over_by(self) -> float:
        return abs(self.remaining) if self.status == EXCEEDED else 0


@dataclass(frozen=True)
class TrendBucket:
    key: str    # "2024-03"
    month: str  # "Mar"
    income: float
    expenses: float
    balance: float


@dataclass(frozen=True)
class Trend:
    buckets: Tuple[TrendBucket, ...]
    max_value: float
    total_income: float
    total_expenses: float
    average_balance: float

    def scale(self, value: float, height: float = 200) -> float:
        return value / self.max_value * height


def _total(trans: Iterable[Transaction]) -> float:
    return sum(t.amount for t in trans)


def monthly_stats(trans: Tuple[Transaction, ...], period_key: str) -> MonthlyStats:
    in_month = tuple(iter_transactions(trans, by_month(period_key)))
    income = _total(iter_transactions(in_month, by_type(INCOME)))
    expenses = _total(iter_transactions(in_month, by_type(EXPENSE)))

    return MonthlyStats(
        income=income,
        expenses=expenses,
        balance=income - expenses,
        transaction_count=len(in_month),
    )


def filtered_transactions(
    trans: Tuple[Transaction, ...],
    search_term: str = "",
    category_filter: str = ALL_CATEGORIES,
) -> Tuple[Transaction, ...]:
    pred = all_of(by_search_term(search_term), by_category(category_filter))
    return tuple(iter_transactions(trans, pred))


def _status(percentage: float, warning_at: float) -> str:
    if percentage >= EXCEEDED_THRESHOLD:
        return EXCEEDED
    if percentage >= warning_at:
        return WARNING
    return GOOD


def budget_spent(b: Budget, trans: Iterable[Transaction]) -> float:
    pred = all_of(by_type(EXPENSE), lambda t: t.category == b.category, by_month(b.month))
    return _total(iter_transactions(trans, pred))


def budget_status(
    budgets: Tuple[Budget, ...],
    trans: Tuple[Transaction, ...],
    warning_at: float = WARNING_THRESHOLD,
) -> Tuple[BudgetStatus, ...]:
    """Recompute spending for each budget; the stored ``spent`` is ignored."""
    result = []
    for b in budgets:
        spent = budget_spent(b, trans)
        percentage = (spent / b.limit) * 100 if b.limit > 0 else 0
        result.append(BudgetStatus(
            budget=b,
            spent=spent,
            percentage=percentage,
            remaining=b.limit - spent,
            status=_status(percentage, warning_at),
            progress=min(percentage, 100),
        ))
    return tuple(result)


def month_keys(reference: date, count: int = TREND_MONTHS) -> Tuple[Tuple[int, int], ...]:
    """(year, month) pairs for ``count`` months ending at ``reference``, oldest first."""
    index = reference.year * 12 + reference.month - 1
    return tuple(
        (i // 12, i % 12 + 1) for i in range(index - count + 1, index + 1)
    )


def six_month_trend(trans: Tuple[Transaction, ...], reference: date) -> Trend:
    buckets = []
    for year, month in month_keys(reference):
        key = f"{year:04d}-{month:02d}"
        stats = monthly_stats(trans, key)
        buckets.append(TrendBucket(
            key=key,
            month=short_month(year, month),
            income=stats.income,
            expenses=stats.expenses,
            balance=stats.balance,
        ))

    max_value = max([v for b in buckets for v in (b.income, b.expenses)] + [MIN_CHART_SCALE])
    return Trend(
        buckets=tuple(buckets),
        max_value=max_value,
        total_income=sum(b.income for b in buckets),
        total_expenses=sum(b.expenses for b in buckets),
        average_balance=sum(b.balance for b in buckets) / len(buckets),
    )


def category_options(
    cats: Tuple[Category, ...], type_: Optional[str] = None
) -> Tuple[Category, ...]:
    return tuple(c for c in cats if type_ is None or c.type == type_)


def resolve_category(cats: Tuple[Category, ...], name: str) -> Category:
    return find_category(cats, name).get_or_else(PLACEHOLDER_CATEGORY)
