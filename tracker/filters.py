from typing import Callable, Iterable, Iterator

from tracker.domain import Transaction

ALL_CATEGORIES = "all"


def iter_transactions(
    trans: Iterable[Transaction], pred: Callable[[Transaction], bool]
) -> Iterator[Transaction]:
    for t in trans:
        if pred(t):
            yield t


def by_month(period_key: str):
    # plain prefix match, so malformed dates simply never match
    def _filter(t: Transaction) -> bool:
        return t.date.startswith(period_key)

    return _filter


def by_type(type_: str):
    def _filter(t: Transaction) -> bool:
        return t.type == type_

    return _filter


def by_category(category: str):
    def _filter(t: Transaction) -> bool:
        return category == ALL_CATEGORIES or t.category == category

    return _filter


def by_search_term(term: str):
    needle = term.lower()

    def _filter(t: Transaction) -> bool:
        return needle in t.description.lower() or needle in t.category.lower()

    return _filter


def all_of(*preds: Callable[[Transaction], bool]):
    def _filter(t: Transaction) -> bool:
        return all(p(t) for p in preds)

    return _filter
