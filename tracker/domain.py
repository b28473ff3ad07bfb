from dataclasses import dataclass, asdict
from typing import Any, Dict

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)


@dataclass(frozen=True)
class Transaction:
    id: str
    amount: float       # always positive, direction comes from type
    description: str
    category: str       # category *name*, not id
    type: str           # "income" or "expense"
    date: str           # "2025-09-01"
    created_at: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "amount": self.amount,
            "description": self.description,
            "category": self.category,
            "type": self.type,
            "date": self.date,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            id=str(data["id"]),
            amount=float(data["amount"]),
            description=data.get("description", ""),
            category=data.get("category", ""),
            type=data.get("type", EXPENSE),
            date=data.get("date", ""),
            created_at=data.get("createdAt") or data.get("created_at", ""),
        )


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    color: str
    type: str
    icon: str = "Circle"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            color=data.get("color", ""),
            type=data.get("type", EXPENSE),
            icon=data.get("icon", "Circle"),
        )


# A budget (spending ceiling for one category in one month)
@dataclass(frozen=True)
class Budget:
    id: str
    category: str
    limit: float
    month: str       # "2025-09"
    spent: float = 0  # stored for format compatibility, never read

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Budget":
        return cls(
            id=str(data["id"]),
            category=data.get("category", ""),
            limit=float(data["limit"]),
            month=data.get("month", ""),
            spent=data.get("spent", 0),
        )
