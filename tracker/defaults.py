"""Seed data and presentation defaults."""

from tracker.domain import Category, INCOME, EXPENSE

DEFAULT_ICON = "Circle"

COLOR_OPTIONS = (
    "#EC4899", "#F472B6", "#FB7185", "#F87171", "#FBBF24", "#A78BFA",
    "#8B5CF6", "#06B6D4", "#10B981", "#6B7280", "#3B82F6", "#F59E0B",
)

# returned when a transaction or budget names a category that no longer exists
PLACEHOLDER_CATEGORY = Category(
    id="",
    name="",
    color="#EC4899",
    type=EXPENSE,
    icon=DEFAULT_ICON,
)

_SEED = (
    ("Salary", INCOME),
    ("Freelance", INCOME),
    ("Investment", INCOME),
    ("Bonus", INCOME),
    ("Food", EXPENSE),
    ("Transport", EXPENSE),
    ("Shopping", EXPENSE),
    ("Entertainment", EXPENSE),
    ("Health", EXPENSE),
    ("Education", EXPENSE),
    ("Bills", EXPENSE),
    ("Other", EXPENSE),
)

DEFAULT_CATEGORIES = tuple(
    Category(id=str(i), name=name, color=color, type=type_, icon=DEFAULT_ICON)
    for i, ((name, type_), color) in enumerate(zip(_SEED, COLOR_OPTIONS), start=1)
)
