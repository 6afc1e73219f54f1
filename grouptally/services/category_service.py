"""
Expense categories shared by expense creation and group analytics.
"""
from typing import Optional

from grouptally.core.config import settings
from grouptally.core.exceptions import InvalidCategoryError

# Predefined categories for group expenses
EXPENSE_CATEGORIES = [
    "food",           # Restaurants, cafes, groceries, food delivery
    "travel",         # Flights, trains, taxis, fuel, hotels
    "shopping",       # Clothes, gifts, household items
    "entertainment",  # Movies, concerts, shows, activities
    "bills",          # Rent, utilities, phone, subscriptions
    "other"           # Default category for unclassified expenses
]


def normalize_category(category: Optional[str]) -> str:
    """
    Return the stored form of a category.

    Empty input falls back to the configured default category.

    Raises:
        InvalidCategoryError: If the category is not in EXPENSE_CATEGORIES
    """
    if not category or not category.strip():
        return settings.DEFAULT_CATEGORY
    normalized = category.strip().lower()
    if normalized not in EXPENSE_CATEGORIES:
        raise InvalidCategoryError(
            f"Unknown category '{category}', expected one of: {', '.join(EXPENSE_CATEGORIES)}"
        )
    return normalized


def get_available_categories() -> list:
    """Get list of available expense categories."""
    return EXPENSE_CATEGORIES.copy()
