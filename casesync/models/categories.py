"""Enumerations shared by tasks and the questionnaire schema.

Raw values match the backend's wire tokens.
"""

from __future__ import annotations

from enum import Enum


class Category(str, Enum):
    """Contact risk tier, ordered from highest risk (1) to lowest (3)."""

    CATEGORY_1 = "1"
    CATEGORY_2A = "2a"
    CATEGORY_2B = "2b"
    CATEGORY_3 = "3"

    @property
    def rank(self) -> int:
        return ALL_CATEGORIES.index(self)


ALL_CATEGORIES: tuple[Category, ...] = (
    Category.CATEGORY_1,
    Category.CATEGORY_2A,
    Category.CATEGORY_2B,
    Category.CATEGORY_3,
)


class Communication(str, Enum):
    """Who informs the contact: the index person, health staff, or undecided."""

    INDEX = "index"
    STAFF = "staff"
    NONE = "none"


class TaskType(str, Enum):
    CONTACT = "contact"


class TaskSource(str, Enum):
    APP = "app"
    PORTAL = "portal"


__all__ = [
    "Category",
    "ALL_CATEGORIES",
    "Communication",
    "TaskType",
    "TaskSource",
]
