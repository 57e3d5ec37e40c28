"""Process-wide registry of error codes and categories for unifiedflux."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from unifiedflux.errors.base import ErrorCategory, ErrorCode

logger = logging.getLogger(__name__)


class ErrorRegistry:
    """
    Interns error categories and codes so one name always maps to one object.

    Code names are unique across categories: registering a known code under
    another category is an error.
    """

    _instance: ErrorRegistry | None = None
    _lock = threading.RLock()

    _categories: dict[str, ErrorCategory]
    _codes: dict[str, ErrorCode]

    def __new__(cls) -> ErrorRegistry:
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._categories = {}
                instance._codes = {}
                cls._instance = instance
            return cls._instance

    def category(self, name: str, parent: ErrorCategory | None = None) -> ErrorCategory:
        """Return the category called ``name``, creating it on first use."""
        from unifiedflux.errors.base import ErrorCategory

        with self._lock:
            category = self._categories.get(name)
            if category is None:
                category = self._categories[name] = ErrorCategory(name, parent)
            return category

    def code(self, name: str, category: ErrorCategory) -> ErrorCode:
        """Return the code called ``name``, creating it under ``category`` on first use.

        Raises:
            ValueError: If the code already belongs to another category
        """
        from unifiedflux.errors.base import ErrorCode

        with self._lock:
            code = self._codes.get(name)
            if code is None:
                interned = self.category(category.name, category.parent)
                code = self._codes[name] = ErrorCode(name, interned)
            elif code.category != category:
                raise ValueError(
                    f"Error code {name!r} is already registered under {code.category}"
                )
            return code

    def find_category(self, name: str) -> ErrorCategory | None:
        with self._lock:
            return self._categories.get(name)

    def find_code(self, name: str) -> ErrorCode | None:
        """Look up a code without creating it."""
        with self._lock:
            code = self._codes.get(name)
        if code is None:
            logger.debug("Error code %r is not registered", name)
        return code

    def categories(self) -> list[ErrorCategory]:
        with self._lock:
            return list(self._categories.values())

    def codes(self, category: ErrorCategory | None = None) -> list[ErrorCode]:
        """Every registered code, optionally limited to a category and its children."""
        with self._lock:
            codes = list(self._codes.values())
        if category is None:
            return codes
        return [code for code in codes if code.category.is_subcategory_of(category)]

    def __contains__(self, name: object) -> bool:
        return name in self._codes


registry = ErrorRegistry()
