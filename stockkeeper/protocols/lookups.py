"""
Lookup Protocols — callables supplied by the storage side.

The reference-number and hierarchy modules are pure; whatever reads the
database is handed to them as one of these callables.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol, runtime_checkable


@runtime_checkable
class ParentLookup(Protocol):
    """
    Parent of a category.

    Implemented by ``stockkeeper.services.categories.parent_of``.
    """

    def __call__(self, category_id: Hashable) -> Hashable | None:
        """
        Args:
            category_id: Category identifier

        Returns:
            Parent identifier, or None for a root (or unknown) category
        """
        ...


@runtime_checkable
class SequenceLookup(Protocol):
    """
    Highest sequence already issued for (prefix, date).

    Implemented by ``ReferenceNumbers.last_issued``.
    """

    def __call__(self, prefix: str, date_string: str) -> int:
        """
        Args:
            prefix: 3-letter document prefix ("PUR", "SAL")
            date_string: Date as YYYYMMDD

        Returns:
            Last issued sequence, 0 when none
        """
        ...
