from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IItemIdProvider(Protocol):
    """Supplies the high-entropy item identifier fragment of a new identifier.

    Implementations may be random (production) or a fixed sequence (tests).
    """

    def get_item_identifier(self) -> str:
        """Return a string of exactly 8 decimal digits."""
        ...
