from __future__ import annotations

from typing import Collection, List, Protocol, runtime_checkable


@runtime_checkable
class IIdentifierSource(Protocol):
    """Allocates component identifiers.

    Shared by local generators and centrally-issued identifier services, so
    callers can switch between them without code changes.
    """

    def reserve_ids(self, namespace_id: int, partition_id: str, quantity: int) -> List[int]:
        """Return exactly *quantity* distinct, unused identifiers."""
        ...

    def register_ids(self, namespace: int, ids_assigned: Collection[int]) -> None:
        """Record that *ids_assigned* are now in use."""
        ...
