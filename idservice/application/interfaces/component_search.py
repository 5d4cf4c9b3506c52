from __future__ import annotations

from typing import Collection, List, Protocol

from idservice.core.partitions import ComponentKind


class IComponentSearch(Protocol):
    """Read-only search over the component store.

    Implementations may back onto Elasticsearch, an in-memory dict, etc. The
    search spans every branch and version held by the store.
    """

    def find_identifiers(
        self,
        kind: ComponentKind,
        field: str,
        values: Collection[int],
        page_size: int,
    ) -> List[str]:
        """Return the *field* value of every stored *kind* component whose
        *field* is one of *values*, in a single page of at most *page_size* hits.

        Raises StoreQueryError if the store cannot be queried.
        """
        ...

    def ping(self) -> bool:
        """Return True if the store is reachable."""
        ...
