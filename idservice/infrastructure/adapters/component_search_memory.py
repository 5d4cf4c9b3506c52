from __future__ import annotations

from collections import defaultdict
from typing import Collection, DefaultDict, Dict, Iterable, List, Set, Tuple

from idservice.application.interfaces import IComponentSearch
from idservice.core.partitions import ComponentKind


class InMemoryComponentSearch(IComponentSearch):
    """Dictionary-backed component store for tests and local runs.

    Records every query it answers in ``queries`` so callers can assert on
    batching behaviour.
    """

    def __init__(self, components: Dict[Tuple[ComponentKind, str], Iterable[int]] | None = None) -> None:
        self._values: DefaultDict[Tuple[ComponentKind, str], Set[str]] = defaultdict(set)
        self.queries: List[Tuple[ComponentKind, str, int, int]] = []
        for (kind, field), values in (components or {}).items():
            self.add(kind, field, *values)

    def add(self, kind: ComponentKind, field: str, *values: int) -> None:
        self._values[(kind, field)].update(str(v) for v in values)

    def find_identifiers(
        self,
        kind: ComponentKind,
        field: str,
        values: Collection[int],
        page_size: int,
    ) -> List[str]:
        self.queries.append((kind, field, len(values), page_size))
        stored = self._values.get((kind, field), set())
        matches = [str(v) for v in values if str(v) in stored]
        return matches[:page_size]

    def ping(self) -> bool:
        return True
