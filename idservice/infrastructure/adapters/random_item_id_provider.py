from __future__ import annotations

import itertools
import random
from typing import Iterable, Optional

from idservice.application.interfaces import IItemIdProvider

ITEM_ID_LENGTH = 8


class RandomItemIdProvider(IItemIdProvider):
    """IItemIdProvider drawing uniformly from [0, 10^10].

    Draws shorter than 8 digits are discarded rather than zero-padded, so the
    returned prefix never starts with a zero.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def get_item_identifier(self) -> str:
        while True:
            draw = str(round(self._rng.random() * 10_000_000_000))
            if len(draw) >= ITEM_ID_LENGTH:
                return draw[:ITEM_ID_LENGTH]


class SequenceItemIdProvider(IItemIdProvider):
    """IItemIdProvider replaying a fixed list of item ids, cycling at the end."""

    def __init__(self, item_ids: Iterable[str]) -> None:
        item_ids = list(item_ids)
        if not item_ids:
            raise ValueError("SequenceItemIdProvider needs at least one item id")
        for item_id in item_ids:
            if len(item_id) != ITEM_ID_LENGTH or not item_id.isdigit():
                raise ValueError(f"Item ids must be {ITEM_ID_LENGTH} digits, got {item_id!r}")
        self._cycle = itertools.cycle(item_ids)
        self.calls = 0

    def get_item_identifier(self) -> str:
        self.calls += 1
        return next(self._cycle)
