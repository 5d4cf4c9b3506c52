from __future__ import annotations

import logging
from typing import Collection, Dict, List, Optional

from idservice.application.interfaces import IIdentifierSource, IItemIdProvider
from idservice.application.services.uniqueness_verifier import UniquenessVerifier
from idservice.core.config import settings
from idservice.core.exceptions import (
    AllocationExhaustedError,
    InvalidAllocationRequestError,
    UnrecognizedPartitionError,
)
from idservice.core.partitions import is_recognized
from utils.sctid_utils import synthesize

logger = logging.getLogger(__name__)


class LocalRandomIdentifierSource(IIdentifierSource):
    """Generates component identifiers locally from random item ids.

    Uniqueness is checked against the store at allocation time; nothing is
    reserved, so callers must persist the returned identifiers promptly.
    """

    def __init__(
        self,
        verifier: UniquenessVerifier,
        item_id_provider: Optional[IItemIdProvider] = None,
        *,
        strict_partition_check: Optional[bool] = None,
        draw_warning_threshold: Optional[int] = None,
        max_draws_per_id: Optional[int] = None,
        min_draw_budget: Optional[int] = None,
    ) -> None:
        if item_id_provider is None:
            from idservice.infrastructure.adapters.random_item_id_provider import (
                RandomItemIdProvider,
            )

            item_id_provider = RandomItemIdProvider()
        self._verifier = verifier
        self._item_id_provider = item_id_provider
        self.strict_partition_check = (
            settings.strict_partition_check
            if strict_partition_check is None
            else strict_partition_check
        )
        self.draw_warning_threshold = (
            draw_warning_threshold or settings.allocation_draw_warning_threshold
        )
        self.max_draws_per_id = max_draws_per_id or settings.allocation_max_draws_per_id
        self.min_draw_budget = min_draw_budget or settings.allocation_min_draw_budget

    @property
    def item_id_provider(self) -> IItemIdProvider:
        return self._item_id_provider

    @item_id_provider.setter
    def item_id_provider(self, provider: IItemIdProvider) -> None:
        self._item_id_provider = provider

    def reserve_ids(self, namespace_id: int, partition_id: str, quantity: int) -> List[int]:
        """Return *quantity* distinct identifiers not present in the store.

        Candidates accumulate until the set first reaches *quantity*; the
        whole batch is then verified and any collisions are evicted. Evicted
        candidates are never retried, the loop simply draws fresh ones.
        """
        self._validate_request(namespace_id, partition_id, quantity)

        # dict keeps insertion order and absorbs duplicate draws
        candidates: Dict[int, None] = {}
        draw_budget = max(self.min_draw_budget, quantity * self.max_draws_per_id)
        warn_at = max(self.draw_warning_threshold, quantity * 10)
        warned = False
        draws = 0
        passes = 0

        while len(candidates) < quantity:
            item_id = self._item_id_provider.get_item_identifier()
            candidates[synthesize(item_id, namespace_id, partition_id)] = None
            draws += 1

            if draws > warn_at and not warned:
                logger.warning(
                    "Allocation of %d id(s) in partition %s has needed %d draws so far; "
                    "the item id source may be degenerate",
                    quantity,
                    partition_id,
                    draws,
                )
                warned = True
            if draws > draw_budget:
                raise AllocationExhaustedError(
                    f"Gave up after {draws} draws with {len(candidates)} of {quantity} "
                    f"identifier(s) allocated",
                    draws=draws,
                    allocated=len(candidates),
                )

            if len(candidates) == quantity:
                passes += 1
                existing = self._verifier.find_existing(list(candidates), partition_id)
                for sctid in existing:
                    candidates.pop(sctid, None)
                if existing:
                    logger.debug(
                        "Verification pass %d evicted %d colliding id(s)", passes, len(existing)
                    )

        logger.info(
            "Reserved %d id(s) in namespace %s partition %s (%d draws, %d verification pass(es))",
            quantity,
            namespace_id,
            partition_id,
            draws,
            passes,
        )
        return list(candidates)

    def register_ids(self, namespace: int, ids_assigned: Collection[int]) -> None:
        # Nothing to record: there is no central ledger for locally generated ids
        return None

    def _validate_request(self, namespace_id: int, partition_id: str, quantity: int) -> None:
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidAllocationRequestError(
                f"quantity must be a positive integer, got {quantity!r}", field="quantity"
            )
        if isinstance(namespace_id, bool) or not isinstance(namespace_id, int) or namespace_id < 0:
            raise InvalidAllocationRequestError(
                f"namespace_id must be a non-negative integer, got {namespace_id!r}",
                field="namespace_id",
            )
        if self.strict_partition_check and not is_recognized(partition_id):
            raise UnrecognizedPartitionError(partition_id)
