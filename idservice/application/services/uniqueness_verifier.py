from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Collection, Iterable, Iterator, List, Set

from idservice.application.interfaces import IComponentSearch
from idservice.core.partitions import PartitionClassification, classify

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 10_000


def chunked(values: Iterable[int], size: int) -> Iterator[List[int]]:
    """Yield consecutive lists of at most *size* items."""
    chunk: List[int] = []
    for value in values:
        chunk.append(value)
        if len(chunk) == size:
            yield chunk
            chunk = []
    if chunk:
        yield chunk


class UniquenessVerifier:
    """Finds which candidate identifiers are already used anywhere in the store.

    Candidates are checked in chunks so no single store query grows with the
    requested quantity. Chunk results are independent and merged by union,
    which lets chunks run concurrently when ``max_workers > 1``.
    """

    def __init__(
        self,
        search: IComponentSearch,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        max_workers: int = 1,
    ) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be a positive integer")
        if max_workers < 1:
            raise ValueError("max_workers must be a positive integer")
        self._search = search
        self.chunk_size = chunk_size
        self.max_workers = max_workers

    def find_existing(self, candidates: Collection[int], partition_id: str) -> Set[int]:
        classification = classify(partition_id)
        if classification is None:
            # Unknown partitions cannot be routed to a component kind; nothing is checked
            logger.warning(
                "Partition %r is not recognized; %d candidate(s) returned unverified",
                partition_id,
                len(candidates),
            )
            return set()
        if not candidates:
            return set()

        chunks = list(chunked(candidates, self.chunk_size))
        logger.debug(
            "Verifying %d candidate(s) against %s.%s in %d chunk(s)",
            len(candidates),
            classification.kind.value,
            classification.id_field,
            len(chunks),
        )

        existing: Set[int] = set()
        if self.max_workers > 1 and len(chunks) > 1:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(chunks))) as pool:
                for found in pool.map(lambda c: self._query_chunk(c, classification), chunks):
                    existing |= found
        else:
            for chunk in chunks:
                existing |= self._query_chunk(chunk, classification)

        if existing:
            logger.info(
                "%d of %d candidate(s) already exist as %s identifiers",
                len(existing),
                len(candidates),
                classification.kind.value,
            )
        return existing

    def _query_chunk(
        self, chunk: List[int], classification: PartitionClassification
    ) -> Set[int]:
        hits = self._search.find_identifiers(
            classification.kind,
            classification.id_field,
            chunk,
            page_size=len(chunk),
        )
        return {int(hit) for hit in hits}
