from __future__ import annotations

from typing import Optional

from idservice.application.interfaces import IComponentSearch, IItemIdProvider
from idservice.application.services.uniqueness_verifier import UniquenessVerifier
from idservice.application.use_cases.local_random_identifier_source import (
    LocalRandomIdentifierSource,
)
from idservice.infrastructure.adapters import (
    ElasticsearchComponentSearch,
    InMemoryComponentSearch,
    RandomItemIdProvider,
)
from idservice.core.config import settings


def get_component_search() -> IComponentSearch:
    """Provide the store search adapter selected by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        return InMemoryComponentSearch()
    return ElasticsearchComponentSearch()


def get_identifier_source(
    *,
    search: Optional[IComponentSearch] = None,
    item_id_provider: Optional[IItemIdProvider] = None,
) -> LocalRandomIdentifierSource:
    """Assemble the identifier source from concrete adapters.

    Kept under infrastructure/adapters/bundles since it is the one place that
    knows which adapter implementations back each interface.
    """
    verifier = UniquenessVerifier(
        search or get_component_search(),
        chunk_size=settings.verification_chunk_size,
        max_workers=settings.verification_max_workers,
    )
    return LocalRandomIdentifierSource(
        verifier, item_id_provider or RandomItemIdProvider()
    )
