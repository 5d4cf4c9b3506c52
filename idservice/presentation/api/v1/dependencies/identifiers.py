from functools import lru_cache

from fastapi import Depends

from idservice.application.interfaces import IComponentSearch
from idservice.application.use_cases.local_random_identifier_source import (
    LocalRandomIdentifierSource,
)
from idservice.infrastructure.adapters.bundles.identifier import (
    get_component_search,
    get_identifier_source,
)


@lru_cache(maxsize=1)
def get_store_search() -> IComponentSearch:
    """One store adapter per process, shared by every request."""
    return get_component_search()


def get_local_identifier_source(
    search: IComponentSearch = Depends(get_store_search),
) -> LocalRandomIdentifierSource:
    """Compose the identifier source at Presentation layer using adapter providers."""
    return get_identifier_source(search=search)
