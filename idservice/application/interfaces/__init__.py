from .item_id_provider import IItemIdProvider
from .component_search import IComponentSearch
from .identifier_source import IIdentifierSource

__all__ = [
    "IItemIdProvider",
    "IComponentSearch",
    "IIdentifierSource",
]
