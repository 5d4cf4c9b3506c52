from .random_item_id_provider import RandomItemIdProvider, SequenceItemIdProvider
from .component_search_es import ElasticsearchComponentSearch
from .component_search_memory import InMemoryComponentSearch

__all__ = [
    "RandomItemIdProvider",
    "SequenceItemIdProvider",
    "ElasticsearchComponentSearch",
    "InMemoryComponentSearch",
]
