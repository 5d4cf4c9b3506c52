from __future__ import annotations

import logging
from typing import Collection, Dict, List, Optional

import requests

from idservice.application.interfaces import IComponentSearch
from idservice.core.config import settings
from idservice.core.exceptions import StoreQueryError
from idservice.core.partitions import ComponentKind

logger = logging.getLogger(__name__)

# Index holding each component kind; every branch and version lives in the same index
INDEX_NAMES: Dict[ComponentKind, str] = {
    ComponentKind.CONCEPT: "concept",
    ComponentKind.DESCRIPTION: "description",
    ComponentKind.RELATIONSHIP: "relationship",
    ComponentKind.REFERENCE_SET_MEMBER: "member",
}


class ElasticsearchComponentSearch(IComponentSearch):
    """IComponentSearch implementation over the Elasticsearch REST API.

    Uses a plain ``terms`` query on the identifying field with no branch
    filter, so identifiers are found on any branch, released or not.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        index_prefix: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = (base_url or settings.es_url).rstrip("/")
        self.index_prefix = settings.es_index_prefix if index_prefix is None else index_prefix
        self.timeout = timeout or settings.es_timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {"User-Agent": "Component-Id-Allocator/1.0", "Accept": "application/json"}
        )
        if settings.es_auth and self._session.auth is None:
            self._session.auth = settings.es_auth

    def index_for(self, kind: ComponentKind) -> str:
        return f"{self.index_prefix}{INDEX_NAMES[kind]}"

    def find_identifiers(
        self,
        kind: ComponentKind,
        field: str,
        values: Collection[int],
        page_size: int,
    ) -> List[str]:
        index = self.index_for(kind)
        body = {
            "query": {"terms": {field: [str(v) for v in values]}},
            "size": page_size,
            "_source": [field],
        }
        url = f"{self.base_url}/{index}/_search"
        logger.debug("Searching %s for %d %s value(s)", index, len(values), field)

        try:
            response = self._session.post(url, json=body, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.Timeout as e:
            raise StoreQueryError(
                f"Search on {index} timed out after {self.timeout}s",
                index=index,
                chunk_size=len(values),
            ) from e
        except requests.exceptions.RequestException as e:
            raise StoreQueryError(
                f"Search on {index} failed: {e}", index=index, chunk_size=len(values)
            ) from e
        except ValueError as e:
            raise StoreQueryError(
                f"Search on {index} returned an invalid JSON body",
                index=index,
                chunk_size=len(values),
            ) from e

        try:
            hits = data["hits"]["hits"]
            return [str(hit["_source"][field]) for hit in hits]
        except (KeyError, TypeError) as e:
            raise StoreQueryError(
                f"Unexpected search response from {index}: missing {e}",
                index=index,
                chunk_size=len(values),
            ) from e

    def ping(self) -> bool:
        try:
            response = self._session.get(self.base_url, timeout=self.timeout)
            return response.ok
        except requests.exceptions.RequestException as e:
            logger.warning("Component store ping failed: %s", e)
            return False
