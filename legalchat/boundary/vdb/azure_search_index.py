"""
Azure AI Search vector index.

REST client for the search service's document APIs. Every call goes through
the shared RetryPolicy; vector queries additionally carry a per-call
timeout. Non-2xx responses are treated as transient.

Index fields: id (key), iso_code (filterable), chunk, chunk_type, table_md,
embedding (vector).

Dependencies: httpx, legalchat.boundary.http
System role: Production vector index
"""

import logging
from typing import Any

import httpx

from legalchat.boundary.http.retry_policy import RetryPolicy, is_retryable
from legalchat.boundary.vdb.base import VectorIndex
from legalchat.boundary.vdb.vector_schemas import BatchResult, IndexDocument, SearchHit
from legalchat.core.exceptions import VectorStoreError

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    """OData string literal escaping."""
    return value.replace("'", "''")


def build_jurisdiction_filter(iso_codes: list[str]) -> str:
    """
    OData filter restricting results to the given codes.

    Args:
        iso_codes: Requested jurisdiction codes

    Returns:
        str: ``search.in(iso_code, 'CH,DE', ',')``
    """
    return f"search.in(iso_code, '{_quote(','.join(iso_codes))}', ',')"


class AzureSearchIndex(VectorIndex):
    """Vector index backed by the Azure AI Search REST API."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        endpoint: str,
        api_key: str,
        index_name: str,
        retry_policy: RetryPolicy,
        api_version: str = "2023-11-01",
        search_timeout: float = 15.0,
        batch_size: int = 1000,
        page_size: int = 1000,
    ) -> None:
        """
        Initialize search index client.

        Args:
            http_client: Shared pooled client
            endpoint: Search service URL
            api_key: Admin key
            index_name: Target index
            retry_policy: Backoff policy for every call
            api_version: REST API version
            search_timeout: Per-call bound for vector queries (seconds)
            batch_size: Documents per upload/delete request
            page_size: Ids per listing page
        """
        self._http = http_client
        self._base_url = f"{endpoint.rstrip('/')}/indexes/{index_name}/docs"
        self._headers = {"api-key": api_key, "Content-Type": "application/json"}
        self._params = {"api-version": api_version}
        self._retry = retry_policy
        self._search_retry = retry_policy.with_timeout(search_timeout)
        self._batch_size = batch_size
        self._page_size = page_size
        self.name = index_name

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self._http.post(
            f"{self._base_url}/{path}",
            params=self._params,
            headers=self._headers,
            json=payload,
        )
        response.raise_for_status()
        return response.json()

    async def _call(
        self,
        operation: str,
        path: str,
        payload: dict[str, Any],
        policy: RetryPolicy | None = None,
    ) -> dict[str, Any]:
        try:
            return await (policy or self._retry).call(
                self._post, path, payload, operation=f"search.{operation}"
            )
        except Exception as e:
            if not is_retryable(e):
                raise
            logger.error(
                f"{__name__}:{operation} - {type(e).__name__}: {e}",
                extra={"index": self.name},
            )
            raise VectorStoreError(
                f"Search index {operation} failed: {e}",
                operation=operation,
                details={"index": self.name},
            ) from e

    async def search(self, vector: list[float], iso_codes: list[str], k: int) -> list[SearchHit]:
        """
        Filtered vector similarity query.

        Args:
            vector: Query embedding
            iso_codes: Jurisdictions to search
            k: Candidates to return

        Returns:
            list[SearchHit]: Hits ordered by similarity

        Raises:
            VectorStoreError: Query failed after retries
        """
        payload = {
            "vectorQueries": [
                {"kind": "vector", "vector": vector, "fields": "embedding", "k": k}
            ],
            "filter": build_jurisdiction_filter(iso_codes),
            "select": "chunk,iso_code,id",
            "top": k,
        }
        body = await self._call("search", "search", payload, policy=self._search_retry)
        return [
            SearchHit(
                id=item.get("id", ""),
                iso_code=item.get("iso_code", ""),
                chunk=item.get("chunk", ""),
            )
            for item in body.get("value", [])
        ]

    async def list_ids(self, iso_code: str | None = None) -> list[str]:
        """
        Page through document keys.

        Args:
            iso_code: Jurisdiction filter (all documents when None)

        Returns:
            list[str]: Document keys
        """
        ids: list[str] = []
        skip = 0
        while True:
            payload: dict[str, Any] = {
                "search": "*",
                "select": "id",
                "top": self._page_size,
                "skip": skip,
            }
            if iso_code:
                payload["filter"] = f"iso_code eq '{_quote(iso_code)}'"
            body = await self._call("list", "search", payload)
            page = [item["id"] for item in body.get("value", []) if item.get("id")]
            ids.extend(page)
            if len(page) < self._page_size:
                break
            skip += self._page_size
        return ids

    async def _index_batch(self, operation: str, actions: list[dict[str, Any]]) -> BatchResult:
        result = BatchResult()
        for start in range(0, len(actions), self._batch_size):
            batch = actions[start : start + self._batch_size]
            body = await self._call(operation, "index", {"value": batch})
            for item in body.get("value", []):
                if item.get("status"):
                    result.succeeded += 1
                else:
                    result.failed += 1
                    result.failed_ids.append(item.get("key", ""))
                    logger.warning(
                        f"{__name__}:{operation} - Document rejected",
                        extra={
                            "key": item.get("key"),
                            "status_code": item.get("statusCode"),
                            "error": item.get("errorMessage"),
                        },
                    )
        return result

    async def upload(self, documents: list[IndexDocument]) -> BatchResult:
        """
        Upload documents (insert or replace).

        Args:
            documents: Index documents

        Returns:
            BatchResult: Per-document success/failure counts
        """
        if not documents:
            return BatchResult()
        actions = [
            {"@search.action": "upload", **doc.model_dump(exclude_none=True)}
            for doc in documents
        ]
        return await self._index_batch("upload", actions)

    async def delete(self, ids: list[str]) -> BatchResult:
        """
        Delete documents by key.

        Args:
            ids: Document keys

        Returns:
            BatchResult: Per-document success/failure counts
        """
        if not ids:
            return BatchResult()
        actions = [{"@search.action": "delete", "id": doc_id} for doc_id in ids]
        return await self._index_batch("delete", actions)

    async def count(self, iso_code: str | None = None) -> int:
        """
        Count documents.

        Args:
            iso_code: Jurisdiction filter (all documents when None)

        Returns:
            int: Document count
        """
        payload: dict[str, Any] = {"search": "*", "count": True, "top": 0}
        if iso_code:
            payload["filter"] = f"iso_code eq '{_quote(iso_code)}'"
        body = await self._call("count", "search", payload)
        return int(body.get("@odata.count", 0))
