"""Minimal async Firestore REST v1 client (no firebase-admin, no grpcio).

Covers what search and its write path need: ordered range queries through
runQuery, paged collection listing, single-document writes and batched
commits. Access tokens come from google-auth service account credentials;
every call goes through one shared httpx.AsyncClient.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from dataclasses import dataclass, field, replace
from typing import Any

import httpx

from blogsearch.infrastructure.firebase._rest_encoding import (
    DocumentPath,
    decode_document,
    encode_document,
    encode_value,
)

API_ROOT = "https://firestore.googleapis.com/v1"
DATASTORE_SCOPE = "https://www.googleapis.com/auth/datastore"
LIST_PAGE_SIZE = 300
MAX_BATCH_WRITES = 500

# Pseudo-field for ordering and resuming by document name.
DOCUMENT_ID_FIELD = "__name__"

_OPERATORS: dict[str, str] = {
    "==": "EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
}


def _get_credentials(info: dict[str, Any]):
    """Service account credentials scoped for Firestore."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        info, scopes=[DATASTORE_SCOPE]
    )


def _fresh_token(credentials) -> str:
    # Blocking (google-auth uses requests); run in a worker thread.
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


def _document_id(name: str) -> str:
    return name.rsplit("/", 1)[-1] if name else ""


class DocumentSnapshot:
    """A read document: its id and decoded fields."""

    __slots__ = ("id", "_data")

    def __init__(self, id_: str, data: dict[str, Any]) -> None:
        self.id = id_
        self._data = data

    @classmethod
    def from_rest(cls, document: dict[str, Any]) -> DocumentSnapshot:
        return cls(_document_id(document.get("name", "")), decode_document(document))

    def to_dict(self) -> dict[str, Any]:
        return self._data


class DocumentReference:
    def __init__(self, client: FirestoreRESTClient, path: str) -> None:
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _document_id(self._path)

    @property
    def path(self) -> DocumentPath:
        """Full resource name; the value to resume after when ordering by __name__."""
        return DocumentPath(self._path)

    async def set(self, data: dict[str, Any]) -> None:
        """Create the document, or replace all of its fields."""
        await self._client.request("PATCH", self._path, body=encode_document(data))

    async def update(self, data: dict[str, Any]) -> bool:
        """Write only the given fields in one request; False if the document is missing.

        The update mask makes fields written together (title and
        title_normalized) land together; the exists precondition fails
        with 404 instead of creating a stray document.
        """
        params = [("updateMask.fieldPaths", name) for name in data]
        params.append(("currentDocument.exists", "true"))
        out = await self._client.request(
            "PATCH",
            self._path,
            body=encode_document(data),
            params=params,
            allow_missing=True,
        )
        return out is not None


@dataclass(frozen=True)
class Query:
    """Immutable structured query over one collection; each builder call returns a copy."""

    client: FirestoreRESTClient = field(repr=False)
    parent: str
    collection_id: str
    filters: tuple[tuple[str, str, Any], ...] = ()
    orders: tuple[tuple[str, str], ...] = ()
    cursor: tuple[Any, ...] | None = None
    max_results: int | None = None

    def where(self, field_path: str, op: str, value: Any) -> Query:
        if op not in _OPERATORS:
            raise ValueError(f"Unsupported filter operator: {op!r}")
        return replace(self, filters=(*self.filters, (field_path, _OPERATORS[op], value)))

    def order_by(self, field_path: str, direction: str = "ASCENDING") -> Query:
        return replace(self, orders=(*self.orders, (field_path, direction)))

    def start_after(self, *values: Any) -> Query:
        """Resume strictly after these values, one per order_by field."""
        return replace(self, cursor=values)

    def limit(self, n: int) -> Query:
        return replace(self, max_results=n)

    def to_structured_query(self) -> dict[str, Any]:
        """The runQuery structuredQuery body."""
        query: dict[str, Any] = {"from": [{"collectionId": self.collection_id}]}
        conditions = [
            {
                "fieldFilter": {
                    "field": {"fieldPath": path},
                    "op": op,
                    "value": encode_value(value),
                }
            }
            for path, op, value in self.filters
        ]
        if len(conditions) > 1:
            query["where"] = {"compositeFilter": {"op": "AND", "filters": conditions}}
        elif conditions:
            query["where"] = conditions[0]
        if self.orders:
            query["orderBy"] = [
                {"field": {"fieldPath": path}, "direction": direction}
                for path, direction in self.orders
            ]
        if self.cursor is not None:
            query["startAt"] = {
                "values": [encode_value(v) for v in self.cursor],
                "before": False,
            }
        if self.max_results is not None:
            query["limit"] = self.max_results
        return query

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Run the query; yields matching documents in query order."""
        rows = await self.client.request(
            "POST",
            f"{self.parent}:runQuery",
            body={"structuredQuery": self.to_structured_query()},
        )
        # runQuery answers with a JSON array; rows without "document" carry
        # only a readTime (e.g. an empty result).
        for row in rows:
            document = row.get("document")
            if document is not None:
                yield DocumentSnapshot.from_rest(document)


class CollectionReference:
    def __init__(self, client: FirestoreRESTClient, path: str) -> None:
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return _document_id(self._path)

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    async def add(self, data: dict[str, Any]) -> str:
        """Create a document with a server-assigned id and return the id."""
        out = await self._client.request("POST", self._path, body=encode_document(data))
        return _document_id((out or {}).get("name", ""))

    def where(self, field_path: str, op: str, value: Any) -> Query:
        """Start a query: .where(...).order_by(...).start_after(...).limit(n).stream()."""
        parent = self._path.rsplit("/", 1)[0]
        return Query(self._client, parent, self.id).where(field_path, op, value)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Every document in the collection, following nextPageToken."""
        params: dict[str, Any] = {"pageSize": LIST_PAGE_SIZE}
        while True:
            page = await self._client.request("GET", self._path, params=params)
            if not page:
                return
            for document in page.get("documents", []):
                yield DocumentSnapshot.from_rest(document)
            token = page.get("nextPageToken")
            if not token:
                return
            params = {"pageSize": LIST_PAGE_SIZE, "pageToken": token}


class FirestoreRESTClient:
    """Firestore client for one project's (default) database."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._documents = f"projects/{project_id}/databases/(default)/documents"
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @property
    def project_id(self) -> str:
        return self._project_id

    async def get_token(self) -> str:
        return await asyncio.to_thread(_fresh_token, self._credentials)

    async def request(
        self,
        method: str,
        resource: str,
        *,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | list[tuple[str, str]] | None = None,
        allow_missing: bool = False,
    ) -> Any:
        """Call API_ROOT/resource and return the decoded JSON.

        With allow_missing, a 404 returns None (the document does not exist);
        otherwise 404 raises like any other error status.

        Raises:
            httpx.HTTPStatusError: a non-2xx status not covered by allow_missing.
            httpx.TransportError: connection problems and timeouts.
            google.auth.exceptions.GoogleAuthError: the token refresh failed.
        """
        response = await self._http.request(
            method,
            f"{API_ROOT}/{resource}",
            headers={"Authorization": f"Bearer {await self.get_token()}"},
            json=body,
            params=params,
        )
        if response.status_code == 404 and allow_missing:
            return None
        response.raise_for_status()
        return response.json() if response.content else {}

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._documents}/{collection_id}")

    async def batch_write(self, writes: list[dict[str, Any]]) -> None:
        """Commit up to MAX_BATCH_WRITES writes atomically (documents:commit).

        Each write is {"path": "coll/id", "data": {...}} (full replace) or
        {"path": ..., "data": {...}, "merge": True} (only the given fields;
        the document must exist).
        """
        if len(writes) > MAX_BATCH_WRITES:
            raise ValueError(f"At most {MAX_BATCH_WRITES} writes per batch, got {len(writes)}")
        if not writes:
            return
        body_writes: list[dict[str, Any]] = []
        for write in writes:
            entry: dict[str, Any] = {
                "update": {
                    "name": f"{self._documents}/{write['path']}",
                    **encode_document(write["data"]),
                }
            }
            if write.get("merge"):
                entry["updateMask"] = {"fieldPaths": list(write["data"])}
                entry["currentDocument"] = {"exists": True}
            body_writes.append(entry)
        await self.request("POST", f"{self._documents}:commit", body={"writes": body_writes})

    async def aclose(self) -> None:
        """Close the HTTP client, unless it was injected."""
        if self._owns_http:
            await self._http.aclose()
