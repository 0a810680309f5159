"""Collection-scoped document store contract.

Backends implement the underscored primitives and are free to raise; the
public methods wrap every call in a ``Result`` envelope so callers never
see an exception from the store.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

DocRef = Tuple[str, str]
NOT_FOUND = "Document not found"


class StoreError(Exception):
    """Raised by backends for store-level failures (missing document, bad input)."""


class Result(BaseModel):
    success: bool
    error: Optional[str] = None
    id: Optional[str] = None
    items: List[Any] = Field(default_factory=list)
    item: Any = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, **kwargs: Any) -> "Result":
        return cls(success=True, **kwargs)

    @classmethod
    def fail(cls, error: str, **kwargs: Any) -> "Result":
        return cls(success=False, error=error, **kwargs)


class DocumentStore(ABC):
    """Base class for store backends."""

    # ─────────────────────────────────────────────
    # Backend primitives
    # ─────────────────────────────────────────────
    @abstractmethod
    def _list(
        self,
        collection: str,
        order_by: Optional[str],
        descending: bool,
        filters: Mapping[str, Any],
    ) -> List[Dict[str, Any]]:
        ...

    @abstractmethod
    def _get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    def _add(self, collection: str, fields: Dict[str, Any]) -> str:
        ...

    @abstractmethod
    def _update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        ...

    @abstractmethod
    def _delete(self, collection: str, doc_id: str) -> None:
        ...

    @abstractmethod
    def timestamp(self) -> Any:
        """Value stamped into createdAt/updatedAt."""

    def _delete_many(self, refs: Sequence[DocRef]) -> None:
        # Sequential and not atomic: a failure part-way leaves earlier deletes applied.
        for collection, doc_id in refs:
            self._delete(collection, doc_id)

    # ─────────────────────────────────────────────
    # Envelope API
    # ─────────────────────────────────────────────
    def list(
        self,
        collection: str,
        order_by: Optional[str] = None,
        descending: bool = False,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Result:
        try:
            records = self._list(collection, order_by, descending, dict(filters or {}))
            return Result.ok(items=records)
        except Exception as exc:
            logger.error("Error listing %s: %s", collection, exc)
            return Result.fail(str(exc))

    def get(self, collection: str, doc_id: str) -> Result:
        try:
            record = self._get(collection, doc_id)
        except Exception as exc:
            logger.error("Error getting %s/%s: %s", collection, doc_id, exc)
            return Result.fail(str(exc))
        if record is None:
            return Result.fail(NOT_FOUND)
        return Result.ok(item=record, id=doc_id)

    def add(self, collection: str, fields: Mapping[str, Any], created_at: Any = None) -> Result:
        """Insert a document; ``created_at`` keeps an existing creation time (migrations)."""
        now = self.timestamp()
        payload = {**fields, "createdAt": created_at if created_at is not None else now, "updatedAt": now}
        try:
            doc_id = self._add(collection, payload)
            return Result.ok(id=doc_id)
        except Exception as exc:
            logger.error("Error adding to %s: %s", collection, exc)
            return Result.fail(str(exc))

    def update(self, collection: str, doc_id: str, fields: Mapping[str, Any]) -> Result:
        payload = {**fields, "updatedAt": self.timestamp()}
        try:
            self._update(collection, doc_id, payload)
            return Result.ok(id=doc_id)
        except Exception as exc:
            logger.error("Error updating %s/%s: %s", collection, doc_id, exc)
            return Result.fail(str(exc))

    def delete(self, collection: str, doc_id: str) -> Result:
        try:
            self._delete(collection, doc_id)
            return Result.ok(id=doc_id)
        except Exception as exc:
            logger.error("Error deleting %s/%s: %s", collection, doc_id, exc)
            return Result.fail(str(exc))

    def delete_many(self, refs: Sequence[DocRef]) -> Result:
        refs = list(refs)
        if not refs:
            return Result.ok()
        try:
            self._delete_many(refs)
            return Result.ok(message=f"Deleted {len(refs)} documents")
        except Exception as exc:
            logger.error("Error deleting %d documents: %s", len(refs), exc)
            return Result.fail(str(exc))
