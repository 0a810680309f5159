"""JSON-file document store for local runs, demos and tests."""
from __future__ import annotations

import json
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from services.common.config import LOCAL_STORE_DIR
from services.common.store import DocumentStore, StoreError


class LocalJsonStore(DocumentStore):
    """One ``<collection>.json`` file per collection, holding ``{id: fields}``."""

    def __init__(self, store_dir: Path | None = None):
        self.store_dir = Path(store_dir or LOCAL_STORE_DIR)
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()

    def _path(self, collection: str) -> Path:
        return self.store_dir / f"{collection}.json"

    def _load(self, collection: str) -> Dict[str, Dict[str, Any]]:
        path = self._path(collection)
        if not path.exists():
            return {}
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)

    def _save(self, collection: str, docs: Dict[str, Dict[str, Any]]) -> None:
        with self._path(collection).open("w", encoding="utf-8") as f:
            json.dump(docs, f, ensure_ascii=False, indent=2)

    def timestamp(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _list(
        self,
        collection: str,
        order_by: Optional[str],
        descending: bool,
        filters: Mapping[str, Any],
    ) -> List[Dict[str, Any]]:
        with self._lock:
            docs = self._load(collection)
        records = [
            {**fields, "id": doc_id}
            for doc_id, fields in docs.items()
            if all(fields.get(k) == v for k, v in filters.items())
        ]
        if order_by:
            present = [r for r in records if r.get(order_by) is not None]
            missing = [r for r in records if r.get(order_by) is None]
            present.sort(key=lambda r: r[order_by], reverse=descending)
            records = present + missing
        return records

    def _get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            fields = self._load(collection).get(doc_id)
        if fields is None:
            return None
        return {**fields, "id": doc_id}

    def _add(self, collection: str, fields: Dict[str, Any]) -> str:
        doc_id = uuid.uuid4().hex[:20]
        with self._lock:
            docs = self._load(collection)
            docs[doc_id] = dict(fields)
            self._save(collection, docs)
        return doc_id

    def _update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        with self._lock:
            docs = self._load(collection)
            if doc_id not in docs:
                raise StoreError(f"No document to update: {collection}/{doc_id}")
            docs[doc_id].update(fields)
            self._save(collection, docs)

    def _delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            docs = self._load(collection)
            if docs.pop(doc_id, None) is not None:
                self._save(collection, docs)
