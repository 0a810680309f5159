"""Turns configuration into a store backend."""
from __future__ import annotations

import logging
from pathlib import Path

from services.common import config
from services.common.store import DocumentStore

logger = logging.getLogger(__name__)

BACKENDS = ("local", "firestore")


def build_store(
    backend: str | None = None,
    *,
    store_dir: Path | str | None = None,
    project_id: str | None = None,
    credentials_path: str | None = None,
) -> DocumentStore:
    backend = (backend or config.STORE_BACKEND).strip().lower()
    if backend == "local":
        from services.common.local_store import LocalJsonStore

        store = LocalJsonStore(Path(store_dir) if store_dir else None)
        logger.info("Using local JSON store at %s", store.store_dir)
        return store
    if backend == "firestore":
        from services.common.firestore_store import FirestoreStore

        return FirestoreStore(project_id=project_id, credentials_path=credentials_path)
    raise ValueError(f"Unknown store backend '{backend}' (expected one of {', '.join(BACKENDS)})")
