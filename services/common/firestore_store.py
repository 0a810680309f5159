"""Cloud Firestore backend."""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence

from google.auth import default as google_auth_default
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter
from google.oauth2 import service_account

from services.common.config import GOOGLE_APPLICATION_CREDENTIALS, GOOGLE_CLOUD_PROJECT
from services.common.store import DocRef, DocumentStore, StoreError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/datastore"]
MAX_BATCH_WRITES = 500


def _build_creds(key_path: str | None):
    if key_path and os.path.exists(key_path):
        return service_account.Credentials.from_service_account_file(key_path, scopes=SCOPES)
    creds, _ = google_auth_default(scopes=SCOPES)
    return creds


class FirestoreStore(DocumentStore):
    def __init__(
        self,
        project_id: str | None = None,
        credentials_path: str | None = None,
        client: Any = None,
    ):
        if client is None:
            project_id = project_id or GOOGLE_CLOUD_PROJECT or None
            creds = _build_creds(credentials_path or GOOGLE_APPLICATION_CREDENTIALS)
            client = firestore.Client(project=project_id, credentials=creds)
            logger.info("Firestore client initialized for project %s", client.project)
        self.client = client

    def timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP

    def _list(
        self,
        collection: str,
        order_by: Optional[str],
        descending: bool,
        filters: Mapping[str, Any],
    ) -> List[Dict[str, Any]]:
        query = self.client.collection(collection)
        for field, value in filters.items():
            query = query.where(filter=FieldFilter(field, "==", value))
        if order_by:
            direction = firestore.Query.DESCENDING if descending else firestore.Query.ASCENDING
            query = query.order_by(order_by, direction=direction)
        return [{**snap.to_dict(), "id": snap.id} for snap in query.stream()]

    def _get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        snap = self.client.collection(collection).document(doc_id).get()
        if not snap.exists:
            return None
        return {**snap.to_dict(), "id": snap.id}

    def _add(self, collection: str, fields: Dict[str, Any]) -> str:
        _, ref = self.client.collection(collection).add(fields)
        return ref.id

    def _update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> None:
        self.client.collection(collection).document(doc_id).update(fields)

    def _delete(self, collection: str, doc_id: str) -> None:
        self.client.collection(collection).document(doc_id).delete()

    def _delete_many(self, refs: Sequence[DocRef]) -> None:
        # One write batch commits atomically; Firestore caps a batch at 500 writes.
        if len(refs) > MAX_BATCH_WRITES:
            raise StoreError(f"Cannot delete {len(refs)} documents in one batch (max {MAX_BATCH_WRITES})")
        batch = self.client.batch()
        for collection, doc_id in refs:
            batch.delete(self.client.collection(collection).document(doc_id))
        batch.commit()
