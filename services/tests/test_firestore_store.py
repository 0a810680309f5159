from unittest.mock import MagicMock

import pytest
from google.cloud import firestore

from services.common import firestore_store
from services.common.firestore_store import MAX_BATCH_WRITES, FirestoreStore


def _snap(doc_id, data, exists=True):
    snap = MagicMock(id=doc_id, exists=exists)
    snap.to_dict.return_value = data
    return snap


@pytest.fixture
def client():
    client = MagicMock()
    query = client.collection.return_value
    query.where.return_value = query
    query.order_by.return_value = query
    return client


def test_list_builds_filtered_ordered_query(client):
    query = client.collection.return_value
    query.stream.return_value = [_snap("u1", {"text": "SSH", "solutionId": "s1"})]
    store = FirestoreStore(client=client)

    res = store.list("useCases", order_by="createdAt", descending=True, filters={"solutionId": "s1"})

    assert res.success
    assert res.items == [{"text": "SSH", "solutionId": "s1", "id": "u1"}]
    client.collection.assert_called_with("useCases")
    field_filter = query.where.call_args.kwargs["filter"]
    assert (field_filter.field_path, field_filter.op_string, field_filter.value) == ("solutionId", "==", "s1")
    query.order_by.assert_called_once_with("createdAt", direction=firestore.Query.DESCENDING)


def test_add_uses_server_timestamps(client):
    ref = MagicMock(id="new-id")
    client.collection.return_value.add.return_value = (None, ref)
    store = FirestoreStore(client=client)

    res = store.add("solutions", {"name": "PRA"})

    assert res.success and res.id == "new-id"
    payload = client.collection.return_value.add.call_args.args[0]
    assert payload["createdAt"] is firestore.SERVER_TIMESTAMP
    assert payload["updatedAt"] is firestore.SERVER_TIMESTAMP


def test_get_missing_document(client):
    client.collection.return_value.document.return_value.get.return_value = _snap("x", None, exists=False)
    res = FirestoreStore(client=client).get("pocPlans", "x")
    assert not res.success
    assert res.error == "Document not found"


def test_client_errors_become_envelopes(client):
    client.collection.return_value.document.return_value.update.side_effect = RuntimeError("404 No document to update")
    res = FirestoreStore(client=client).update("solutions", "gone", {"name": "x"})
    assert not res.success
    assert "No document to update" in res.error


def test_delete_many_commits_one_batch(client):
    batch = client.batch.return_value
    store = FirestoreStore(client=client)

    res = store.delete_many([("useCases", "u1"), ("solutionPrerequisites", "p1")])

    assert res.success
    assert batch.delete.call_count == 2
    batch.commit.assert_called_once()
    client.collection.return_value.document.return_value.delete.assert_not_called()


def test_delete_many_over_batch_limit_fails_before_writing(client):
    refs = [("useCases", str(i)) for i in range(MAX_BATCH_WRITES + 1)]
    res = FirestoreStore(client=client).delete_many(refs)
    assert not res.success
    assert "max 500" in res.error
    client.batch.assert_not_called()


def test_client_built_from_config(monkeypatch):
    built = {}

    def fake_client(project=None, credentials=None):
        built.update(project=project, credentials=credentials)
        return MagicMock(project=project)

    monkeypatch.setattr(firestore_store, "_build_creds", lambda key_path: f"creds:{key_path}")
    monkeypatch.setattr(firestore_store.firestore, "Client", fake_client)

    FirestoreStore(project_id="demo-project", credentials_path="/keys/sa.json")
    assert built == {"project": "demo-project", "credentials": "creds:/keys/sa.json"}
