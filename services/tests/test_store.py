import json

from conftest import FlakyStore

from services.common.local_store import LocalJsonStore
from services.common.store import NOT_FOUND


def test_add_get_stamps_timestamps(store):
    res = store.add("solutions", {"name": "PRA"})
    assert res.success and len(res.id) == 20

    got = store.get("solutions", res.id)
    assert got.success
    assert got.item["id"] == res.id
    assert got.item["name"] == "PRA"
    assert got.item["createdAt"] == got.item["updatedAt"]


def test_add_keeps_given_creation_time(store):
    res = store.add("solutionPrerequisites", {"text": "x"}, created_at="2020-01-01T00:00:00+00:00")
    record = store.get("solutionPrerequisites", res.id).item
    assert record["createdAt"] == "2020-01-01T00:00:00+00:00"
    assert record["updatedAt"] != record["createdAt"]


def test_get_missing_document(store):
    res = store.get("solutions", "nope")
    assert not res.success
    assert res.error == NOT_FOUND


def test_list_orders_and_filters(store):
    store.add("useCases", {"solutionId": "s1", "text": "b"})
    store.add("useCases", {"solutionId": "s2", "text": "a"})
    store.add("useCases", {"solutionId": "s1", "text": "c"})
    store.add("useCases", {"solutionId": "s1"})

    res = store.list("useCases", order_by="text", filters={"solutionId": "s1"})
    assert res.success
    # records without the sort field come last
    assert [r.get("text") for r in res.items] == ["b", "c", None]

    res = store.list("useCases", order_by="text", descending=True)
    assert [r.get("text") for r in res.items][:3] == ["c", "b", "a"]


def test_update_overwrites_fields_and_refreshes_updated_at(store):
    doc_id = store.add("solutions", {"name": "PRA", "icon": "📦"}).id
    before = store.get("solutions", doc_id).item

    assert store.update("solutions", doc_id, {"name": "Privileged Remote Access"}).success
    after = store.get("solutions", doc_id).item
    assert after["name"] == "Privileged Remote Access"
    assert after["icon"] == "📦"
    assert after["createdAt"] == before["createdAt"]
    assert after["updatedAt"] >= before["updatedAt"]


def test_update_missing_document_fails(store):
    res = store.update("solutions", "ghost", {"name": "x"})
    assert not res.success
    assert "ghost" in res.error


def test_delete_and_delete_many(store):
    ids = [store.add("useCases", {"text": str(i)}).id for i in range(3)]
    assert store.delete("useCases", ids[0]).success
    assert store.delete_many([("useCases", ids[1]), ("useCases", ids[2])]).success
    assert store.list("useCases").items == []
    assert store.delete_many([]).success


def test_collection_file_layout(tmp_path):
    store = LocalJsonStore(tmp_path)
    doc_id = store.add("pocPlans", {"status": "draft"}).id
    data = json.loads((tmp_path / "pocPlans.json").read_text(encoding="utf-8"))
    assert data[doc_id]["status"] == "draft"
    assert "id" not in data[doc_id]


def test_backend_errors_become_envelopes(tmp_path, caplog):
    store = FlakyStore(tmp_path, fail_on={"list": "*", "add": "*", "update": "*", "delete": "*"})
    for res in (
        store.list("solutions"),
        store.add("solutions", {"name": "x"}),
        store.update("solutions", "a", {"name": "x"}),
        store.delete("solutions", "a"),
        store.delete_many([("solutions", "a")]),
    ):
        assert not res.success
        assert "failed for solutions" in res.error
    assert "Error listing solutions" in caplog.text


def test_delete_many_is_not_atomic(tmp_path):
    store = FlakyStore(tmp_path, delete_budget=1)
    ids = [store.add("useCases", {"text": str(i)}).id for i in range(3)]

    res = store.delete_many([("useCases", doc_id) for doc_id in ids])
    assert not res.success
    assert res.error == "permission denied"
    remaining = {r["id"] for r in store.list("useCases").items}
    assert remaining == set(ids[1:])
