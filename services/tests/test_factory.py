import pytest

from services.common import firestore_store
from services.common.factory import build_store
from services.common.local_store import LocalJsonStore


def test_local_backend(tmp_path):
    store = build_store("local", store_dir=tmp_path)
    assert isinstance(store, LocalJsonStore)
    assert store.store_dir == tmp_path


def test_backend_name_is_normalised(tmp_path):
    assert isinstance(build_store("  LOCAL ", store_dir=tmp_path), LocalJsonStore)


def test_firestore_backend(monkeypatch):
    created = []
    monkeypatch.setattr(
        firestore_store.FirestoreStore,
        "__init__",
        lambda self, project_id=None, credentials_path=None, client=None: created.append(project_id),
    )
    store = build_store("firestore", project_id="demo")
    assert isinstance(store, firestore_store.FirestoreStore)
    assert created == ["demo"]


def test_unknown_backend():
    with pytest.raises(ValueError, match="Unknown store backend"):
        build_store("mongo")
