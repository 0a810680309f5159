import pytest

from services.common.local_store import LocalJsonStore
from services.common.store import StoreError
from services.core.catalog import CatalogService


class FlakyStore(LocalJsonStore):
    """Local store whose primitives fail on demand.

    ``fail_on`` maps a primitive name (``list``, ``add``, ``delete`` ...) to a
    collection name; ``delete_budget`` lets that many deletes through before
    the next one raises.
    """

    def __init__(self, store_dir, fail_on=None, delete_budget=None):
        super().__init__(store_dir)
        self.fail_on = dict(fail_on or {})
        self.delete_budget = delete_budget
        self.calls = []

    def _check(self, op, collection):
        self.calls.append((op, collection))
        if self.fail_on.get(op) in (collection, "*"):
            raise StoreError(f"{op} failed for {collection}")

    def _list(self, collection, order_by, descending, filters):
        self._check("list", collection)
        return super()._list(collection, order_by, descending, filters)

    def _get(self, collection, doc_id):
        self._check("get", collection)
        return super()._get(collection, doc_id)

    def _add(self, collection, fields):
        self._check("add", collection)
        return super()._add(collection, fields)

    def _update(self, collection, doc_id, fields):
        self._check("update", collection)
        return super()._update(collection, doc_id, fields)

    def _delete(self, collection, doc_id):
        self._check("delete", collection)
        if self.delete_budget is not None:
            if self.delete_budget == 0:
                raise StoreError("permission denied")
            self.delete_budget -= 1
        return super()._delete(collection, doc_id)


@pytest.fixture
def store(tmp_path):
    return LocalJsonStore(tmp_path / "store")


@pytest.fixture
def catalog(store):
    return CatalogService(store)


@pytest.fixture
def password_safe(catalog):
    """Password Safe with one use case and one solution-level prerequisite."""
    solution_id = catalog.add_solution("Password Safe", "Credential vault", "🔑").id
    use_case_id = catalog.add_use_case(solution_id, "SSH key management", ["SSH keys discovered"]).id
    prereq_id = catalog.add_prerequisite("SSL certificate for web portal", solution_id=solution_id).id
    return {"solution": solution_id, "use_case": use_case_id, "prereq": prereq_id}
