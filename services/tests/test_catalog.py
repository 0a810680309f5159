import pytest
from conftest import FlakyStore

from services.common.seed_data import SEED_SOLUTIONS
from services.core.catalog import CatalogService


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_solution_requires_name(catalog, store, name):
    res = catalog.add_solution(name)
    assert not res.success
    assert res.error == "Name is required"
    assert store.list("solutions").items == []


def test_add_and_list_solutions_by_name(catalog):
    catalog.add_solution("Remote Support", "RS", "🛠️")
    catalog.add_solution("  Password Safe  ")
    res = catalog.get_all_solutions()
    assert [s.name for s in res.items] == ["Password Safe", "Remote Support"]
    assert res.items[0].icon == "📦"


def test_update_solution(catalog):
    sid = catalog.add_solution("PRA").id
    assert catalog.update_solution(sid, "Privileged Remote Access", "desc", "🔐").success
    solution = catalog.get_all_solutions().items[0]
    assert (solution.name, solution.description, solution.icon) == ("Privileged Remote Access", "desc", "🔐")
    assert not catalog.update_solution(sid, " ").success


def test_use_case_validation_blocks_store_calls(tmp_path):
    store = FlakyStore(tmp_path)
    catalog = CatalogService(store)
    assert catalog.add_use_case("", "text").error == "Solution is required"
    assert catalog.add_use_case("s1", "  ").error == "Use case text is required"
    assert catalog.update_use_case("u1", "s1", "").error == "Use case text is required"
    assert store.calls == []


def test_use_case_prerequisites_are_cleaned(catalog):
    sid = catalog.add_solution("PRA").id
    catalog.add_use_case(sid, " Jump client ", ["Agent installed", "", "   ", " Firewall open "])
    uc = catalog.get_use_cases_by_solution(sid).items[0]
    assert uc.text == "Jump client"
    assert uc.prerequisites == ["Agent installed", "Firewall open"]


def test_use_cases_newest_first(catalog):
    sid = catalog.add_solution("PRA").id
    first = catalog.add_use_case(sid, "first").id
    second = catalog.add_use_case(sid, "second").id
    assert [uc.id for uc in catalog.get_all_use_cases().items] == [second, first]


@pytest.mark.parametrize(
    "solution_id, use_case_id",
    [(None, None), ("s1", "u1")],
)
def test_prerequisite_needs_exactly_one_reference(catalog, solution_id, use_case_id):
    res = catalog.add_prerequisite("Agent", solution_id=solution_id, use_case_id=use_case_id)
    assert not res.success
    assert res.error == "Exactly one of solution or use case is required"


def test_prerequisite_scope_change_clears_old_reference(catalog, store, password_safe):
    prereq_id = password_safe["prereq"]
    assert catalog.update_prerequisite(prereq_id, "Moved", use_case_id=password_safe["use_case"]).success

    record = store.get("solutionPrerequisites", prereq_id).item
    assert record["solutionId"] is None
    assert record["useCaseId"] == password_safe["use_case"]
    prereq = catalog.get_all_prerequisites().items[0]
    assert prereq.scope == "use_case"


def test_delete_solution_cascades_only_its_children(catalog, password_safe):
    other = catalog.add_solution("Remote Support").id
    other_uc = catalog.add_use_case(other, "Remote session").id
    other_prereq = catalog.add_prerequisite("Appliance", solution_id=other).id

    assert catalog.delete_solution(password_safe["solution"]).success

    assert [s.id for s in catalog.get_all_solutions().items] == [other]
    assert [uc.id for uc in catalog.get_all_use_cases().items] == [other_uc]
    assert [p.id for p in catalog.get_all_prerequisites().items] == [other_prereq]


def test_delete_solution_keeps_solution_when_children_fail(tmp_path):
    store = FlakyStore(tmp_path)
    catalog = CatalogService(store)
    sid = catalog.add_solution("PRA").id
    catalog.add_use_case(sid, "a")
    catalog.add_use_case(sid, "b")
    catalog.add_prerequisite("p", solution_id=sid)

    store.delete_budget = 1
    res = catalog.delete_solution(sid)

    assert not res.success
    assert res.error == "permission denied"
    assert [s.id for s in catalog.get_all_solutions().items] == [sid]
    remaining = len(catalog.get_all_use_cases().items) + len(catalog.get_all_prerequisites().items)
    assert remaining == 2


def test_delete_use_case_leaves_prerequisite_rows(catalog, store, password_safe):
    scoped = catalog.add_prerequisite("Agent deployed", use_case_id=password_safe["use_case"]).id
    assert catalog.delete_use_case(password_safe["use_case"]).success
    assert store.get("solutionPrerequisites", scoped).success


def test_full_solutions_data(catalog, password_safe):
    res = catalog.get_full_solutions_data()
    assert res.success
    [solution] = res.items
    assert solution.name == "Password Safe"
    assert [uc.id for uc in solution.use_cases] == [password_safe["use_case"]]
    assert solution.prerequisites == ["SSL certificate for web portal"]


def test_full_solutions_data_fails_as_a_whole(tmp_path):
    store = FlakyStore(tmp_path)
    catalog = CatalogService(store)
    catalog.add_solution("PRA")
    store.fail_on = {"list": "useCases"}

    res = catalog.get_full_solutions_data()
    assert not res.success
    assert res.items == []
    assert res.error.startswith("Failed to fetch all data:")
    assert "useCases" in res.error


def test_seed_initial_data_once(catalog):
    res = catalog.seed_initial_data()
    assert res.success
    assert res.item["solutions"] == len(SEED_SOLUTIONS)
    assert res.message.startswith("Data seeded successfully")

    expected_use_cases = sum(len(entry["use_cases"]) for entry in SEED_SOLUTIONS)
    assert len(catalog.get_all_use_cases().items) == expected_use_cases

    again = catalog.seed_initial_data()
    assert again.success
    assert again.message == "Data already seeded"
    assert len(catalog.get_all_solutions().items) == len(SEED_SOLUTIONS)


def test_seed_force_adds_again(catalog):
    dataset = [{"name": "Only", "use_cases": [("uc", ["p"])], "prerequisites": ["sp"]}]
    catalog.seed_initial_data(dataset)
    res = catalog.seed_initial_data(dataset, force=True)
    assert res.item == {"solutions": 1, "use_cases": 1, "prerequisites": 1}
    assert len(catalog.get_all_solutions().items) == 2
