from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from services.common.local_store import LocalJsonStore
from services.core.catalog import CatalogService

UI_DIR = Path(__file__).resolve().parents[1] / "ui"


def _app(script, store_dir):
    at = AppTest.from_file(str(UI_DIR / script), default_timeout=30)
    at.session_state["store_backend"] = "local"
    at.session_state["store_dir"] = str(store_dir)
    return at


def _button(at, label):
    return next(b for b in at.button if b.label == label)


def _text_input(at, label):
    return next(t for t in at.text_input if t.label == label)


@pytest.fixture
def seeded(tmp_path):
    catalog = CatalogService(LocalJsonStore(tmp_path))
    solution_id = catalog.add_solution("Password Safe", "Vault", "🔑").id
    catalog.add_use_case(solution_id, "SSH key management", ["SSH keys discovered"])
    catalog.add_use_case(solution_id, "Password rotation")
    catalog.add_prerequisite("SSL certificate for web portal", solution_id=solution_id)
    return {"dir": tmp_path, "catalog": catalog, "solution": solution_id}


def test_home_seeds_empty_store(tmp_path):
    at = _app("app.py", tmp_path).run()
    assert not at.exception
    assert any("catalog is empty" in i.value for i in at.info)

    at.button(key="home_seed").click().run()
    assert not at.exception
    assert at.success[0].value.startswith("Data seeded successfully")
    assert CatalogService(LocalJsonStore(tmp_path)).get_all_solutions().items


def test_dashboard_totals_follow_search(seeded):
    at = _app("pages/dashboard.py", seeded["dir"]).run()
    assert not at.exception
    metrics = {m.label: m.value for m in at.metric}
    assert metrics == {"Use cases": "2", "Prerequisites": "1", "Solutions": "1"}

    at.text_input(key="dashboard_search").set_value("ssh").run()
    metrics = {m.label: m.value for m in at.metric}
    assert metrics["Use cases"] == "1"
    assert metrics["Prerequisites"] == "0"


def test_dashboard_toggle_all_hides_everything(seeded):
    at = _app("pages/dashboard.py", seeded["dir"]).run()
    at.button(key="dashboard_toggle_all").click().run()
    assert not at.exception
    assert any("No items match" in i.value for i in at.info)


def test_planner_select_and_save(seeded):
    at = _app("pages/planner.py", seeded["dir"]).run()
    assert not at.exception

    at.button(key=f"planner_pick_{seeded['solution']}").click().run()
    assert at.session_state["planner_state"].selected_ids == [seeded["solution"]]
    assert any(c.label == "SSH key management" for c in at.checkbox)
    assert any("No success criteria defined" in c.value for c in at.code)

    at.button(key="planner_save").click().run()
    assert not at.exception
    assert at.success[0].value.startswith("Saved! Plan ID: ")


def test_solutions_page_add(tmp_path):
    at = _app("pages/solutions.py", tmp_path).run()
    _text_input(at, "Name *").set_value("Remote Support")
    _button(at, "Add solution").click().run()
    assert not at.exception
    assert at.success[0].value == "Solution added!"
    assert [s.name for s in CatalogService(LocalJsonStore(tmp_path)).get_all_solutions().items] == ["Remote Support"]


def test_solutions_page_rejects_blank_name(tmp_path):
    at = _app("pages/solutions.py", tmp_path).run()
    _button(at, "Add solution").click().run()
    assert at.error[0].value == "Name is required"


def test_prerequisites_page_marks_unknown_owner(seeded):
    seeded["catalog"].add_prerequisite("Agent deployed", use_case_id="deleted-use-case")
    at = _app("pages/prerequisites.py", seeded["dir"]).run()
    assert not at.exception
    assert any("Use case: Unknown" in m.value for m in at.markdown)


def test_use_cases_page_filters_by_search(seeded):
    at = _app("pages/use_cases.py", seeded["dir"]).run()
    at.text_input(key="use_case_search").set_value("rotation").run()
    assert not at.exception
    assert any(c.value == "Showing 1 of 2 use cases" for c in at.caption)


def test_dashboard_shows_writes_made_elsewhere(seeded):
    catalog = seeded["catalog"]
    at = _app("pages/dashboard.py", seeded["dir"]).run()
    assert {m.label: m.value for m in at.metric}["Use cases"] == "2"

    rotation = next(uc for uc in catalog.get_all_use_cases().items if uc.text == "Password rotation")
    catalog.delete_use_case(rotation.id)
    at.run()
    assert {m.label: m.value for m in at.metric}["Use cases"] == "1"

    catalog.delete_solution(seeded["solution"])
    at.run()
    assert not at.exception
    assert {m.label: m.value for m in at.metric} == {"Use cases": "0", "Prerequisites": "0", "Solutions": "0"}


def test_planner_drops_solution_deleted_elsewhere(seeded):
    at = _app("pages/planner.py", seeded["dir"]).run()
    at.button(key=f"planner_pick_{seeded['solution']}").click().run()
    assert at.session_state["planner_state"].selected_ids == [seeded["solution"]]

    seeded["catalog"].delete_solution(seeded["solution"])
    at.run()
    assert not at.exception
    assert at.session_state["planner_state"].selected_ids == []
    assert not any(b.key == f"planner_pick_{seeded['solution']}" for b in at.button)


def test_dashboard_load_failure_keeps_queued_message(tmp_path):
    (tmp_path / "solutions.json").write_text("{not json", encoding="utf-8")
    at = _app("pages/dashboard.py", tmp_path)
    at.session_state["flash"] = {"dashboard": ("success", "Use case deleted")}
    at.run()
    assert not at.exception
    assert at.success[0].value == "Use case deleted"
    assert at.error[0].value.startswith("Failed to fetch all data")
