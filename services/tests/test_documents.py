from services.common.models import CustomerInfo, UseCase
from services.core.aggregation import AggregatedSolution
from services.core.documents import (
    NO_CRITERIA_PLACEHOLDER,
    build_plan_document,
    document_stats,
    render_prerequisites_text,
    render_print_html,
    render_success_plan_text,
)


def _solutions():
    pra = AggregatedSolution(
        id="s1",
        name="PRA",
        icon="🔐",
        use_cases=[
            UseCase(id="u1", solution_id="s1", text="Vendor access", prerequisites=["Vendor network"]),
            UseCase(id="u2", solution_id="s1", text="Session recording"),
        ],
        prerequisites=["SSL certificate", "DNS entry", "SSL certificate"],
    )
    rs = AggregatedSolution(id="s2", name="Remote Support", icon="🖥️")
    return [pra, rs]


def test_sections_follow_selection_and_use_case_order():
    doc = build_plan_document(_solutions(), {"s1": ["u2", "u1"]}, {"s1": "  Custom check  "})
    pra, rs = doc.sections
    assert [row.milestone for row in pra.criteria] == ["Vendor access", "Session recording", "Custom check"]
    assert pra.criteria[0].prerequisites == ["Vendor network"]
    assert pra.criteria[0].status == "Pending"
    assert pra.criteria[0].owner == "" and pra.criteria[0].target_date == ""
    assert pra.criteria[-1].custom
    assert pra.prerequisites == ["SSL certificate", "DNS entry"]
    assert pra.placeholder is None
    assert rs.criteria == []
    assert rs.placeholder == NO_CRITERIA_PLACEHOLDER


def test_placeholder_is_in_every_rendering():
    doc = build_plan_document(_solutions(), {}, {"s2": "   "})
    text = render_success_plan_text(doc)
    html = render_print_html(doc)
    assert text.count("No success criteria defined") == 2
    assert html.count("No success criteria defined") == 2


def test_success_plan_text():
    customer = CustomerInfo(company_name="Acme", poc_start_date="2024-05-01", poc_end_date="2024-05-31")
    doc = build_plan_document(_solutions(), {"s1": ["u1"]}, {"s1": "Custom check"}, customer)
    text = render_success_plan_text(doc)
    assert text.startswith("MUTUAL POC SUCCESS PLAN\n")
    assert "Customer: Acme" in text
    assert "POC Period: 2024-05-01 to 2024-05-31" in text
    assert "[ ] Vendor access | Owner: ____ | Target: ____ | Status: Pending" in text
    assert "    Prerequisites: Vendor network" in text
    assert "[ ] Custom check (custom)" in text
    assert "• None listed" in text  # Remote Support has no prerequisites


def test_prerequisites_text():
    customer = CustomerInfo(company_name="Acme", contact_name="Jo", contact_email="jo@acme.test", se_name="Sam")
    text = render_prerequisites_text(build_plan_document(_solutions(), {}, {}, customer))
    lines = text.splitlines()
    assert lines[0] == "PRE-REQUISITES DOCUMENT"
    assert "Contact: Jo (jo@acme.test)" in lines
    assert "SE: Sam" in lines
    assert lines.count("• SSL certificate") == 1
    assert "PRA" in lines and "---" in lines


def test_print_html_escapes_content():
    solutions = _solutions()
    solutions[0].use_cases[0].text = "<script>alert(1)</script>"
    doc = build_plan_document(solutions, {"s1": ["u1"]}, {})
    html = render_print_html(doc)
    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "<th>Milestone</th>" in html
    assert "@media print" in html

    prereq_html = render_print_html(doc, include_criteria=False)
    assert "Technical Pre-requisites" in prereq_html
    assert "Milestone" not in prereq_html


def test_document_stats():
    doc = build_plan_document(_solutions(), {"s1": ["u1"]}, {})
    assert document_stats(doc) == {"solutions": 2, "criteria": 1, "prerequisites": 2, "empty_sections": 1}
