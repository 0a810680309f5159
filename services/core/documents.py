"""Exportable POC documents built from a planner selection.

Two documents come out of one ``PlanDocument``: the technical
pre-requisites list and the mutual success plan. Each has a plain-text
rendering (clipboard) and a print-ready HTML rendering.
"""
from __future__ import annotations

from html import escape
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field

from services.common.models import CustomerInfo, UseCase
from services.core.aggregation import AggregatedSolution

NO_CRITERIA_PLACEHOLDER = "No success criteria defined"
PENDING = "Pending"


class CriteriaRow(BaseModel):
    milestone: str
    prerequisites: List[str] = Field(default_factory=list)
    owner: str = ""
    target_date: str = ""
    status: str = PENDING
    custom: bool = False


class PlanSection(BaseModel):
    solution_id: str
    name: str
    icon: str = ""
    prerequisites: List[str] = Field(default_factory=list)
    criteria: List[CriteriaRow] = Field(default_factory=list)
    placeholder: Optional[str] = None


class PlanDocument(BaseModel):
    customer: CustomerInfo = Field(default_factory=CustomerInfo)
    sections: List[PlanSection] = Field(default_factory=list)


def dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    unique = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def selected_use_cases_for(solution: AggregatedSolution, selected_use_cases: Mapping[str, Sequence[str]]) -> List[UseCase]:
    chosen = set(selected_use_cases.get(solution.id, []))
    return [uc for uc in solution.use_cases if uc.id in chosen]


def build_plan_document(
    solutions: Sequence[AggregatedSolution],
    selected_use_cases: Mapping[str, Sequence[str]],
    custom_use_cases: Mapping[str, str],
    customer: Optional[CustomerInfo] = None,
) -> PlanDocument:
    sections = []
    for solution in solutions:
        criteria = [
            CriteriaRow(milestone=uc.text, prerequisites=list(uc.prerequisites))
            for uc in selected_use_cases_for(solution, selected_use_cases)
        ]
        custom = (custom_use_cases.get(solution.id) or "").strip()
        if custom:
            criteria.append(CriteriaRow(milestone=custom, custom=True))
        sections.append(
            PlanSection(
                solution_id=solution.id,
                name=solution.name,
                icon=solution.icon,
                prerequisites=dedupe(solution.prerequisites),
                criteria=criteria,
                placeholder=None if criteria else NO_CRITERIA_PLACEHOLDER,
            )
        )
    return PlanDocument(customer=customer or CustomerInfo(), sections=sections)


# ─────────────────────────────────────────────
# Plain text (clipboard)
# ─────────────────────────────────────────────
def _heading(name: str) -> List[str]:
    return ["", name, "-" * len(name)]


def render_prerequisites_text(document: PlanDocument) -> str:
    customer = document.customer
    lines = ["PRE-REQUISITES DOCUMENT", "=" * 24, ""]
    if customer.company_name:
        lines.append(f"Customer: {customer.company_name}")
        if customer.contact_name or customer.contact_email:
            lines.append(f"Contact: {customer.contact_name} ({customer.contact_email})")
        if customer.se_name:
            lines.append(f"SE: {customer.se_name}")
        lines.append("")
    for section in document.sections:
        lines.extend(_heading(section.name))
        lines.extend(f"• {prereq}" for prereq in section.prerequisites)
    return "\n".join(lines) + "\n"


def _poc_period(customer: CustomerInfo) -> Optional[str]:
    if customer.poc_start_date and customer.poc_end_date:
        return f"POC Period: {customer.poc_start_date} to {customer.poc_end_date}"
    if customer.poc_start_date:
        return f"POC Start: {customer.poc_start_date}"
    return None


def render_success_plan_text(document: PlanDocument) -> str:
    customer = document.customer
    lines = ["MUTUAL POC SUCCESS PLAN", "=" * 24, ""]
    if customer.company_name:
        lines.append(f"Customer: {customer.company_name}")
        period = _poc_period(customer)
        if period:
            lines.append(period)
        lines.append("")
    for section in document.sections:
        lines.extend(_heading(section.name))
        lines.append("")
        lines.append("Technical Prerequisites:")
        lines.extend(f"• {prereq}" for prereq in section.prerequisites)
        if not section.prerequisites:
            lines.append("• None listed")
        lines.append("")
        lines.append("Success Criteria:")
        if section.placeholder:
            lines.append(section.placeholder)
            continue
        for row in section.criteria:
            label = f"{row.milestone} (custom)" if row.custom else row.milestone
            lines.append(f"[ ] {label} | Owner: {row.owner or '____'} | Target: {row.target_date or '____'} | Status: {row.status}")
            if row.prerequisites:
                lines.append(f"    Prerequisites: {'; '.join(row.prerequisites)}")
    return "\n".join(lines) + "\n"


# ─────────────────────────────────────────────
# Print view
# ─────────────────────────────────────────────
PRINT_CSS = """
body { font-family: "Inter","Segoe UI",system-ui,sans-serif; color: #0f172a; margin: 2rem; }
h1 { font-size: 1.6rem; margin-bottom: 0.2rem; }
h2 { font-size: 1.2rem; margin-top: 1.6rem; border-bottom: 2px solid #007aff; padding-bottom: 0.2rem; }
h3 { font-size: 1rem; margin: 0.8rem 0 0.3rem; }
.meta { color: #334155; margin: 0 0 1rem; }
table { border-collapse: collapse; width: 100%; margin-top: 0.4rem; }
th, td { border: 1px solid #cbd5e1; padding: 6px 8px; text-align: left; vertical-align: top; }
th { background: #e2e8f0; }
.placeholder { color: #64748b; font-style: italic; }
.prereqs { color: #475569; font-size: 0.85rem; }
@media print { body { margin: 0.5in; } .no-print { display: none; } }
"""


def _customer_meta(customer: CustomerInfo, with_period: bool) -> str:
    if not customer.company_name:
        return ""
    parts = [f"Prepared for: <strong>{escape(customer.company_name)}</strong>"]
    if customer.se_name:
        parts.append(f"SE: {escape(customer.se_name)}")
    period = _poc_period(customer) if with_period else None
    if period:
        parts.append(escape(period))
    return f'<p class="meta">{" | ".join(parts)}</p>'


def _section_html(section: PlanSection, include_criteria: bool) -> str:
    prereq_items = "".join(f"<li>{escape(p)}</li>" for p in section.prerequisites)
    parts = [f"<h2>{escape(section.icon)} {escape(section.name)}</h2>"]
    if include_criteria:
        parts.append("<h3>Technical Prerequisites</h3>")
    parts.append(f"<ul>{prereq_items}</ul>" if prereq_items else '<p class="placeholder">None listed</p>')
    if not include_criteria:
        return "\n".join(parts)

    parts.append("<h3>Success Criteria</h3>")
    if section.placeholder:
        parts.append(f'<p class="placeholder">{escape(section.placeholder)}</p>')
        return "\n".join(parts)
    rows = []
    for row in section.criteria:
        milestone = f"<em>{escape(row.milestone)}</em>" if row.custom else escape(row.milestone)
        if row.prerequisites:
            milestone += f'<div class="prereqs">Prerequisites: {escape("; ".join(row.prerequisites))}</div>'
        rows.append(
            f"<tr><td>{milestone}</td><td>{escape(row.owner) or '—'}</td>"
            f"<td>{escape(row.target_date) or '—'}</td><td>{escape(row.status)}</td></tr>"
        )
    parts.append(
        "<table><thead><tr><th>Milestone</th><th>Owner</th><th>Target Date</th><th>Status</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody></table>"
    )
    return "\n".join(parts)


def render_print_html(document: PlanDocument, include_criteria: bool = True) -> str:
    """Self-contained HTML page; ``include_criteria=False`` gives the pre-requisites document."""
    title = "Mutual POC Success Plan" if include_criteria else "Technical Pre-requisites"
    body = "\n".join(_section_html(s, include_criteria) for s in document.sections)
    return (
        "<!DOCTYPE html><html><head><meta charset=\"utf-8\">"
        f"<title>{title}</title><style>{PRINT_CSS}</style></head><body>"
        f"<h1>{title}</h1>{_customer_meta(document.customer, include_criteria)}"
        f"{body}"
        "</body></html>"
    )


def document_stats(document: PlanDocument) -> Dict[str, int]:
    return {
        "solutions": len(document.sections),
        "criteria": sum(len(s.criteria) for s in document.sections),
        "prerequisites": sum(len(s.prerequisites) for s in document.sections),
        "empty_sections": sum(1 for s in document.sections if s.placeholder),
    }
