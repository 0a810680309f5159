"""Saved POC plan snapshots.

A snapshot stores solution id/name references and the raw selection maps,
not the resolved use case text. Reading a plan back means re-joining it
against the live catalog; records deleted since then come back as
placeholders.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence

from pydantic import BaseModel, Field

from services.common.config import POC_PLANS_COLLECTION
from services.common.models import CustomerInfo, PocPlan, Solution, UseCase, parse_records
from services.common.store import NOT_FOUND, DocumentStore, Result
from services.core.catalog import CatalogService

logger = logging.getLogger(__name__)

DRAFT = "draft"
UNKNOWN_SOLUTION = "Unknown solution"
UNKNOWN_USE_CASE = "Unknown use case"


def format_plan_for_save(
    customer_info: CustomerInfo | Mapping[str, Any],
    selected_solutions: Sequence[Solution],
    selected_use_cases: Mapping[str, Sequence[str]],
    custom_use_cases: Mapping[str, str],
) -> Dict[str, Any]:
    if not isinstance(customer_info, CustomerInfo):
        customer_info = CustomerInfo.model_validate(customer_info)
    return {
        "customerInfo": customer_info.model_dump(by_alias=True),
        "solutions": [{"id": s.id, "name": s.name} for s in selected_solutions],
        "selectedUseCases": {sid: list(ids) for sid, ids in selected_use_cases.items()},
        "customUseCases": dict(custom_use_cases),
        "status": DRAFT,
    }


class ResolvedUseCase(BaseModel):
    id: str
    text: str
    prerequisites: List[str] = Field(default_factory=list)
    missing: bool = False


class ResolvedSolution(BaseModel):
    id: str
    name: str
    icon: str = ""
    missing: bool = False
    saved_name: str = ""
    use_cases: List[ResolvedUseCase] = Field(default_factory=list)
    custom_use_case: str = ""


class ResolvedPlan(BaseModel):
    id: str
    status: str
    customer_info: CustomerInfo
    solutions: List[ResolvedSolution] = Field(default_factory=list)

    @property
    def has_missing_references(self) -> bool:
        return any(s.missing or any(uc.missing for uc in s.use_cases) for s in self.solutions)


def resolve_saved_plan(plan: PocPlan, solutions: Sequence[Solution], use_cases: Sequence[UseCase]) -> ResolvedPlan:
    solution_by_id = {s.id: s for s in solutions}
    use_case_by_id = {uc.id: uc for uc in use_cases}

    resolved = []
    for ref in plan.solutions:
        live = solution_by_id.get(ref.id)
        entries = []
        for uc_id in plan.selected_use_cases.get(ref.id, []):
            uc = use_case_by_id.get(uc_id)
            if uc is None:
                entries.append(ResolvedUseCase(id=uc_id, text=UNKNOWN_USE_CASE, missing=True))
            else:
                entries.append(ResolvedUseCase(id=uc.id, text=uc.text, prerequisites=list(uc.prerequisites)))
        resolved.append(
            ResolvedSolution(
                id=ref.id,
                name=live.name if live else UNKNOWN_SOLUTION,
                icon=live.icon if live else "",
                missing=live is None,
                saved_name=ref.name,
                use_cases=entries,
                custom_use_case=plan.custom_use_cases.get(ref.id, ""),
            )
        )
    return ResolvedPlan(id=plan.id, status=plan.status, customer_info=plan.customer_info, solutions=resolved)


class PlanService:
    def __init__(self, store: DocumentStore):
        self.store = store

    def save_poc_plan(self, plan_data: Mapping[str, Any]) -> Result:
        return self.store.add(POC_PLANS_COLLECTION, dict(plan_data))

    def get_all_poc_plans(self) -> Result:
        res = self.store.list(POC_PLANS_COLLECTION, order_by="createdAt", descending=True)
        if not res.success:
            return res
        return Result.ok(items=parse_records(PocPlan, res.items))

    def get_poc_plan_by_id(self, plan_id: str) -> Result:
        res = self.store.get(POC_PLANS_COLLECTION, plan_id)
        if not res.success:
            if res.error == NOT_FOUND:
                return Result.fail("Plan not found")
            return res
        plans = parse_records(PocPlan, [res.item])
        if not plans:
            return Result.fail(f"Plan {plan_id} could not be read")
        return Result.ok(item=plans[0], id=plan_id)

    def update_poc_plan(self, plan_id: str, plan_data: Mapping[str, Any]) -> Result:
        return self.store.update(POC_PLANS_COLLECTION, plan_id, dict(plan_data))

    def delete_poc_plan(self, plan_id: str) -> Result:
        return self.store.delete(POC_PLANS_COLLECTION, plan_id)

    def resolve(self, plan: PocPlan, solutions: Sequence[Solution], use_cases: Sequence[UseCase]) -> ResolvedPlan:
        resolved = resolve_saved_plan(plan, solutions, use_cases)
        if resolved.has_missing_references:
            logger.info("Plan %s references records that no longer exist", plan.id)
        return resolved


def load_resolved_plan(plans: PlanService, catalog: CatalogService, plan_id: str) -> Result:
    """Fetch a plan and the live catalog, then re-join them."""
    res = plans.get_poc_plan_by_id(plan_id)
    if not res.success:
        return res
    solutions_res = catalog.get_all_solutions()
    use_cases_res = catalog.get_all_use_cases()
    for r in (solutions_res, use_cases_res):
        if not r.success:
            return r
    return Result.ok(item=plans.resolve(res.item, solutions_res.items, use_cases_res.items), id=plan_id)
