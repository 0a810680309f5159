"""Transient selection state of one planning session."""
from __future__ import annotations

from typing import Dict, List, Sequence

from pydantic import BaseModel, Field

from services.common.models import CustomerInfo
from services.core.aggregation import AggregatedSolution

PLANNER_STEPS = [
    {"id": 1, "label": "Select Solutions", "description": "Choose products to evaluate"},
    {"id": 2, "label": "Define Use Cases", "description": "Pick success criteria"},
    {"id": 3, "label": "Review & Export", "description": "Generate documents"},
]


class PlannerState(BaseModel):
    selected_solutions: List[AggregatedSolution] = Field(default_factory=list)
    selected_use_cases: Dict[str, List[str]] = Field(default_factory=dict)
    custom_use_cases: Dict[str, str] = Field(default_factory=dict)
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo)

    @property
    def selected_ids(self) -> List[str]:
        return [s.id for s in self.selected_solutions]

    def is_selected(self, solution_id: str) -> bool:
        return solution_id in self.selected_ids

    def select_solutions(self, solutions: Sequence[AggregatedSolution]) -> None:
        """Replace the selection, dropping use case picks of deselected solutions."""
        self.selected_solutions = list(solutions)
        keep = set(self.selected_ids)
        self.selected_use_cases = {sid: ids for sid, ids in self.selected_use_cases.items() if sid in keep}
        self.custom_use_cases = {sid: text for sid, text in self.custom_use_cases.items() if sid in keep}

    def toggle_solution(self, solution: AggregatedSolution) -> None:
        if self.is_selected(solution.id):
            self.select_solutions([s for s in self.selected_solutions if s.id != solution.id])
        else:
            self.select_solutions([*self.selected_solutions, solution])

    def set_use_case(self, solution_id: str, use_case_id: str, selected: bool) -> None:
        current = list(self.selected_use_cases.get(solution_id, []))
        if selected and use_case_id not in current:
            current.append(use_case_id)
        elif not selected:
            current = [uid for uid in current if uid != use_case_id]
        self.selected_use_cases[solution_id] = current

    def set_custom_use_case(self, solution_id: str, text: str) -> None:
        self.custom_use_cases[solution_id] = text

    def refresh(self, solutions: Sequence[AggregatedSolution]) -> None:
        """Swap selected solutions for freshly fetched copies; vanished solutions and use cases drop out."""
        fresh = {s.id: s for s in solutions}
        self.select_solutions([fresh[sid] for sid in self.selected_ids if sid in fresh])
        for solution in self.selected_solutions:
            live = {uc.id for uc in solution.use_cases}
            if solution.id in self.selected_use_cases:
                self.selected_use_cases[solution.id] = [
                    uid for uid in self.selected_use_cases[solution.id] if uid in live
                ]

    @property
    def has_criteria(self) -> bool:
        return any(self.selected_use_cases.get(sid) or (self.custom_use_cases.get(sid) or "").strip()
                   for sid in self.selected_ids)

    @property
    def current_step(self) -> int:
        if not self.selected_solutions:
            return 1
        if not self.has_criteria:
            return 2
        return 3
