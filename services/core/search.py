"""Dashboard filter/search over aggregated solutions.

Everything here is a pure projection of (solutions, selected ids, search
term); nothing is cached between calls.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, Literal, Sequence

import pandas as pd
from pydantic import BaseModel, Field

from services.common.models import UseCase
from services.core.aggregation import AggregatedSolution

VIEW_MODES = ("all", "usecases", "prereqs")


class DashboardItem(BaseModel):
    type: Literal["usecase", "prereq"]
    id: str
    solution_id: str
    solution: str
    solution_icon: str = ""
    text: str
    prerequisites: List[str] = Field(default_factory=list)


def _matches(text: str | None, term: str) -> bool:
    return term in (text or "").lower()


def use_case_matches(use_case: UseCase, term: str) -> bool:
    return _matches(use_case.text, term) or any(_matches(p, term) for p in use_case.prerequisites)


def default_selection(solutions: Iterable[AggregatedSolution]) -> List[str]:
    return [s.id for s in solutions]


def apply_selection(solutions: Sequence[AggregatedSolution], selected_ids: Iterable[str]) -> List[AggregatedSolution]:
    selected = set(selected_ids)
    return [s for s in solutions if s.id in selected]


def apply_search(solutions: Sequence[AggregatedSolution], search_term: str | None) -> List[AggregatedSolution]:
    """Case-insensitive substring search.

    A solution whose name matches keeps all of its children. Otherwise its
    use cases and prerequisites are narrowed to the matching entries, and the
    solution is dropped when nothing is left.
    """
    term = (search_term or "").strip().lower()
    if not term:
        return list(solutions)

    visible: List[AggregatedSolution] = []
    for solution in solutions:
        if _matches(solution.name, term):
            visible.append(solution)
            continue
        use_cases = [uc for uc in solution.use_cases if use_case_matches(uc, term)]
        prerequisites = [p for p in solution.prerequisites if _matches(p, term)]
        if use_cases or prerequisites:
            visible.append(solution.model_copy(update={"use_cases": use_cases, "prerequisites": prerequisites}))
    return visible


def filter_solutions(
    solutions: Sequence[AggregatedSolution],
    selected_ids: Iterable[str],
    search_term: str | None = "",
) -> List[AggregatedSolution]:
    return apply_search(apply_selection(solutions, selected_ids), search_term)


# ─────────────────────────────────────────────
# Checkbox filter helpers
# ─────────────────────────────────────────────
def toggle_selection(selected_ids: Sequence[str], solution_id: str) -> List[str]:
    if solution_id in selected_ids:
        return [sid for sid in selected_ids if sid != solution_id]
    return [*selected_ids, solution_id]


def toggle_all(selected_ids: Sequence[str], all_ids: Sequence[str]) -> List[str]:
    if set(selected_ids) >= set(all_ids):
        return []
    return list(all_ids)


# ─────────────────────────────────────────────
# Flat rows for the dashboard table
# ─────────────────────────────────────────────
def flatten_items(solutions: Sequence[AggregatedSolution], view_mode: str = "all") -> List[DashboardItem]:
    if view_mode not in VIEW_MODES:
        raise ValueError(f"Unknown view mode '{view_mode}'")
    items: List[DashboardItem] = []
    for solution in solutions:
        if view_mode in ("all", "usecases"):
            items.extend(
                DashboardItem(
                    type="usecase",
                    id=uc.id,
                    solution_id=solution.id,
                    solution=solution.name,
                    solution_icon=solution.icon,
                    text=uc.text,
                    prerequisites=list(uc.prerequisites),
                )
                for uc in solution.use_cases
            )
        if view_mode in ("all", "prereqs"):
            items.extend(
                DashboardItem(
                    type="prereq",
                    id=f"{solution.id}-prereq-{index}",
                    solution_id=solution.id,
                    solution=solution.name,
                    solution_icon=solution.icon,
                    text=text,
                )
                for index, text in enumerate(solution.prerequisites)
            )
    return items


def summarize(items: Sequence[DashboardItem], selected_ids: Sequence[str]) -> Dict[str, int]:
    use_cases = sum(1 for item in items if item.type == "usecase")
    return {
        "total": len(items),
        "use_cases": use_cases,
        "prereqs": len(items) - use_cases,
        "solutions": len(selected_ids),
    }


def items_frame(items: Sequence[DashboardItem]) -> pd.DataFrame:
    rows = [
        {
            "Type": "Use case" if item.type == "usecase" else "Prerequisite",
            "Solution": f"{item.solution_icon} {item.solution}".strip(),
            "Text": item.text,
            "Use case prerequisites": "; ".join(item.prerequisites),
        }
        for item in items
    ]
    return pd.DataFrame(rows, columns=["Type", "Solution", "Text", "Use case prerequisites"])


def solution_counts_frame(solutions: Sequence[AggregatedSolution]) -> pd.DataFrame:
    rows = [
        {"solution": s.name, "use_cases": len(s.use_cases), "prerequisites": len(s.prerequisites)}
        for s in solutions
    ]
    return pd.DataFrame(rows, columns=["solution", "use_cases", "prerequisites"])
