"""Joins the flat solution / use case / prerequisite collections per solution."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Union

from pydantic import Field

from services.common.models import Solution, SolutionPrerequisite, UseCase, UseCasePrerequisite

logger = logging.getLogger(__name__)

ScopedPrerequisite = Union[SolutionPrerequisite, UseCasePrerequisite]


class AggregatedSolution(Solution):
    use_cases: List[UseCase] = Field(default_factory=list)
    # Flattened texts; which record each came from is not kept at this layer.
    prerequisites: List[str] = Field(default_factory=list)


def prerequisite_owner(prereq: ScopedPrerequisite, use_case_owner: Dict[str, str]) -> Optional[str]:
    """Solution id a prerequisite belongs to, or None when its use case is gone."""
    if isinstance(prereq, SolutionPrerequisite):
        return prereq.solution_id
    return use_case_owner.get(prereq.use_case_id)


def aggregate_solutions(
    solutions: Sequence[Solution],
    use_cases: Sequence[UseCase],
    prerequisites: Sequence[ScopedPrerequisite],
) -> List[AggregatedSolution]:
    use_case_owner = {uc.id: uc.solution_id for uc in use_cases}

    use_cases_by_solution: Dict[str, List[UseCase]] = {}
    for uc in use_cases:
        use_cases_by_solution.setdefault(uc.solution_id, []).append(uc)

    prereqs_by_solution: Dict[str, List[str]] = {}
    for prereq in prerequisites:
        owner = prerequisite_owner(prereq, use_case_owner)
        if owner is not None:
            prereqs_by_solution.setdefault(owner, []).append(prereq.text)

    aggregated = [
        AggregatedSolution.model_validate(
            {
                **solution.model_dump(),
                "use_cases": use_cases_by_solution.get(solution.id, []),
                "prerequisites": prereqs_by_solution.get(solution.id, []),
            }
        )
        for solution in solutions
    ]
    logger.debug(
        "Aggregated %d solutions from %d use cases and %d prerequisites",
        len(aggregated), len(use_cases), len(prerequisites),
    )
    return aggregated
