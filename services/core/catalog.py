"""CRUD over the solution catalog: solutions, use cases and prerequisites.

Every method returns a ``Result`` envelope. Required-field checks run before
any store call, so an invalid form never reaches the store.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, List, Optional, Sequence

from services.common.config import (
    SOLUTION_PREREQS_COLLECTION,
    SOLUTIONS_COLLECTION,
    USE_CASES_COLLECTION,
)
from services.common.models import Solution, UseCase, parse_prerequisites, parse_records
from services.common.seed_data import SEED_SOLUTIONS
from services.common.store import DocumentStore, Result
from services.core.aggregation import aggregate_solutions

logger = logging.getLogger(__name__)


def _missing(value: Optional[str], label: str) -> Optional[Result]:
    if value is None or not str(value).strip():
        return Result.fail(f"{label} is required")
    return None


def clean_prerequisites(items: Optional[Iterable[str]]) -> List[str]:
    return [str(item).strip() for item in (items or []) if item and str(item).strip()]


class CatalogService:
    def __init__(self, store: DocumentStore):
        self.store = store

    # ─────────────────────────────────────────────
    # Solutions
    # ─────────────────────────────────────────────
    def get_all_solutions(self) -> Result:
        res = self.store.list(SOLUTIONS_COLLECTION, order_by="name")
        if not res.success:
            return res
        return Result.ok(items=parse_records(Solution, res.items))

    def add_solution(self, name: str, description: str = "", icon: str = "📦") -> Result:
        invalid = _missing(name, "Name")
        if invalid:
            return invalid
        return self.store.add(
            SOLUTIONS_COLLECTION,
            {"name": name.strip(), "description": (description or "").strip(), "icon": icon or "📦"},
        )

    def update_solution(self, solution_id: str, name: str, description: str = "", icon: str = "📦") -> Result:
        invalid = _missing(name, "Name")
        if invalid:
            return invalid
        return self.store.update(
            SOLUTIONS_COLLECTION,
            solution_id,
            {"name": name.strip(), "description": (description or "").strip(), "icon": icon or "📦"},
        )

    def delete_solution(self, solution_id: str) -> Result:
        """Delete a solution after its use cases and solution-level prerequisites.

        The solution is only removed once its children are gone; when the
        children delete fails the solution stays and so may some children.
        """
        children = []
        for collection in (USE_CASES_COLLECTION, SOLUTION_PREREQS_COLLECTION):
            res = self.store.list(collection, filters={"solutionId": solution_id})
            if not res.success:
                return res
            children.extend((collection, record["id"]) for record in res.items)

        res = self.store.delete_many(children)
        if not res.success:
            logger.error("Cascade delete for solution %s stopped: %s", solution_id, res.error)
            return res
        return self.store.delete(SOLUTIONS_COLLECTION, solution_id)

    # ─────────────────────────────────────────────
    # Use cases
    # ─────────────────────────────────────────────
    def get_all_use_cases(self) -> Result:
        res = self.store.list(USE_CASES_COLLECTION, order_by="createdAt", descending=True)
        if not res.success:
            return res
        return Result.ok(items=parse_records(UseCase, res.items))

    def get_use_cases_by_solution(self, solution_id: str) -> Result:
        res = self.store.list(
            USE_CASES_COLLECTION,
            order_by="createdAt",
            descending=True,
            filters={"solutionId": solution_id},
        )
        if not res.success:
            return res
        return Result.ok(items=parse_records(UseCase, res.items))

    def _use_case_fields(self, solution_id: str, text: str, prerequisites: Optional[Sequence[str]]) -> Dict[str, Any]:
        return {
            "solutionId": solution_id,
            "text": text.strip(),
            "prerequisites": clean_prerequisites(prerequisites),
        }

    def add_use_case(self, solution_id: str, text: str, prerequisites: Optional[Sequence[str]] = None) -> Result:
        invalid = _missing(solution_id, "Solution") or _missing(text, "Use case text")
        if invalid:
            return invalid
        return self.store.add(USE_CASES_COLLECTION, self._use_case_fields(solution_id, text, prerequisites))

    def update_use_case(
        self,
        use_case_id: str,
        solution_id: str,
        text: str,
        prerequisites: Optional[Sequence[str]] = None,
    ) -> Result:
        invalid = _missing(solution_id, "Solution") or _missing(text, "Use case text")
        if invalid:
            return invalid
        return self.store.update(
            USE_CASES_COLLECTION, use_case_id, self._use_case_fields(solution_id, text, prerequisites)
        )

    def delete_use_case(self, use_case_id: str) -> Result:
        # Prerequisite rows pointing at this use case are left in place.
        return self.store.delete(USE_CASES_COLLECTION, use_case_id)

    # ─────────────────────────────────────────────
    # Prerequisites
    # ─────────────────────────────────────────────
    def get_all_prerequisites(self) -> Result:
        res = self.store.list(SOLUTION_PREREQS_COLLECTION, order_by="createdAt", descending=True)
        if not res.success:
            return res
        return Result.ok(items=parse_prerequisites(res.items))

    def get_prerequisites_by_solution(self, solution_id: str) -> Result:
        res = self.store.list(
            SOLUTION_PREREQS_COLLECTION,
            order_by="createdAt",
            descending=True,
            filters={"solutionId": solution_id},
        )
        if not res.success:
            return res
        return Result.ok(items=parse_prerequisites(res.items))

    def _prerequisite_fields(
        self, text: str, solution_id: Optional[str], use_case_id: Optional[str]
    ) -> Dict[str, Any] | Result:
        invalid = _missing(text, "Prerequisite text")
        if invalid:
            return invalid
        if bool(solution_id) == bool(use_case_id):
            return Result.fail("Exactly one of solution or use case is required")
        # The unused reference is written as null so a scope change clears it.
        return {"text": text.strip(), "solutionId": solution_id or None, "useCaseId": use_case_id or None}

    def add_prerequisite(self, text: str, solution_id: Optional[str] = None, use_case_id: Optional[str] = None) -> Result:
        fields = self._prerequisite_fields(text, solution_id, use_case_id)
        if isinstance(fields, Result):
            return fields
        return self.store.add(SOLUTION_PREREQS_COLLECTION, fields)

    def update_prerequisite(
        self,
        prereq_id: str,
        text: str,
        solution_id: Optional[str] = None,
        use_case_id: Optional[str] = None,
    ) -> Result:
        fields = self._prerequisite_fields(text, solution_id, use_case_id)
        if isinstance(fields, Result):
            return fields
        return self.store.update(SOLUTION_PREREQS_COLLECTION, prereq_id, fields)

    def delete_prerequisite(self, prereq_id: str) -> Result:
        return self.store.delete(SOLUTION_PREREQS_COLLECTION, prereq_id)

    # ─────────────────────────────────────────────
    # Combined data for the planner and dashboard
    # ─────────────────────────────────────────────
    def get_full_solutions_data(self) -> Result:
        with ThreadPoolExecutor(max_workers=3) as pool:
            futures = [
                pool.submit(self.get_all_solutions),
                pool.submit(self.get_all_use_cases),
                pool.submit(self.get_all_prerequisites),
            ]
            solutions_res, use_cases_res, prereqs_res = [f.result() for f in futures]

        failed = [r for r in (solutions_res, use_cases_res, prereqs_res) if not r.success]
        if failed:
            detail = "; ".join(r.error or "unknown error" for r in failed)
            logger.error("Error getting full solutions data: %s", detail)
            return Result.fail(f"Failed to fetch all data: {detail}")

        return Result.ok(items=aggregate_solutions(solutions_res.items, use_cases_res.items, prereqs_res.items))

    # ─────────────────────────────────────────────
    # Seed
    # ─────────────────────────────────────────────
    def seed_initial_data(self, dataset: Sequence[Dict[str, Any]] = SEED_SOLUTIONS, force: bool = False) -> Result:
        """Load the starter catalog; with ``force`` it is added even when solutions exist."""
        existing = self.get_all_solutions()
        if not existing.success:
            return existing
        if existing.items and not force:
            return Result.ok(message="Data already seeded")

        counts = {"solutions": 0, "use_cases": 0, "prerequisites": 0}
        for entry in dataset:
            res = self.add_solution(entry["name"], entry.get("description", ""), entry.get("icon", "📦"))
            if not res.success:
                return Result.fail(res.error or "Failed to add solution", item=counts)
            counts["solutions"] += 1
            solution_id = res.id

            for text, prereqs in entry.get("use_cases", []):
                res = self.add_use_case(solution_id, text, prereqs)
                if not res.success:
                    return Result.fail(res.error or "Failed to add use case", item=counts)
                counts["use_cases"] += 1

            for text in entry.get("prerequisites", []):
                res = self.add_prerequisite(text, solution_id=solution_id)
                if not res.success:
                    return Result.fail(res.error or "Failed to add prerequisite", item=counts)
                counts["prerequisites"] += 1

        logger.info("Seeded catalog: %s", counts)
        return Result.ok(
            item=counts,
            message=(
                f"Data seeded successfully: {counts['solutions']} solutions, "
                f"{counts['use_cases']} use cases, {counts['prerequisites']} prerequisites"
            ),
        )
