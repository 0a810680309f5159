"""Stored entities shared by the catalog, planner and document flows.

Documents keep the camelCase field names they have in the store
(``solutionId``, ``createdAt`` ...); Python code uses the snake_case
attributes. ``to_document()`` gives back the storable fields without the
id and the backend-assigned timestamps.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Annotated, Any, Dict, Iterable, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

_STORE_MANAGED = {"id", "created_at", "updated_at", "scope"}


class Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    created_at: Any = Field(default=None, alias="createdAt")
    updated_at: Any = Field(default=None, alias="updatedAt")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude=_STORE_MANAGED)


class Solution(Record):
    name: str
    description: str = ""
    icon: str = "📦"


class UseCase(Record):
    solution_id: str = Field(alias="solutionId")
    text: str
    prerequisites: List[str] = Field(default_factory=list)


class SolutionPrerequisite(Record):
    """Prerequisite attached to a whole solution."""

    scope: Literal["solution"] = "solution"
    text: str
    solution_id: str = Field(alias="solutionId")


class UseCasePrerequisite(Record):
    """Prerequisite attached to one use case; belongs to that use case's solution."""

    scope: Literal["use_case"] = "use_case"
    text: str
    use_case_id: str = Field(alias="useCaseId")


Prerequisite = Annotated[
    Union[SolutionPrerequisite, UseCasePrerequisite],
    Field(discriminator="scope"),
]


class CustomerInfo(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    company_name: str = Field(default="", alias="companyName")
    contact_name: str = Field(default="", alias="contactName")
    contact_email: str = Field(default="", alias="contactEmail")
    se_name: str = Field(default="", alias="seName")
    poc_start_date: str = Field(default_factory=lambda: date.today().isoformat(), alias="pocStartDate")
    poc_end_date: str = Field(default="", alias="pocEndDate")


class SolutionRef(BaseModel):
    id: str
    name: str = ""


class PocPlan(Record):
    customer_info: CustomerInfo = Field(default_factory=CustomerInfo, alias="customerInfo")
    solutions: List[SolutionRef] = Field(default_factory=list)
    selected_use_cases: Dict[str, List[str]] = Field(default_factory=dict, alias="selectedUseCases")
    custom_use_cases: Dict[str, str] = Field(default_factory=dict, alias="customUseCases")
    status: str = "draft"


M = TypeVar("M", bound=BaseModel)


def parse_records(model: Type[M], records: Iterable[Dict[str, Any]]) -> List[M]:
    """Validate raw store records, skipping the ones that do not fit ``model``."""
    parsed: List[M] = []
    for record in records:
        try:
            parsed.append(model.model_validate(record))
        except ValidationError as exc:
            logger.warning("Skipping malformed %s record %s: %s", model.__name__, record.get("id"), exc)
    return parsed


def prerequisite_from_record(record: Dict[str, Any]) -> Optional[Union[SolutionPrerequisite, UseCasePrerequisite]]:
    """Build the scoped prerequisite for a raw record.

    Exactly one of ``solutionId`` / ``useCaseId`` must be set, otherwise the
    record cannot be attributed and ``None`` is returned.
    """
    solution_id = record.get("solutionId")
    use_case_id = record.get("useCaseId")
    if bool(solution_id) == bool(use_case_id):
        logger.warning("Prerequisite %s is not attributable (solutionId=%r, useCaseId=%r)",
                       record.get("id"), solution_id, use_case_id)
        return None
    model = SolutionPrerequisite if solution_id else UseCasePrerequisite
    fields = {k: v for k, v in record.items() if k != "scope"}
    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        logger.warning("Skipping malformed prerequisite %s: %s", record.get("id"), exc)
        return None


def parse_prerequisites(records: Iterable[Dict[str, Any]]) -> List[Union[SolutionPrerequisite, UseCasePrerequisite]]:
    return [p for p in (prerequisite_from_record(r) for r in records) if p is not None]
