"""Packing-list endpoints - POST /packing-list/compute, POST /rules/validate, GET /categories."""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, status
from pydantic import BaseModel, Field

from packlist.engine.pipeline import compute_packing_list
from packlist.engine.validation import RuleValidationError, validate_rule_payload
from packlist.models.categories import Category, all_categories
from packlist.models.common import ViewMode
from packlist.models.packing import GroupedView, PackingListItem, TripSnapshot, ViewFilters
from packlist.models.violations import RuleValidationResult, RuleViolation

router = APIRouter(tags=["packing"])
logger = logging.getLogger(__name__)


class ComputeRequest(BaseModel):
    """Snapshot plus view options for one packing-list computation."""

    snapshot: TripSnapshot
    mode: ViewMode | None = None
    filters: ViewFilters | None = None


class ComputeResponse(BaseModel):
    """Grouped view and the merged instances it was built from."""

    view: GroupedView
    instances: list[PackingListItem]
    advisories: list[RuleViolation] = Field(default_factory=list)


@router.post("/packing-list/compute", response_model=ComputeResponse, status_code=status.HTTP_200_OK)
async def compute(request: ComputeRequest) -> ComputeResponse:
    """Derive the grouped packing list for a trip snapshot.

    Returns:
        ComputeResponse with the grouped view, merged instances and advisories

    Raises:
        HTTPException: 422 with the blocking violations if any rule is invalid
    """
    try:
        result = compute_packing_list(request.snapshot, request.mode, request.filters)
    except RuleValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={
                "message": str(e),
                "violations": [v.model_dump(mode="json") for v in e.violations],
            },
        ) from e

    return ComputeResponse(view=result.view, instances=result.instances, advisories=result.advisories)


@router.post("/rules/validate", response_model=RuleValidationResult)
async def validate_rule(payload: dict[str, Any] = Body(...)) -> RuleValidationResult:
    """Validate a raw rule before it is saved.

    Always answers 200; ``valid`` is false when any blocking violation exists.
    """
    result = validate_rule_payload(payload)
    if not result.valid:
        logger.info(f"Rule {result.rule_id or '<unnamed>'} failed validation")
    return result


@router.get("/categories", response_model=list[Category])
async def categories() -> list[Category]:
    """Built-in display categories, top-level entries first."""
    return all_categories()
