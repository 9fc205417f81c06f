from __future__ import annotations

from typing import Optional

from fastapi import APIRouter

from .. import config
from ..exceptions import http_problem
from ..schemas import SplitAnalyzeIn, SplitOut
from ..scoring.splits import SplitInfo, analyze_split_from_pins, catalog_entries
from ..services.validation import ValidationError, validate_pin_selection

router = APIRouter(prefix="/splits", tags=["splits"])


def split_out(split: Optional[SplitInfo]) -> Optional[SplitOut]:
    if split is None:
        return None
    return SplitOut.model_validate(split.to_dict())


# GET /api/v0/splits
@router.get("", response_model=list[SplitOut])
async def list_splits() -> list[SplitOut]:
    return [split_out(s) for s in catalog_entries()]


# POST /api/v0/splits/analyze
@router.post("/analyze", response_model=Optional[SplitOut])
async def analyze_split(body: SplitAnalyzeIn) -> Optional[SplitOut]:
    try:
        pins = validate_pin_selection(body.knocked_down)
    except ValidationError as exc:
        raise http_problem(
            status_code=422,
            detail=str(exc),
            code="split_invalid_pins",
        )
    policy = body.policy or config.SPLIT_POLICY
    return split_out(analyze_split_from_pins(pins, policy=policy))
