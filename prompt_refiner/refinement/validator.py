"""Builds a RefinedPrompt from untyped JSON, filling defaults for anything missing."""

import math
from typing import Any

from prompt_refiner.refinement.models import (
    Constraints,
    Deliverables,
    ProductOverview,
    RefinedPrompt,
    RefinedPromptMetadata,
    Requirements,
    ValidationFlags,
)

_MIN_SCORE = 0
_MAX_SCORE = 100


def build_refined_prompt(data: Any) -> RefinedPrompt:
    """Build a RefinedPrompt from parsed JSON.

    Never raises on shape problems: missing or mistyped lists become empty,
    strings become "", booleans become False and the confidence score is
    coerced to an integer in 0-100.
    """
    raw = _section(data)
    return RefinedPrompt(
        metadata=_build_metadata(_section(raw.get("metadata"))),
        product_overview=_build_product_overview(_section(raw.get("product_overview"))),
        requirements=_build_requirements(_section(raw.get("requirements"))),
        constraints=_build_constraints(_section(raw.get("constraints"))),
        deliverables=_build_deliverables(_section(raw.get("deliverables"))),
        validation_flags=_build_validation_flags(_section(raw.get("validation_flags"))),
    )


def _build_metadata(raw: dict[str, Any]) -> RefinedPromptMetadata:
    return RefinedPromptMetadata(
        id=_string(raw.get("id")),
        timestamp=_string(raw.get("timestamp")),
        source_types=_string_list(raw.get("source_types")),
        confidence_score=_score(raw.get("confidence_score")),
    )


def _build_product_overview(raw: dict[str, Any]) -> ProductOverview:
    return ProductOverview(
        title=_string(raw.get("title")),
        description=_string(raw.get("description")),
        target_users=_string(raw.get("target_users")),
        problem_statement=_string(raw.get("problem_statement")),
    )


def _build_requirements(raw: dict[str, Any]) -> Requirements:
    priority_ranked = raw.get("priority_ranked")
    return Requirements(
        functional=_string_list(raw.get("functional")),
        non_functional=_string_list(raw.get("non_functional")),
        priority_ranked=priority_ranked if isinstance(priority_ranked, bool) else False,
    )


def _build_constraints(raw: dict[str, Any]) -> Constraints:
    return Constraints(
        technical=_string_list(raw.get("technical")),
        business=_string_list(raw.get("business")),
        timeline=_string(raw.get("timeline")),
    )


def _build_deliverables(raw: dict[str, Any]) -> Deliverables:
    return Deliverables(
        expected_outputs=_string_list(raw.get("expected_outputs")),
        success_criteria=_string_list(raw.get("success_criteria")),
    )


def _build_validation_flags(raw: dict[str, Any]) -> ValidationFlags:
    return ValidationFlags(
        missing_sections=_string_list(raw.get("missing_sections")),
        ambiguous_items=_string_list(raw.get("ambiguous_items")),
        confidence_notes=_string(raw.get("confidence_notes")),
    )


def _section(raw: Any) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _string(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return str(raw)


def _string_list(raw: Any) -> list[str]:
    if not isinstance(raw, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in raw if item is not None]


def _score(raw: Any) -> int:
    if isinstance(raw, bool):
        return _MIN_SCORE
    if isinstance(raw, int):
        return _clamp(raw)
    if isinstance(raw, float):
        value = raw
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            return _MIN_SCORE
    else:
        return _MIN_SCORE
    # NaN and infinities have no integer form
    if not math.isfinite(value):
        return _MIN_SCORE
    return _clamp(round(value))


def _clamp(value: int) -> int:
    return max(_MIN_SCORE, min(_MAX_SCORE, value))
