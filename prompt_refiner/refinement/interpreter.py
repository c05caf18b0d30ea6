"""Classifies raw model output as rejected, refined or malformed."""

import json
import re

from prompt_refiner.refinement.models import InterpretedResponse, Malformed, Refined, Rejected
from prompt_refiner.refinement.validator import build_refined_prompt

_LEADING_FENCE = re.compile(r"^```(?:json)?[ \t]*\n?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"\n?[ \t]*```$")

DEFAULT_REJECTION_REASON = "Input is not related to product development"


def strip_code_fences(raw: str) -> str:
    cleaned = raw.strip()
    cleaned = _LEADING_FENCE.sub("", cleaned)
    cleaned = _TRAILING_FENCE.sub("", cleaned)
    return cleaned.strip()


def interpret(raw: str) -> InterpretedResponse:
    """Parse the completion text into a tagged response.

    Untyped JSON never leaves this function: a refined answer is rebuilt
    into a RefinedPrompt with defaults for anything the model left out.
    """
    cleaned = strip_code_fences(raw)
    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        return Malformed(reason=f"Invalid JSON: {exc}", raw=raw)

    if not isinstance(parsed, dict):
        return Malformed(reason="JSON response must be an object", raw=raw)

    if parsed.get("rejected") is True:
        reason = parsed.get("reason")
        if not isinstance(reason, str) or not reason.strip():
            reason = DEFAULT_REJECTION_REASON
        return Rejected(reason=reason)

    refined = parsed.get("refinedPrompt")
    if not isinstance(refined, dict):
        return Malformed(reason="Response has no 'refinedPrompt' object", raw=raw)
    return Refined(prompt=build_refined_prompt(refined))
