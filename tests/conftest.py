import json
from collections.abc import Callable
from typing import Any

import pytest

from prompt_refiner.refinement.models import StoredFile


@pytest.fixture()
def refined_prompt_payload() -> dict[str, Any]:
    """A complete refinedPrompt object as the model would return it."""
    return {
        "metadata": {
            "id": "model-supplied-id",
            "timestamp": "1999-01-01T00:00:00Z",
            "source_types": ["image"],
            "confidence_score": 85,
        },
        "product_overview": {
            "title": "TaskFlow",
            "description": "A task manager for small teams",
            "target_users": "Remote teams of 5-20 people",
            "problem_statement": "Tasks get lost across chat threads",
        },
        "requirements": {
            "functional": ["Create tasks", "Assign tasks"],
            "non_functional": ["Loads in under 2 seconds"],
            "priority_ranked": True,
        },
        "constraints": {
            "technical": ["Runs in the browser"],
            "business": ["Free tier required"],
            "timeline": "3 months",
        },
        "deliverables": {
            "expected_outputs": ["Web app"],
            "success_criteria": ["100 weekly active teams"],
        },
        "validation_flags": {
            "missing_sections": [],
            "ambiguous_items": [],
            "confidence_notes": "Clear input",
        },
    }


@pytest.fixture()
def model_response(refined_prompt_payload: dict[str, Any]) -> Callable[..., str]:
    """Build the raw completion text for a refined answer."""

    def _build(fenced: bool = False, **flags: Any) -> str:
        payload = json.loads(json.dumps(refined_prompt_payload))
        payload["validation_flags"].update(flags)
        body = json.dumps({"rejected": False, "refinedPrompt": payload})
        if fenced:
            return f"```json\n{body}\n```"
        return body

    return _build


@pytest.fixture()
def image_file() -> StoredFile:
    return StoredFile(
        url="https://files.example.com/1700000000000-sketch.png",
        name="sketch.png",
        mime_type="image/png",
    )


@pytest.fixture()
def pdf_file() -> StoredFile:
    return StoredFile(
        url="https://files.example.com/1700000000000-brief.pdf",
        name="brief.pdf",
        mime_type="application/pdf",
    )
