"""Offline completion client.

Returns a canned refined prompt so the whole pipeline can run without a
gateway account. Selected with GATEWAY_PROVIDER=example.
"""

import json
from typing import ClassVar

from prompt_refiner.refinement.client_base import BaseCompletionClient


class ExampleClientAdapter(BaseCompletionClient):
    """Adapter that answers every request with a fixed refined prompt JSON."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "rejected": False,
        "refinedPrompt": {
            "metadata": {
                "id": "example",
                "timestamp": "",
                "source_types": ["text"],
                "confidence_score": 60,
            },
            "product_overview": {
                "title": "Example Product",
                "description": "Placeholder refinement produced without a model.",
                "target_users": "",
                "problem_statement": "",
            },
            "requirements": {
                "functional": [],
                "non_functional": [],
                "priority_ranked": False,
            },
            "constraints": {"technical": [], "business": [], "timeline": ""},
            "deliverables": {"expected_outputs": [], "success_criteria": []},
            "validation_flags": {
                "missing_sections": ["target_users", "problem_statement", "requirements"],
                "ambiguous_items": [],
                "confidence_notes": "Generated by the offline example client.",
            },
        },
    }

    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        content: list[dict[str, object]],
    ) -> str:
        _ = model, temperature, system_prompt, content
        return json.dumps(self.DEFAULT_RESPONSE)
