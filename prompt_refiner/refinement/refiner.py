"""AI-powered product prompt refiner."""

from collections.abc import Sequence
from pathlib import Path

from prompt_refiner.logging.logger import Log
from prompt_refiner.refinement.client_base import BaseCompletionClient
from prompt_refiner.refinement.exceptions import ResponseParseError
from prompt_refiner.refinement.input_normalizer import build_content_parts
from prompt_refiner.refinement.interpreter import interpret
from prompt_refiner.refinement.models import (
    FinalizedRefinement,
    Malformed,
    RefinementOutcome,
    Rejected,
    StoredFile,
)
from prompt_refiner.refinement.post_processor import PostProcessor
from prompt_refiner.refinement.prompt_loader import load_system_prompt

NO_INPUT_REASON = "No input provided"

# Sampling range accepted by OpenAI-compatible chat endpoints
MIN_TEMPERATURE = 0.0
MAX_TEMPERATURE = 2.0


class Refiner:
    """Turns text and stored files into a finalized refined prompt via a completion client."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.3,
        system_prompt_path: Path | None = None,
        post_processor: PostProcessor | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(MIN_TEMPERATURE, min(MAX_TEMPERATURE, temperature))
        self._system_prompt = load_system_prompt(system_prompt_path)
        self._post_processor = post_processor or PostProcessor()

    def refine(self, text: str, files: Sequence[StoredFile]) -> RefinementOutcome:
        """Run one refinement round trip.

        Returns:
            Rejected when there is no input or the model rejects it,
            otherwise a FinalizedRefinement.

        Raises:
            GatewayError: when the completion call fails.
            ResponseParseError: when the model output cannot be interpreted.
        """
        parts = build_content_parts(text, files)
        if not parts:
            Log.info("Refinement skipped: no input provided")
            return Rejected(reason=NO_INPUT_REASON)

        content = [part.to_message() for part in parts]
        Log.debug(f"Refinement prompt parts:\n{content}")

        raw_response = self._client.create_chat_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            content=content,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        interpreted = interpret(raw_response)
        if isinstance(interpreted, Malformed):
            Log.error(f"Failed to parse AI response: {interpreted.reason}")
            raise ResponseParseError(f"Failed to parse AI response: {interpreted.reason}")
        if isinstance(interpreted, Rejected):
            Log.info(f"Refinement rejected: {interpreted.reason}")
            return interpreted

        result: FinalizedRefinement = self._post_processor.finalize(
            interpreted.prompt, text, files
        )
        Log.info(
            f"Refinement complete: '{result.title}' scored "
            f"{result.prompt.metadata.confidence_score}"
        )
        return result
