import uuid
from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import UTC, datetime

from prompt_refiner.refinement.input_normalizer import derive_source_types
from prompt_refiner.refinement.models import FinalizedRefinement, RefinedPrompt, StoredFile

UNTITLED_PROMPT = "Untitled Prompt"


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _new_id() -> str:
    return str(uuid.uuid4())


class PostProcessor:
    """Stamps system-controlled metadata onto a model-produced refined prompt."""

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utc_now,
        id_factory: Callable[[], str] = _new_id,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory

    def finalize(
        self,
        prompt: RefinedPrompt,
        text: str,
        files: Sequence[StoredFile],
    ) -> FinalizedRefinement:
        """Overwrite id, timestamp and source types, then derive title and validation.

        The model's own id, timestamp and source_types are discarded.
        """
        metadata = replace(
            prompt.metadata,
            id=self._id_factory(),
            timestamp=self._clock().isoformat(),
            source_types=derive_source_types(text, files),
        )
        finalized = replace(prompt, metadata=metadata)
        title = finalized.product_overview.title.strip() or UNTITLED_PROMPT
        return FinalizedRefinement(
            prompt=finalized,
            validation_passed=finalized.validation_flags.passed,
            title=title,
        )
