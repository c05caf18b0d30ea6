from collections.abc import Sequence
from pathlib import Path

from prompt_refiner.config.settings import Settings
from prompt_refiner.database.models import SubmissionRecord
from prompt_refiner.database.repositories.submission_repository import SubmissionRepository
from prompt_refiner.logging.logger import Log
from prompt_refiner.refinement.factory import RefinerFactory
from prompt_refiner.submission.file_storage import LocalFileStorage
from prompt_refiner.submission.intake import IntakeValidator
from prompt_refiner.submission.models import FileUpload
from prompt_refiner.submission.pipeline import PipelineContext, PipelineStep
from prompt_refiner.submission.steps import (
    CreateSubmissionStep,
    MarkFailedStep,
    PersistOutcomeStep,
    RefineStep,
    UploadFilesStep,
    ValidateIntakeStep,
)


class Processor:
    """Runs one submission from intake to a terminal state.

    Pipeline: validate -> upload -> create (processing) -> refine -> persist.
    Errors raised before the record exists propagate to the caller. Any
    error after that is recorded as a failed submission and the failed
    record is returned.
    """

    def __init__(self, steps: Sequence[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = list(steps)
        self._failed_step = failed_step

    def submit(self, text: str, files: Sequence[FileUpload] = ()) -> SubmissionRecord:
        context = PipelineContext(text=text, uploads=list(files))
        for step in self._steps:
            try:
                context = step.run(context)
            except Exception as exc:
                if context.record is None:
                    Log.error(f"Submission aborted before it was recorded: {exc}")
                    raise
                context.error_message = str(exc)
                context = self._failed_step.run(context)
                break

        if context.record is None:
            raise RuntimeError("Pipeline finished without creating a submission")
        return context.record


def build_processor(
    settings: Settings,
    repo: SubmissionRepository | None = None,
) -> Processor:
    """Build a Processor with all required adapters."""
    repo = repo or SubmissionRepository()
    storage = LocalFileStorage(
        root=Path(settings.storage_root),
        public_base_url=settings.storage_public_base_url,
    )
    refiner = RefinerFactory.create(settings)
    steps: list[PipelineStep] = [
        ValidateIntakeStep(IntakeValidator.from_settings(settings)),
        UploadFilesStep(storage),
        CreateSubmissionStep(repo),
        RefineStep(refiner),
        PersistOutcomeStep(repo),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(repo))
