import time
from dataclasses import replace

from prompt_refiner.database.models import SubmissionRecord
from prompt_refiner.database.repositories.submission_repository import SubmissionRepository
from prompt_refiner.logging.logger import Log
from prompt_refiner.refinement.input_normalizer import classify_input
from prompt_refiner.refinement.models import FinalizedRefinement, Rejected
from prompt_refiner.refinement.refiner import Refiner
from prompt_refiner.submission.file_storage import BaseFileStorage
from prompt_refiner.submission.intake import IntakeValidator
from prompt_refiner.submission.models import (
    CompletedTransition,
    FailedTransition,
    RejectedTransition,
    Transition,
)
from prompt_refiner.submission.pipeline import PipelineContext, PipelineStep


def _apply(
    repo: SubmissionRepository, record: SubmissionRecord, transition: Transition
) -> SubmissionRecord:
    updated = repo.apply_transition(record.id, transition)
    if updated is not None:
        return updated
    Log.warning(
        f"Submission {record.id} was deleted or already finished before it could be "
        f"marked {transition.status}; result kept in memory only"
    )
    return replace(record, **transition.to_columns())


class ValidateIntakeStep(PipelineStep):
    def __init__(self, validator: IntakeValidator) -> None:
        self._validator = validator

    def run(self, context: PipelineContext) -> PipelineContext:
        self._validator.validate(context.text, context.uploads)
        return context


class UploadFilesStep(PipelineStep):
    """Uploads every file in order. The first failure aborts the submission."""

    def __init__(self, storage: BaseFileStorage) -> None:
        self._storage = storage

    def run(self, context: PipelineContext) -> PipelineContext:
        context.stored_files = [self._storage.upload(upload) for upload in context.uploads]
        if context.stored_files:
            Log.info(f"Uploaded {len(context.stored_files)} files")
        return context


class CreateSubmissionStep(PipelineStep):
    def __init__(self, repo: SubmissionRepository) -> None:
        self._repo = repo

    def run(self, context: PipelineContext) -> PipelineContext:
        context.input_type = classify_input(context.text, context.stored_files)
        context.record = self._repo.create_processing(
            input_type=context.input_type,
            raw_text=context.text or None,
            files=context.stored_files,
        )
        Log.info(
            f"Submission {context.record.id} created as processing "
            f"({context.input_type} input)"
        )
        return context


class RefineStep(PipelineStep):
    def __init__(self, refiner: Refiner) -> None:
        self._refiner = refiner

    def run(self, context: PipelineContext) -> PipelineContext:
        started = time.monotonic()
        context.outcome = self._refiner.refine(context.text, context.stored_files)
        context.processing_time_ms = int((time.monotonic() - started) * 1000)
        Log.info(f"Refinement round trip took {context.processing_time_ms} ms")
        return context


class PersistOutcomeStep(PipelineStep):
    def __init__(self, repo: SubmissionRepository) -> None:
        self._repo = repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None or context.outcome is None:
            raise ValueError("PipelineContext.record and outcome must be set before persist")

        transition: Transition
        if isinstance(context.outcome, Rejected):
            transition = RejectedTransition(reason=context.outcome.reason)
        elif isinstance(context.outcome, FinalizedRefinement):
            transition = CompletedTransition(
                refined_prompt=context.outcome.prompt,
                title=context.outcome.title,
                completeness_score=context.outcome.prompt.metadata.confidence_score,
                validation_passed=context.outcome.validation_passed,
                processing_time_ms=context.processing_time_ms or 0,
            )
        else:
            raise TypeError(f"Unexpected refinement outcome: {context.outcome!r}")

        context.record = _apply(self._repo, context.record, transition)
        Log.info(f"Submission {context.record.id} marked as {transition.status}")
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, repo: SubmissionRepository) -> None:
        self._repo = repo

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.record is None:
            raise ValueError("PipelineContext.record must be set before marking failed")
        context.record = _apply(
            self._repo, context.record, FailedTransition(error_message=context.error_message)
        )
        Log.error(f"Submission {context.record.id} marked as failed: {context.error_message}")
        return context
