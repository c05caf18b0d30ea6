from dataclasses import dataclass, field
from datetime import datetime

from prompt_refiner.refinement.models import InputType, RefinedPrompt
from prompt_refiner.submission.models import SubmissionStatus


@dataclass
class SubmissionRecord:
    """Represents a row from the prompt_submissions table."""

    id: str
    status: SubmissionStatus
    input_type: InputType
    title: str | None = None
    raw_text: str | None = None
    file_urls: list[str] = field(default_factory=list)
    file_names: list[str] = field(default_factory=list)
    file_types: list[str] = field(default_factory=list)
    refined_prompt: RefinedPrompt | None = None
    completeness_score: int | None = None
    validation_passed: bool = False
    validation_errors: list[str] = field(default_factory=list)
    processing_time_ms: int | None = None
    error_message: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if not (len(self.file_urls) == len(self.file_names) == len(self.file_types)):
            raise ValueError(
                f"Submission {self.id}: file_urls, file_names and file_types "
                "must have the same length"
            )
        if (self.refined_prompt is not None) != (self.status == SubmissionStatus.COMPLETED):
            raise ValueError(
                f"Submission {self.id}: refined_prompt must be set exactly when "
                f"status is completed (status={self.status})"
            )
