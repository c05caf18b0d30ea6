import mimetypes
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from prompt_refiner.refinement.models import InputType, RefinedPrompt

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class SubmissionStatus(StrEnum):
    # PENDING is reserved for queued submissions; the synchronous pipeline never writes it.
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (
            SubmissionStatus.COMPLETED,
            SubmissionStatus.FAILED,
            SubmissionStatus.REJECTED,
        )


@dataclass(frozen=True)
class FileUpload:
    """A file picked by the user, not yet in object storage."""

    name: str
    mime_type: str
    content: bytes
    preview: str | None = None

    @property
    def kind(self) -> str:
        return "image" if self.mime_type.startswith("image/") else "document"

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path) -> "FileUpload":
        mime_type, _ = mimetypes.guess_type(path.name)
        if mime_type is None and path.suffix.lower() == ".docx":
            mime_type = DOCX_MIME_TYPE
        return cls(
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            content=path.read_bytes(),
        )


@dataclass(frozen=True)
class CompletedTransition:
    """processing -> completed."""

    refined_prompt: RefinedPrompt
    title: str
    completeness_score: int
    validation_passed: bool
    processing_time_ms: int

    @property
    def status(self) -> SubmissionStatus:
        return SubmissionStatus.COMPLETED

    def to_columns(self) -> dict[str, object]:
        return {
            "status": self.status,
            "title": self.title,
            "refined_prompt": self.refined_prompt,
            "completeness_score": self.completeness_score,
            "validation_passed": self.validation_passed,
            "validation_errors": [],
            "processing_time_ms": self.processing_time_ms,
            "error_message": None,
        }


@dataclass(frozen=True)
class RejectedTransition:
    """processing -> rejected. The reason doubles as the only validation error."""

    reason: str

    @property
    def status(self) -> SubmissionStatus:
        return SubmissionStatus.REJECTED

    def to_columns(self) -> dict[str, object]:
        return {
            "status": self.status,
            "error_message": self.reason,
            "validation_errors": [self.reason],
        }


@dataclass(frozen=True)
class FailedTransition:
    """processing -> failed."""

    error_message: str

    @property
    def status(self) -> SubmissionStatus:
        return SubmissionStatus.FAILED

    def to_columns(self) -> dict[str, object]:
        return {
            "status": self.status,
            "error_message": self.error_message,
        }


Transition = CompletedTransition | RejectedTransition | FailedTransition


@dataclass(frozen=True)
class HistoryQuery:
    """Filters for the history listing. Results are always newest first."""

    status: SubmissionStatus | None = None
    input_type: InputType | None = None
    search: str | None = None
    limit: int = 50
