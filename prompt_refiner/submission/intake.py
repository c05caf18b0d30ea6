from collections.abc import Sequence

from prompt_refiner.config.settings import Settings
from prompt_refiner.submission.exceptions import SubmissionValidationError
from prompt_refiner.submission.models import DOCX_MIME_TYPE, FileUpload

ACCEPTED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/webp",
    "application/pdf",
    DOCX_MIME_TYPE,
})

_BYTES_PER_MB = 1024 * 1024


class IntakeValidator:
    """Checks submit preconditions before anything is uploaded or persisted."""

    def __init__(
        self,
        *,
        min_text_length: int = 10,
        max_text_length: int = 10000,
        max_files: int = 10,
        max_file_size_mb: int = 20,
    ) -> None:
        self._min_text_length = min_text_length
        self._max_text_length = max_text_length
        self._max_files = max_files
        self._max_file_size_mb = max_file_size_mb

    @classmethod
    def from_settings(cls, settings: Settings) -> "IntakeValidator":
        return cls(
            min_text_length=settings.min_text_length,
            max_text_length=settings.max_text_length,
            max_files=settings.max_files,
            max_file_size_mb=settings.max_file_size_mb,
        )

    def errors(self, text: str, files: Sequence[FileUpload]) -> list[str]:
        """Return every rule the input breaks, empty when it is acceptable."""
        errors: list[str] = []
        stripped = text.strip()
        if not stripped and not files:
            errors.append("Please provide text or upload files.")
        if stripped and len(stripped) < self._min_text_length:
            errors.append(f"Text must be at least {self._min_text_length} characters.")
        if len(text) > self._max_text_length:
            errors.append(f"Text must be less than {self._max_text_length} characters.")
        if len(files) > self._max_files:
            errors.append(f"Maximum {self._max_files} files allowed")
        for upload in files:
            if upload.mime_type not in ACCEPTED_MIME_TYPES:
                errors.append(f"{upload.name}: unsupported file type {upload.mime_type}")
            if upload.size_bytes > self._max_file_size_mb * _BYTES_PER_MB:
                errors.append(f"{upload.name}: file exceeds {self._max_file_size_mb}MB")
        return errors

    def validate(self, text: str, files: Sequence[FileUpload]) -> None:
        """Raises:
            SubmissionValidationError: listing every violation.
        """
        errors = self.errors(text, files)
        if errors:
            raise SubmissionValidationError(errors)
