class SubmissionError(Exception):
    """Base exception for all submission-related errors."""


class SubmissionValidationError(SubmissionError):
    """Raised when the submitted text or files break intake rules."""

    def __init__(self, errors: list[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


class UploadError(SubmissionError):
    """Raised when a file cannot be written to object storage."""

    def __init__(self, file_name: str, cause: str) -> None:
        super().__init__(f"Failed to upload {file_name}: {cause}")
        self.file_name = file_name
