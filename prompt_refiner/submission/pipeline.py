from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from prompt_refiner.database.models import SubmissionRecord
from prompt_refiner.refinement.models import InputType, RefinementOutcome, StoredFile
from prompt_refiner.submission.models import FileUpload


@dataclass(slots=True)
class PipelineContext:
    text: str
    uploads: list[FileUpload] = field(default_factory=list)
    stored_files: list[StoredFile] = field(default_factory=list)
    input_type: InputType | None = None
    record: SubmissionRecord | None = None
    outcome: RefinementOutcome | None = None
    processing_time_ms: int | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
