from dataclasses import dataclass, field
from enum import StrEnum


class InputType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    DOCUMENT = "document"
    MIXED = "mixed"


class SourceType(StrEnum):
    TEXT = "text"
    IMAGE = "image"
    DOCUMENT = "document"


@dataclass(frozen=True)
class StoredFile:
    """A file already persisted to object storage."""

    url: str
    name: str
    mime_type: str

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")


@dataclass(frozen=True)
class TextPart:
    """Plain text content part of the user message."""

    text: str

    def to_message(self) -> dict[str, object]:
        return {"type": "text", "text": self.text}


@dataclass(frozen=True)
class ImagePart:
    """Image content part, referenced by URL."""

    url: str

    def to_message(self) -> dict[str, object]:
        return {"type": "image_url", "image_url": {"url": self.url}}


ContentPart = TextPart | ImagePart


@dataclass
class RefinedPromptMetadata:
    id: str = ""
    timestamp: str = ""
    source_types: list[str] = field(default_factory=list)
    confidence_score: int = 0


@dataclass
class ProductOverview:
    title: str = ""
    description: str = ""
    target_users: str = ""
    problem_statement: str = ""


@dataclass
class Requirements:
    functional: list[str] = field(default_factory=list)
    non_functional: list[str] = field(default_factory=list)
    priority_ranked: bool = False


@dataclass
class Constraints:
    technical: list[str] = field(default_factory=list)
    business: list[str] = field(default_factory=list)
    timeline: str = ""


@dataclass
class Deliverables:
    expected_outputs: list[str] = field(default_factory=list)
    success_criteria: list[str] = field(default_factory=list)


@dataclass
class ValidationFlags:
    missing_sections: list[str] = field(default_factory=list)
    ambiguous_items: list[str] = field(default_factory=list)
    confidence_notes: str = ""

    @property
    def passed(self) -> bool:
        return not self.missing_sections and not self.ambiguous_items


@dataclass
class RefinedPrompt:
    """Structured product-development extraction produced from a submission."""

    metadata: RefinedPromptMetadata = field(default_factory=RefinedPromptMetadata)
    product_overview: ProductOverview = field(default_factory=ProductOverview)
    requirements: Requirements = field(default_factory=Requirements)
    constraints: Constraints = field(default_factory=Constraints)
    deliverables: Deliverables = field(default_factory=Deliverables)
    validation_flags: ValidationFlags = field(default_factory=ValidationFlags)


@dataclass(frozen=True)
class Rejected:
    """The model (or the intake short-circuit) declared the input irrelevant."""

    reason: str


@dataclass(frozen=True)
class Refined:
    """The model returned a refined prompt, not yet finalized."""

    prompt: RefinedPrompt


@dataclass(frozen=True)
class Malformed:
    """The model output could not be interpreted."""

    reason: str
    raw: str = ""


InterpretedResponse = Rejected | Refined | Malformed


@dataclass(frozen=True)
class FinalizedRefinement:
    """A refined prompt stamped by the system and ready for persistence."""

    prompt: RefinedPrompt
    validation_passed: bool
    title: str


RefinementOutcome = Rejected | FinalizedRefinement
