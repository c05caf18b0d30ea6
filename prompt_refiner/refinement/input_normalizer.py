"""Turns raw submission input into the multi-part user message."""

from collections.abc import Sequence

from prompt_refiner.refinement.models import (
    ContentPart,
    ImagePart,
    InputType,
    SourceType,
    StoredFile,
    TextPart,
)

JSON_ONLY_INSTRUCTION = (
    "\n\nAnalyze the above input and return ONLY valid JSON following the schema "
    "in your instructions. No markdown, no explanation, just JSON."
)


def build_content_parts(text: str, files: Sequence[StoredFile]) -> list[ContentPart]:
    """Build the ordered content parts for the completion request.

    Returns an empty list when there is neither text nor files; callers must
    treat that as "no input" and skip the gateway call.
    """
    parts: list[ContentPart] = []
    if text and text.strip():
        parts.append(TextPart(text=f"TEXT INPUT:\n{text}"))

    for index, stored in enumerate(files):
        name = stored.name or f"file_{index}"
        if stored.is_image:
            parts.append(ImagePart(url=stored.url))
            parts.append(TextPart(text=f"[Image: {name}]"))
        else:
            parts.append(
                TextPart(
                    text=f"[Document attached: {name} ({stored.mime_type}). URL: {stored.url}]"
                )
            )

    if not parts:
        return parts
    parts.append(TextPart(text=JSON_ONLY_INSTRUCTION))
    return parts


def classify_input(text: str, files: Sequence[StoredFile]) -> InputType:
    """Declared input classification: mixed > image > document > text."""
    has_text = bool(text and text.strip())
    has_images = any(f.is_image for f in files)
    has_documents = any(not f.is_image for f in files)

    if has_text and (has_images or has_documents):
        return InputType.MIXED
    if has_images:
        return InputType.IMAGE
    if has_documents:
        return InputType.DOCUMENT
    return InputType.TEXT


def derive_source_types(text: str, files: Sequence[StoredFile]) -> list[str]:
    """Source types present in the real input, in text/image/document order."""
    source_types: list[str] = []
    if text and text.strip():
        source_types.append(SourceType.TEXT.value)
    if any(f.is_image for f in files):
        source_types.append(SourceType.IMAGE.value)
    if any(not f.is_image for f in files):
        source_types.append(SourceType.DOCUMENT.value)
    return source_types
