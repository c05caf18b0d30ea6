import json
import re
from dataclasses import asdict

from prompt_refiner.database.models import SubmissionRecord

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


def export_refined_prompt_json(record: SubmissionRecord) -> str:
    """Render a completed submission's refined prompt as indented JSON.

    Raises:
        ValueError: if the submission has no refined prompt.
    """
    if record.refined_prompt is None:
        raise ValueError(f"Submission {record.id} has no refined prompt ({record.status})")
    return json.dumps(asdict(record.refined_prompt), indent=2, ensure_ascii=False)


def export_filename(record: SubmissionRecord) -> str:
    """Download name: {title or "prompt"}-{id}.json"""
    title = _UNSAFE_FILENAME_CHARS.sub("_", record.title or "prompt")
    return f"{title}-{record.id}.json"
