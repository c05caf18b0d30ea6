"""Aggregate figures over submission history."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from prompt_refiner.database.models import SubmissionRecord
from prompt_refiner.refinement.models import InputType
from prompt_refiner.submission.models import SubmissionStatus

SCORE_BUCKETS: tuple[tuple[str, int, int], ...] = (
    ("0-20", 0, 20),
    ("21-40", 21, 40),
    ("41-60", 41, 60),
    ("61-80", 61, 80),
    ("81-100", 81, 100),
)


@dataclass(frozen=True)
class SubmissionStats:
    total: int
    completed: int
    unsuccessful: int
    success_rate: int
    average_score: int
    by_input_type: dict[str, int] = field(default_factory=dict)
    by_status: dict[str, int] = field(default_factory=dict)
    score_distribution: dict[str, int] = field(default_factory=dict)


def summarize(
    records: Sequence[SubmissionRecord],
    days: int | None = None,
    now: datetime | None = None,
) -> SubmissionStats:
    """Summarize submissions, optionally restricted to the last `days` days.

    Failed and rejected submissions both count as unsuccessful. Rates and
    averages are rounded to whole numbers.
    """
    if days is not None:
        cutoff = (now or datetime.now(UTC)) - timedelta(days=days)
        records = [r for r in records if r.created_at is not None and r.created_at >= cutoff]

    total = len(records)
    completed = sum(1 for r in records if r.status == SubmissionStatus.COMPLETED)
    unsuccessful = sum(
        1 for r in records if r.status in (SubmissionStatus.FAILED, SubmissionStatus.REJECTED)
    )
    scores = [r.completeness_score for r in records if r.completeness_score is not None]

    by_input_type = {t.value: 0 for t in InputType}
    by_status = {s.value: 0 for s in SubmissionStatus}
    for record in records:
        by_input_type[record.input_type.value] += 1
        by_status[record.status.value] += 1

    distribution = {label: 0 for label, _, _ in SCORE_BUCKETS}
    for score in scores:
        for label, low, high in SCORE_BUCKETS:
            if low <= score <= high:
                distribution[label] += 1
                break

    return SubmissionStats(
        total=total,
        completed=completed,
        unsuccessful=unsuccessful,
        success_rate=round(completed / total * 100) if total else 0,
        average_score=round(sum(scores) / len(scores)) if scores else 0,
        by_input_type=by_input_type,
        by_status=by_status,
        score_distribution=distribution,
    )
