import uuid
from collections.abc import Sequence
from dataclasses import asdict
from enum import StrEnum
from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from prompt_refiner.database.connection import get_connection
from prompt_refiner.database.models import SubmissionRecord
from prompt_refiner.refinement.models import InputType, RefinedPrompt, StoredFile
from prompt_refiner.refinement.validator import build_refined_prompt
from prompt_refiner.submission.models import HistoryQuery, SubmissionStatus, Transition

_COLUMNS = """
    id, title, status, input_type, raw_text, file_urls, file_names, file_types,
    refined_prompt, completeness_score, validation_passed, validation_errors,
    processing_time_ms, error_message, created_at, updated_at
"""

_JSON_COLUMNS = frozenset({"refined_prompt", "validation_errors"})

MAX_HISTORY_LIMIT = 500


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SubmissionRepository:
    """Database operations for the prompt_submissions table."""

    def create_processing(
        self,
        input_type: InputType,
        raw_text: str | None,
        files: Sequence[StoredFile],
    ) -> SubmissionRecord:
        """Insert a new submission in 'processing' state."""
        submission_id = str(uuid.uuid4())
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO prompt_submissions
                    (id, status, input_type, raw_text, file_urls, file_names, file_types)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        submission_id,
                        SubmissionStatus.PROCESSING.value,
                        input_type.value,
                        raw_text,
                        [f.url for f in files],
                        [f.name for f in files],
                        [f.mime_type for f in files],
                    ),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            raise RuntimeError("INSERT into prompt_submissions returned no row")
        return _row_to_record(row)

    def apply_transition(
        self, submission_id: str, transition: Transition
    ) -> SubmissionRecord | None:
        """Move a processing submission to its terminal state in one UPDATE.

        Returns None when the row is gone (deleted while processing) or is
        already terminal; nothing is written in that case.
        """
        columns = transition.to_columns()
        assignments = ", ".join(f"{name} = %s" for name in columns)
        params = [_to_db_value(name, value) for name, value in columns.items()]
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE prompt_submissions
                    SET {assignments}, updated_at = NOW()
                    WHERE id = %s AND status = %s
                    RETURNING {_COLUMNS}
                    """,
                    (*params, submission_id, SubmissionStatus.PROCESSING.value),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            return None
        return _row_to_record(row)

    def find_by_id(self, submission_id: str) -> SubmissionRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM prompt_submissions WHERE id = %s",
                    (submission_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _row_to_record(row)

    def list_history(self, query: HistoryQuery) -> list[SubmissionRecord]:
        """List submissions newest first, optionally filtered.

        Search is a case-insensitive substring match over title and raw text.
        """
        conditions: list[str] = []
        params: list[Any] = []
        if query.status is not None:
            conditions.append("status = %s")
            params.append(query.status.value)
        if query.input_type is not None:
            conditions.append("input_type = %s")
            params.append(query.input_type.value)
        if query.search and query.search.strip():
            pattern = f"%{escape_like(query.search.strip())}%"
            conditions.append(
                "(title ILIKE %s ESCAPE '\\' OR raw_text ILIKE %s ESCAPE '\\')"
            )
            params.extend([pattern, pattern])

        where = f"WHERE {' AND '.join(conditions)}" if conditions else ""
        limit = max(1, min(query.limit, MAX_HISTORY_LIMIT))
        params.append(limit)

        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM prompt_submissions
                    {where}
                    ORDER BY created_at DESC, id DESC
                    LIMIT %s
                    """,
                    tuple(params),
                )
                rows = cur.fetchall()

        return [_row_to_record(row) for row in rows]

    def delete(self, submission_id: str) -> None:
        """Delete a submission. Deleting a missing id is not an error."""
        with get_connection() as conn:
            conn.execute(
                "DELETE FROM prompt_submissions WHERE id = %s",
                (submission_id,),
            )
            conn.commit()


def _to_db_value(name: str, value: object) -> object:
    if isinstance(value, StrEnum):
        return value.value
    if name not in _JSON_COLUMNS:
        return value
    if isinstance(value, RefinedPrompt):
        return Jsonb(asdict(value))
    return Jsonb(value)


def _row_to_record(row: dict[str, Any]) -> SubmissionRecord:
    refined = row["refined_prompt"]
    return SubmissionRecord(
        id=str(row["id"]),
        title=row["title"],
        status=SubmissionStatus(row["status"]),
        input_type=InputType(row["input_type"]),
        raw_text=row["raw_text"],
        file_urls=list(row["file_urls"] or []),
        file_names=list(row["file_names"] or []),
        file_types=list(row["file_types"] or []),
        refined_prompt=build_refined_prompt(refined) if refined is not None else None,
        completeness_score=row["completeness_score"],
        validation_passed=bool(row["validation_passed"]),
        validation_errors=list(row["validation_errors"] or []),
        processing_time_ms=row["processing_time_ms"],
        error_message=row["error_message"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
