import uuid

from prompt_refiner.database.repositories.submission_repository import SubmissionRepository
from prompt_refiner.refinement.models import InputType, StoredFile
from prompt_refiner.refinement.validator import build_refined_prompt
from prompt_refiner.submission.models import (
    CompletedTransition,
    FailedTransition,
    HistoryQuery,
    RejectedTransition,
    SubmissionStatus,
)


def _create(repo: SubmissionRepository, cleanup: list[str], text: str) -> str:
    record = repo.create_processing(InputType.TEXT, text, [])
    cleanup.append(record.id)
    return record.id


class TestSubmissionLifecycle:
    def test_create_then_complete(
        self, integration_cleanup: list[str], refined_prompt_payload: dict[str, object]
    ) -> None:
        repo = SubmissionRepository()
        files = [StoredFile(url="https://f/1-a.png", name="a.png", mime_type="image/png")]
        record = repo.create_processing(InputType.MIXED, "A task manager for teams", files)
        integration_cleanup.append(record.id)
        assert record.status == SubmissionStatus.PROCESSING
        assert record.file_names == ["a.png"]

        prompt = build_refined_prompt(refined_prompt_payload)
        updated = repo.apply_transition(
            record.id,
            CompletedTransition(
                refined_prompt=prompt,
                title="TaskFlow",
                completeness_score=85,
                validation_passed=True,
                processing_time_ms=1234,
            ),
        )

        assert updated is not None
        assert updated.status == SubmissionStatus.COMPLETED
        assert updated.refined_prompt == prompt
        assert updated.processing_time_ms == 1234
        assert updated.updated_at is not None

    def test_terminal_state_is_never_overwritten(self, integration_cleanup: list[str]) -> None:
        repo = SubmissionRepository()
        submission_id = _create(repo, integration_cleanup, "A task manager for teams")
        repo.apply_transition(submission_id, RejectedTransition(reason="Not a product"))

        second = repo.apply_transition(submission_id, FailedTransition(error_message="late"))

        assert second is None
        stored = repo.find_by_id(submission_id)
        assert stored is not None
        assert stored.status == SubmissionStatus.REJECTED
        assert stored.validation_errors == ["Not a product"]

    def test_update_after_delete_returns_none(self, integration_cleanup: list[str]) -> None:
        repo = SubmissionRepository()
        submission_id = _create(repo, integration_cleanup, "A task manager for teams")
        repo.delete(submission_id)

        assert repo.apply_transition(submission_id, FailedTransition(error_message="x")) is None
        assert repo.find_by_id(submission_id) is None

    def test_delete_missing_is_silent(self, integration_pool: None) -> None:
        SubmissionRepository().delete(str(uuid.uuid4()))


class TestHistory:
    def test_search_and_order_are_stable(self, integration_cleanup: list[str]) -> None:
        repo = SubmissionRepository()
        marker = uuid.uuid4().hex
        first = _create(repo, integration_cleanup, f"Older idea {marker}")
        second = _create(repo, integration_cleanup, f"Newer idea {marker.upper()}")
        query = HistoryQuery(search=marker, limit=10)

        results = repo.list_history(query)

        assert [r.id for r in results] == [second, first]
        assert [r.id for r in repo.list_history(query)] == [second, first]

    def test_search_wildcards_match_literally(self, integration_cleanup: list[str]) -> None:
        repo = SubmissionRepository()
        marker = uuid.uuid4().hex
        _create(repo, integration_cleanup, f"Plain idea {marker}")

        assert repo.list_history(HistoryQuery(search=f"{marker[:4]}%")) == []
