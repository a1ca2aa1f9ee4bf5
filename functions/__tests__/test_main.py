"""
Unit tests for the Firestore event bindings in main.py.

Calls the undecorated handlers (__wrapped__) with MagicMock events and
checks what each one passes to its trigger logic.

Run: python3 -m pytest __tests__/test_main.py -v
"""

from unittest.mock import MagicMock, patch

import main
from models import Review

REVIEW_DATA = {"workerId": "w1", "customerId": "c1", "jobId": "j1", "rating": 4}


def make_snapshot(data: dict | None) -> MagicMock:
    """Create a mock DocumentSnapshot (data=None -> document doesn't exist)."""
    snapshot = MagicMock()
    snapshot.exists = data is not None
    snapshot.to_dict.return_value = data
    return snapshot


def make_event(params: dict, data) -> MagicMock:
    """Create a mock firestore_fn.Event."""
    event = MagicMock()
    event.params = params
    event.data = data
    return event


def make_change_event(params: dict, before: dict | None, after: dict | None) -> MagicMock:
    """Create a mock Event carrying a Change of two snapshots."""
    return make_event(params, MagicMock(before=make_snapshot(before), after=make_snapshot(after)))


@patch("main.get_db")
class TestReviewBindings:
    """reviews/{reviewId} create / update / delete / write."""

    @patch("main.process_review_created")
    def test_created_passes_new_review(self, mock_process, mock_get_db):
        event = make_event({"reviewId": "r1"}, make_snapshot(REVIEW_DATA))

        main.update_worker_rating.__wrapped__(event)

        mock_process.assert_called_once_with(
            mock_get_db.return_value, Review.from_dict("r1", REVIEW_DATA)
        )

    @patch("main.process_review_updated")
    def test_updated_passes_before_then_after(self, mock_process, mock_get_db):
        event = make_change_event({"reviewId": "r1"}, REVIEW_DATA, {**REVIEW_DATA, "rating": 2})

        main.update_worker_rating_on_update.__wrapped__(event)

        _, before, after = mock_process.call_args.args
        assert before == Review.from_dict("r1", REVIEW_DATA)
        assert after.rating == 2
        assert after.review_id == "r1"

    @patch("main.process_review_deleted")
    def test_deleted_passes_before_image(self, mock_process, mock_get_db):
        """Delete events carry the deleted document; its workerId drives the recount."""
        event = make_event({"reviewId": "r1"}, make_snapshot(REVIEW_DATA))

        main.update_worker_rating_on_delete.__wrapped__(event)

        review = mock_process.call_args.args[1]
        assert review.review_id == "r1"
        assert review.worker_id == "w1"

    @patch("main.process_review_written")
    def test_written_create_has_no_before(self, mock_process, mock_get_db):
        event = make_change_event({"reviewId": "r9"}, None, REVIEW_DATA)

        main.validate_review.__wrapped__(event)

        mock_process.assert_called_once_with(mock_get_db.return_value, "r9", None, REVIEW_DATA)


@patch("main.get_db")
class TestJobBindings:
    """jobs/{jobId} update / delete."""

    @patch("main.process_job_updated")
    def test_updated_passes_job_id_and_images(self, mock_process, mock_get_db):
        before = {"status": "in_progress", "workerId": "w1"}
        after = {"status": "completed", "workerId": "w1"}
        event = make_change_event({"jobId": "j1"}, before, after)

        main.update_job_stats.__wrapped__(event)

        mock_process.assert_called_once_with(mock_get_db.return_value, "j1", before, after)

    @patch("main.process_job_deleted")
    def test_deleted_uses_path_job_id(self, mock_process, mock_get_db):
        event = make_event({"jobId": "j1"}, make_snapshot({"status": "completed"}))

        main.cleanup_reviews_on_job_delete.__wrapped__(event)

        mock_process.assert_called_once_with(mock_get_db.return_value, "j1")
