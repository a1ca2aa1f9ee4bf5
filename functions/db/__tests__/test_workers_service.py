"""
Unit tests for worker database services.

Run: python3 -m pytest db/__tests__/test_workers_service.py -v
"""

from unittest.mock import MagicMock

from google.cloud import firestore

from db.workers_service import increment_total_jobs, list_rated_worker_ids, update_worker_rating
from models import WorkerRating


class TestUpdateWorkerRating:
    """Tests for update_worker_rating."""

    def test_writes_rating_fields_and_server_timestamp(self):
        mock_db = MagicMock()

        update_worker_rating(mock_db, WorkerRating(worker_id="w1", avg_rating=4.5, rating_count=2))

        mock_db.collection.assert_called_once_with("workers")
        mock_db.collection.return_value.document.assert_called_once_with("w1")
        update = mock_db.collection.return_value.document.return_value.update
        update.assert_called_once_with({
            "avgRating": 4.5,
            "ratingCount": 2,
            "updatedAt": firestore.SERVER_TIMESTAMP,
        })


class TestIncrementTotalJobs:
    """Tests for increment_total_jobs."""

    def test_uses_server_side_increment(self):
        """Should never read-modify-write; the increment happens on the server."""
        mock_db = MagicMock()

        increment_total_jobs(mock_db, "w1")

        doc = mock_db.collection.return_value.document
        doc.assert_called_once_with("w1")
        doc.return_value.get.assert_not_called()

        payload = doc.return_value.update.call_args.args[0]
        assert isinstance(payload["totalJobs"], firestore.Increment)
        assert payload["totalJobs"].value == 1
        assert payload["updatedAt"] is firestore.SERVER_TIMESTAMP


class TestListRatedWorkerIds:
    """Tests for list_rated_worker_ids."""

    def test_returns_document_ids(self):
        mock_db = MagicMock()
        query = mock_db.collection.return_value.where.return_value.select.return_value
        query.stream.return_value = [MagicMock(id="w1"), MagicMock(id="w3")]

        assert list_rated_worker_ids(mock_db) == {"w1", "w3"}
        field_filter = mock_db.collection.return_value.where.call_args.kwargs["filter"]
        assert (field_filter.field_path, field_filter.op_string, field_filter.value) == ("ratingCount", ">", 0)
