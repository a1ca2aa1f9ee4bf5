"""
Database service functions for worker documents.

Workers are created by the app; these functions only update the derived
fields (avgRating, ratingCount, totalJobs, updatedAt).
"""

import logging

from google.cloud import firestore
from google.cloud.firestore import Client
from google.cloud.firestore_v1.base_query import FieldFilter

from models import Collection, WorkerField, WorkerRating

logger = logging.getLogger(__name__)


def update_worker_rating(db: Client, rating: WorkerRating) -> None:
    """
    Write a recomputed rating aggregate onto the worker document.

    Overwrites avgRating and ratingCount (last write wins) and stamps
    updatedAt with the server time.

    Raises:
        google.api_core.exceptions.NotFound: If the worker document doesn't exist
    """
    db.collection(Collection.WORKERS).document(rating.worker_id).update({
        **rating.to_update(),
        WorkerField.UPDATED_AT: firestore.SERVER_TIMESTAMP,
    })


def increment_total_jobs(db: Client, worker_id: str, amount: int = 1) -> None:
    """
    Atomically increment a worker's completed jobs counter.

    Uses a server-side increment so concurrent completions for the same
    worker are all counted.

    Raises:
        google.api_core.exceptions.NotFound: If the worker document doesn't exist
    """
    db.collection(Collection.WORKERS).document(worker_id).update({
        WorkerField.TOTAL_JOBS: firestore.Increment(amount),
        WorkerField.UPDATED_AT: firestore.SERVER_TIMESTAMP,
    })


def list_rated_worker_ids(db: Client) -> set[str]:
    """Get the IDs of all workers whose stored ratingCount is above zero."""
    snapshots = (
        db.collection(Collection.WORKERS)
        .where(filter=FieldFilter(WorkerField.RATING_COUNT, ">", 0))
        .select([WorkerField.RATING_COUNT])
        .stream()
    )
    return {snapshot.id for snapshot in snapshots}
