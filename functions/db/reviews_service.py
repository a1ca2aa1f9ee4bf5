"""
Database service functions for review documents.

Provides the review queries and deletes used by the rating, duplicate
guard and job cleanup triggers.
"""

import logging

from google.cloud.firestore import Client, DocumentReference
from google.cloud.firestore_v1.base_query import FieldFilter

from models import Collection

logger = logging.getLogger(__name__)


def get_worker_ratings(db: Client, worker_id: str) -> list:
    """
    Get the rating of every review written for a worker.

    Args:
        db: Firestore client
        worker_id: Worker document ID

    Returns:
        Raw `rating` values, one per review (None where the field is missing)
    """
    snapshots = (
        db.collection(Collection.REVIEWS)
        .where(filter=FieldFilter("workerId", "==", worker_id))
        .get()
    )
    return [(snapshot.to_dict() or {}).get("rating") for snapshot in snapshots]


def count_reviews_for_job(db: Client, job_id: str, customer_id: str) -> int:
    """
    Count reviews a customer has written for a job.

    Args:
        db: Firestore client
        job_id: Job document ID
        customer_id: Customer (review author) ID

    Returns:
        Number of matching reviews, including one just created
    """
    snapshots = (
        db.collection(Collection.REVIEWS)
        .where(filter=FieldFilter("jobId", "==", job_id))
        .where(filter=FieldFilter("customerId", "==", customer_id))
        .get()
    )
    return len(snapshots)


def delete_review(db: Client, review_id: str) -> None:
    """Delete a single review document."""
    db.collection(Collection.REVIEWS).document(review_id).delete()


def get_review_refs_for_job(db: Client, job_id: str) -> list[DocumentReference]:
    """Get references to every review written for a job."""
    snapshots = (
        db.collection(Collection.REVIEWS)
        .where(filter=FieldFilter("jobId", "==", job_id))
        .get()
    )
    return [snapshot.reference for snapshot in snapshots]


def delete_reviews_batch(db: Client, refs: list[DocumentReference]) -> int:
    """
    Delete reviews in a single atomic batch.

    Either every document is deleted or none is.

    Args:
        db: Firestore client
        refs: Review document references

    Returns:
        Number of reviews deleted
    """
    if not refs:
        return 0

    batch = db.batch()
    for ref in refs:
        batch.delete(ref)
    batch.commit()

    logger.info(f"Batch deleted {len(refs)} reviews")

    return len(refs)


def list_reviewed_worker_ids(db: Client) -> set[str]:
    """
    Get the IDs of all workers that have at least one review.

    Streams only the workerId field of each review.
    """
    worker_ids = set()
    for snapshot in db.collection(Collection.REVIEWS).select(["workerId"]).stream():
        worker_id = (snapshot.to_dict() or {}).get("workerId")
        if worker_id:
            worker_ids.add(worker_id)
    return worker_ids
