"""
Firebase Cloud Functions entry point.

Binds the trigger logic in triggers/ to Firestore document events.
Firebase discovers the deployed functions from the module-level names.
"""
from firebase_functions import firestore_fn
from firebase_functions.firestore_fn import Change, DocumentSnapshot, Event

from config.settings import settings
from db.client import get_db
from models import Review
from triggers.job_triggers import process_job_deleted, process_job_updated
from triggers.rating_trigger import (
    process_review_created,
    process_review_deleted,
    process_review_updated,
)
from triggers.review_guard import process_review_written
from triggers.types import DocumentChange, snapshot_to_dict

REVIEW_DOCUMENT = "reviews/{reviewId}"
JOB_DOCUMENT = "jobs/{jobId}"

_trigger_options = {
    "region": settings.FUNCTIONS_REGION,
    "database": settings.FIRESTORE_DATABASE,
}


# Review rating aggregates
@firestore_fn.on_document_created(document=REVIEW_DOCUMENT, **_trigger_options)
def update_worker_rating(event: Event[DocumentSnapshot | None]) -> None:
    """Recompute the worker's rating when a review is created."""
    review_id = event.params["reviewId"]
    process_review_created(get_db(), Review.from_dict(review_id, snapshot_to_dict(event.data)))


@firestore_fn.on_document_updated(document=REVIEW_DOCUMENT, **_trigger_options)
def update_worker_rating_on_update(event: Event[Change[DocumentSnapshot | None]]) -> None:
    """Recompute the worker's rating when a review's rating changes."""
    review_id = event.params["reviewId"]
    change = DocumentChange.from_change(event.data)
    process_review_updated(
        get_db(),
        Review.from_dict(review_id, change.before),
        Review.from_dict(review_id, change.after),
    )


@firestore_fn.on_document_deleted(document=REVIEW_DOCUMENT, **_trigger_options)
def update_worker_rating_on_delete(event: Event[DocumentSnapshot | None]) -> None:
    """Recompute the worker's rating when a review is deleted."""
    review_id = event.params["reviewId"]
    process_review_deleted(get_db(), Review.from_dict(review_id, snapshot_to_dict(event.data)))


# Duplicate review guard
@firestore_fn.on_document_written(document=REVIEW_DOCUMENT, **_trigger_options)
def validate_review(event: Event[Change[DocumentSnapshot | None]]) -> None:
    """Delete a newly created review if the customer already reviewed the job."""
    change = DocumentChange.from_change(event.data)
    process_review_written(get_db(), event.params["reviewId"], change.before, change.after)


# Job triggers
@firestore_fn.on_document_updated(document=JOB_DOCUMENT, **_trigger_options)
def update_job_stats(event: Event[Change[DocumentSnapshot | None]]) -> None:
    """Count a job towards the worker's totalJobs when it becomes completed."""
    change = DocumentChange.from_change(event.data)
    process_job_updated(get_db(), event.params["jobId"], change.before, change.after)


@firestore_fn.on_document_deleted(document=JOB_DOCUMENT, **_trigger_options)
def cleanup_reviews_on_job_delete(event: Event[DocumentSnapshot | None]) -> None:
    """Delete all reviews of a deleted job."""
    process_job_deleted(get_db(), event.params["jobId"])
