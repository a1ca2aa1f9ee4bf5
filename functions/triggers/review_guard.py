"""
Duplicate Review Guard

Bound in main.py to any write on reviews/{reviewId}; acts only when the
write is a create (no before-image, after-image present).

A customer may leave at most one review per job. The check runs after
the review has already been written, so it is a compensating action:
1. Count reviews with the same jobId and customerId
2. If more than one exists, delete the review that was just created
3. Raise an already-exists error so the rejection shows up in the
   function's error reporting

Two reviews created at nearly the same moment can race past each other's
check; this is accepted.

Log Format:
All logs use prefix [ReviewGuard:review=X:job=Y] for Cloud Logging filtering.
"""

from typing import Optional

from firebase_functions import https_fn
from google.cloud.firestore import Client

from db.reviews_service import count_reviews_for_job, delete_review
from models import Review
from triggers.types import DocumentChange
from utils.trigger_logging import ReviewGuardLogContext

DUPLICATE_REVIEW_MESSAGE = "A review already exists for this job."


class DuplicateReviewError(https_fn.HttpsError):
    """Raised after a duplicate review for the same job and customer is deleted."""


def duplicate_review_error() -> DuplicateReviewError:
    return DuplicateReviewError(
        code=https_fn.FunctionsErrorCode.ALREADY_EXISTS,
        message=DUPLICATE_REVIEW_MESSAGE,
    )


def process_review_written(
    db: Client,
    review_id: str,
    before: Optional[dict],
    after: Optional[dict],
    # Dependency injection for testing
    _count_reviews_for_job=count_reviews_for_job,
    _delete_review=delete_review,
) -> dict:
    """
    Reject a newly created review if the customer already reviewed the job.

    Args:
        db: Firestore client
        review_id: ID of the written review document
        before: Document data before the write (None on create)
        after: Document data after the write (None on delete)
        _*: Dependency injection for DB operations (for testing)

    Returns:
        Status dict: {"status": "accepted" | "skipped", "review_id", ...}

    Raises:
        DuplicateReviewError: The review was a duplicate and has been deleted
        Exception: Any Firestore read/write failure, after logging it
    """
    # Only run on create
    if not DocumentChange(before=before, after=after).is_create:
        return {"status": "skipped", "review_id": review_id, "reason": "not_a_create"}

    review = Review.from_dict(review_id, after)
    log = ReviewGuardLogContext(review_id, review.job_id)

    if not review.job_id or not review.customer_id:
        log.log_warning(f"Review is missing jobId or customerId (customer={review.customer_id})")
        return {"status": "skipped", "review_id": review_id, "reason": "missing_job_or_customer"}

    try:
        count = _count_reviews_for_job(db, review.job_id, review.customer_id)

        if count > 1:
            log.log_warning(f"Duplicate review detected for customer {review.customer_id} ({count} reviews), deleting...")
            _delete_review(db, review_id)
            raise duplicate_review_error()

        return {"status": "accepted", "review_id": review_id}

    except DuplicateReviewError:
        raise
    except Exception as e:
        log.log_exception(f"Error validating review: {e}")
        raise
