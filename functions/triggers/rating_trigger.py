"""
Rating Aggregator Triggers

Keeps workers/{workerId}.avgRating and .ratingCount in sync with the
reviews collection. Bound in main.py to:
- reviews/{reviewId} create  → process_review_created
- reviews/{reviewId} update  → process_review_updated (only when rating changed)
- reviews/{reviewId} delete  → process_review_deleted

Every event recomputes the aggregate from all reviews of the worker
(full recount, never an incremental delta):
1. Query all reviews with workerId == worker
2. avgRating = mean(rating) rounded half-up to 2 decimals, ratingCount = count
3. Single update of the worker doc with avgRating, ratingCount, updatedAt

Concurrent events for the same worker each write their own snapshot;
last write wins.

Log Format:
All logs use prefix [RatingTrigger:worker=X] for Cloud Logging filtering.
"""

from typing import Optional

from google.cloud.firestore import Client

from db.reviews_service import get_worker_ratings
from db.workers_service import update_worker_rating
from models import Review
from utils.rating import compute_worker_rating
from utils.trigger_logging import RatingLogContext


def recompute_worker_rating(
    db: Client,
    worker_id: str,
    reset_when_empty: bool,
    dry_run: bool = False,
    # Dependency injection for testing
    _get_worker_ratings=get_worker_ratings,
    _update_worker_rating=update_worker_rating,
) -> dict:
    """
    Recompute a worker's rating aggregate from all of their reviews.

    Args:
        db: Firestore client
        worker_id: Worker whose aggregate is rebuilt
        reset_when_empty: When no reviews remain, write avgRating=0/ratingCount=0
            (True after a delete) instead of skipping the write
        dry_run: Compute but don't write
        _*: Dependency injection for DB operations (for testing)

    Returns:
        Status dict: {"status": "updated" | "skipped", "worker_id", ...}

    Raises:
        Exception: Any Firestore read/write failure, after logging it
    """
    log = RatingLogContext(worker_id)

    try:
        ratings = _get_worker_ratings(db, worker_id)

        if not ratings and not reset_when_empty:
            log.log_info("No reviews found for worker")
            return {"status": "skipped", "worker_id": worker_id, "reason": "no_reviews"}

        rating = compute_worker_rating(worker_id, ratings)

        if dry_run:
            log.log_info(f"[DRY RUN] Would set rating {rating.avg_rating:.2f} ({rating.rating_count} reviews)")
        else:
            _update_worker_rating(db, rating)
            log.log_info(f"Updated rating {rating.avg_rating:.2f} ({rating.rating_count} reviews)")

        return {
            "status": "updated",
            "worker_id": worker_id,
            "avg_rating": rating.avg_rating,
            "rating_count": rating.rating_count,
        }

    except Exception as e:
        log.log_exception(f"Error updating worker rating: {e}")
        raise


def _skip_missing_worker(review: Optional[Review]) -> Optional[dict]:
    """Return a skip result if the review has no worker to aggregate for."""
    if review is None or not review.worker_id:
        review_id = review.review_id if review else None
        RatingLogContext(None).log_warning(f"Review {review_id} has no workerId, nothing to update")
        return {"status": "skipped", "worker_id": None, "reason": "missing_worker_id"}
    return None


def process_review_created(
    db: Client,
    review: Optional[Review],
    _get_worker_ratings=get_worker_ratings,
    _update_worker_rating=update_worker_rating,
) -> dict:
    """
    Recompute the worker's rating after a review is created.

    The new review itself is expected in the query result, so an empty
    result is logged and skipped rather than treated as an error.
    """
    skipped = _skip_missing_worker(review)
    if skipped:
        return skipped

    return recompute_worker_rating(
        db,
        review.worker_id,
        reset_when_empty=False,
        _get_worker_ratings=_get_worker_ratings,
        _update_worker_rating=_update_worker_rating,
    )


def process_review_updated(
    db: Client,
    before: Review,
    after: Review,
    _get_worker_ratings=get_worker_ratings,
    _update_worker_rating=update_worker_rating,
) -> dict:
    """
    Recompute the worker's rating after a review's rating is edited.

    Edits that leave the rating unchanged are skipped without a query.
    """
    if before.rating == after.rating:
        return {"status": "skipped", "worker_id": after.worker_id, "reason": "rating_unchanged"}

    skipped = _skip_missing_worker(after)
    if skipped:
        return skipped

    return recompute_worker_rating(
        db,
        after.worker_id,
        reset_when_empty=False,
        _get_worker_ratings=_get_worker_ratings,
        _update_worker_rating=_update_worker_rating,
    )


def process_review_deleted(
    db: Client,
    review: Optional[Review],
    _get_worker_ratings=get_worker_ratings,
    _update_worker_rating=update_worker_rating,
) -> dict:
    """
    Recompute the worker's rating after a review is deleted.

    Uses the deleted review's before-image for the workerId. Deleting the
    worker's last review resets avgRating and ratingCount to 0.
    """
    skipped = _skip_missing_worker(review)
    if skipped:
        return skipped

    return recompute_worker_rating(
        db,
        review.worker_id,
        reset_when_empty=True,
        _get_worker_ratings=_get_worker_ratings,
        _update_worker_rating=_update_worker_rating,
    )
