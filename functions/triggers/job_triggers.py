"""
Job Triggers

Bound in main.py to:
- jobs/{jobId} update → process_job_updated
- jobs/{jobId} delete → process_job_deleted

Job completion counter:
    When status moves from anything else to "completed" and the job has a
    workerId, the worker's totalJobs is incremented by 1 with a server-side
    atomic increment. completed → completed and completed → other are
    ignored (totalJobs is never decremented).

Review cleanup:
    When a job is deleted, all reviews with that jobId are deleted in one
    atomic batch (all or nothing).

Log Format:
- [JobStatsTrigger:job=X:worker=Y] message
- [ReviewCleanupTrigger:job=X] message
"""

from typing import Optional

from google.cloud.firestore import Client

from db.reviews_service import get_review_refs_for_job, delete_reviews_batch
from db.workers_service import increment_total_jobs
from models import Job
from utils.trigger_logging import JobStatsLogContext, ReviewCleanupLogContext


def is_completion_transition(before: Job, after: Job) -> bool:
    """True only for a transition into "completed" from another status."""
    return not before.is_completed and after.is_completed


def process_job_updated(
    db: Client,
    job_id: str,
    before: Optional[dict],
    after: Optional[dict],
    # Dependency injection for testing
    _increment_total_jobs=increment_total_jobs,
) -> dict:
    """
    Count a completed job towards the assigned worker's totalJobs.

    Args:
        db: Firestore client
        job_id: ID of the updated job
        before: Job data before the update
        after: Job data after the update
        _increment_total_jobs: Increment function (for testing)

    Returns:
        Status dict: {"status": "incremented" | "skipped", "job_id", ...}
    """
    before_job = Job.from_dict(job_id, before)
    after_job = Job.from_dict(job_id, after)

    if not is_completion_transition(before_job, after_job):
        return {"status": "skipped", "job_id": job_id, "reason": "not_completed_transition"}

    log = JobStatsLogContext(job_id, after_job.worker_id)

    if not after_job.worker_id:
        log.log_info("Job completed without an assigned worker, nothing to count")
        return {"status": "skipped", "job_id": job_id, "reason": "missing_worker_id"}

    try:
        _increment_total_jobs(db, after_job.worker_id)
    except Exception as e:
        log.log_exception(f"Error updating job stats: {e}")
        raise

    log.log_info("Incremented total jobs")

    return {"status": "incremented", "job_id": job_id, "worker_id": after_job.worker_id}


def process_job_deleted(
    db: Client,
    job_id: str,
    # Dependency injection for testing
    _get_review_refs_for_job=get_review_refs_for_job,
    _delete_reviews_batch=delete_reviews_batch,
) -> dict:
    """
    Delete every review written for a deleted job.

    Args:
        db: Firestore client
        job_id: ID of the deleted job (from the document path)
        _*: Dependency injection for DB operations (for testing)

    Returns:
        Status dict: {"status": "deleted" | "skipped", "job_id", "reviews_deleted"}
    """
    log = ReviewCleanupLogContext(job_id)

    try:
        refs = _get_review_refs_for_job(db, job_id)

        if not refs:
            log.log_info("No reviews to delete for job")
            return {"status": "skipped", "job_id": job_id, "reviews_deleted": 0}

        deleted = _delete_reviews_batch(db, refs)

    except Exception as e:
        log.log_exception(f"Error cleaning up reviews: {e}")
        raise

    log.log_info(f"Deleted {deleted} reviews")

    return {"status": "deleted", "job_id": job_id, "reviews_deleted": deleted}
