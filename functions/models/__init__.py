class Collection:
    """Firestore collection names."""
    REVIEWS = "reviews"
    WORKERS = "workers"
    JOBS = "jobs"


from models.review import Review
from models.job import Job, JobStatus
from models.worker import WorkerField, WorkerRating

__all__ = ["Collection", "Review", "Job", "JobStatus", "WorkerField", "WorkerRating"]
