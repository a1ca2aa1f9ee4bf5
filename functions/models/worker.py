from dataclasses import dataclass


class WorkerField:
    """
    Derived fields this project writes on `workers/{workerId}`.

    Worker documents are created by the app; the triggers only update them.
    """
    AVG_RATING = "avgRating"
    RATING_COUNT = "ratingCount"
    TOTAL_JOBS = "totalJobs"
    UPDATED_AT = "updatedAt"


@dataclass
class WorkerRating:
    """Recomputed rating aggregate for one worker."""
    worker_id: str
    avg_rating: float = 0.0
    rating_count: int = 0

    def to_update(self) -> dict:
        """Firestore field values for the worker update (without updatedAt)."""
        return {
            WorkerField.AVG_RATING: self.avg_rating,
            WorkerField.RATING_COUNT: self.rating_count,
        }
