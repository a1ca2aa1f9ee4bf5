from dataclasses import dataclass
from typing import Optional, Union

Rating = Union[int, float]


@dataclass
class Review:
    """
    Review document in the `reviews` collection.

    Written by a customer after a job is completed. At most one review
    may exist per (job_id, customer_id) pair.
    """
    review_id: str
    worker_id: Optional[str] = None
    customer_id: Optional[str] = None
    job_id: Optional[str] = None
    rating: Optional[Rating] = None

    @classmethod
    def from_dict(cls, review_id: str, data: Optional[dict]) -> "Review":
        """Create from Firestore document data (camelCase field names)."""
        data = data or {}
        return cls(
            review_id=review_id,
            worker_id=data.get("workerId") or None,
            customer_id=data.get("customerId") or None,
            job_id=data.get("jobId") or None,
            rating=data.get("rating"),
        )
