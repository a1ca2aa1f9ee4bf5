from dataclasses import dataclass
from typing import Optional


class JobStatus:
    """Job status constants (written by the mobile app)."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class Job:
    """
    Job document in the `jobs` collection.

    Only the fields the triggers read are mapped; the rest of the
    document is ignored.
    """
    job_id: str
    status: Optional[str] = None
    worker_id: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == JobStatus.COMPLETED

    @classmethod
    def from_dict(cls, job_id: str, data: Optional[dict]) -> "Job":
        data = data or {}
        return cls(
            job_id=job_id,
            status=data.get("status"),
            worker_id=data.get("workerId") or None,
        )
