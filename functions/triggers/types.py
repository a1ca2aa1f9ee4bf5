"""
Helpers for reading Firestore trigger event payloads.

Document events carry DocumentSnapshot objects (or a Change of two
snapshots for update/write events). The trigger logic works on plain
dicts so it can be tested without building snapshots.
"""

from dataclasses import dataclass
from typing import Any, Optional


def snapshot_to_dict(snapshot: Any) -> Optional[dict]:
    """
    Convert a document snapshot to its data dict.

    Returns None if there is no snapshot or the document doesn't exist
    (e.g., the before-image of a create event).
    """
    if snapshot is None or not getattr(snapshot, "exists", False):
        return None
    return snapshot.to_dict() or {}


@dataclass
class DocumentChange:
    """Before and after images of a written document as plain dicts."""
    before: Optional[dict]
    after: Optional[dict]

    @property
    def is_create(self) -> bool:
        return self.before is None and self.after is not None

    @classmethod
    def from_change(cls, change: Any) -> "DocumentChange":
        """Create from a firestore_fn.Change event payload."""
        if change is None:
            return cls(before=None, after=None)
        return cls(
            before=snapshot_to_dict(change.before),
            after=snapshot_to_dict(change.after),
        )
