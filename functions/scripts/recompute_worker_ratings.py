#!/usr/bin/env python3
"""
Recompute worker rating aggregates from the reviews collection.

Repairs workers/{workerId}.avgRating and .ratingCount after missed or
failed trigger runs, using the same recount as the rating triggers.
Workers with no remaining reviews are reset to 0/0.

totalJobs is not touched.

Usage:
    python scripts/recompute_worker_ratings.py --worker-id w1
    python scripts/recompute_worker_ratings.py --all --dry-run

Environment:
    Application Default Credentials (gcloud auth application-default login),
    or FIRESTORE_EMULATOR_HOST for the local emulator.
"""

import argparse
import sys
from pathlib import Path

# Add functions dir to path for imports
FUNCTIONS_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(FUNCTIONS_DIR))

from db.client import get_db  # noqa: E402
from db.reviews_service import list_reviewed_worker_ids  # noqa: E402
from db.workers_service import list_rated_worker_ids  # noqa: E402
from triggers.rating_trigger import recompute_worker_rating  # noqa: E402
from utils.trigger_logging import BackfillLogContext  # noqa: E402


def collect_worker_ids(db, worker_ids: list[str], all_workers: bool) -> list[str]:
    """
    Resolve which workers to recompute.

    With --all: every worker that has reviews, plus every worker whose
    stored ratingCount is still above zero (their reviews may all be gone).
    """
    if not all_workers:
        return sorted(set(worker_ids))
    return sorted(list_reviewed_worker_ids(db) | list_rated_worker_ids(db))


def run(db, worker_ids: list[str], dry_run: bool = False, _recompute=recompute_worker_rating) -> dict:
    """
    Recompute each worker's rating, continuing past individual failures.

    Returns:
        Counts: {"updated": int, "failed": int}
    """
    log = BackfillLogContext(dry_run=dry_run)
    log.log_info(f"Recomputing ratings for {len(worker_ids)} workers")

    updated = 0
    failed = 0
    for worker_id in worker_ids:
        try:
            _recompute(db, worker_id, reset_when_empty=True, dry_run=dry_run)
            updated += 1
        except Exception as e:
            # Already logged with traceback by recompute_worker_rating
            log.log_error(f"Failed for worker {worker_id}: {e}")
            failed += 1

    log.log_info(f"Done - {updated} recomputed, {failed} failed")
    return {"updated": updated, "failed": failed}


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recompute worker rating aggregates from reviews")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--worker-id", action="append", dest="worker_ids", default=[],
                        help="Worker ID to recompute (repeatable)")
    target.add_argument("--all", action="store_true", dest="all_workers",
                        help="Recompute every worker with reviews or a stored rating")
    parser.add_argument("--dry-run", action="store_true",
                        help="Compute and log values without writing")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    db = get_db()

    worker_ids = collect_worker_ids(db, args.worker_ids, args.all_workers)
    if not worker_ids:
        print("No workers to recompute")
        return 0

    result = run(db, worker_ids, dry_run=args.dry_run)
    print(f"✓ Recomputed {result['updated']} workers ({result['failed']} failed)")
    return 1 if result["failed"] else 0


if __name__ == "__main__":
    sys.exit(main())
