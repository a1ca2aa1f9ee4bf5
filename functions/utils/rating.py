"""
Rating aggregation for worker profiles.

Worker ratings are always recomputed from the full set of reviews
(never incrementally adjusted), so a missed or retried event cannot make
the stored aggregate drift from the reviews collection.
"""

import logging
import math
import numbers
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional

from config.settings import settings
from models.worker import WorkerRating

logger = logging.getLogger(__name__)


def round_half_up(value: float, decimals: Optional[int] = None) -> float:
    """
    Round to `decimals` places with half-up rounding.

    Goes through the decimal string representation so values like 4.125
    round to 4.13 instead of Python's banker's rounding / binary error.

    Args:
        value: Value to round
        decimals: Decimal places (defaults to settings.RATING_DECIMALS)

    Returns:
        Rounded float
    """
    if decimals is None:
        decimals = settings.RATING_DECIMALS
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def is_valid_rating(rating) -> bool:
    """Finite numeric ratings only (bool is excluded even though it is an int)."""
    return (
        isinstance(rating, numbers.Real)
        and not isinstance(rating, bool)
        and math.isfinite(rating)
    )


def compute_worker_rating(worker_id: str, ratings: Iterable) -> WorkerRating:
    """
    Compute a worker's rating aggregate from the ratings of all their reviews.

    Ratings that are missing or not numeric are left out of both the sum
    and the count.

    Args:
        worker_id: Worker the reviews belong to
        ratings: Raw `rating` field values of every review for the worker

    Returns:
        WorkerRating (avg_rating=0, rating_count=0 when nothing is valid)

    Example:
        compute_worker_rating("w1", [4, 5])     -> avg_rating=4.5, rating_count=2
        compute_worker_rating("w1", [4, 5, 3])  -> avg_rating=4.0, rating_count=3
    """
    total = 0
    count = 0
    for rating in ratings:
        if not is_valid_rating(rating):
            logger.warning(f"Ignoring non-numeric rating {rating!r} for worker {worker_id}")
            continue
        total += rating
        count += 1

    if count == 0:
        return WorkerRating(worker_id=worker_id, avg_rating=0.0, rating_count=0)

    return WorkerRating(
        worker_id=worker_id,
        avg_rating=round_half_up(total / count),
        rating_count=count,
    )
