"""
Trigger logging utilities with Protocol + Mixin pattern.

Provides trait-like logging functionality for Firestore trigger handlers.
Each trigger defines its type and context format, the mixin provides
consistent log_info/log_warning/log_error methods.

Usage:
    class RatingLogContext(TriggerLoggerMixin):
        trigger_type = TriggerType.RATING

        def __init__(self, worker_id: str):
            self.worker_id = worker_id

        def _log_context(self) -> str:
            return f"worker={self.worker_id}"

    ctx = RatingLogContext("w1")
    ctx.log_info("Recomputing")  # [RatingTrigger:worker=w1] Recomputing
"""

import logging
from enum import Enum
from typing import Optional, Protocol

from config.settings import settings

logger = logging.getLogger()
logger.setLevel(settings.get_log_level())


class TriggerType(Enum):
    """Trigger type enum for log prefix identification."""
    RATING = "RatingTrigger"
    REVIEW_GUARD = "ReviewGuard"
    JOB_STATS = "JobStatsTrigger"
    REVIEW_CLEANUP = "ReviewCleanupTrigger"
    BACKFILL = "RatingBackfill"


class TriggerLoggerProtocol(Protocol):
    """
    Protocol defining what classes using TriggerLoggerMixin must provide.

    This enables type checking - mypy will error if a class uses the mixin
    but doesn't define trigger_type or _log_context().
    """
    trigger_type: TriggerType

    def _log_context(self) -> str:
        """Return context string like 'worker=w1' or 'job=j1:worker=w1'."""
        ...


class TriggerLoggerMixin:
    """
    Mixin providing log_info/log_warning/log_error methods.

    Classes using this mixin must satisfy TriggerLoggerProtocol:
    - Define trigger_type: TriggerType class attribute
    - Implement _log_context() -> str method

    Log format: [TriggerType:context] message

    Examples:
    - [RatingTrigger:worker=w1] Updated rating 4.5 (2 reviews)
    - [ReviewGuard:review=r9:job=j1] Duplicate review detected
    """

    def _log_prefix(self: TriggerLoggerProtocol) -> str:
        """Build log prefix from trigger type and context."""
        return f"[{self.trigger_type.value}:{self._log_context()}]"

    def log_info(self: TriggerLoggerProtocol, message: str) -> None:
        """Log info message with trigger prefix."""
        logger.info(f"{self._log_prefix()} {message}")

    def log_warning(self: TriggerLoggerProtocol, message: str) -> None:
        """Log warning message with trigger prefix."""
        logger.warning(f"{self._log_prefix()} {message}")

    def log_error(self: TriggerLoggerProtocol, message: str) -> None:
        """Log error message with trigger prefix."""
        logger.error(f"{self._log_prefix()} {message}")

    def log_exception(self: TriggerLoggerProtocol, message: str) -> None:
        """Log error message with trigger prefix and the active traceback."""
        logger.exception(f"{self._log_prefix()} {message}")


# =============================================================================
# Concrete Context Classes
# =============================================================================

class RatingLogContext(TriggerLoggerMixin):
    """
    Logging context for the rating aggregator triggers.

    Log format: [RatingTrigger:worker=X] message
    """
    trigger_type = TriggerType.RATING

    def __init__(self, worker_id: Optional[str]):
        self.worker_id = worker_id

    def _log_context(self) -> str:
        return f"worker={self.worker_id}"


class ReviewGuardLogContext(TriggerLoggerMixin):
    """
    Logging context for the duplicate review guard.

    Log format: [ReviewGuard:review=X:job=Y] message
    """
    trigger_type = TriggerType.REVIEW_GUARD

    def __init__(self, review_id: str, job_id: Optional[str]):
        self.review_id = review_id
        self.job_id = job_id

    def _log_context(self) -> str:
        return f"review={self.review_id}:job={self.job_id}"


class JobStatsLogContext(TriggerLoggerMixin):
    """
    Logging context for the job completion counter.

    Log format: [JobStatsTrigger:job=X:worker=Y] message
    """
    trigger_type = TriggerType.JOB_STATS

    def __init__(self, job_id: str, worker_id: Optional[str]):
        self.job_id = job_id
        self.worker_id = worker_id

    def _log_context(self) -> str:
        return f"job={self.job_id}:worker={self.worker_id}"


class ReviewCleanupLogContext(TriggerLoggerMixin):
    """
    Logging context for the job delete cascade.

    Log format: [ReviewCleanupTrigger:job=X] message
    """
    trigger_type = TriggerType.REVIEW_CLEANUP

    def __init__(self, job_id: str):
        self.job_id = job_id

    def _log_context(self) -> str:
        return f"job={self.job_id}"


class BackfillLogContext(TriggerLoggerMixin):
    """
    Logging context for the rating backfill script.

    Log format: [RatingBackfill:dry_run=X] message
    """
    trigger_type = TriggerType.BACKFILL

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def _log_context(self) -> str:
        return f"dry_run={self.dry_run}"
