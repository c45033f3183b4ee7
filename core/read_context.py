"""
Explicit read context for store calls.

A ``ReadContext`` travels with every availability query. It carries the
caller's deadline or cancellation token and, optionally, the database alias
the reads must use (for example a replica or a snapshot connection). Store
errors are translated into the platform's exception types here so that every
service reports them the same way.
"""

import logging
import threading
import time
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from typing import Optional

from django.db import DatabaseError, connections

from core.exceptions import SearchTimeoutException, StoreUnavailableException

logger = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for a statement cancelled by statement_timeout or a cancel request
QUERY_CANCELED = "57014"

# SQLite VM instructions between deadline checks
SQLITE_PROGRESS_STEPS = 10000


@dataclass(frozen=True)
class ReadContext:
    """Deadline, cancellation token and connection alias for one unit of work."""

    deadline: Optional[float] = None
    using: Optional[str] = None
    cancel_event: Optional[threading.Event] = field(default=None, compare=False)

    @classmethod
    def with_timeout(cls, seconds: Optional[float], using: Optional[str] = None, cancel_event=None):
        """Build a context whose deadline is ``seconds`` from now (``None`` for no deadline)."""
        deadline = None if seconds is None else time.monotonic() + float(seconds)
        return cls(deadline=deadline, using=using, cancel_event=cancel_event)

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def is_cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self, stage: str) -> None:
        """Raise SearchTimeoutException if the deadline passed or the caller cancelled."""
        if self.is_cancelled():
            raise SearchTimeoutException(f"Search cancelled during {stage}.", stage=stage)
        if self.expired():
            raise SearchTimeoutException(f"Search deadline exceeded during {stage}.", stage=stage)

    def queryset(self, manager):
        """Return ``manager``'s queryset bound to the pinned alias, if any."""
        qs = manager.all()
        if self.using:
            qs = qs.using(self.using)
        return qs

    def interrupted(self, error) -> bool:
        """True when a store error was caused by the deadline or a cancellation."""
        if self.expired() or self.is_cancelled():
            return True
        cause = error.__cause__
        # psycopg 3 exposes sqlstate, psycopg2 pgcode
        code = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
        return code == QUERY_CANCELED

    def bounded_execute(self, execute, sql, params, many, context):
        """
        Execute wrapper that hands the remaining budget to the database.

        PostgreSQL gets a ``statement_timeout``; SQLite gets a progress
        handler that aborts the statement once the deadline passes or the
        caller cancels. Other backends only get the pre-flight check.
        """
        if self.is_cancelled() or self.expired():
            raise SearchTimeoutException("Search deadline exceeded before the query ran.")

        connection = context["connection"]
        remaining = self.remaining()

        if connection.vendor == "postgresql" and remaining is not None:
            timeout_ms = max(1, int(remaining * 1000))
            raw_cursor = context["cursor"].cursor
            if connection.in_atomic_block:
                raw_cursor.execute(f"SET LOCAL statement_timeout = {timeout_ms}")
                return execute(sql, params, many, context)
            raw_cursor.execute(f"SET statement_timeout = {timeout_ms}")
            try:
                return execute(sql, params, many, context)
            finally:
                raw_cursor.execute("RESET statement_timeout")

        if connection.vendor == "sqlite":
            raw_connection = connection.connection
            raw_connection.set_progress_handler(
                lambda: int(self.expired() or self.is_cancelled()), SQLITE_PROGRESS_STEPS
            )
            try:
                return execute(sql, params, many, context)
            finally:
                raw_connection.set_progress_handler(None, SQLITE_PROGRESS_STEPS)

        return execute(sql, params, many, context)

    @contextmanager
    def read(self, stage: str):
        """
        Wrap one store read.

        The deadline is checked before and after the read and passed to the
        database for every statement run inside the block, so a slow query
        is cancelled rather than awaited. A cancelled or timed-out statement
        surfaces as SearchTimeoutException; any other database failure as
        StoreUnavailableException. Both are tagged with ``stage``.
        Querysets must be evaluated inside the block.
        """
        self.check(stage)
        with ExitStack() as stack:
            if self.deadline is not None or self.cancel_event is not None:
                for connection in connections.all():
                    stack.enter_context(connection.execute_wrapper(self.bounded_execute))
            try:
                yield self
            except SearchTimeoutException as e:
                if e.stage is None:
                    e.stage = stage
                raise
            except DatabaseError as e:
                if self.interrupted(e):
                    logger.warning(f"Store read interrupted during {stage}: {str(e)}")
                    raise SearchTimeoutException(
                        f"Search deadline exceeded during {stage}.", stage=stage
                    ) from e
                logger.error(f"Store read failed during {stage}: {str(e)}")
                raise StoreUnavailableException(
                    f"The booking store could not be read during {stage}.",
                    stage=stage,
                    cause=e,
                ) from e
        self.check(stage)
