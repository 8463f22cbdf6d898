"""
Operation events for Fuel Tracker.

Each entry write, reset, export and statistics request produces one JSON log
line with everything known about it: the submitted values, validation
outcome, step timings and result. Writes are always logged; read-side events
are sampled unless they failed, ran slow or saw invalid segments.
"""

import random
import time
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Optional

import structlog

from .time_utils import utc_now

structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(sort_keys=True),
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

SERVICE_NAME = "fuel-tracker"
DEFAULT_SAMPLE_RATE = 0.05
SLOW_OPERATION_MS = 1000

# Metrics that keep a sampled event whenever they are non-zero
ALWAYS_KEEP_METRICS = ("invalid_segments",)


class WideEvent:
    """
    Collects fields for one operation and logs them as a single line.

    Usage:
        event = WideEvent("statistics")
        event.add_context(entry_count=12)
        with event.timer("build"):
            payload = build_statistics(records, settings)
        event.add_business_metric("invalid_segments", 1)
        event.mark_success().emit()
    """

    def __init__(self, operation: str, request_id: Optional[str] = None, trace_id: Optional[str] = None):
        self.operation = operation
        self._started = time.perf_counter()
        self.fields: Dict[str, Any] = {
            "operation": operation,
            "service": SERVICE_NAME,
            "started_at": utc_now().isoformat(),
            "request_id": request_id or uuid.uuid4().hex,
        }
        if trace_id:
            self.fields["trace_id"] = trace_id

        self.log = structlog.get_logger(__name__)

    @property
    def elapsed_ms(self) -> float:
        return (time.perf_counter() - self._started) * 1000

    def add_context(self, **fields) -> "WideEvent":
        self.fields.update(fields)
        return self

    def add_business_metric(self, name: str, value: Any) -> "WideEvent":
        self.fields.setdefault("metrics", {})[name] = value
        return self

    def add_error(self, error: Exception, **details) -> "WideEvent":
        self.fields["error"] = {"type": type(error).__name__, "message": str(error)}
        if details:
            self.fields["error"]["details"] = details
        self.fields["success"] = False
        return self

    def mark_success(self) -> "WideEvent":
        self.fields["success"] = True
        return self

    def mark_failure(self, reason: str) -> "WideEvent":
        self.fields["success"] = False
        self.fields["failure_reason"] = reason
        return self

    @contextmanager
    def timer(self, step: str):
        """Record how long a step took under timings_ms."""
        started = time.perf_counter()
        try:
            yield
        finally:
            elapsed = (time.perf_counter() - started) * 1000
            self.fields.setdefault("timings_ms", {})[step] = round(elapsed, 2)

    def should_emit(self, sample_rate: float = DEFAULT_SAMPLE_RATE, slow_threshold_ms: float = SLOW_OPERATION_MS) -> bool:
        """Keep failures, slow operations and flagged metrics; sample the rest."""
        if self.fields.get("success") is False:
            return True
        if self.elapsed_ms > slow_threshold_ms:
            return True

        metrics = self.fields.get("metrics", {})
        if any(metrics.get(name) for name in ALWAYS_KEEP_METRICS):
            return True

        return random.random() < sample_rate

    def emit(self, level: str = "info", force: bool = False) -> None:
        """Log the event unless sampling drops it."""
        if not force and not self.should_emit():
            return

        self.fields["duration_ms"] = round(self.elapsed_ms, 2)
        log_method = getattr(self.log, level, self.log.info)
        log_method(self.operation, **self.fields)


@contextmanager
def track_operation(operation: str, **fields):
    """
    Wrap a block in a WideEvent that is always logged.

    Usage:
        with track_operation("export", export_format="csv") as event:
            event.add_business_metric("entries", len(records))
    """
    event = WideEvent(operation).add_context(**fields)
    try:
        yield event
    except Exception as e:
        event.add_error(e)
        event.emit(level="error", force=True)
        raise

    event.mark_success()
    event.emit(force=True)


def log_entry_event(entry_id: Optional[str], operation: str, success: bool, **fields) -> None:
    """Log a refuel entry write (created, updated, deleted, rejected, all_deleted)."""
    event = WideEvent(f"entry_{operation}", trace_id=entry_id)
    if entry_id:
        event.add_context(entry_id=entry_id)
    event.add_context(**fields)

    if success:
        event.mark_success()
    else:
        event.mark_failure(fields.get("error", "unknown"))

    event.emit(force=True)
