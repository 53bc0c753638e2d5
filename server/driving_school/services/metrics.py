"""
Request metrics for the health endpoint.
"""
import threading
import time
from datetime import datetime, timezone
from typing import Dict


class RequestMetrics:
    """Counts requests, error responses and unhandled faults since startup."""

    def __init__(self, error_budget_cost: float = 0.01):
        self.error_budget_cost = error_budget_cost
        self.started_at = datetime.now(timezone.utc)
        self._start = time.monotonic()
        self.total_requests = 0
        self.total_errors = 0
        self.error_budget_used = 0.0
        self._lock = threading.Lock()

    def record_request(self, status_code: int) -> None:
        with self._lock:
            self.total_requests += 1
            if status_code >= 400:
                self.total_errors += 1

    def record_fault(self) -> None:
        """An unhandled exception reached the top-level handler."""
        with self._lock:
            self.error_budget_used += self.error_budget_cost

    def uptime_seconds(self) -> int:
        return int(time.monotonic() - self._start)

    def error_rate(self) -> float:
        with self._lock:
            return self.total_errors / max(self.total_requests, 1)

    def snapshot(self) -> Dict[str, float]:
        with self._lock:
            return {
                "totalRequests": self.total_requests,
                "totalErrors": self.total_errors,
                "errorBudgetUsed": self.error_budget_used,
            }
