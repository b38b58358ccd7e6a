"""
Usage Metrics Module

The verifier reports one outcome label per completed lookup to a
UsageMetricsSink. Persisting the counters is the sink owner's business;
this module ships a no-op sink and a thread-safe in-memory sink that keeps
per-day counters and derives success and real-data rates from them.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict
from datetime import date
from threading import RLock
from typing import Any, Callable, Dict, Optional


logger = logging.getLogger("vietqr.metrics")

# Outcome labels
PRIMARY = "Primary"
SIMULATED = "Simulated"
SYNTHETIC = "Synthetic"
ERROR = "Error"


class UsageMetricsSink(ABC):
    """Append/increment surface for lookup outcome labels"""

    @abstractmethod
    def record(self, label: str) -> None:
        """Record one completed lookup with its outcome label"""
        pass


class NullMetricsSink(UsageMetricsSink):
    """Sink that discards everything"""

    def record(self, label: str) -> None:
        pass


@dataclass
class DailyUsage:
    """Counters for a single calendar day"""
    primary: int = 0
    simulated: int = 0
    synthetic: int = 0
    error: int = 0
    requests: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class InMemoryUsageMetrics(UsageMetricsSink):
    """Per-day counters kept in process memory"""

    def __init__(self, clock: Callable[[], date] = date.today):
        self._clock = clock
        self._days: Dict[date, DailyUsage] = {}
        self._lock = RLock()

    def record(self, label: str) -> None:
        with self._lock:
            usage = self._days.setdefault(self._clock(), DailyUsage())
            key = (label or "").lower()
            if key == PRIMARY.lower():
                usage.primary += 1
            elif key == SIMULATED.lower():
                usage.simulated += 1
            elif key == ERROR.lower():
                usage.error += 1
            else:
                # Anything else is fallback data
                usage.synthetic += 1
            usage.requests += 1
        logger.debug(f"Recorded lookup outcome {label}")

    def today_stats(self) -> DailyUsage:
        """Copy of today's counters"""
        return self.stats_for(self._clock())

    def stats_for(self, day: date) -> DailyUsage:
        """Copy of the counters for a given day"""
        with self._lock:
            usage = self._days.get(day)
            return DailyUsage(**usage.to_dict()) if usage else DailyUsage()

    def summary(self, day: Optional[date] = None) -> Dict[str, Any]:
        """
        Derived performance figures for a day (today by default).

        success_rate is the share of non-error lookups, real_data_rate the
        share answered by the primary provider. Both are whole percentages.
        """
        stats = self.stats_for(day or self._clock())
        total_calls = stats.primary + stats.simulated + stats.synthetic + stats.error

        if total_calls > 0:
            success_rate = round((total_calls - stats.error) * 100 / total_calls)
            real_data_rate = round(stats.primary * 100 / total_calls)
        else:
            success_rate = 100
            real_data_rate = 0

        if success_rate >= 99:
            status = "excellent"
        elif success_rate >= 95:
            status = "good"
        else:
            status = "degraded"

        return {
            "today": stats.to_dict(),
            "total_calls": total_calls,
            "success_rate": success_rate,
            "real_data_rate": real_data_rate,
            "status": status,
        }

    def reset(self) -> None:
        """Drop all counters"""
        with self._lock:
            self._days.clear()
