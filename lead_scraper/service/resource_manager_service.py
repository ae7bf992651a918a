"""
Resource Manager for browser session concurrency.

Each scrape launches its own Chromium process. The limiter caps how many
can run at once; callers beyond the cap wait for a slot instead of
launching another browser.
"""

import asyncio
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Any, AsyncIterator, Dict, Optional, Tuple

import psutil

from lead_scraper.core.config import settings
from lead_scraper.utils.logging import setup_logger

logger = setup_logger(__name__)


@dataclass
class ResourceThresholds:
    """Thresholds used to size the browser session cap"""
    max_cpu_percent: float = 80.0
    max_memory_percent: float = 85.0
    min_memory_per_session_gb: float = 0.5  # Chromium with one tab
    base_sessions: int = 1
    max_sessions: int = 8
    cpu_per_session: float = 15.0  # Estimated CPU % per browser


class BrowserSessionLimiter:
    """
    Bounded set of browser slots with a FIFO wait queue.

    The cap is fixed at construction: either the explicit `max_sessions`
    or a recommendation derived from current CPU and memory headroom.
    """

    def __init__(
        self,
        max_sessions: Optional[int] = None,
        thresholds: Optional[ResourceThresholds] = None,
    ):
        self.thresholds = thresholds or ResourceThresholds()
        if max_sessions is None:
            max_sessions, reason = self.calculate_recommended_sessions()
            logger.info(
                "Browser session cap derived from host resources",
                extra={"max_sessions": max_sessions, "reason": reason},
            )
        if max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")

        self.max_sessions = max_sessions
        self._semaphore = asyncio.Semaphore(max_sessions)
        self._active = 0
        self._waiting = 0
        self._start_time = datetime.now()

    def get_cpu_usage(self, interval: Optional[float] = None) -> float:
        """CPU usage percentage; `interval=None` returns immediately"""
        return psutil.cpu_percent(interval=interval)

    def get_memory_info(self) -> Dict[str, float]:
        """Get memory usage information"""
        mem = psutil.virtual_memory()
        return {
            "total_gb": mem.total / (1024 ** 3),
            "available_gb": mem.available / (1024 ** 3),
            "percent": mem.percent
        }

    def calculate_recommended_sessions(self) -> Tuple[int, str]:
        """
        Recommend a session cap from current CPU and memory headroom.

        Returns:
            Tuple of (recommended_sessions, reason). Never below
            `base_sessions`, so a busy host still serves requests one at a time.
        """
        cpu = self.get_cpu_usage(interval=0.1)
        mem = self.get_memory_info()

        if cpu > self.thresholds.max_cpu_percent:
            return self.thresholds.base_sessions, f"CPU usage high ({cpu:.1f}%)"

        if mem["percent"] > self.thresholds.max_memory_percent:
            return self.thresholds.base_sessions, f"Memory usage high ({mem['percent']:.1f}%)"

        available_cpu = self.thresholds.max_cpu_percent - cpu
        available_memory_gb = mem["available_gb"] - 1.0  # Keep 1GB buffer

        by_cpu = int(available_cpu / self.thresholds.cpu_per_session)
        by_memory = int(available_memory_gb / self.thresholds.min_memory_per_session_gb)

        recommended = min(by_cpu, by_memory, self.thresholds.max_sessions)
        recommended = max(recommended, self.thresholds.base_sessions)

        reason = f"Based on {available_cpu:.1f}% CPU and {available_memory_gb:.1f}GB memory available"
        return recommended, reason

    @asynccontextmanager
    async def slot(self) -> AsyncIterator[None]:
        """Hold one browser slot for the duration of the block."""
        self._waiting += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._waiting -= 1

        self._active += 1
        try:
            yield
        finally:
            self._active -= 1
            self._semaphore.release()

    @property
    def active_sessions(self) -> int:
        return self._active

    @property
    def waiting_requests(self) -> int:
        return self._waiting

    def get_uptime_seconds(self) -> float:
        return (datetime.now() - self._start_time).total_seconds()

    def get_resource_info_dict(self) -> Dict[str, Any]:
        """Get resource info as dictionary for API response"""
        mem = self.get_memory_info()
        return {
            "cpu_percent": self.get_cpu_usage(),
            "memory_percent": mem["percent"],
            "memory_available_gb": round(mem["available_gb"], 2),
            "max_sessions": self.max_sessions,
            "active_sessions": self._active,
            "waiting_requests": self._waiting,
            "uptime_seconds": round(self.get_uptime_seconds(), 1),
        }


# Global limiter instance
browser_session_limiter = BrowserSessionLimiter(settings.MAX_BROWSER_SESSIONS)
