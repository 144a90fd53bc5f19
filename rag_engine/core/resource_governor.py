"""
Resource-pressure governor.

Classifies process memory headroom and provides the bounded reclamation and
yield points consulted by chunking, PDF extraction and batch ingestion.
Advisory only: it never waits on a condition, it only sleeps for fixed,
short delays.

Dependencies: psutil, gc, asyncio
System role: Memory pacing policy for ingestion
"""

import asyncio
import enum
import gc
import logging
from typing import Callable

import psutil

from rag_engine.core.exceptions import ResourceExhaustedError

logger = logging.getLogger(__name__)

MemoryProbe = Callable[[], tuple[int, int]]

CHECKPOINT_DELAY_SECONDS = 0.01
RELIEF_DELAY_SECONDS = 0.1
MAX_DELAY_SECONDS = 0.2


class PressureLevel(str, enum.Enum):
    """Coarse memory headroom classification."""

    NORMAL = "normal"
    ELEVATED = "elevated"
    CRITICAL = "critical"


def process_memory_probe(limit_bytes: int | None = None) -> MemoryProbe:
    """
    Build a probe reporting (resident set size, budget) for this process.

    Args:
        limit_bytes: Working-set budget; total system memory when None

    Returns:
        MemoryProbe: Zero-argument callable returning (used, total) in bytes
    """
    process = psutil.Process()

    def probe() -> tuple[int, int]:
        total = limit_bytes or psutil.virtual_memory().total
        return process.memory_info().rss, total

    return probe


class ResourceGovernor:
    """Stateless pressure query over process memory statistics."""

    def __init__(
        self,
        memory_probe: MemoryProbe | None = None,
        elevated_ratio: float = 0.90,
        critical_ratio: float = 0.95,
    ) -> None:
        """
        Initialize governor.

        Args:
            memory_probe: Callable returning (used, total) bytes; psutil-backed if None
            elevated_ratio: Usage ratio above which pressure is elevated
            critical_ratio: Usage ratio above which pressure is critical

        Raises:
            ValueError: When thresholds are not 0 < elevated < critical <= 1
        """
        if not 0 < elevated_ratio < critical_ratio <= 1:
            raise ValueError(
                f"Invalid pressure thresholds: elevated={elevated_ratio}, critical={critical_ratio}"
            )
        self._probe = memory_probe or process_memory_probe()
        self.elevated_ratio = elevated_ratio
        self.critical_ratio = critical_ratio

    def usage_ratio(self) -> float:
        """Current working set as a fraction of the budget."""
        used, total = self._probe()
        if total <= 0:
            return 0.0
        return used / total

    def pressure(self) -> PressureLevel:
        """Classify current memory pressure."""
        ratio = self.usage_ratio()
        if ratio > self.critical_ratio:
            return PressureLevel.CRITICAL
        if ratio > self.elevated_ratio:
            return PressureLevel.ELEVATED
        return PressureLevel.NORMAL

    def reclaim(self) -> int:
        """Request an immediate reclamation pass; returns objects collected."""
        return gc.collect()

    def ensure_capacity(self) -> None:
        """
        Refuse new large work under critical pressure.

        Raises:
            ResourceExhaustedError: When pressure is critical
        """
        ratio = self.usage_ratio()
        if ratio > self.critical_ratio:
            logger.warning(
                "Critical memory pressure, refusing new work",
                extra={"usage_ratio": round(ratio, 4)},
            )
            raise ResourceExhaustedError(
                "Server is currently busy. Please try again in a moment.",
                usage_ratio=ratio,
            )

    async def relieve(self, delay: float = RELIEF_DELAY_SECONDS) -> PressureLevel:
        """
        Reclaim and yield briefly if pressure is elevated or worse.

        Args:
            delay: Yield duration in seconds (capped at MAX_DELAY_SECONDS)

        Returns:
            PressureLevel: Pressure observed before relief
        """
        level = self.pressure()
        if level is not PressureLevel.NORMAL:
            logger.info("Memory pressure %s, reclaiming", level.value)
            self.reclaim()
            await asyncio.sleep(min(delay, MAX_DELAY_SECONDS))
        return level

    async def checkpoint(
        self,
        processed: int,
        every: int,
        delay: float = CHECKPOINT_DELAY_SECONDS,
    ) -> bool:
        """
        Periodic reclamation point for long loops.

        Args:
            processed: Units processed so far (1-based count)
            every: Reclaim when processed is a multiple of this
            delay: Yield duration in seconds (capped at MAX_DELAY_SECONDS)

        Returns:
            bool: True when a reclamation pass ran
        """
        if every <= 0 or processed <= 0 or processed % every:
            return False
        self.reclaim()
        await asyncio.sleep(min(delay, MAX_DELAY_SECONDS))
        return True
