"""
Test suite for the resource-pressure governor.

System role: Verification of memory pressure classification and pacing
"""

from unittest.mock import patch

import pytest

from rag_engine.core.exceptions import ResourceExhaustedError
from rag_engine.core.resource_governor import (
    MAX_DELAY_SECONDS,
    PressureLevel,
    ResourceGovernor,
    process_memory_probe,
)


class TestResourceGovernorInit:
    """Test suite for threshold validation."""

    @pytest.mark.parametrize(
        "elevated, critical",
        [(0.0, 0.95), (0.95, 0.90), (0.9, 0.9), (0.9, 1.5)],
    )
    def test_invalid_thresholds_should_raise_value_error(
        self, elevated: float, critical: float
    ) -> None:
        with pytest.raises(ValueError):
            ResourceGovernor(
                memory_probe=lambda: (0, 1),
                elevated_ratio=elevated,
                critical_ratio=critical,
            )

    def test_default_probe_should_report_process_memory(self) -> None:
        # Act
        used, total = process_memory_probe()()

        # Assert
        assert used > 0
        assert total >= used

    def test_probe_with_limit_should_use_limit_as_total(self) -> None:
        used, total = process_memory_probe(limit_bytes=123)()

        assert total == 123
        assert used > 0


class TestResourceGovernorPressure:
    """Test suite for pressure classification."""

    @pytest.mark.parametrize(
        "ratio, expected",
        [
            (0.10, PressureLevel.NORMAL),
            (0.90, PressureLevel.NORMAL),
            (0.91, PressureLevel.ELEVATED),
            (0.95, PressureLevel.ELEVATED),
            (0.96, PressureLevel.CRITICAL),
        ],
    )
    def test_pressure_should_classify_usage_ratio(
        self, make_governor, ratio: float, expected: PressureLevel
    ) -> None:
        assert make_governor(ratio).pressure() is expected

    def test_zero_total_should_report_zero_usage(self) -> None:
        governor = ResourceGovernor(memory_probe=lambda: (100, 0))

        assert governor.usage_ratio() == 0.0
        assert governor.pressure() is PressureLevel.NORMAL


class TestResourceGovernorEnsureCapacity:
    """Test suite for ensure_capacity()."""

    def test_should_pass_below_critical(self, make_governor) -> None:
        make_governor(0.93).ensure_capacity()

    def test_should_raise_when_critical(self, make_governor) -> None:
        # Act
        with pytest.raises(ResourceExhaustedError) as exc_info:
            make_governor(0.97).ensure_capacity()

        # Assert
        assert exc_info.value.message == "Server is currently busy. Please try again in a moment."
        assert exc_info.value.details["usage_ratio"] == 0.97


class TestResourceGovernorRelieve:
    """Test suite for relieve()."""

    @pytest.mark.asyncio
    async def test_normal_pressure_should_not_reclaim_or_sleep(self, make_governor) -> None:
        governor = make_governor(0.5)

        with patch("rag_engine.core.resource_governor.gc.collect") as mock_collect, patch(
            "rag_engine.core.resource_governor.asyncio.sleep"
        ) as mock_sleep:
            level = await governor.relieve()

        assert level is PressureLevel.NORMAL
        mock_collect.assert_not_called()
        mock_sleep.assert_not_called()

    @pytest.mark.asyncio
    async def test_elevated_pressure_should_reclaim_and_sleep(self, make_governor) -> None:
        governor = make_governor(0.92)

        with patch("rag_engine.core.resource_governor.gc.collect") as mock_collect, patch(
            "rag_engine.core.resource_governor.asyncio.sleep"
        ) as mock_sleep:
            level = await governor.relieve(delay=0.1)

        assert level is PressureLevel.ELEVATED
        mock_collect.assert_called_once()
        mock_sleep.assert_awaited_once_with(0.1)

    @pytest.mark.asyncio
    async def test_delay_should_be_capped(self, make_governor) -> None:
        governor = make_governor(0.99)

        with patch("rag_engine.core.resource_governor.gc.collect"), patch(
            "rag_engine.core.resource_governor.asyncio.sleep"
        ) as mock_sleep:
            level = await governor.relieve(delay=5.0)

        assert level is PressureLevel.CRITICAL
        mock_sleep.assert_awaited_once_with(MAX_DELAY_SECONDS)


class TestResourceGovernorCheckpoint:
    """Test suite for checkpoint()."""

    @pytest.mark.asyncio
    async def test_should_reclaim_only_on_multiples(self, calm_governor) -> None:
        with patch("rag_engine.core.resource_governor.gc.collect") as mock_collect, patch(
            "rag_engine.core.resource_governor.asyncio.sleep"
        ):
            results = [await calm_governor.checkpoint(n, every=25) for n in range(1, 51)]

        assert results.count(True) == 2
        assert results[24] is True
        assert results[49] is True
        assert mock_collect.call_count == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("processed, every", [(0, 25), (10, 0), (-1, 2)])
    async def test_degenerate_arguments_should_not_reclaim(
        self, calm_governor, processed: int, every: int
    ) -> None:
        with patch("rag_engine.core.resource_governor.gc.collect") as mock_collect:
            assert await calm_governor.checkpoint(processed, every=every) is False

        mock_collect.assert_not_called()
