"""Unit tests for percentage gauges."""

from __future__ import annotations

import pytest

from tmux_cockpit.monitoring.bar import (
    EMPTY_GLYPH,
    FILLED_GLYPH,
    coerce_percent,
    render_bar,
    render_sample,
)
from tmux_cockpit.types import MetricSample


def _glyph_counts(bar: str) -> tuple[int, int]:
    body = bar[bar.index("[") + 1 : bar.index("]")]
    return body.count(FILLED_GLYPH), body.count(EMPTY_GLYPH)


class TestRenderBar:
    """Tests for render_bar."""

    def test_exact_format(self) -> None:
        assert render_bar(50) == "[█████░░░░░]  50%"

    @pytest.mark.parametrize("percent", range(0, 101))
    def test_width_is_constant(self, percent: int) -> None:
        """Every percentage renders exactly ``width`` glyph positions."""
        filled, empty = _glyph_counts(render_bar(percent))
        assert filled + empty == 10

    def test_zero_and_full(self) -> None:
        assert _glyph_counts(render_bar(0)) == (0, 10)
        assert _glyph_counts(render_bar(100)) == (10, 0)
        assert render_bar(100).endswith(" 100%")

    def test_fill_is_floored(self) -> None:
        assert _glyph_counts(render_bar(59)) == (5, 5)
        assert _glyph_counts(render_bar(9)) == (0, 10)
        assert _glyph_counts(render_bar(99.9)) == (9, 1)

    @pytest.mark.parametrize(
        ("percent", "expected"),
        [(150, (10, 0)), (1000, (10, 0)), (-5, (0, 10)), (-100, (0, 10))],
    )
    def test_out_of_range_is_clamped(
        self, percent: int, expected: tuple[int, int]
    ) -> None:
        """Out-of-range values never overflow or underflow the gauge."""
        assert _glyph_counts(render_bar(percent)) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "N/A", "[N/A]", "abc"])
    def test_missing_data_renders_as_zero(self, value: object) -> None:
        assert render_bar(value) == render_bar(0)

    def test_custom_width(self) -> None:
        bar = render_bar(50, width=20)
        assert _glyph_counts(bar) == (10, 10)


class TestCoercePercent:
    """Tests for coerce_percent."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, 42),
            (42.9, 42),
            ("17", 17),
            (" 75% ", 75),
            ("12.5", 12),
            (float("inf"), 100),
            (float("-inf"), 0),
            (float("nan"), 0),
            (None, 0),
            ("garbage", 0),
        ],
    )
    def test_coercion(self, value: object, expected: int) -> None:
        assert coerce_percent(value) == expected


class TestRenderSample:
    """Tests for gauges of metric samples."""

    def test_sample_value_is_rendered(self) -> None:
        assert render_sample(MetricSample("cpu", 70.0)) == render_bar(70)

    def test_missing_sample_renders_as_zero(self) -> None:
        assert render_sample(None, width=20) == render_bar(0, width=20)
