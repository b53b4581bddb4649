"""Tests for the channel table reader."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from espritkit.io import RowStatus, parse_row, read_channel_table


class TestParseRow:
    """Tests for per-row decoding."""

    def test_two_fields(self):
        result = parse_row("-465.1\t12")
        assert result.status is RowStatus.OK
        assert result.ok
        assert result.value == 12.0

    def test_extra_fields_ignored(self):
        result = parse_row("1  2.5  garbage  more")
        assert result.status is RowStatus.OK
        assert result.value == 2.5

    def test_mixed_horizontal_whitespace(self):
        assert parse_row("  7 \t   42  ").value == 42.0

    def test_index_only_row_skipped(self):
        result = parse_row("17")
        assert result.status is RowStatus.SKIP
        assert result.value is None

    def test_unparsable_count(self):
        result = parse_row("12 NaNtext")
        assert result.status is RowStatus.ERROR
        assert "NaNtext" in result.message
        assert not result.ok

    def test_scientific_notation(self):
        assert parse_row("0 1.5e3").value == 1500.0


class TestReadChannelTable:
    """Tests for the best-effort table loop."""

    def test_full_table(self):
        counts = read_channel_table(["0 1", "1 2", "2 3"], 3)
        np.testing.assert_array_equal(counts, [1.0, 2.0, 3.0])
        assert counts.dtype == np.float64

    def test_short_table_keeps_length(self):
        counts = read_channel_table(["0 5", "1 6", ""], 3)
        assert len(counts) == 3
        np.testing.assert_array_equal(counts, [5.0, 6.0, 0.0])

    def test_stops_at_blank_line(self):
        counts = read_channel_table(["0 5", "   ", "2 7"], 3)
        np.testing.assert_array_equal(counts, [5.0, 0.0, 0.0])

    def test_stops_at_row_budget(self):
        lines = iter(["0 1", "1 2", "2 3", "3 4"])
        counts = read_channel_table(lines, 2)
        np.testing.assert_array_equal(counts, [1.0, 2.0])
        assert next(lines) == "2 3"

    def test_skipped_row_advances_channel(self):
        counts = read_channel_table(["0 1", "1", "2 3"], 3)
        np.testing.assert_array_equal(counts, [1.0, 0.0, 3.0])

    def test_malformed_row_is_soft_failure(self, caplog):
        with caplog.at_level(logging.WARNING, logger="espritkit.io.channels"):
            counts = read_channel_table(["0 1", "12 NaNtext", "2 3"], 3)
        np.testing.assert_array_equal(counts, [1.0, 0.0, 3.0])
        assert "Channel 1 left at zero" in caplog.text
        assert "NaNtext" in caplog.text

    def test_log_reports_line_number(self, caplog):
        with caplog.at_level(logging.WARNING, logger="espritkit.io.channels"):
            read_channel_table(["0 x"], 1, first_line_number=30)
        assert "line 30" in caplog.text

    def test_zero_channels(self):
        lines = iter(["0 1"])
        counts = read_channel_table(lines, 0)
        assert counts.shape == (0,)
        assert next(lines) == "0 1"

    def test_exhausted_input(self):
        np.testing.assert_array_equal(read_channel_table([], 4), np.zeros(4))

    @pytest.mark.parametrize("row", ["0 -3", "0 +3", "0 3."])
    def test_signed_and_trailing_dot(self, row):
        assert abs(read_channel_table([row], 1)[0]) == 3.0
