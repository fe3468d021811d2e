"""Unit tests for milestoneproxy.dates."""

from __future__ import annotations

import pytest

from milestoneproxy.dates import format_date


class TestFormatDate:
    def test_iso_to_day_month_year(self) -> None:
        assert format_date("2024-03-07") == "07/03/2024"

    def test_date_with_time_suffix(self) -> None:
        assert format_date("2024-12-31 09:30") == "31/12/2024"

    def test_iso_datetime(self) -> None:
        assert format_date("2024-12-31T09:30:00Z") == "31/12/2024"

    @pytest.mark.parametrize("value", ["", None, "20240307", "March 7", "07/03/2024"])
    def test_missing_or_malformed_returns_empty(self, value: str | None) -> None:
        assert format_date(value) == ""

    def test_partial_date_returns_empty(self) -> None:
        assert format_date("2024-03") == ""
