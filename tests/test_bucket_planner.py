"""
Tests for day/month/year bucket planning
"""
import datetime
from zoneinfo import ZoneInfo

import pytest

from conftest import local_ts
from core.errors import InvalidRange
from core.models.period import PeriodKind
from core.processing.bucket_planner import (
    parse_local_date,
    plan,
    plan_range,
    reference_date,
    resolve_timezone,
)

PARIS = ZoneInfo("Europe/Paris")
UTC = ZoneInfo("UTC")


class TestDayPlan:
    """Hourly buckets of one local day"""

    def test_day_has_24_hourly_buckets(self) -> None:
        buckets = plan(PeriodKind.DAY, datetime.date(2024, 6, 15), PARIS)
        assert len(buckets) == 24
        assert buckets[0].label == "00:00"
        assert buckets[9].label == "09:00"
        assert buckets[23].label == "23:00"

    def test_day_anchored_at_local_midnight(self) -> None:
        """Boundaries come from the viewer's zone, not from UTC midnight"""
        buckets = plan(PeriodKind.DAY, datetime.date(2024, 6, 15), ZoneInfo("America/Los_Angeles"))
        assert buckets[0].start == local_ts("America/Los_Angeles", 2024, 6, 15)
        assert buckets[-1].end == local_ts("America/Los_Angeles", 2024, 6, 16) - 1

    def test_hour_buckets_are_contiguous_and_inclusive(self) -> None:
        buckets = plan(PeriodKind.DAY, datetime.date(2024, 6, 15), UTC)
        for current, following in zip(buckets, buckets[1:]):
            assert current.end + 1 == following.start
            assert current.end - current.start == 3599

    def test_spring_forward_day(self) -> None:
        """Skipped local hour gives an empty bucket, day still has 24 labels"""
        buckets = plan(PeriodKind.DAY, datetime.date(2024, 3, 31), PARIS)
        assert len(buckets) == 24
        assert buckets[2].label == "02:00"
        assert buckets[2].end < buckets[2].start
        start, end = plan_range(buckets)
        assert end - start + 1 == 23 * 3600

    def test_fall_back_day(self) -> None:
        """Repeated local hour is folded into a single two-hour bucket"""
        buckets = plan(PeriodKind.DAY, datetime.date(2024, 10, 27), PARIS)
        assert len(buckets) == 24
        assert buckets[2].end - buckets[2].start + 1 == 2 * 3600
        start, end = plan_range(buckets)
        assert end - start + 1 == 25 * 3600


class TestMonthPlan:
    """Daily buckets of one month"""

    @pytest.mark.parametrize("year, month, expected", [
        (2024, 2, 29),
        (2023, 2, 28),
        (2024, 4, 30),
        (2024, 12, 31),
        (2000, 2, 29),
        (1900, 2, 28),
    ])
    def test_days_in_month(self, year: int, month: int, expected: int) -> None:
        buckets = plan(PeriodKind.MONTH, reference_date(year, month), PARIS)
        assert len(buckets) == expected

    def test_month_labels(self) -> None:
        buckets = plan(PeriodKind.MONTH, reference_date(2024, 2), PARIS)
        assert buckets[0].label == "2024-02-01"
        assert buckets[-1].label == "2024-02-29"

    def test_december_ends_at_next_year(self) -> None:
        buckets = plan(PeriodKind.MONTH, reference_date(2024, 12), PARIS)
        assert buckets[-1].end == local_ts("Europe/Paris", 2025, 1, 1) - 1

    def test_reference_day_does_not_matter(self) -> None:
        first = plan(PeriodKind.MONTH, datetime.date(2024, 5, 1), PARIS)
        middle = plan(PeriodKind.MONTH, datetime.date(2024, 5, 17), PARIS)
        assert first == middle


class TestYearPlan:
    """Monthly buckets of one year"""

    def test_year_has_12_buckets(self) -> None:
        buckets = plan(PeriodKind.YEAR, reference_date(2024), PARIS)
        assert len(buckets) == 12
        assert [b.label for b in buckets][:3] == ["2024-01", "2024-02", "2024-03"]
        assert buckets[-1].label == "2024-12"

    def test_year_boundaries(self) -> None:
        buckets = plan(PeriodKind.YEAR, reference_date(2024), PARIS)
        assert buckets[0].start == local_ts("Europe/Paris", 2024, 1, 1)
        assert buckets[1].start == local_ts("Europe/Paris", 2024, 2, 1)
        assert buckets[-1].end == local_ts("Europe/Paris", 2025, 1, 1) - 1


class TestInvalidInput:
    """Invalid input is rejected as InvalidRange"""

    @pytest.mark.parametrize("value", [
        "2024-02-30", "2024-13-01", "15/06/2024", "", "yesterday", "2024-6-5", "2024-06-5", " 2024-06-05",
    ])
    def test_parse_invalid_date(self, value: str) -> None:
        with pytest.raises(InvalidRange):
            parse_local_date(value)

    def test_parse_valid_date(self) -> None:
        assert parse_local_date("2024-02-29") == datetime.date(2024, 2, 29)

    def test_invalid_month(self) -> None:
        with pytest.raises(InvalidRange):
            reference_date(2024, 13)
        with pytest.raises(InvalidRange):
            reference_date(2024, 0)

    def test_huge_components(self) -> None:
        with pytest.raises(InvalidRange):
            reference_date(10 ** 20)
        with pytest.raises(InvalidRange):
            reference_date(2024, 10 ** 20)

    def test_unknown_timezone(self) -> None:
        with pytest.raises(InvalidRange):
            resolve_timezone("Mars/Olympus_Mons")

    def test_empty_timezone(self) -> None:
        with pytest.raises(InvalidRange):
            resolve_timezone("")

    def test_year_without_following_year(self) -> None:
        with pytest.raises(InvalidRange):
            plan(PeriodKind.YEAR, reference_date(9999), UTC)

    def test_invalid_range_is_value_error(self) -> None:
        """Callers catching ValueError still see planning failures"""
        with pytest.raises(ValueError):
            parse_local_date("not-a-date")
