import datetime
import logging
from typing import List, Optional

from core.models.aggregated_series import AggregatedSeries
from core.models.period import PeriodKind
from core.models.sample import SampleWithData
from core.processing.aggregator import build_series
from core.processing.bucket_planner import plan, plan_range, reference_date, resolve_timezone
from core.processing.classifier import classify
from core.processing.resolver import NearestPointResolver

logger = logging.getLogger(__name__)


class SeriesService:
    """
    Query surface for range summaries and point lookups.

    Range summaries plan their buckets first (bad dates or zones raise
    InvalidRange before the store is touched), fetch the whole range in one
    query, then classify and reduce in memory. Nothing is cached between calls.
    """

    def __init__(self, store, default_timezone: str = "UTC"):
        self.store = store
        self.default_timezone = default_timezone
        self.resolver = NearestPointResolver(store)

    def get_series_for_day(self, local_date: datetime.date, tz: Optional[str] = None) -> AggregatedSeries:
        """24 hourly buckets of `local_date` in the viewer's zone."""
        return self._build(PeriodKind.DAY, local_date, tz)

    def get_series_for_month(self, year: int, month: int, tz: Optional[str] = None) -> AggregatedSeries:
        """One bucket per calendar day of `year`-`month`."""
        return self._build(PeriodKind.MONTH, reference_date(year, month), tz)

    def get_series_for_year(self, year: int, tz: Optional[str] = None) -> AggregatedSeries:
        """12 monthly buckets of `year`."""
        return self._build(PeriodKind.YEAR, reference_date(year), tz)

    def get_timestamps_for_day(self, local_date: datetime.date, tz: Optional[str] = None) -> List[int]:
        """Timestamps of every sample taken on `local_date` in the viewer's zone."""
        zone = resolve_timezone(tz or self.default_timezone)
        start, end = plan_range(plan(PeriodKind.DAY, local_date, zone))
        return self.store.timestamps_in_range(start, end)

    def get_current_sample(self) -> Optional[SampleWithData]:
        return self.resolver.latest()

    def get_sample_near(self, instant: int) -> Optional[SampleWithData]:
        return self.resolver.nearest(instant)

    def _build(self, period: PeriodKind, day: datetime.date, tz: Optional[str]) -> AggregatedSeries:
        zone = resolve_timezone(tz or self.default_timezone)
        buckets = plan(period, day, zone)
        start, end = plan_range(buckets)

        samples = self.store.samples_in_range(start, end)
        sensor_ids = self.store.distinct_sensor_ids()
        bucketed = classify(samples, buckets, period, zone)

        logger.info(f"Built {period.value} series for {day} ({zone.key}): {len(samples)} samples")
        return build_series(period, zone.key, buckets, bucketed, samples, sensor_ids)
