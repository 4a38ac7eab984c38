"""
Per-bucket reduction of classified samples into avg/min/max sequences.

A bucket contributes values for a metric only through samples that carry the
sub-record the metric reads (a sensor reading for that sensor id, or a system
snapshot). Buckets with no contributing value get GAP for avg, min and max.
"""
import logging
import math
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from core.config_loader import config_loader
from core.models.aggregated_series import (
    GAP,
    AggregatedSeries,
    Bucket,
    SensorSeries,
    Stats,
    SystemSeries,
)
from core.models.period import PeriodKind
from core.models.sample import SampleWithData

logger = logging.getLogger(__name__)

# Returns the values a sample contributes to a metric (empty when the sub-record is absent)
MetricExtractor = Callable[[SampleWithData], List[float]]

SENSOR_FIELDS = ("temperature", "humidity")
SYSTEM_FIELDS = (
    "soc_temperature",
    "wlan0_link_quality",
    "wlan0_signal_level",
    "storage_used",
    "storage_avail",
)


def _usable(value: Optional[float]) -> bool:
    return value is not None and not math.isnan(value)


def sensor_extractor(sensor_id: int, field_name: str) -> MetricExtractor:
    def extract(sample: SampleWithData) -> List[float]:
        values = []
        for reading in sample.sensors:
            if reading.sensor_id != sensor_id:
                continue
            value = getattr(reading, field_name)
            if _usable(value):
                values.append(float(value))
        return values
    return extract


def system_extractor(field_name: str) -> MetricExtractor:
    def extract(sample: SampleWithData) -> List[float]:
        if sample.system_data is None:
            return []
        value = getattr(sample.system_data, field_name)
        return [float(value)] if _usable(value) else []
    return extract


def reduce_values(values: List[float]) -> Tuple[float, float, float]:
    """(avg, min, max) of `values`, or three GAPs when empty."""
    if not values:
        return GAP, GAP, GAP
    # fsum is exactly rounded, so the mean does not depend on summation order
    return math.fsum(values) / len(values), min(values), max(values)


def aggregate(
    bucketed_ids: Mapping[int, Iterable[int]],
    samples_by_id: Mapping[int, SampleWithData],
    extractor: MetricExtractor,
    bucket_count: int,
) -> Stats:
    """Reduce one metric over every bucket. The result always has `bucket_count` entries."""
    stats = Stats.empty(bucket_count)
    for index in range(bucket_count):
        values: List[float] = []
        for sample_id in bucketed_ids.get(index, ()):
            sample = samples_by_id.get(sample_id)
            if sample is not None:
                values.extend(extractor(sample))
        stats.avg[index], stats.min[index], stats.max[index] = reduce_values(values)
    return stats


def build_series(
    period: PeriodKind,
    timezone: str,
    buckets: List[Bucket],
    bucketed_ids: Mapping[int, Iterable[int]],
    samples: Iterable[SampleWithData],
    sensor_ids: Iterable[int],
) -> AggregatedSeries:
    """
    Assemble the full AggregatedSeries for a plan.

    `sensor_ids` is the set of sensors known to the store; each gets a block
    even when it reported nothing in this period.
    """
    samples_by_id: Dict[int, SampleWithData] = {s.id: s for s in samples}
    count = len(buckets)

    sensors = [
        SensorSeries(
            sensor_id=sensor_id,
            name=config_loader.get_sensor_display_name(sensor_id),
            **{
                name: aggregate(bucketed_ids, samples_by_id, sensor_extractor(sensor_id, name), count)
                for name in SENSOR_FIELDS
            },
        )
        for sensor_id in sorted(set(sensor_ids))
    ]

    system_stats = {
        name: aggregate(bucketed_ids, samples_by_id, system_extractor(name), count)
        for name in SYSTEM_FIELDS
    }

    logger.debug(f"Aggregated {len(samples_by_id)} samples into {count} {period.value} buckets")
    return AggregatedSeries(
        period=period,
        timezone=timezone,
        labels=[b.label for b in buckets],
        bucket_starts=[b.start for b in buckets],
        sensors=sensors,
        system=SystemSeries(**system_stats),
    )
