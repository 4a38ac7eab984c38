"""
Value structures returned by range summaries.

Every statistic sequence is index-aligned with `AggregatedSeries.labels`.
Buckets without data hold GAP (NaN), never zero and never omitted.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, List

from core.models.period import PeriodKind

GAP = math.nan


def is_gap(value: float) -> bool:
    """True if `value` is the gap sentinel."""
    return math.isnan(value)


@dataclass(frozen=True)
class Bucket:
    """A calendar-aligned span. Both `start` and `end` are inclusive epoch seconds."""
    start: int
    end: int
    label: str

    def contains(self, timestamp: int) -> bool:
        return self.start <= timestamp <= self.end


@dataclass
class Stats:
    """Parallel avg/min/max sequences for one metric."""
    avg: List[float] = field(default_factory=list)
    min: List[float] = field(default_factory=list)
    max: List[float] = field(default_factory=list)

    @classmethod
    def empty(cls, bucket_count: int) -> "Stats":
        return cls(
            avg=[GAP] * bucket_count,
            min=[GAP] * bucket_count,
            max=[GAP] * bucket_count,
        )

    def __len__(self) -> int:
        return len(self.avg)


@dataclass
class SensorSeries:
    sensor_id: int
    name: str
    temperature: Stats
    humidity: Stats


@dataclass
class SystemSeries:
    soc_temperature: Stats
    wlan0_link_quality: Stats
    wlan0_signal_level: Stats
    storage_used: Stats
    storage_avail: Stats

    def metrics(self) -> Dict[str, Stats]:
        return {
            "soc_temperature": self.soc_temperature,
            "wlan0_link_quality": self.wlan0_link_quality,
            "wlan0_signal_level": self.wlan0_signal_level,
            "storage_used": self.storage_used,
            "storage_avail": self.storage_avail,
        }


@dataclass
class AggregatedSeries:
    """
    Result of a day/month/year range summary.

    `bucket_starts` holds the epoch second each bucket begins at, so callers can
    render their own labels (the day chart uses local times).
    """
    period: PeriodKind
    timezone: str
    labels: List[str]
    bucket_starts: List[int]
    sensors: List[SensorSeries]
    system: SystemSeries

    def all_stats(self) -> List[Stats]:
        stats: List[Stats] = []
        for sensor in self.sensors:
            stats.extend([sensor.temperature, sensor.humidity])
        stats.extend(self.system.metrics().values())
        return stats
