"""Assigns samples to the buckets of a plan."""
import bisect
import datetime
import logging
from typing import Dict, Iterable, List
from zoneinfo import ZoneInfo

from core.models.aggregated_series import Bucket
from core.models.period import PeriodKind
from core.models.sample import SampleWithData

logger = logging.getLogger(__name__)


def ordered_samples(samples: Iterable[SampleWithData]) -> List[SampleWithData]:
    """Samples sorted by (timestamp, id), independent of store row order."""
    return sorted(samples, key=lambda s: (s.timestamp, s.id))


def classify(
    samples: Iterable[SampleWithData],
    buckets: List[Bucket],
    period: PeriodKind,
    tz: ZoneInfo,
) -> Dict[int, List[int]]:
    """
    Map every bucket index to the ids of the samples that fall inside it.

    DAY plans classify by local hour-of-day; MONTH and YEAR plans match the
    timestamp against each bucket's inclusive span. Ids within a bucket are
    ordered by (timestamp, id). Samples matching no bucket are dropped.
    """
    result: Dict[int, List[int]] = {index: [] for index in range(len(buckets))}
    if not buckets:
        return result

    starts = [b.start for b in buckets]
    local_day = datetime.datetime.fromtimestamp(buckets[0].start, tz).date()
    dropped = 0

    for sample in ordered_samples(samples):
        if period is PeriodKind.DAY:
            local = datetime.datetime.fromtimestamp(sample.timestamp, tz)
            index = local.hour if local.date() == local_day else -1
        else:
            index = bisect.bisect_right(starts, sample.timestamp) - 1
            if index >= 0 and not buckets[index].contains(sample.timestamp):
                index = -1

        if index < 0:
            dropped += 1
            continue
        result[index].append(sample.id)

    if dropped:
        logger.debug(f"Dropped {dropped} samples outside the {period.value} plan")
    return result
