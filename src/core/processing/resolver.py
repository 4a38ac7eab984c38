"""Nearest-point resolution for "reading at time T" queries."""
import logging
from typing import Iterable, Optional, TypeVar

from core.models.sample import DataPoint, SampleWithData

logger = logging.getLogger(__name__)

T = TypeVar("T", DataPoint, SampleWithData)


def closest(candidates: Iterable[Optional[T]], target: int) -> Optional[T]:
    """
    Return the candidate whose timestamp is nearest to `target`.

    `None` entries are skipped. On equal distance the earlier candidate in
    iteration order wins. Returns None when there is no candidate.
    """
    best: Optional[T] = None
    best_distance = 0
    for candidate in candidates:
        if candidate is None:
            continue
        distance = abs(candidate.timestamp - target)
        if best is None or distance < best_distance:
            best = candidate
            best_distance = distance
    return best


class NearestPointResolver:
    """
    Answers "current reading" and "reading at time T" against a sample store.
    Both lookups return None (not found) when the store holds no samples.
    """

    def __init__(self, store):
        self.store = store

    def nearest(self, target: int) -> Optional[SampleWithData]:
        sample = self.store.sample_nearest(target)
        if sample is None:
            logger.info(f"No sample found near {target}")
        return sample

    def latest(self) -> Optional[SampleWithData]:
        sample = self.store.latest_sample()
        if sample is None:
            logger.info("No samples stored yet")
        return sample
