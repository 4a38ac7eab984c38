"""Period kind enumeration for range summaries."""
from enum import Enum


class PeriodKind(Enum):
    """Calendar period a range summary covers."""
    DAY = "day"      # 24 hourly buckets
    MONTH = "month"  # one bucket per calendar day
    YEAR = "year"    # 12 monthly buckets
