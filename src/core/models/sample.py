"""
Telemetry sample data models.

These mirror the rows of the persisted sample tables. They are frozen: the
query engine only ever reads them.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class DataPoint:
    """
    A single ingested observation event.
    `timestamp` is Unix epoch seconds (UTC).
    """
    id: int
    timestamp: int
    synchronized: int = 0


@dataclass(frozen=True)
class SensorReading:
    id: int
    sensor_id: int
    temperature: float
    humidity: float
    data_point_id: int


@dataclass(frozen=True)
class SystemSnapshot:
    id: int
    soc_temperature: float
    wlan0_link_quality: float
    wlan0_signal_level: float
    storage_total_size: float
    storage_used: float
    storage_avail: float
    data_point_id: int


@dataclass(frozen=True)
class ImageRecord:
    id: int
    filename: str
    data_point_id: int


@dataclass(frozen=True)
class SampleWithData:
    """
    A data point with its attached sub-records.
    A sample may carry any number of sensor readings and at most one system snapshot.
    """
    data_point: DataPoint
    sensors: List[SensorReading] = field(default_factory=list)
    system_data: Optional[SystemSnapshot] = None
    image: Optional[ImageRecord] = None

    @property
    def id(self) -> int:
        return self.data_point.id

    @property
    def timestamp(self) -> int:
        return self.data_point.timestamp
