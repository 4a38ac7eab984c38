from typing import Dict, List, Optional
from pydantic import BaseModel


class AppHealthOK(BaseModel):
    status: str
    app: str


class DataPointModel(BaseModel):
    id: int
    timestamp: int
    synchronized: int


class SensorReadingModel(BaseModel):
    id: int
    sensor_id: int
    name: str
    temperature: Optional[float]
    humidity: Optional[float]
    data_point_id: int


class SystemDataModel(BaseModel):
    id: int
    soc_temperature: Optional[float]
    wlan0_link_quality: Optional[float]
    wlan0_signal_level: Optional[float]
    storage_total_size: Optional[float]
    storage_used: Optional[float]
    storage_avail: Optional[float]
    data_point_id: int


class ImageModel(BaseModel):
    id: int
    filename: str
    data_point_id: int


class DataPointWithDataResponse(BaseModel):
    dataPoint: DataPointModel
    sensors: List[SensorReadingModel]
    systemData: Optional[SystemDataModel]
    image: Optional[ImageModel]


class TimestampsResponse(BaseModel):
    timestamps: List[int]


class SensorChartSeries(BaseModel):
    sensor_id: int
    name: str
    # "<metric>_<avg|min|max>" -> one value per bucket, null where the bucket has no data
    series: Dict[str, List[Optional[float]]]


class ChartDataResponse(BaseModel):
    period: str
    timezone: str
    labels: List[str]
    timestamps: List[int]
    sensors: List[SensorChartSeries]
    systemData: Dict[str, List[Optional[float]]]
