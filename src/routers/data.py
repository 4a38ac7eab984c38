from fastapi import APIRouter, HTTPException

from core.config_loader import config_loader
from core.models.sample import SampleWithData
from routers.common import STORE_UNAVAILABLE_RESPONSE, get_series_service
from schemas import (
    DataPointModel,
    DataPointWithDataResponse,
    ImageModel,
    SensorReadingModel,
    SystemDataModel,
)

router = APIRouter(prefix="/data", tags=["data"])

# SQLite INTEGER is a signed 64-bit value
TIMESTAMP_MIN = -(2 ** 63)
TIMESTAMP_MAX = 2 ** 63 - 1


def to_response(sample: SampleWithData) -> DataPointWithDataResponse:
    """Convert a stored sample to its API shape, deriving each sensor's display name."""
    system = sample.system_data
    image = sample.image
    return DataPointWithDataResponse(
        dataPoint=DataPointModel(
            id=sample.data_point.id,
            timestamp=sample.data_point.timestamp,
            synchronized=sample.data_point.synchronized,
        ),
        sensors=[
            SensorReadingModel(
                id=r.id,
                sensor_id=r.sensor_id,
                name=config_loader.get_sensor_display_name(r.sensor_id),
                temperature=r.temperature,
                humidity=r.humidity,
                data_point_id=r.data_point_id,
            )
            for r in sample.sensors
        ],
        systemData=SystemDataModel(
            id=system.id,
            soc_temperature=system.soc_temperature,
            wlan0_link_quality=system.wlan0_link_quality,
            wlan0_signal_level=system.wlan0_signal_level,
            storage_total_size=system.storage_total_size,
            storage_used=system.storage_used,
            storage_avail=system.storage_avail,
            data_point_id=system.data_point_id,
        ) if system is not None else None,
        image=ImageModel(
            id=image.id,
            filename=image.filename,
            data_point_id=image.data_point_id,
        ) if image is not None else None,
    )


@router.get("/current", response_model=DataPointWithDataResponse, responses={
    404: {
        "description": "The store holds no samples.",
        "content": {
            "application/json": {
                "example": {"detail": "No data found"}
            }
        }
    },
    **STORE_UNAVAILABLE_RESPONSE,
})
def get_current_data() -> DataPointWithDataResponse:
    """
    Get the most recent sample with its sensor readings, system data and image.
    """
    sample = get_series_service().get_current_sample()
    if sample is None:
        raise HTTPException(status_code=404, detail="No data found")
    return to_response(sample)


@router.get("/{timestamp}", response_model=DataPointWithDataResponse, responses={
    400: {
        "description": "Timestamp is not a 64-bit integer.",
        "content": {
            "application/json": {
                "example": {"detail": "Invalid timestamp"}
            }
        }
    },
    404: {
        "description": "The store holds no samples.",
        "content": {
            "application/json": {
                "example": {"detail": "No data found for timestamp"}
            }
        }
    },
    **STORE_UNAVAILABLE_RESPONSE,
})
def get_data_by_timestamp(timestamp: str) -> DataPointWithDataResponse:
    """
    Get the sample closest in time to `timestamp` (Unix seconds).
    """
    try:
        target = int(timestamp)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid timestamp")
    if not TIMESTAMP_MIN <= target <= TIMESTAMP_MAX:
        raise HTTPException(status_code=400, detail="Invalid timestamp")

    sample = get_series_service().get_sample_near(target)
    if sample is None:
        raise HTTPException(status_code=404, detail="No data found for timestamp")
    return to_response(sample)
