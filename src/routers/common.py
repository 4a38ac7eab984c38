from fastapi import HTTPException

from core.service_manager import service_manager
from core.services.series_service import SeriesService

STORE_UNAVAILABLE_RESPONSE = {
    503: {
        "description": "The sample store could not be read.",
        "content": {
            "application/json": {
                "example": {"detail": "Database file not found: data/greenhouse_data.sqlite"}
            }
        }
    }
}


def get_series_service() -> SeriesService:
    """Return the running query service or answer 503."""
    if not service_manager.running or service_manager.series_service is None:
        raise HTTPException(status_code=503, detail="Services are not running")
    return service_manager.series_service
