from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from core.errors import InvalidRange
from core.processing.bucket_planner import parse_local_date
from routers.common import STORE_UNAVAILABLE_RESPONSE, get_series_service
from schemas import TimestampsResponse

router = APIRouter(prefix="/dates", tags=["dates"])


@router.get("/{date}/data-points", response_model=TimestampsResponse, responses={
    400: {
        "description": "Malformed date or unknown time zone.",
        "content": {
            "application/json": {
                "example": {"detail": "Invalid date format: 2024-13-01. Use YYYY-MM-DD"}
            }
        }
    },
    **STORE_UNAVAILABLE_RESPONSE,
})
def get_data_points_for_date(
    date: str,
    tz: Optional[str] = Query(None, description="IANA time zone of the viewer, e.g. Europe/Paris"),
) -> TimestampsResponse:
    """
    List the timestamps of every sample taken on a local calendar day (YYYY-MM-DD).
    """
    try:
        timestamps = get_series_service().get_timestamps_for_day(parse_local_date(date), tz)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TimestampsResponse(timestamps=timestamps)
