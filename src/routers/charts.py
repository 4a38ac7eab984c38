from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException, Query

from core.errors import InvalidRange
from core.models.aggregated_series import AggregatedSeries, Stats, is_gap
from core.processing.bucket_planner import parse_local_date
from routers.common import STORE_UNAVAILABLE_RESPONSE, get_series_service
from schemas import ChartDataResponse, SensorChartSeries

router = APIRouter(prefix="/charts", tags=["charts"])

TZ_QUERY = Query(None, description="IANA time zone of the viewer, e.g. Europe/Paris")

INVALID_RANGE_RESPONSE = {
    400: {
        "description": "Invalid date, month, year or time zone.",
        "content": {
            "application/json": {
                "example": {"detail": "Invalid calendar date: 2024-13-1"}
            }
        }
    },
    **STORE_UNAVAILABLE_RESPONSE,
}


def _gaps_to_null(values: List[float]) -> List[Optional[float]]:
    """JSON has no NaN: gap buckets are sent as null."""
    return [None if is_gap(v) else v for v in values]


def _flatten(prefix: str, stats: Stats) -> Dict[str, List[Optional[float]]]:
    return {
        f"{prefix}_avg": _gaps_to_null(stats.avg),
        f"{prefix}_min": _gaps_to_null(stats.min),
        f"{prefix}_max": _gaps_to_null(stats.max),
    }


def to_response(series: AggregatedSeries) -> ChartDataResponse:
    system: Dict[str, List[Optional[float]]] = {}
    for name, stats in series.system.metrics().items():
        system.update(_flatten(name, stats))

    return ChartDataResponse(
        period=series.period.value,
        timezone=series.timezone,
        labels=series.labels,
        timestamps=series.bucket_starts,
        sensors=[
            SensorChartSeries(
                sensor_id=sensor.sensor_id,
                name=sensor.name,
                series={**_flatten("temperature", sensor.temperature), **_flatten("humidity", sensor.humidity)},
            )
            for sensor in series.sensors
        ],
        systemData=system,
    )


@router.get("/day/{date}", response_model=ChartDataResponse, responses=INVALID_RANGE_RESPONSE)
def get_chart_for_day(date: str, tz: Optional[str] = TZ_QUERY) -> ChartDataResponse:
    """
    Hourly avg/min/max for one local calendar day (YYYY-MM-DD): always 24 buckets.
    """
    try:
        series = get_series_service().get_series_for_day(parse_local_date(date), tz)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    return to_response(series)


@router.get("/month/{year}/{month}", response_model=ChartDataResponse, responses=INVALID_RANGE_RESPONSE)
def get_chart_for_month(year: int, month: int, tz: Optional[str] = TZ_QUERY) -> ChartDataResponse:
    """
    Daily avg/min/max for one month: one bucket per calendar day.
    """
    try:
        series = get_series_service().get_series_for_month(year, month, tz)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    return to_response(series)


@router.get("/year/{year}", response_model=ChartDataResponse, responses=INVALID_RANGE_RESPONSE)
def get_chart_for_year(year: int, tz: Optional[str] = TZ_QUERY) -> ChartDataResponse:
    """
    Monthly avg/min/max for one year: always 12 buckets.
    """
    try:
        series = get_series_service().get_series_for_year(year, tz)
    except InvalidRange as e:
        raise HTTPException(status_code=400, detail=str(e))
    return to_response(series)
