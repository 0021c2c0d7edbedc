from fastapi import APIRouter, HTTPException, Depends, Query, Request
from features.tides.exceptions.tide_exceptions import TideClientError
from features.tides.models.tide_types import Coordinate, TideChart, TideReport
from features.tides.services.tide_service import TideService, to_http_exception
from features.locations.services.location_store import LocationStore

router = APIRouter(
    prefix="/tides",
    tags=["Tides"]
)

def get_service(request: Request) -> TideService:
    """Dependency to get the TideService instance."""
    return request.app.state.tide_service

def get_location_store(request: Request) -> LocationStore:
    """Dependency to get the LocationStore instance."""
    return request.app.state.location_store

@router.get(
    "",
    response_model=TideReport,
    summary="Get today's tides for a coordinate",
    description="Returns tide heights and high/low extremes for today at the given coordinate"
)
async def get_tides(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    service: TideService = Depends(get_service)
) -> TideReport:
    """Get today's tide report for a coordinate."""
    try:
        return await service.get_tide_report(Coordinate(latitude=lat, longitude=lon))
    except TideClientError as e:
        raise to_http_exception(e)

@router.get(
    "/saved",
    response_model=TideReport,
    summary="Get today's tides for the saved location",
    description="Returns tide heights and extremes for the location stored via /locations/saved"
)
async def get_saved_location_tides(
    service: TideService = Depends(get_service),
    store: LocationStore = Depends(get_location_store)
) -> TideReport:
    """Get today's tide report for the saved location."""
    location = store.load()
    if not location:
        raise HTTPException(status_code=404, detail="No saved location")
    try:
        return await service.get_tide_report(location.coordinate)
    except TideClientError as e:
        raise to_http_exception(e)

@router.get(
    "/chart",
    response_model=TideChart,
    summary="Get chart data for a coordinate",
    description="Returns normalized heights, the current sample index and the extremes summary"
)
async def get_tide_chart(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    service: TideService = Depends(get_service)
) -> TideChart:
    """Get chart-ready tide data for a coordinate."""
    try:
        return await service.get_tide_chart(Coordinate(latitude=lat, longitude=lon))
    except TideClientError as e:
        raise to_http_exception(e)
