from fastapi import APIRouter, HTTPException, Depends, Request
from features.locations.models.location_types import SavedLocation
from features.locations.services.location_store import LocationStore

router = APIRouter(
    prefix="/locations",
    tags=["Locations"]
)

def get_store(request: Request) -> LocationStore:
    """Dependency to get the LocationStore instance."""
    return request.app.state.location_store

@router.get(
    "/saved",
    response_model=SavedLocation,
    summary="Get the saved location"
)
async def get_saved_location(
    store: LocationStore = Depends(get_store)
) -> SavedLocation:
    location = store.load()
    if not location:
        raise HTTPException(status_code=404, detail="No saved location")
    return location

@router.put(
    "/saved",
    response_model=SavedLocation,
    summary="Save the location used for tide lookups"
)
async def put_saved_location(
    location: SavedLocation,
    store: LocationStore = Depends(get_store)
) -> SavedLocation:
    store.save(location)
    return location

@router.delete(
    "/saved",
    status_code=204,
    summary="Forget the saved location"
)
async def delete_saved_location(
    store: LocationStore = Depends(get_store)
) -> None:
    if not store.clear():
        raise HTTPException(status_code=404, detail="No saved location")
