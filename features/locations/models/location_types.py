from pydantic import BaseModel, Field

from features.tides.models.tide_types import Coordinate

class SavedLocation(BaseModel):
    """Location chosen by the user for tide lookups"""
    name: str = Field(..., min_length=1, description="Display name of the location")
    latitude: float = Field(..., description="Latitude in decimal degrees")
    longitude: float = Field(..., description="Longitude in decimal degrees")

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)
