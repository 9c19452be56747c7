from typing import Optional, List

from pydantic import BaseModel, Field


class UserLocation(BaseModel):
    lat: float
    lng: float
    address: Optional[str] = None
    is_using_device_location: bool = False


class UserPreferences(BaseModel):
    max_distance: Optional[float] = None  # km; None falls back to the configured default
    genre_preferences: List[str] = Field(default_factory=list)
