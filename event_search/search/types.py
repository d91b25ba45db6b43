from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class CityWithRadius(BaseModel):
    """A city to search in, with an optional radius in kilometres."""

    city_name: str
    radius: Optional[float] = Field(default=None, ge=0)


class SearchInputParameters(BaseModel):
    """Request for events matching a field of interest across locations."""

    field_of_interest: str
    locations: List[CityWithRadius] = Field(default_factory=list)
