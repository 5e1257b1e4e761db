"""Search result domain models.

Each variant is built where its source is read, so consumers dispatch on
``variant`` instead of guessing from the shape of the object.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from map_route_planner.domain.models.coordinate import Coordinate
from map_route_planner.domain.models.point_of_interest import PoiCategory


class MarkerSearchResult(BaseModel):
    """A user marker matching the query."""

    model_config = ConfigDict(frozen=True)

    variant: Literal["marker"] = "marker"
    title: str
    coordinate: Coordinate
    description: str = ""
    source_id: str


class PoiSearchResult(BaseModel):
    """A cached point of interest matching the query."""

    model_config = ConfigDict(frozen=True)

    variant: Literal["poi"] = "poi"
    title: str
    coordinate: Coordinate
    category: PoiCategory
    source_id: str


class PlaceSearchResult(BaseModel):
    """A place returned by the external geocoder."""

    model_config = ConfigDict(frozen=True)

    variant: Literal["place"] = "place"
    title: str
    coordinate: Coordinate
    source_id: str | None = None


SearchResult = Annotated[
    MarkerSearchResult | PoiSearchResult | PlaceSearchResult,
    Field(discriminator="variant"),
]
