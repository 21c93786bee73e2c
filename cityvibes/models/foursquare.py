"""Foursquare Places API (v3) response and request models."""
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class FoursquareCategory(BaseModel):
    """Category attached to a place, e.g. {"id": 13003, "name": "Bar"}."""
    id: Union[int, str]
    name: str = ""
    short_name: Optional[str] = None
    plural_name: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class FoursquareLocation(BaseModel):
    address: Optional[str] = None
    locality: Optional[str] = None
    region: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None
    formatted_address: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class FoursquareLatLng(BaseModel):
    latitude: float
    longitude: float


class FoursquareGeocodes(BaseModel):
    main: Optional[FoursquareLatLng] = None
    roof: Optional[FoursquareLatLng] = None

    model_config = ConfigDict(extra="ignore")


class FoursquareHours(BaseModel):
    display: Optional[str] = None
    is_local_holiday: Optional[bool] = None
    open_now: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")


class FoursquarePhoto(BaseModel):
    """Photo reference. Full URL is prefix + size + suffix."""
    id: Optional[str] = None
    prefix: str
    suffix: str

    model_config = ConfigDict(extra="ignore")

    def url(self, size: str = "300x300") -> str:
        return f"{self.prefix}{size}{self.suffix}"


class FoursquareTip(BaseModel):
    text: str = ""

    model_config = ConfigDict(extra="ignore")


class FoursquareContact(BaseModel):
    tel: Optional[str] = None
    website: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class FoursquarePlace(BaseModel):
    """Single place from the /places/search response.

    Handles both response shapes:
    - tel/website at the top level (explicit `fields` request)
    - tel/website nested under "contact"
    """
    fsq_id: Optional[str] = None
    name: str
    categories: list[FoursquareCategory] = Field(default_factory=list)
    location: Optional[FoursquareLocation] = None
    geocodes: Optional[FoursquareGeocodes] = None
    rating: Optional[float] = None  # 0-10 scale
    price: Optional[int] = None  # 1-4
    hours: Optional[FoursquareHours] = None
    tel: Optional[str] = None
    website: Optional[str] = None
    contact: Optional[FoursquareContact] = None
    features: dict[str, Any] = Field(default_factory=dict)
    photos: list[FoursquarePhoto] = Field(default_factory=list)
    tips: list[FoursquareTip] = Field(default_factory=list)
    distance: Optional[int] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def phone(self) -> Optional[str]:
        if self.tel:
            return self.tel
        return self.contact.tel if self.contact else None

    @property
    def site(self) -> Optional[str]:
        if self.website:
            return self.website
        return self.contact.website if self.contact else None


class FoursquareSearchResponse(BaseModel):
    """Response from /places/search."""
    results: list[FoursquarePlace] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")


class FoursquareSearchParams(BaseModel):
    """Parameters for /places/search request."""
    near: str  # City name, e.g. "Monterrey, NL"
    query: Optional[str] = None
    categories: Optional[list[str]] = None  # Foursquare category ids
    limit: int = 50  # API max is 50

    def to_query_params(self, fields: Optional[str] = None) -> dict[str, Any]:
        """Convert to query parameters dict, excluding None values."""
        params: dict[str, Any] = {"near": self.near, "limit": min(self.limit, 50)}

        if self.query:
            params["query"] = self.query
        if self.categories:
            params["categories"] = ",".join(self.categories)
        if fields:
            params["fields"] = fields

        return params
