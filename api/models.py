import math
from typing import Optional, List, Mapping, Any
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

SORT_KEYS = ("price_asc", "price_desc", "area_desc", "newest")

class Listing(BaseModel):
    id: int = Field(..., description="Stable listing identifier")
    title: str
    city: str
    type: str = Field(..., description="Property category: flat, house, ...")
    price: float = Field(..., ge=0)
    beds: Optional[int] = Field(None, ge=0)
    area_m2: Optional[float] = Field(None, ge=0)
    address: Optional[str] = None
    created_at: Optional[datetime] = None

def _blank(v: Any) -> bool:
    return v is None or (isinstance(v, str) and not v.strip())

class ListingQuery(BaseModel):
    """
    Typed view of the listing query string.
    All coercion lives here: blank or unparseable numbers mean "not specified".
    """
    q: Optional[str] = None
    city: Optional[str] = None
    type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    beds: Optional[float] = None
    sort: Optional[str] = None

    @field_validator("q", mode="before")
    @classmethod
    def _normalize_text(cls, v):
        if _blank(v):
            return None
        return str(v).strip().lower()

    @field_validator("city", "type", mode="before")
    @classmethod
    def _empty_to_none(cls, v):
        # only "" means unset; " " is a real (non-matching) value
        return None if v is None or v == "" else v

    @field_validator("min_price", "max_price", "beds", mode="before")
    @classmethod
    def _to_number(cls, v):
        if _blank(v) or (isinstance(v, str) and "_" in v):
            return None
        try:
            n = float(v)
        except (TypeError, ValueError):
            return None
        return None if math.isnan(n) else n

    @field_validator("sort", mode="before")
    @classmethod
    def _known_sort(cls, v):
        return v if v in SORT_KEYS else None

    @classmethod
    def from_params(cls, params: Mapping[str, Optional[str]]) -> "ListingQuery":
        """Build from raw query-string names (minPrice, maxPrice, ...)."""
        return cls(
            q=params.get("q"),
            city=params.get("city"),
            type=params.get("type"),
            min_price=params.get("minPrice"),
            max_price=params.get("maxPrice"),
            beds=params.get("beds"),
            sort=params.get("sort"),
        )

class CityStat(BaseModel):
    city: str
    count: int

class TypeStat(BaseModel):
    type: str
    count: int

class ListingsResponse(BaseModel):
    total: int = Field(..., description="Rows that match the filters")
    listings: List[Listing]
    source: str = Field(..., description="database or mock")

class ListingResponse(BaseModel):
    listing: Listing
    source: str

class RelatedResponse(BaseModel):
    listing_id: int
    listing_city: str
    listing_type: str
    related_in_city: List[Listing]
    related_by_type: List[Listing]
    similar_price: List[Listing]
    city_stats: List[CityStat]
    type_stats: List[TypeStat]
    source: str

class HealthResponse(BaseModel):
    status: str
    database: bool
