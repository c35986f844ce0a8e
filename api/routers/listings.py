# api/routers/listings.py
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.engine import Connection

from api import query
from api.deps import get_context
from api.models import (
    Listing, ListingQuery, ListingsResponse, ListingResponse,
    RelatedResponse, CityStat, TypeStat,
)
from api.query import RelatedBundle
from api.repository import listings as repo
from api.source import SourceContext, select_source

router = APIRouter(prefix="/api", tags=["listings"])

def _connect(ctx: SourceContext) -> Connection:
    if ctx.engine is None:
        raise RuntimeError("No database configured (DATABASE_URL is unset)")
    return ctx.engine.connect()

def _related_response(bundle: Optional[RelatedBundle], source: str) -> Optional[RelatedResponse]:
    if bundle is None:
        return None
    return RelatedResponse(
        listing_id=bundle.listing_id,
        listing_city=bundle.city,
        listing_type=bundle.type,
        related_in_city=bundle.related_in_city,
        related_by_type=bundle.related_by_type,
        similar_price=bundle.similar_price,
        city_stats=[CityStat(city=c, count=n) for c, n in bundle.city_stats],
        type_stats=[TypeStat(type=t, count=n) for t, n in bundle.type_stats],
        source=source,
    )

@router.get("/listings", response_model=ListingsResponse)
def list_listings(
    # raw strings: numeric coercion happens in ListingQuery
    q: Optional[str]         = Query(None, description="Free text over title, city, address, type"),
    city: Optional[str]      = Query(None),
    type: Optional[str]      = Query(None, description="flat, house, studio, ..."),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    beds: Optional[str]      = Query(None, description="Minimum bedrooms"),
    sort: Optional[str]      = Query(None, description="price_asc, price_desc, area_desc, newest"),

    ctx: SourceContext = Depends(get_context),
):
    """
    Thin endpoint:
      - parse the query string into a ListingQuery
      - answer from the database or the mock collection
    """
    lq = ListingQuery.from_params({
        "q": q, "city": city, "type": type,
        "minPrice": min_price, "maxPrice": max_price,
        "beds": beds, "sort": sort,
    })

    def db_logic(c: SourceContext) -> ListingsResponse:
        with _connect(c) as conn:
            rows = repo.search(conn, lq)
        items = [Listing(**row) for row in rows]
        return ListingsResponse(total=len(items), listings=items, source="database")

    def mock_logic(c: SourceContext) -> ListingsResponse:
        items = query.search(c.listings, lq)
        return ListingsResponse(total=len(items), listings=items, source="mock")

    return select_source(ctx, db_logic, mock_logic)

@router.get("/listings/{listing_id}", response_model=ListingResponse)
def get_listing(listing_id: str, ctx: SourceContext = Depends(get_context)):
    def db_logic(c: SourceContext) -> Optional[ListingResponse]:
        target_id = query.parse_listing_id(listing_id)
        if target_id is None:
            return None
        with _connect(c) as conn:
            row = repo.get_by_id(conn, target_id)
        return ListingResponse(listing=Listing(**row), source="database") if row else None

    def mock_logic(c: SourceContext) -> Optional[ListingResponse]:
        listing = query.find_listing(c.listings, listing_id)
        return ListingResponse(listing=listing, source="mock") if listing else None

    resp = select_source(ctx, db_logic, mock_logic)
    if resp is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return resp

@router.get("/listings/{listing_id}/related", response_model=RelatedResponse)
def get_related(listing_id: str, ctx: SourceContext = Depends(get_context)):
    def db_logic(c: SourceContext) -> Optional[RelatedResponse]:
        with _connect(c) as conn:
            rows = repo.fetch_all(conn)
        collection = [Listing(**row) for row in rows]
        return _related_response(query.related(collection, listing_id), "database")

    def mock_logic(c: SourceContext) -> Optional[RelatedResponse]:
        return _related_response(query.related(c.listings, listing_id), "mock")

    resp = select_source(ctx, db_logic, mock_logic)
    if resp is None:
        raise HTTPException(status_code=404, detail="Listing not found")
    return resp
