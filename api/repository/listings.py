import logging
from datetime import datetime, timezone
from typing import Dict, Any, List

from sqlalchemy import DateTime, asc, desc, func, literal
from sqlalchemy.engine import Connection

from api.models import ListingQuery
from api.sql import base_select, listings

LOG = logging.getLogger("repo")

# missing created_at sorts as the epoch, as in api.query
_EPOCH = literal(datetime(1970, 1, 1, tzinfo=timezone.utc), DateTime(timezone=True))

_SORT = {
    "price_asc":  [asc(listings.c.price)],
    "price_desc": [desc(listings.c.price)],
    "area_desc":  [desc(func.coalesce(listings.c.area_m2, 0))],
    "newest":     [desc(func.coalesce(listings.c.created_at, _EPOCH))],
}

def _haystack():
    """lower(title || ' ' || city || ' ' || coalesce(address, '') || ' ' || type)"""
    return func.lower(
        listings.c.title + " " + listings.c.city + " "
        + func.coalesce(listings.c.address, "") + " " + listings.c.type
    )

def _apply_filters(stmt, q: ListingQuery):
    """Attach WHEREs + ORDER BY to a Core statement built by base_select()."""
    if q.q:
        stmt = stmt.where(_haystack().contains(q.q, autoescape=True))
    if q.city:
        stmt = stmt.where(listings.c.city == q.city)
    if q.type:
        stmt = stmt.where(listings.c.type == q.type)

    # numeric ranges
    if q.min_price is not None:
        stmt = stmt.where(listings.c.price >= q.min_price)
    if q.max_price is not None:
        stmt = stmt.where(listings.c.price <= q.max_price)
    if q.beds is not None:
        stmt = stmt.where(func.coalesce(listings.c.beds, 0) >= q.beds)

    # id keeps ties (and the unsorted case) deterministic
    return stmt.order_by(*_SORT.get(q.sort, []), asc(listings.c.id))

def search(conn: Connection, q: ListingQuery) -> List[Dict[str, Any]]:
    """
    Returns the rows matching `q` as plain dicts with keys matching
    api.models.Listing.
    """
    rows = conn.execute(_apply_filters(base_select(), q)).mappings().all()
    LOG.debug("search matched %s rows", len(rows))
    return [dict(r) for r in rows]

def get_by_id(conn: Connection, listing_id: int) -> Dict[str, Any]:
    """
    Returns one listing as a dict, or {} if not found.
    """
    row = conn.execute(base_select().where(listings.c.id == listing_id)).mappings().first()
    return dict(row) if row else {}

def fetch_all(conn: Connection) -> List[Dict[str, Any]]:
    rows = conn.execute(base_select().order_by(asc(listings.c.id))).mappings().all()
    return [dict(r) for r in rows]
