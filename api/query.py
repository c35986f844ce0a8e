"""
In-memory query engine over a listing collection.

Every function here is pure: the collection is only read, and each call
returns freshly built lists.
"""
import re
from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from api.models import Listing, ListingQuery

RELATED_LIMIT = 3

_ID_RE = re.compile(r"[+-]?[0-9]{1,19}")

# BIGINT range of the listings.id column
_ID_MIN, _ID_MAX = -(2 ** 63), 2 ** 63 - 1

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

@dataclass(frozen=True)
class RelatedBundle:
    listing_id: int
    city: str
    type: str
    related_in_city: List[Listing]
    related_by_type: List[Listing]
    similar_price: List[Listing]
    city_stats: List[Tuple[str, int]]
    type_stats: List[Tuple[str, int]]

def parse_listing_id(raw) -> Optional[int]:
    """Strict base-10 id; anything else is treated as unknown."""
    if isinstance(raw, int):
        return raw
    s = str(raw or "").strip()
    if not _ID_RE.fullmatch(s):
        return None
    n = int(s)
    return n if _ID_MIN <= n <= _ID_MAX else None

def _haystack(x: Listing) -> str:
    return f"{x.title} {x.city} {x.address or ''} {x.type}".lower()

def _created(x: Listing) -> datetime:
    ts = x.created_at
    if ts is None:
        return _EPOCH
    # naive timestamps are UTC
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)

_SORTS: Dict[str, Tuple[Callable[[Listing], object], bool]] = {
    "price_asc":  (lambda x: x.price, False),
    "price_desc": (lambda x: x.price, True),
    "area_desc":  (lambda x: x.area_m2 or 0, True),
    "newest":     (_created, True),
}

def search(collection: Sequence[Listing], query: ListingQuery) -> List[Listing]:
    results = list(collection)

    if query.q:
        results = [x for x in results if query.q in _haystack(x)]
    if query.city:
        results = [x for x in results if x.city == query.city]
    if query.type:
        results = [x for x in results if x.type == query.type]
    if query.min_price is not None:
        results = [x for x in results if x.price >= query.min_price]
    if query.max_price is not None:
        results = [x for x in results if x.price <= query.max_price]
    if query.beds is not None:
        results = [x for x in results if (x.beds or 0) >= query.beds]

    # sorted() is stable, reverse=True included
    if query.sort in _SORTS:
        key, reverse = _SORTS[query.sort]
        results = sorted(results, key=key, reverse=reverse)

    return results

def find_listing(collection: Sequence[Listing], listing_id) -> Optional[Listing]:
    target_id = parse_listing_id(listing_id)
    if target_id is None:
        return None
    return next((x for x in collection if x.id == target_id), None)

def _counts(values) -> List[Tuple[str, int]]:
    # Counter keeps first-seen order; the stable sort keeps it on ties
    return sorted(Counter(values).items(), key=lambda kv: kv[1], reverse=True)

def related(collection: Sequence[Listing], listing_id) -> Optional[RelatedBundle]:
    """
    Listings related to one target: same city, same type, closest price,
    plus city/type counts over the whole collection. None when the target
    does not exist.
    """
    target = find_listing(collection, listing_id)
    if target is None:
        return None

    others = [x for x in collection if x.id != target.id]

    return RelatedBundle(
        listing_id=target.id,
        city=target.city,
        type=target.type,
        related_in_city=[x for x in others if x.city == target.city][:RELATED_LIMIT],
        related_by_type=[x for x in others if x.type == target.type][:RELATED_LIMIT],
        similar_price=sorted(others, key=lambda x: abs(x.price - target.price))[:RELATED_LIMIT],
        city_stats=_counts(x.city for x in collection),
        type_stats=_counts(x.type for x in collection),
    )
