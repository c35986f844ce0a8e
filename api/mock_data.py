"""
Static listing collection served when no database is reachable.
"""
from functools import lru_cache
from typing import Any, Dict, List, Tuple

from api.models import Listing

MOCK_LISTINGS: List[Dict[str, Any]] = [
    {
        "id": 1, "title": "Bright two-room flat near the old port", "city": "Marseille",
        "type": "flat", "price": 245000, "beds": 2, "area_m2": 54,
        "address": "12 Rue de la Republique", "created_at": "2024-03-02T09:15:00Z",
    },
    {
        "id": 2, "title": "Family house with garden", "city": "Lyon",
        "type": "house", "price": 520000, "beds": 4, "area_m2": 142,
        "address": "8 Chemin des Vignes", "created_at": "2024-02-18T14:00:00Z",
    },
    {
        "id": 3, "title": "Studio close to the university", "city": "Lyon",
        "type": "studio", "price": 129000, "beds": 1, "area_m2": 24,
        "address": "41 Avenue Berthelot", "created_at": "2024-04-11T08:30:00Z",
    },
    {
        "id": 4, "title": "Renovated loft in the Marais", "city": "Paris",
        "type": "loft", "price": 890000, "beds": 2, "area_m2": 96,
        "address": "3 Rue Vieille du Temple", "created_at": "2024-01-27T17:45:00Z",
    },
    {
        "id": 5, "title": "Three-bedroom flat with balcony", "city": "Paris",
        "type": "flat", "price": 735000, "beds": 3, "area_m2": 78,
        "address": "27 Boulevard Voltaire", "created_at": "2024-03-21T10:05:00Z",
    },
    {
        "id": 6, "title": "Seaside villa with pool", "city": "Marseille",
        "type": "house", "price": 1150000, "beds": 5, "area_m2": 210,
        "address": "2 Corniche Kennedy", "created_at": "2023-12-09T12:00:00Z",
    },
    {
        "id": 7, "title": "Compact flat, ideal first purchase", "city": "Lyon",
        "type": "flat", "price": 189000, "beds": 1, "area_m2": 38,
        "created_at": "2024-04-02T16:20:00Z",
    },
    {
        "id": 8, "title": "Building plot with planning permission", "city": "Bordeaux",
        "type": "land", "price": 98000, "area_m2": 650,
        "address": "Lieu-dit Les Pins",
    },
    {
        "id": 9, "title": "Townhouse near the Garonne", "city": "Bordeaux",
        "type": "house", "price": 465000, "beds": 3, "area_m2": 118,
        "address": "15 Quai des Chartrons", "created_at": "2024-02-29T11:10:00Z",
    },
    {
        "id": 10, "title": "Top-floor flat with view", "city": "Marseille",
        "type": "flat", "price": 310000, "beds": 3, "area_m2": 71,
        "address": "90 Boulevard Longchamp", "created_at": "2024-04-15T07:50:00Z",
    },
    {
        "id": 11, "title": "Student studio, furnished", "city": "Paris",
        "type": "studio", "price": 215000, "beds": 1, "area_m2": 19,
        "address": "6 Rue Mouffetard", "created_at": "2024-03-30T13:35:00Z",
    },
    {
        "id": 12, "title": "Flat to renovate", "city": "Bordeaux",
        "type": "flat", "price": 176000, "beds": 2,
        "address": "58 Cours Victor Hugo",
    },
]

@lru_cache(maxsize=1)
def get_mock_listings() -> Tuple[Listing, ...]:
    """Validated, immutable mock collection (insertion order preserved)."""
    return tuple(Listing(**row) for row in MOCK_LISTINGS)
