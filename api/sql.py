from sqlalchemy import MetaData, Table, Column, Integer, BigInteger, String, Numeric, DateTime
from sqlalchemy.sql import select

metadata = MetaData()

# ---------- Table (as exposed by the database) ----------
listings = Table(
    "listings", metadata,
    Column("id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True),
    Column("title", String, nullable=False),
    Column("city", String, nullable=False),
    Column("type", String, nullable=False),
    Column("price", Numeric(asdecimal=False), nullable=False),
    Column("beds", Integer),
    Column("area_m2", Numeric(asdecimal=False)),
    Column("address", String),
    Column("created_at", DateTime(timezone=True)),
)

# ---------- Column list reused across queries ----------

BASE_COLS = [
    listings.c.id,
    listings.c.title,
    listings.c.city,
    listings.c.type,
    listings.c.price,
    listings.c.beds,
    listings.c.area_m2,
    listings.c.address,
    listings.c.created_at,
]

def base_select():
    """
    Every listing column, keys matching api.models.Listing.
    """
    return select(*BASE_COLS).select_from(listings)
