import logging
import os

from fastapi import FastAPI
from api.deps import engine
from api.models import HealthResponse
from api.routers import listings

LOG_LEVEL = os.getenv("API_LOG_LEVEL", "INFO").upper()

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO),
                    format="%(asctime)s | %(levelname)s | %(message)s")
LOG = logging.getLogger("api")

app = FastAPI(
    title="Real Estate Listings API",
    version="1.0.0",
    description="Search listings from the database, or from mock data when it is unavailable."
)

app.include_router(listings.router)

LOG.info("Data source: %s", "database (with mock fallback)" if engine is not None else "mock only")

@app.get("/api/health", response_model=HealthResponse)
def health():
    return HealthResponse(status="ok", database=engine is not None)
