"""
Per-request choice between the database and the mock collection.

Rules:
  - source=mock  -> mock handler, always
  - source=db    -> db handler, errors propagate (no fallback)
  - otherwise    -> db handler when a database is configured, and on any
                    failure one logged fallback to the mock handler
"""
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Sequence, TypeVar

from sqlalchemy.engine import Engine

from api.models import Listing

LOG = logging.getLogger("source")

T = TypeVar("T")

SOURCE_MOCK = "mock"
SOURCE_DB = "db"

@dataclass(frozen=True)
class SourceContext:
    """Everything a handler may touch for one request."""
    engine: Optional[Engine]
    listings: Sequence[Listing]
    source: Optional[str] = None  # override: "mock" | "db" | None

    @property
    def db_available(self) -> bool:
        return self.engine is not None

def normalize_source(raw: Optional[str]) -> Optional[str]:
    return raw if raw in (SOURCE_MOCK, SOURCE_DB) else None

@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None

def attempt(handler: Callable[[SourceContext], T], ctx: SourceContext) -> Outcome[T]:
    """Run `handler` once and capture its failure instead of raising it."""
    try:
        return Outcome(value=handler(ctx))
    except Exception as e:
        return Outcome(error=e)

def select_source(
    ctx: SourceContext,
    db_handler: Callable[[SourceContext], T],
    mock_handler: Callable[[SourceContext], T],
) -> T:
    if ctx.source == SOURCE_MOCK:
        return mock_handler(ctx)

    if ctx.source == SOURCE_DB:
        return db_handler(ctx)

    if not ctx.db_available:
        LOG.debug("No database configured, using mock data")
        return mock_handler(ctx)

    outcome = attempt(db_handler, ctx)
    if outcome.ok:
        return outcome.value

    LOG.warning("DB logic failed, falling back to mock data: %s: %s",
                type(outcome.error).__name__, outcome.error)
    return mock_handler(ctx)
