"""Tests for database/mock source selection."""

import logging

import pytest

from api.source import Outcome, SourceContext, attempt, normalize_source, select_source


class _Recorder:
    def __init__(self, result=None, error=None):
        self.calls = 0
        self.result = result
        self.error = error

    def __call__(self, ctx):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


def _ctx(source=None, db=True) -> SourceContext:
    # select_source only checks that an engine is configured
    return SourceContext(engine=object() if db else None, listings=(), source=source)


def test_normalize_source():
    assert normalize_source("mock") == "mock"
    assert normalize_source("db") == "db"
    assert normalize_source("database") is None
    assert normalize_source("") is None
    assert normalize_source(None) is None


def test_attempt_success_and_failure():
    ok = attempt(lambda ctx: 42, _ctx())
    assert ok.ok and ok.value == 42

    err = RuntimeError("boom")
    failed = attempt(_Recorder(error=err), _ctx())
    assert not failed.ok
    assert failed.error is err
    assert Outcome().ok


def test_healthy_db_is_used():
    db, mock = _Recorder("db"), _Recorder("mock")
    assert select_source(_ctx(), db, mock) == "db"
    assert (db.calls, mock.calls) == (1, 0)


def test_no_database_uses_mock():
    db, mock = _Recorder("db"), _Recorder("mock")
    assert select_source(_ctx(db=False), db, mock) == "mock"
    assert (db.calls, mock.calls) == (0, 1)


def test_override_mock_skips_healthy_db():
    db, mock = _Recorder("db"), _Recorder("mock")
    assert select_source(_ctx(source="mock"), db, mock) == "mock"
    assert db.calls == 0


def test_override_db_propagates_failure():
    db, mock = _Recorder(error=ValueError("db down")), _Recorder("mock")
    with pytest.raises(ValueError, match="db down"):
        select_source(_ctx(source="db"), db, mock)
    assert (db.calls, mock.calls) == (1, 0)


def test_override_db_ignores_availability():
    db, mock = _Recorder("db"), _Recorder("mock")
    assert select_source(_ctx(source="db", db=False), db, mock) == "db"


def test_db_failure_falls_back_once_and_logs(caplog):
    db, mock = _Recorder(error=ConnectionError("refused")), _Recorder("mock")

    with caplog.at_level(logging.WARNING, logger="source"):
        assert select_source(_ctx(), db, mock) == "mock"

    assert (db.calls, mock.calls) == (1, 1)
    warnings = [r for r in caplog.records if r.name == "source"]
    assert len(warnings) == 1
    assert "ConnectionError" in warnings[0].getMessage()


def test_mock_failure_after_fallback_propagates():
    db = _Recorder(error=RuntimeError("db"))
    mock = _Recorder(error=KeyError("mock"))
    with pytest.raises(KeyError):
        select_source(_ctx(), db, mock)


def test_mock_failure_without_db_propagates():
    with pytest.raises(KeyError):
        select_source(_ctx(db=False), _Recorder("db"), _Recorder(error=KeyError("mock")))
