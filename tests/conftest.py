"""
Model Translations Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

import catalog  # noqa: F401  (registers the test models on Base.metadata)
from model_translations.db.base import Base


# ---------------------------------------------------------------------------
# Global state isolation
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset settings, locale and logging singletons between tests."""
    import model_translations.engine.config as cfg_mod
    from model_translations.engine.context import clear_locale, set_locale_provider
    from model_translations.engine.logging import shutdown_logging

    cfg_mod._settings = cfg_mod.Settings()
    clear_locale()
    set_locale_provider(None)
    shutdown_logging()
    yield
    cfg_mod._settings = None
    clear_locale()
    set_locale_provider(None)
    shutdown_logging()


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection of the test."""
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = Session(engine)
    yield session
    session.close()


@pytest.fixture
def fresh_session(engine):
    """Factory for new sessions on the same database (empty identity map)."""
    sessions = []

    def _make() -> Session:
        s = Session(engine)
        sessions.append(s)
        return s

    yield _make
    for s in sessions:
        s.close()


@pytest.fixture
def count_rows():
    """count_rows(session, Model) -> number of rows in the model's table."""
    def _count(session, model) -> int:
        return session.scalar(select(func.count()).select_from(model))
    return _count


@pytest.fixture
def laptop(session):
    """A product translated into English and French."""
    from catalog import Product

    return Product.create_with_translations(session, {
        "sku": "LAP-1",
        "price": 999,
        "name": {"en": "Laptop", "fr": "Ordinateur"},
        "description": {"en": "A portable computer", "fr": "Un ordinateur portable"},
    })
