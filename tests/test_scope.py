"""Tests for model_translations.translations.scope — auto eager loading of translations."""

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.orm import selectinload

from catalog import Category, Product, Shelf
from model_translations.translations.scope import (
    SKIP_OPTION,
    AutoLoadScope,
    auto_load_scope,
    with_translations,
)


def _loaded(entity) -> bool:
    return "translations" not in inspect(entity).unloaded


@pytest.fixture
def lazy_products():
    """Auto-load switched off for Product for the duration of one test."""
    auto_load_scope.disable(Product)
    yield
    auto_load_scope.enable(Product)


class TestRegistration:
    def test_models_registered_at_definition(self):
        assert auto_load_scope.is_registered(Product)
        assert auto_load_scope.is_registered(Category)
        assert "catalog.Product" in auto_load_scope.registered

    def test_register_is_idempotent(self):
        assert auto_load_scope.register(Product, enabled=False) is False
        assert auto_load_scope.is_enabled(Product)

    def test_fresh_scope(self):
        scope = AutoLoadScope()
        try:
            assert scope.register(Product, enabled=True) is True
            assert scope.register(Product, enabled=False) is False
            assert scope.is_enabled(Product)
            scope.disable(Product)
            assert not scope.is_enabled(Product)
            scope.unregister(Product)
            assert not scope.is_registered(Product)
            assert scope.registered == []
        finally:
            scope.uninstall()

    def test_unknown_model_is_not_enabled(self):
        assert not AutoLoadScope().is_enabled(Product)

    def test_install_uninstall_are_idempotent(self):
        scope = AutoLoadScope()
        scope.install()
        scope.install()
        scope.uninstall()
        scope.uninstall()


class TestAutoLoad:
    def test_select_eager_loads(self, laptop, fresh_session):
        other = fresh_session()
        product = other.scalars(select(Product).where(Product.id == laptop.id)).one()
        assert _loaded(product)

    def test_session_get_eager_loads(self, laptop, fresh_session):
        product = fresh_session().get(Product, laptop.id)
        assert _loaded(product)

    def test_skip_option(self, laptop, fresh_session):
        stmt = select(Product).execution_options(**{SKIP_OPTION: True})
        product = fresh_session().scalars(stmt).one()
        assert not _loaded(product)
        # lazy load still works
        assert product.name_translations == {"en": "Laptop", "fr": "Ordinateur"}

    def test_disabled_model_stays_lazy(self, laptop, fresh_session, lazy_products):
        product = fresh_session().scalars(select(Product)).one()
        assert not _loaded(product)

    def test_with_translations_explicit(self, laptop, fresh_session, lazy_products):
        product = fresh_session().scalars(with_translations(select(Product), Product)).one()
        assert _loaded(product)

    def test_column_select_untouched(self, laptop, fresh_session):
        skus = fresh_session().scalars(select(Product.sku)).all()
        assert skus == ["LAP-1"]

    def test_translation_query_results_loaded(self, laptop, fresh_session):
        found = Product.translation_query().where_any_translation("name", "Ordinateur").all(fresh_session())
        assert len(found) == 1
        assert _loaded(found[0])


@pytest.fixture
def shelf(session):
    """A plain shelf holding two translated products."""
    shelf = Shelf(label="front")
    session.add(shelf)
    session.commit()
    for sku, name in (("S-1", "Lamp"), ("S-2", "Chair")):
        Product.create_with_translations(session, {"sku": sku, "shelf_id": shelf.id, "name": {"en": name}})
    return shelf.id


class TestRelationshipLoads:
    def test_lazy_relationship_eager_loads(self, shelf, fresh_session):
        products = fresh_session().get(Shelf, shelf).products
        assert [p.sku for p in products] == ["S-1", "S-2"]
        assert all(_loaded(p) for p in products)

    def test_selectin_relationship_eager_loads(self, shelf, fresh_session):
        stmt = select(Shelf).options(selectinload(Shelf.products))
        loaded = fresh_session().scalars(stmt).one()
        assert all(_loaded(p) for p in loaded.products)

    def test_disabled_model_stays_lazy(self, shelf, fresh_session, lazy_products):
        products = fresh_session().get(Shelf, shelf).products
        assert not any(_loaded(p) for p in products)
        assert products[0].name_translations == {"en": "Lamp"}
