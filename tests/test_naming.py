"""Unit tests for model_translations.translations.naming — translation model resolution."""

from model_translations.translations.naming import load_translation_model, translation_model_name


class Thing:
    pass


class Explicit:
    __translation_model__ = "somewhere.else.ThingText"


class TestTranslationModelName:
    def test_convention(self):
        from catalog import Product

        assert translation_model_name(Product) == "catalog.translations.ProductTranslation"

    def test_convention_for_plain_class(self):
        assert translation_model_name(Thing) == f"{Thing.__module__}.translations.ThingTranslation"

    def test_string_override_returned_verbatim(self):
        assert translation_model_name(Explicit) == "somewhere.else.ThingText"

    def test_class_override(self):
        class WithClass:
            __translation_model__ = Thing

        assert translation_model_name(WithClass) == f"{Thing.__module__}.Thing"

    def test_model_override(self):
        from catalog import Category

        assert translation_model_name(Category) == "catalog.translations.CategoryLabel"


class TestLoadTranslationModel:
    def test_by_convention(self):
        from catalog import Product
        from catalog.translations import ProductTranslation

        assert load_translation_model(Product) is ProductTranslation

    def test_by_override(self):
        from catalog import Category
        from catalog.translations import CategoryLabel

        assert load_translation_model(Category) is CategoryLabel
        assert Category.translation_model() is CategoryLabel
