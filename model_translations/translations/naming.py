"""Translation model naming — maps a translatable model to its translation model."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import configure_mappers

TRANSLATIONS_NAMESPACE = "translations"
TRANSLATION_SUFFIX = "Translation"


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def translation_model_name(model_cls: type) -> str:
    """
    Return the dotted path of the translation model for ``model_cls``.

    An explicit ``__translation_model__`` (dotted path or class) wins.
    Otherwise: ``shop.models.Product`` -> ``shop.models.translations.ProductTranslation``.

    Nothing is imported or checked here; SQLAlchemy resolves the path when
    mappers are configured and reports a missing class there.
    """
    override: Any = model_cls.__dict__.get("__translation_model__")
    if override is None:
        # inherited override from an abstract parent still counts
        override = getattr(model_cls, "__translation_model__", None)
    if override is not None:
        return override if isinstance(override, str) else _qualified_name(override)

    return (
        f"{model_cls.__module__}.{TRANSLATIONS_NAMESPACE}."
        f"{model_cls.__name__}{TRANSLATION_SUFFIX}"
    )


def load_translation_model(model_cls: type) -> type:
    """Return the mapped class behind ``model_cls.translations``."""
    configure_mappers()
    return model_cls.translations.property.mapper.class_
