"""
Model Translations — database-backed, locale-aware translation of SQLAlchemy model attributes.

Translatable attributes live one row per locale in a separate translation
table. Writes go through transactional helpers, reads resolve the current
locale with a configurable fallback, queries filter by translated content.

    from model_translations import Base, TranslatableMixin, TranslationMixin, locale_scope

    product = Product.create_with_translations(session, {
        "sku": "ABC123",
        "name": {"en": "Laptop", "fr": "Ordinateur"},
    })
    with locale_scope("fr"):
        product.name  # "Ordinateur"
"""

__version__ = "1.0.0"

from model_translations.db.base import Base, TimestampMixin  # noqa: F401,E402
from model_translations.engine.context import (  # noqa: F401,E402
    LocaleProvider,
    get_locale,
    locale_scope,
    set_locale,
    set_locale_provider,
)
from model_translations.engine.errors import (  # noqa: F401,E402
    ConfigurationError,
    InvalidFormatError,
    TranslationError,
    UnsupportedOperatorError,
)
from model_translations.translations import (  # noqa: F401,E402
    TranslatableMixin,
    TranslationMixin,
    TranslationQuery,
    TranslationSynchronizer,
    auto_load_scope,
)

__all__ = [
    "Base",
    "TimestampMixin",
    "TranslatableMixin",
    "TranslationMixin",
    "TranslationQuery",
    "TranslationSynchronizer",
    "auto_load_scope",
    "LocaleProvider",
    "get_locale",
    "locale_scope",
    "set_locale",
    "set_locale_provider",
    "ConfigurationError",
    "InvalidFormatError",
    "TranslationError",
    "UnsupportedOperatorError",
]
