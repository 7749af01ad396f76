"""Translation core — naming, extraction, synchronization, locale resolution, predicates, eager loading."""

from model_translations.translations.extractor import extract_translations, translatable_attributes  # noqa: F401
from model_translations.translations.locale import (  # noqa: F401
    LocaleResolver,
    list_all_translations,
    resolve_translation_record,
)
from model_translations.translations.mixin import TranslatableMixin, TranslationMixin  # noqa: F401
from model_translations.translations.naming import load_translation_model, translation_model_name  # noqa: F401
from model_translations.translations.query import TranslationQuery, translation_criterion  # noqa: F401
from model_translations.translations.scope import AutoLoadScope, auto_load_scope, with_translations  # noqa: F401
from model_translations.translations.synchronizer import TranslationSynchronizer  # noqa: F401

__all__ = [
    "AutoLoadScope",
    "LocaleResolver",
    "TranslatableMixin",
    "TranslationMixin",
    "TranslationQuery",
    "TranslationSynchronizer",
    "auto_load_scope",
    "extract_translations",
    "list_all_translations",
    "load_translation_model",
    "resolve_translation_record",
    "translatable_attributes",
    "translation_criterion",
    "translation_model_name",
    "with_translations",
]
