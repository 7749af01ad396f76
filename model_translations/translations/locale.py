"""
Locale resolution — picks the one translation row to expose for the current locale.

Fallback chain:
1. Row for the current locale
2. fallback == "app":   row for ``app.fallback_locale``
3. fallback == "first": first row in load order (no sort is imposed)
4. None

Resolution never fetches per locale: it works on the full, already-loaded
``translations`` collection. Accessing that collection on an unloaded
instance triggers one lazy load, which is then reused for the instance.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from model_translations.engine.config import Settings, get_settings
from model_translations.engine.context import LocaleProvider, get_locale_provider

FALLBACK_APP = "app"
FALLBACK_FIRST = "first"


def _find_locale(records: Sequence[Any], locale: Optional[str]) -> Optional[Any]:
    if locale is None:
        return None
    for record in records:
        if record.locale == locale:
            return record
    return None


def resolve_translation_record(
    records: Iterable[Any],
    current_locale: str,
    fallback: Optional[str] = None,
    fallback_locale: Optional[str] = None,
) -> Optional[Any]:
    """Apply the fallback chain to ``records``. Returns the chosen row or None."""
    records = list(records)

    translation = _find_locale(records, current_locale)
    if translation is not None:
        return translation

    if fallback == FALLBACK_APP:
        translation = _find_locale(records, fallback_locale)

    if translation is None and fallback == FALLBACK_FIRST and records:
        translation = records[0]

    return translation


def list_all_translations(records: Iterable[Any], attribute: str) -> Dict[str, Any]:
    """Map every row's locale to its value for ``attribute``, ignoring fallback."""
    return {record.locale: getattr(record, attribute) for record in records}


class LocaleResolver:
    """
    Binds the fallback chain to a locale provider and the live settings.

    Both are looked up on every call unless injected, so a change of locale
    or of ``translatable.fallback`` applies to the next attribute access.
    """

    def __init__(
        self,
        provider: Optional[LocaleProvider] = None,
        settings: Optional[Settings] = None,
    ):
        self._provider = provider
        self._settings = settings

    @property
    def provider(self) -> LocaleProvider:
        return self._provider or get_locale_provider()

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def current_locale(self) -> str:
        return self.provider.get_locale()

    def resolve(self, records: Iterable[Any], locale: Optional[str] = None) -> Optional[Any]:
        settings = self.settings
        return resolve_translation_record(
            records,
            locale or self.current_locale(),
            fallback=settings.translatable.fallback,
            fallback_locale=settings.app.fallback_locale,
        )

    def translated_value(
        self,
        records: Iterable[Any],
        attribute: str,
        locale: Optional[str] = None,
    ) -> Any:
        """Value of ``attribute`` on the resolved row, None when nothing resolves."""
        translation = self.resolve(records, locale)
        return getattr(translation, attribute) if translation is not None else None

    def all_translations(self, records: Iterable[Any], attribute: str) -> Dict[str, Any]:
        return list_all_translations(records, attribute)


default_resolver = LocaleResolver()
