"""
Locale Context — the single narrow interface through which the current locale is read.

The translation core never reaches into a host framework for the locale; it
asks the installed LocaleProvider at the moment of each attribute access.
The default provider keeps the locale in a ContextVar, so every thread and
asyncio task sees its own value.

Usage:
    from model_translations.engine.context import locale_scope, set_locale, get_locale

    with locale_scope("fr"):
        product.name   # resolved for "fr"
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Generator, Optional

from model_translations.engine.config import get_settings

# ---------------------------------------------------------------------------
# Thread-safe context variable: one value per request/task
# ---------------------------------------------------------------------------

current_locale: ContextVar[Optional[str]] = ContextVar("current_locale", default=None)


class LocaleProvider:
    """Source of the current locale code."""

    def get_locale(self) -> str:
        raise NotImplementedError


class ContextLocaleProvider(LocaleProvider):
    """
    Default provider.

    Resolution chain:
    1. Locale set for the current context via set_locale() / locale_scope()
    2. ``app.locale`` from settings
    """

    def get_locale(self) -> str:
        locale = current_locale.get()
        if locale:
            return locale
        return get_settings().app.locale


class CallableLocaleProvider(LocaleProvider):
    """Adapts a host framework's zero-argument locale getter."""

    def __init__(self, getter: Callable[[], str]):
        self._getter = getter

    def get_locale(self) -> str:
        return self._getter()

    def __repr__(self) -> str:
        return f"<CallableLocaleProvider({self._getter!r})>"


_default_provider = ContextLocaleProvider()
_provider: LocaleProvider = _default_provider


def set_locale_provider(provider: Optional[LocaleProvider]) -> None:
    """Install a process-wide locale provider. None restores the default."""
    global _provider
    _provider = provider or _default_provider


def get_locale_provider() -> LocaleProvider:
    return _provider


def set_locale(locale: str) -> None:
    """Set the locale for the current thread/task."""
    current_locale.set(locale)


def get_locale() -> str:
    """Read the current locale through the installed provider."""
    return _provider.get_locale()


def clear_locale() -> None:
    """Clear the context locale (e.g., at request end)."""
    current_locale.set(None)


@contextmanager
def locale_scope(locale: str) -> Generator[str, None, None]:
    """Temporarily switch the context locale."""
    token = current_locale.set(locale)
    try:
        yield locale
    finally:
        current_locale.reset(token)
