"""
Translation set extraction — splits a flat attribute mapping into base
attributes and a locale-indexed translation set.

    >>> extract_translations(
    ...     {"sku": "ABC", "name": {"en": "Laptop", "fr": "Ordinateur"}},
    ...     ("name", "description"),
    ... )
    ({'sku': 'ABC'}, {'en': {'name': 'Laptop'}, 'fr': {'name': 'Ordinateur'}})
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Dict, Optional, Sequence, Tuple

from model_translations.engine.errors import ConfigurationError, InvalidFormatError

TranslationSet = Dict[str, Dict[str, Any]]


def extract_translations(
    attributes: Mapping,
    translatable: Optional[Sequence[str]],
    model: Optional[str] = None,
) -> Tuple[Dict[str, Any], TranslationSet]:
    """
    Split ``attributes`` into ``(remaining, translation_set)``.

    Args:
        attributes: Flat input mapping. Never mutated.
        translatable: Declared translatable attribute names, or None when the
            model forgot to declare them.
        model: Model name, for error context only.

    Returns:
        ``remaining`` holds every non-translatable attribute untouched;
        ``translation_set`` maps locale -> {attribute: value}.

    Raises:
        ConfigurationError: ``translatable`` is None.
        InvalidFormatError: a translatable attribute is not a locale mapping.
    """
    if translatable is None:
        raise ConfigurationError(
            f"{model or 'Model'} must define __translatable__ (missing translatable declaration)",
            model=model,
        )

    remaining: Dict[str, Any] = dict(attributes)
    translations: TranslationSet = {}

    for attribute in translatable:
        if attribute not in remaining:
            continue

        value = remaining.pop(attribute)
        if value is None:
            continue

        if not isinstance(value, Mapping):
            raise InvalidFormatError(attribute, model=model, value_type=type(value).__name__)

        for locale, text in value.items():
            translations.setdefault(locale, {})[attribute] = text

    return remaining, translations


def translatable_attributes(model_cls: type) -> Tuple[str, ...]:
    """
    Declared translatable attribute names of ``model_cls``.

    Raises:
        ConfigurationError: the model has no ``__translatable__`` declaration.
    """
    translatable = getattr(model_cls, "__translatable__", None)
    if translatable is None:
        raise ConfigurationError(
            f"{model_cls.__name__} must define __translatable__ (missing translatable declaration)",
            model=model_cls.__name__,
        )
    return tuple(translatable)
