"""
Declarative mixins for translatable models and their translation tables.

    class Product(TranslatableMixin, Base):
        __tablename__ = "products"
        __translatable__ = ("name", "description")

        id = Column(Integer, primary_key=True)
        sku = Column(String(50), unique=True, nullable=False)

    # shop/models/translations.py
    class ProductTranslation(TranslationMixin, Base):
        __tablename__ = "product_translations"
        __table_args__ = (UniqueConstraint("product_id", "locale"),)

        product_id = Column(ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
        name = Column(String(200))
        description = Column(Text)

    product.name               # value for the current locale, with fallback
    product.name_translations  # {"en": "Laptop", "fr": "Ordinateur"}

Put TranslatableMixin before Base in the class bases so the accessors are in
place when the class is mapped.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import Session, declared_attr, relationship

from model_translations.db.base import TimestampMixin
from model_translations.engine.config import get_settings
from model_translations.engine.context import LocaleProvider
from model_translations.translations.extractor import translatable_attributes
from model_translations.translations.locale import default_resolver
from model_translations.translations.naming import load_translation_model, translation_model_name
from model_translations.translations.query import TranslationQuery
from model_translations.translations.scope import auto_load_scope
from model_translations.translations.synchronizer import TranslationSynchronizer

logger = logging.getLogger("model_translations.translations.mixin")

ALL_TRANSLATIONS_SUFFIX = "_translations"


class TranslatedAttribute:
    """Read-only accessor resolving one translatable attribute for the current locale."""

    def __init__(self, attribute: str):
        self.attribute = attribute

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.get_translated(self.attribute)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(
            f"'{self.attribute}' is translatable; write it with update_with_translations()"
        )

    def __repr__(self) -> str:
        return f"<TranslatedAttribute({self.attribute})>"


class AllTranslationsAttribute:
    """Read-only ``{attribute}_translations`` accessor: every locale's value."""

    def __init__(self, attribute: str):
        self.attribute = attribute

    def __get__(self, instance: Any, owner: type) -> Any:
        if instance is None:
            return self
        return instance.get_all_translations(self.attribute)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(f"'{self.attribute}{ALL_TRANSLATIONS_SUFFIX}' is read-only")


class TranslatableMixin:
    """
    Adds a ``translations`` one-to-many relationship, per-attribute accessors
    and the transactional write helpers to a declarative model.

    Class attributes:
        __translatable__:      tuple of translatable attribute names (required for writes)
        __translation_model__: optional dotted path or class of the translation model
        locale_resolver:       LocaleResolver used by the accessors
    """

    locale_resolver = default_resolver

    def __init_subclass__(cls, **kwargs: Any):
        translatable = cls.__dict__.get("__translatable__")
        if translatable is not None:
            for attribute in translatable:
                setattr(cls, attribute, TranslatedAttribute(attribute))
                setattr(cls, f"{attribute}{ALL_TRANSLATIONS_SUFFIX}", AllTranslationsAttribute(attribute))

        super().__init_subclass__(**kwargs)

        if not cls.__dict__.get("__abstract__", False):
            auto_load_scope.register(cls, enabled=get_settings().translatable.auto_load)

    @declared_attr
    def translations(cls):
        return relationship(
            translation_model_name(cls),
            cascade="all, delete-orphan",
        )

    # -------------------------------------------------------------------
    # Declaration helpers
    # -------------------------------------------------------------------

    @classmethod
    def translatable_attributes(cls) -> Tuple[str, ...]:
        return translatable_attributes(cls)

    @classmethod
    def translation_model(cls) -> type:
        return load_translation_model(cls)

    # -------------------------------------------------------------------
    # Read path
    # -------------------------------------------------------------------

    def _require_translatable(self, attribute: str) -> None:
        if attribute not in (getattr(type(self), "__translatable__", None) or ()):
            raise AttributeError(f"{type(self).__name__} has no translatable attribute '{attribute}'")

    def translation_for(self, locale: Optional[str] = None) -> Optional[Any]:
        """The translation row exposed for ``locale`` (current locale by default)."""
        return self.locale_resolver.resolve(self.translations, locale)

    def get_translated(self, attribute: str, locale: Optional[str] = None) -> Any:
        self._require_translatable(attribute)
        return self.locale_resolver.translated_value(self.translations, attribute, locale)

    def get_all_translations(self, attribute: str) -> Dict[str, Any]:
        self._require_translatable(attribute)
        return self.locale_resolver.all_translations(self.translations, attribute)

    # -------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------

    @classmethod
    def create_with_translations(cls, session: Session, attributes: Mapping[str, Any]) -> Any:
        return TranslationSynchronizer(cls).create_with_translations(session, attributes)

    def update_with_translations(self, session: Session, attributes: Mapping[str, Any]) -> bool:
        return TranslationSynchronizer(type(self)).update_with_translations(session, self, attributes)

    @classmethod
    def first_or_create_with_translations(
        cls,
        session: Session,
        match: Mapping[str, Any],
        values: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return TranslationSynchronizer(cls).first_or_create_with_translations(session, match, values)

    @classmethod
    def update_or_create_with_translations(
        cls,
        session: Session,
        match: Mapping[str, Any],
        values: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        return TranslationSynchronizer(cls).update_or_create_with_translations(session, match, values)

    def refresh_translations(self, session: Session) -> list:
        return TranslationSynchronizer(type(self)).refresh_translations(session, self)

    # -------------------------------------------------------------------
    # Query path
    # -------------------------------------------------------------------

    @classmethod
    def translation_query(cls, provider: Optional[LocaleProvider] = None) -> TranslationQuery:
        return TranslationQuery(cls, provider=provider)


class TranslationMixin(TimestampMixin):
    """
    Columns shared by every translation table: id, locale, timestamps.

    The concrete model adds the foreign key to its parent table and one
    nullable column per translatable attribute.
    """

    id = Column(Integer, primary_key=True, autoincrement=True)
    locale = Column(String(16), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id}, locale='{self.locale}')>"
