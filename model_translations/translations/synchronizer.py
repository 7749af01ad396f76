"""
Translation synchronizer — transactional writes of a model plus its translation rows.

Every operation is one all-or-nothing unit of work on the caller's session:

    extract -> write base row -> write translation rows -> commit

Any exception (InvalidFormatError, a storage error, anything else) rolls the
whole unit back and propagates unchanged. ConfigurationError is raised before
the transaction opens.

Translation rows are matched by (parent, locale) explicitly; the
``UniqueConstraint(<fk>, "locale")`` recommended on translation tables is a
storage-level guard against races, not something this module relies on.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Generator, Mapping, Optional, Tuple

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session, with_parent

from model_translations.db.session import transaction_scope
from model_translations.engine.errors import InvalidFormatError, TranslationError
from model_translations.engine.logging import log, log_translation_sync
from model_translations.translations.extractor import (
    TranslationSet,
    extract_translations,
    translatable_attributes,
)
from model_translations.translations.naming import load_translation_model

logger = logging.getLogger("model_translations.translations.synchronizer")


class TranslationSynchronizer:
    """
    Create / update / first-or-create / update-or-create for one translatable model.

    Usage:
        sync = TranslationSynchronizer(Product)
        product = sync.create_with_translations(session, {
            "sku": "ABC123",
            "name": {"en": "Laptop", "fr": "Ordinateur"},
        })
    """

    def __init__(self, model_cls: type):
        self.model = model_cls

    @property
    def model_name(self) -> str:
        return self.model.__name__

    def translatable_attributes(self) -> Tuple[str, ...]:
        return translatable_attributes(self.model)

    # -------------------------------------------------------------------
    # Write operations
    # -------------------------------------------------------------------

    def create_with_translations(self, session: Session, attributes: Mapping[str, Any]) -> Any:
        """Create the model and one translation row per supplied locale."""
        translatable = self.translatable_attributes()

        with self._unit_of_work(session, "create") as outcome:
            remaining, translations = extract_translations(attributes, translatable, self.model_name)
            entity = self._create_entity(session, remaining)
            self._create_translations(entity, translations)
            session.flush()
            outcome.update(record_id=_identity(entity), locales=list(translations))

        return entity

    def update_with_translations(
        self,
        session: Session,
        entity: Any,
        attributes: Mapping[str, Any],
    ) -> bool:
        """
        Update base columns and upsert the supplied locales.

        Locales and fields not mentioned are left untouched.

        Returns:
            True when at least one base column value changed.
        """
        translatable = self.translatable_attributes()

        with self._unit_of_work(session, "update") as outcome:
            remaining, translations = extract_translations(attributes, translatable, self.model_name)
            changed = self._assign(entity, remaining)
            self._upsert_translations(session, entity, translations)
            session.flush()
            self.refresh_translations(session, entity)
            outcome.update(record_id=_identity(entity), locales=list(translations))

        return changed

    def first_or_create_with_translations(
        self,
        session: Session,
        match: Mapping[str, Any],
        values: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Return the first model matching ``match``, or create it with translations.

        A found model is returned with its translations reloaded; its
        translation rows are never written, whatever payload was supplied.
        """
        translatable = self.translatable_attributes()

        with self._unit_of_work(session, "first_or_create") as outcome:
            data = {**match, **(values or {})}
            remaining, translations = extract_translations(data, translatable, self.model_name)

            entity = self._find(session, match, translatable)
            if entity is not None:
                logger.debug(f"{self.model_name} matched {dict(match)}; translations left untouched")
                self.refresh_translations(session, entity)
                outcome.update(record_id=_identity(entity), created=False)
            else:
                entity = self._create_entity(session, remaining)
                self._create_translations(entity, translations)
                session.flush()
                self.refresh_translations(session, entity)
                outcome.update(record_id=_identity(entity), locales=list(translations), created=True)

        return entity

    def update_or_create_with_translations(
        self,
        session: Session,
        match: Mapping[str, Any],
        values: Optional[Mapping[str, Any]] = None,
    ) -> Any:
        """
        Update the model matching ``match`` (or create it), then upsert every
        supplied locale against its translations.
        """
        translatable = self.translatable_attributes()

        with self._unit_of_work(session, "update_or_create") as outcome:
            data = {**match, **(values or {})}
            remaining, translations = extract_translations(data, translatable, self.model_name)

            entity = self._find(session, match, translatable)
            created = entity is None
            if created:
                entity = self._create_entity(session, remaining)
            else:
                self._assign(entity, remaining)

            self._upsert_translations(session, entity, translations)
            session.flush()
            self.refresh_translations(session, entity)
            outcome.update(record_id=_identity(entity), locales=list(translations), created=created)

        return entity

    def refresh_translations(self, session: Session, entity: Any) -> list:
        """Discard the loaded translations collection and reload it from storage."""
        session.expire(entity, ["translations"])
        return list(entity.translations)

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------

    @contextmanager
    def _unit_of_work(self, session: Session, operation: str) -> Generator[Dict[str, Any], None, None]:
        """Transaction scope plus a structured event for the outcome."""
        outcome: Dict[str, Any] = {}
        start = time.perf_counter()
        try:
            with transaction_scope(session):
                yield outcome
        except Exception as e:
            error = e.to_dict() if isinstance(e, TranslationError) else {
                "error_type": type(e).__name__,
                "message": str(e),
            }
            logger.warning(f"{self.model_name}.{operation}_with_translations rolled back: {e}")
            log(log_translation_sync(
                operation, self.model_name, success=False,
                record_id=outcome.get("record_id"),
                duration_ms=_elapsed_ms(start),
                error=error,
            ))
            raise

        logger.debug(
            f"{self.model_name}.{operation}_with_translations committed "
            f"(id={outcome.get('record_id')}, locales={outcome.get('locales', [])})"
        )
        log(log_translation_sync(
            operation, self.model_name, success=True,
            record_id=outcome.get("record_id"),
            locales=outcome.get("locales"),
            duration_ms=_elapsed_ms(start),
        ))

    def _find(self, session: Session, match: Mapping[str, Any], translatable: Tuple[str, ...]) -> Optional[Any]:
        # translatable keys in ``match`` are payload, not lookup columns
        lookup = {k: v for k, v in match.items() if k not in translatable}
        if match and not lookup:
            attribute = next(iter(match))
            raise InvalidFormatError(
                attribute,
                f"Cannot match {self.model_name} on translatable attributes only "
                f"({', '.join(match)}); add a non-translatable column to the match",
                model=self.model_name,
            )
        return session.scalars(select(self.model).filter_by(**lookup)).first()

    def _create_entity(self, session: Session, attributes: Dict[str, Any]) -> Any:
        entity = self.model(**attributes)
        session.add(entity)
        session.flush()
        return entity

    def _assign(self, entity: Any, attributes: Dict[str, Any]) -> bool:
        mapper = inspect(type(entity))
        changed = False
        for key, value in attributes.items():
            if key not in mapper.attrs:
                raise TypeError(f"{key!r} is an invalid keyword argument for {type(entity).__name__}")
            if getattr(entity, key) != value:
                setattr(entity, key, value)
                changed = True
        return changed

    def _create_translations(self, entity: Any, translations: TranslationSet) -> None:
        translation_cls = load_translation_model(self.model)
        for locale, fields in translations.items():
            entity.translations.append(translation_cls(locale=locale, **fields))

    def _upsert_translations(self, session: Session, entity: Any, translations: TranslationSet) -> None:
        translation_cls = load_translation_model(self.model)
        for locale, fields in translations.items():
            record = session.scalars(
                select(translation_cls).where(
                    with_parent(entity, self.model.translations),
                    translation_cls.locale == locale,
                )
            ).first()

            if record is None:
                entity.translations.append(translation_cls(locale=locale, **fields))
            else:
                for key, value in fields.items():
                    setattr(record, key, value)


def _identity(entity: Any) -> Any:
    identity = inspect(entity).identity
    if identity is None:
        return None
    return identity[0] if len(identity) == 1 else list(identity)


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 3)
