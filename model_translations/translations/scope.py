"""
Auto eager loading of the ``translations`` relationship.

Each translatable model is registered once, at class definition, with a
per-type flag taken from ``translatable.auto_load``. A single
``do_orm_execute`` listener on Session consults the flag and adds
``selectinload(Model.translations)`` to ORM SELECTs whose root entity is an
enabled model, including the lazy or eager loads of another model's
relationship to it.

Opt out for one statement with the execution option ``skip_translations=True``:

    session.scalars(select(Product).execution_options(skip_translations=True))
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, List, Optional

from sqlalchemy import event
from sqlalchemy.orm import ORMExecuteState, Session, selectinload

from model_translations.engine.logging import log, log_system_event

logger = logging.getLogger("model_translations.translations.scope")

SKIP_OPTION = "skip_translations"


def _type_key(model_cls: type) -> str:
    return f"{model_cls.__module__}.{model_cls.__qualname__}"


def with_translations(stmt: Any, model_cls: type) -> Any:
    """Explicitly eager load translations on ``stmt`` (caller-controlled loading)."""
    return stmt.options(selectinload(model_cls.translations))


class AutoLoadScope:
    """Registry of translatable model types and their auto-load flag."""

    def __init__(self):
        self._enabled: Dict[str, bool] = {}
        self._lock = threading.Lock()
        self._listener_installed = False

    def register(self, model_cls: type, enabled: bool) -> bool:
        """
        Register ``model_cls`` once.

        Returns True on first registration, False if it was already known
        (the existing flag is kept).
        """
        key = _type_key(model_cls)
        with self._lock:
            if key in self._enabled:
                return False
            self._enabled[key] = enabled
        if enabled:
            self.install()
        logger.debug(f"Registered translatable model {key} (auto_load={enabled})")
        log(log_system_event("translatable_model_registered", details={"model": key, "auto_load": enabled}))
        return True

    def unregister(self, model_cls: type) -> None:
        with self._lock:
            self._enabled.pop(_type_key(model_cls), None)

    def enable(self, model_cls: type) -> None:
        with self._lock:
            self._enabled[_type_key(model_cls)] = True
        self.install()

    def disable(self, model_cls: type) -> None:
        with self._lock:
            self._enabled[_type_key(model_cls)] = False

    def is_registered(self, model_cls: type) -> bool:
        return _type_key(model_cls) in self._enabled

    def is_enabled(self, model_cls: type) -> bool:
        return self._enabled.get(_type_key(model_cls), False)

    @property
    def registered(self) -> List[str]:
        return sorted(self._enabled)

    # -------------------------------------------------------------------
    # Session listener
    # -------------------------------------------------------------------

    def install(self) -> None:
        """Attach the do_orm_execute listener to Session (at most once)."""
        with self._lock:
            if self._listener_installed:
                return
            event.listen(Session, "do_orm_execute", self._on_execute)
            self._listener_installed = True

    def uninstall(self) -> None:
        with self._lock:
            if not self._listener_installed:
                return
            event.remove(Session, "do_orm_execute", self._on_execute)
            self._listener_installed = False

    def _on_execute(self, state: ORMExecuteState) -> None:
        if (
            not state.is_select
            or state.is_column_load
            or state.execution_options.get(SKIP_OPTION, False)
        ):
            return

        options = []
        seen = set()
        for model_cls in self._root_entities(state):
            key = _type_key(model_cls)
            if key in seen or not self._enabled.get(key, False):
                continue
            seen.add(key)
            options.append(selectinload(model_cls.translations))

        if options:
            state.statement = state.statement.options(*options)

    @staticmethod
    def _root_entities(state: ORMExecuteState) -> List[type]:
        """Mapped classes selected as whole entities (not single columns)."""
        entities: List[type] = []
        for desc in getattr(state.statement, "column_descriptions", []):
            entity: Optional[Any] = desc.get("entity")
            if entity is not None and desc.get("type") is entity and isinstance(entity, type):
                entities.append(entity)
        return entities


auto_load_scope = AutoLoadScope()
