"""
Translation predicates — filter translatable models by translated content.

Every predicate is an EXISTS sub-query over the ``translations`` relationship:

    Product.translations.any(and_(ProductTranslation.locale == "en",
                                  ProductTranslation.name.like("%Lap%")))

TranslationQuery chains predicates with AND / OR the way SQL reads them:
AND binds tighter than OR, so

    q.where_translation("name", "A").where(Product.active.is_(True))
     .or_where_any_translation("name", "B")

means ``(name@locale = 'A' AND active) OR (name@any = 'B')``.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.orm import Session

from model_translations.engine.context import LocaleProvider, get_locale_provider
from model_translations.engine.errors import UnsupportedOperatorError
from model_translations.translations.naming import load_translation_model

_OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "=": lambda col, v: col == v,
    "==": lambda col, v: col == v,
    "!=": lambda col, v: col != v,
    "<>": lambda col, v: col != v,
    "<": lambda col, v: col < v,
    "<=": lambda col, v: col <= v,
    ">": lambda col, v: col > v,
    ">=": lambda col, v: col >= v,
    "like": lambda col, v: col.like(v),
    "not like": lambda col, v: col.not_like(v),
    "ilike": lambda col, v: col.ilike(v),
    "not ilike": lambda col, v: col.not_ilike(v),
    "in": lambda col, v: col.in_(v),
    "not in": lambda col, v: col.not_in(v),
}

SUPPORTED_OPERATORS = tuple(_OPERATORS)


def compare(column: Any, operator: str, value: Any) -> Any:
    """Build ``column <operator> value``."""
    fn = _OPERATORS.get(" ".join(str(operator).lower().split()))
    if fn is None:
        raise UnsupportedOperatorError(str(operator))
    return fn(column, value)


def translation_criterion(
    model_cls: type,
    attribute: str,
    operator: str,
    value: Any,
    locale: Optional[str] = None,
) -> Any:
    """
    EXISTS predicate: ``model_cls`` has a translation row whose ``attribute``
    compares to ``value``. ``locale=None`` matches rows of any locale.
    """
    translation_cls = load_translation_model(model_cls)
    column = getattr(translation_cls, attribute)

    conditions = []
    if locale is not None:
        conditions.append(translation_cls.locale == locale)
    conditions.append(compare(column, operator, value))
    return model_cls.translations.any(and_(*conditions))


class TranslationQuery:
    """
    Chainable filter over a translatable model.

    Equality has its own shorthand (``where_translation(attr, value)``); any
    other comparison goes through the ``*_op`` variant with an explicit operator.
    A translation predicate without ``locale`` uses the current locale read at
    the time the predicate is added.
    """

    def __init__(self, model_cls: type, provider: Optional[LocaleProvider] = None):
        self.model = model_cls
        self._provider = provider
        self._groups: List[List[Any]] = []

    def _locale(self, locale: Optional[str]) -> str:
        return locale or (self._provider or get_locale_provider()).get_locale()

    def _push(self, criterion: Any, boolean: str = "and") -> "TranslationQuery":
        if boolean == "or" or not self._groups:
            self._groups.append([criterion])
        else:
            self._groups[-1].append(criterion)
        return self

    # -------------------------------------------------------------------
    # Base-column criteria
    # -------------------------------------------------------------------

    def where(self, *criteria: Any) -> "TranslationQuery":
        for criterion in criteria:
            self._push(criterion)
        return self

    def or_where(self, *criteria: Any) -> "TranslationQuery":
        if not criteria:
            return self
        return self._push(and_(*criteria), "or")

    # -------------------------------------------------------------------
    # Locale-scoped translation predicates
    # -------------------------------------------------------------------

    def where_translation(self, attribute: str, value: Any, locale: Optional[str] = None) -> "TranslationQuery":
        return self.where_translation_op(attribute, "=", value, locale=locale)

    def where_translation_op(
        self, attribute: str, operator: str, value: Any, locale: Optional[str] = None,
    ) -> "TranslationQuery":
        return self._push(
            translation_criterion(self.model, attribute, operator, value, self._locale(locale))
        )

    def or_where_translation(self, attribute: str, value: Any, locale: Optional[str] = None) -> "TranslationQuery":
        return self.or_where_translation_op(attribute, "=", value, locale=locale)

    def or_where_translation_op(
        self, attribute: str, operator: str, value: Any, locale: Optional[str] = None,
    ) -> "TranslationQuery":
        return self._push(
            translation_criterion(self.model, attribute, operator, value, self._locale(locale)),
            "or",
        )

    # -------------------------------------------------------------------
    # Any-locale translation predicates
    # -------------------------------------------------------------------

    def where_any_translation(self, attribute: str, value: Any) -> "TranslationQuery":
        return self.where_any_translation_op(attribute, "=", value)

    def where_any_translation_op(self, attribute: str, operator: str, value: Any) -> "TranslationQuery":
        return self._push(translation_criterion(self.model, attribute, operator, value))

    def or_where_any_translation(self, attribute: str, value: Any) -> "TranslationQuery":
        return self.or_where_any_translation_op(attribute, "=", value)

    def or_where_any_translation_op(self, attribute: str, operator: str, value: Any) -> "TranslationQuery":
        return self._push(translation_criterion(self.model, attribute, operator, value), "or")

    # -------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------

    def criterion(self) -> Optional[Any]:
        """The combined WHERE clause, or None when nothing was added."""
        if not self._groups:
            return None
        clauses = [and_(*group) if len(group) > 1 else group[0] for group in self._groups]
        return clauses[0] if len(clauses) == 1 else or_(*clauses)

    def statement(self) -> Any:
        stmt = select(self.model)
        criterion = self.criterion()
        if criterion is not None:
            stmt = stmt.where(criterion)
        return stmt

    def all(self, session: Session) -> List[Any]:
        return list(session.scalars(self.statement()).all())

    def first(self, session: Session) -> Optional[Any]:
        return session.scalars(self.statement().limit(1)).first()

    def count(self, session: Session) -> int:
        stmt = select(func.count()).select_from(self.model)
        criterion = self.criterion()
        if criterion is not None:
            stmt = stmt.where(criterion)
        return session.scalar(stmt) or 0

    def __repr__(self) -> str:
        return f"<TranslationQuery({self.model.__name__}, groups={len(self._groups)})>"
