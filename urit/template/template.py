"""
Публичный API URI-шаблона.

Шаблон разбирается один раз при создании и затем может раскрываться
сколько угодно раз с разными резолверами. Разобранная последовательность
элементов неизменяема и может разделяться между одновременными
раскрытиями, если каждое раскрытие получает свой резолвер.
"""

from __future__ import annotations

import io
from typing import TYPE_CHECKING, Any, Iterator, List, Tuple

from .expander import TemplateExpander, TextSink
from .nodes import ExpressionElement, TemplateElement
from .parser import TemplateParser
from .resolvers import as_resolver

if TYPE_CHECKING:
    from .bound import BoundTemplate


class Template:
    """
    Разобранный URI-шаблон (RFC 6570, уровни 1-4).

    Пример:
        >>> t = Template("http://example.com/search{?q,lang}")
        >>> t.expand(q="cat", lang="en")
        'http://example.com/search?q=cat&lang=en'
    """

    __slots__ = ("_source", "_elements")

    def __init__(self, source: str):
        """
        Разбирает строку шаблона.

        Args:
            source: Исходный текст шаблона

        Raises:
            ParseError: При синтаксической ошибке в шаблоне
        """
        self._source = source
        self._elements: Tuple[TemplateElement, ...] = tuple(TemplateParser(source).parse())

    @classmethod
    def parse(cls, source: str) -> "Template":
        """Разбирает строку шаблона (то же, что и конструктор)."""
        return cls(source)

    # ---------- introspection ----------

    @property
    def source(self) -> str:
        return self._source

    @property
    def elements(self) -> Tuple[TemplateElement, ...]:
        return self._elements

    @property
    def expressions(self) -> List[ExpressionElement]:
        return [e for e in self._elements if isinstance(e, ExpressionElement)]

    @property
    def variables(self) -> List[str]:
        """Различные имена переменных в порядке первого появления."""
        seen: dict = {}
        for expression in self.expressions:
            for ref in expression.variables:
                seen.setdefault(ref.name, None)
        return list(seen)

    def __contains__(self, name: object) -> bool:
        return any(ref.name == name for e in self.expressions for ref in e.variables)

    def __len__(self) -> int:
        return len(self._elements)

    def __iter__(self) -> Iterator[TemplateElement]:
        return iter(self._elements)

    # ---------- expansion ----------

    def expand(self, /, *args: Any, **values: Any) -> str:
        """
        Раскрывает шаблон в строку.

        Формы вызова:
            expand() — все переменные не определены
            expand(resolver) — функция имя → значение или объект с методом resolve
            expand(mapping) — отображение имя → значение
            expand(name, value) — одна переменная
            expand(**values) — именованные значения
        """
        buffer = io.StringIO()
        self.expand_to(buffer, *args, **values)
        return buffer.getvalue()

    def expand_to(self, sink: TextSink, /, *args: Any, **values: Any) -> None:
        """
        Раскрывает шаблон, дописывая результат в приёмник.

        Принимает те же формы источника значений, что и expand().
        """
        TemplateExpander(as_resolver(*args, **values)).expand_to(sink, self._elements)

    def bind(self, /, **values: Any) -> "BoundTemplate":
        """Создаёт изменяемую привязку значений к этому шаблону."""
        from .bound import BoundTemplate
        bound = BoundTemplate(self)
        for name, value in values.items():
            bound[name] = value
        return bound

    # ---------- identity ----------

    def __str__(self) -> str:
        return self._source

    def __repr__(self) -> str:
        return f"Template({self._source!r})"

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Template):
            return NotImplemented
        return self._source == other._source

    def __hash__(self) -> int:
        return hash(self._source)


__all__ = ["Template"]
