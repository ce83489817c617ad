"""
Элементы разобранного URI-шаблона.

Шаблон представляется неизменяемой последовательностью элементов двух видов:
литеральный текст и выражение {...}. Конкатенация исходных фрагментов
(атрибут text) всех элементов восстанавливает исходную строку шаблона.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .operators import Operator, SIMPLE


@dataclass(frozen=True)
class VariableReference:
    """
    Ссылка на переменную внутри выражения.

    Attributes:
        name: Имя переменной (как записано в шаблоне)
        character_limit: Модификатор префикса :N (None, если не задан)
        explode: Модификатор *
    """
    name: str
    character_limit: Optional[int] = None
    explode: bool = False

    def __str__(self) -> str:
        if self.character_limit is not None:
            return f"{self.name}:{self.character_limit}"
        if self.explode:
            return f"{self.name}*"
        return self.name


@dataclass(frozen=True)
class TemplateElement:
    """Базовый класс для всех элементов шаблона."""
    text: str           # Исходный фрагмент шаблона
    start: int          # Позиция начала в исходной строке
    end: int            # Позиция конца (не включительно)


@dataclass(frozen=True)
class TextElement(TemplateElement):
    """
    Литеральный текст шаблона.

    Уже проверен парсером; процентные триплеты выводятся как есть.
    """

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class ExpressionElement(TemplateElement):
    """
    Выражение {...} со списком ссылок на переменные.
    """
    variables: Tuple[VariableReference, ...] = ()
    operator: Operator = SIMPLE

    @property
    def prefix(self) -> Optional[str]:
        return self.operator.prefix

    @property
    def separator(self) -> str:
        return self.operator.separator

    @property
    def reserved_encoding(self) -> bool:
        return self.operator.reserved

    @property
    def add_variable_names(self) -> bool:
        return self.operator.add_names

    @property
    def forms_style_equals(self) -> bool:
        return self.operator.forms_equals

    def __str__(self) -> str:
        refs = ",".join(str(ref) for ref in self.variables)
        return f"{{{self.operator}{refs}}}"


__all__ = ["VariableReference", "TemplateElement", "TextElement", "ExpressionElement"]
