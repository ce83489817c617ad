"""
Операторы выражений URI-шаблона.

Каждый оператор — это набор атрибутов, полностью определяющих стиль
раскрытия выражения. Движок раскрытия не ветвится по оператору,
а читает эти атрибуты.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Operator:
    """
    Атрибуты оператора выражения.

    Attributes:
        char: Символ оператора в шаблоне (None для простой подстановки)
        prefix: Символ перед первым подставленным значением
        separator: Символ между подставленными значениями
        reserved: Пропускать reserved-символы без кодирования
        add_names: Выводить пары name=value
        forms_equals: Всегда выводить '=' (даже для пустого значения)
    """
    char: Optional[str]
    prefix: Optional[str]
    separator: str
    reserved: bool = False
    add_names: bool = False
    forms_equals: bool = False

    @property
    def name(self) -> str:
        return _OPERATOR_NAMES[self.char]

    def __str__(self) -> str:
        return self.char or ""


SIMPLE = Operator(char=None, prefix=None, separator=",")
RESERVED = Operator(char="+", prefix=None, separator=",", reserved=True)
FRAGMENT = Operator(char="#", prefix="#", separator=",", reserved=True)
LABEL = Operator(char=".", prefix=".", separator=".")
PATH_SEGMENT = Operator(char="/", prefix="/", separator="/")
PATH_PARAMETER = Operator(char=";", prefix=";", separator=";", add_names=True)
QUERY = Operator(char="?", prefix="?", separator="&", add_names=True, forms_equals=True)
QUERY_CONTINUATION = Operator(char="&", prefix="&", separator="&", add_names=True, forms_equals=True)

OPERATORS: Dict[str, Operator] = {
    op.char: op
    for op in (RESERVED, FRAGMENT, LABEL, PATH_SEGMENT, PATH_PARAMETER, QUERY, QUERY_CONTINUATION)
}

_OPERATOR_NAMES: Dict[Optional[str], str] = {
    None: "simple",
    "+": "reserved",
    "#": "fragment",
    ".": "label",
    "/": "path-segment",
    ";": "path-parameter",
    "?": "query",
    "&": "query-continuation",
}


def operator_for(ch: str) -> Optional[Operator]:
    """Возвращает оператор для символа или None, если символ не является оператором."""
    return OPERATORS.get(ch)


__all__ = [
    "Operator",
    "SIMPLE",
    "RESERVED",
    "FRAGMENT",
    "LABEL",
    "PATH_SEGMENT",
    "PATH_PARAMETER",
    "QUERY",
    "QUERY_CONTINUATION",
    "OPERATORS",
    "operator_for",
]
