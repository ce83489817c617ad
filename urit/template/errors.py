"""
Ошибки разбора и использования URI-шаблонов.
"""

from __future__ import annotations

import enum
from typing import Optional

from ..errors import UritUserError


class ParseErrorKind(enum.Enum):
    """Виды ошибок разбора шаблона."""
    ILLEGAL_CHARACTER = "IllegalCharacter"
    ILLEGAL_PERCENT_ENCODING = "IllegalPercentEncoding"
    ILLEGAL_DOT = "IllegalDot"
    EMPTY_VARIABLE_NAME = "EmptyVariableName"
    ILLEGAL_CHARACTER_LIMIT = "IllegalCharacterLimit"
    ILLEGAL_EXPLODE_MODIFIER = "IllegalExplodeModifier"
    UNTERMINATED_EXPRESSION = "UnterminatedExpression"


class ParseError(UritUserError):
    """
    Ошибка синтаксического анализа шаблона.

    Attributes:
        kind: Вид ошибки
        text: Сообщение без позиционного суффикса
        offset: Смещение символа, на котором обнаружена ошибка
                (None для незакрытого выражения)
    """

    def __init__(self, kind: ParseErrorKind, text: str, offset: Optional[int] = None):
        self.kind = kind
        self.text = text
        self.offset = offset
        super().__init__(self.message)

    @property
    def message(self) -> str:
        if self.offset is None:
            return self.text
        return f"{self.text} at offset {self.offset}"


class UnknownVariableError(UritUserError):
    """Обращение к переменной, которой нет в шаблоне."""

    def __init__(self, name: str):
        super().__init__(f"Variable not recognised - {name}")
        self.name = name


__all__ = ["ParseErrorKind", "ParseError", "UnknownVariableError"]
