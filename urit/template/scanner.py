"""
Курсор по исходной строке шаблона.

Предоставляет парсеру методы навигации по символам
и управления позицией при однопроходном разборе.
"""

from __future__ import annotations

from typing import Callable

from ..encoding import is_hex_digit


class SourceCursor:
    """
    Курсор для посимвольного разбора строки.
    """

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.length = len(text)

    def is_at_end(self) -> bool:
        """Проверяет, достигнут ли конец строки."""
        return self.position >= self.length

    def current(self) -> str:
        """Возвращает текущий символ или пустую строку в конце."""
        if self.position >= self.length:
            return ""
        return self.text[self.position]

    def peek(self, offset: int = 1) -> str:
        """Возвращает символ на указанном смещении от текущей позиции."""
        pos = self.position + offset
        if pos >= self.length:
            return ""
        return self.text[pos]

    def previous(self) -> str:
        """Возвращает символ перед текущей позицией."""
        if self.position == 0:
            return ""
        return self.text[self.position - 1]

    def advance(self, count: int = 1) -> str:
        """Продвигается на count символов и возвращает пройденный фрагмент."""
        start = self.position
        self.position = min(self.position + count, self.length)
        return self.text[start:self.position]

    def match(self, chars: str) -> bool:
        """
        Потребляет текущий символ, если он входит в chars.

        Returns:
            True, если символ потреблён
        """
        ch = self.current()
        if ch and ch in chars:
            self.position += 1
            return True
        return False

    def match_hex_pair(self) -> bool:
        """Потребляет две шестнадцатеричные цифры, если они следуют за текущей позицией."""
        if is_hex_digit(self.current()) and is_hex_digit(self.peek()):
            self.position += 2
            return True
        return False

    def take_while(self, predicate: Callable[[str], bool]) -> str:
        """Потребляет символы, пока выполняется предикат, и возвращает их."""
        start = self.position
        while self.position < self.length and predicate(self.text[self.position]):
            self.position += 1
        return self.text[start:self.position]

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]


__all__ = ["SourceCursor"]
