"""
Парсер URI-шаблонов (RFC 6570, уровни 1-4).

Однопроходный разбор строки шаблона слева направо в последовательность
элементов: литеральный текст и выражения {...}. Любая ошибка прерывает
разбор немедленно, частичного восстановления нет.
"""

from __future__ import annotations

import logging
from typing import List, NoReturn, Optional

from .errors import ParseError, ParseErrorKind
from .nodes import ExpressionElement, TemplateElement, TextElement, VariableReference
from .operators import SIMPLE, operator_for
from .scanner import SourceCursor
from ..encoding import is_literal_char, is_varchar

logger = logging.getLogger(__name__)

# Модификатор префикса: не более 4 цифр, значение строго меньше 10000
MAX_CHARACTER_LIMIT = 9999

_DIGITS = "0123456789"
_SPEC_TERMINATORS = ",}"
_NAME_TERMINATORS = ",}:*"


class TemplateParser:
    """
    Парсер строки URI-шаблона.

    Использование:
        elements = TemplateParser("/users/{id}{?fields*}").parse()
    """

    def __init__(self, text: str):
        self.text = text
        self.cursor = SourceCursor(text)

    def parse(self) -> List[TemplateElement]:
        """
        Разбирает всю строку шаблона.

        Returns:
            Список элементов в порядке следования

        Raises:
            ParseError: При ошибке синтаксического анализа
        """
        cur = self.cursor
        elements: List[TemplateElement] = []
        text_start = 0

        while not cur.is_at_end():
            ch = cur.current()
            if ch == "{":
                if cur.position > text_start:
                    elements.append(self._text_element(text_start, cur.position))
                elements.append(self._parse_expression())
                text_start = cur.position
            elif ch == "%":
                self._parse_percent_triplet()
            elif is_literal_char(ch):
                cur.advance()
            else:
                self._fail(ParseErrorKind.ILLEGAL_CHARACTER, "Illegal character", cur.position)

        if cur.position > text_start:
            elements.append(self._text_element(text_start, cur.position))

        logger.debug("Parsed URI template %r into %d element(s)", self.text, len(elements))
        return elements

    # ---------- литеральный текст ----------

    def _text_element(self, start: int, end: int) -> TextElement:
        return TextElement(text=self.cursor.slice(start, end), start=start, end=end)

    def _parse_percent_triplet(self) -> None:
        """Проверяет триплет %XX; курсор стоит на '%'."""
        cur = self.cursor
        start = cur.position
        cur.advance()
        if not cur.match_hex_pair():
            self._fail(ParseErrorKind.ILLEGAL_PERCENT_ENCODING, "Illegal percent encoding", start)

    # ---------- выражения ----------

    def _parse_expression(self) -> ExpressionElement:
        """
        Разбирает выражение {[operator]varspec[,varspec...]}.

        Курсор стоит на '{'; после успешного разбора — за '}'.
        """
        cur = self.cursor
        start = cur.position
        cur.advance()

        operator = operator_for(cur.current())
        if operator is None:
            operator = SIMPLE
        else:
            cur.advance()

        variables: List[VariableReference] = []
        while True:
            variables.append(self._parse_variable_spec())
            if cur.match(","):
                continue
            # _parse_variable_spec гарантирует, что дальше стоит ',' или '}'
            cur.advance()
            break

        return ExpressionElement(
            text=cur.slice(start, cur.position),
            start=start,
            end=cur.position,
            variables=tuple(variables),
            operator=operator,
        )

    def _parse_variable_spec(self) -> VariableReference:
        """
        Разбирает varspec := name [ ':' limit | '*' ].

        После возврата курсор стоит на ',' или '}'.
        """
        name = self._parse_variable_name()
        cur = self.cursor

        character_limit: Optional[int] = None
        explode = False

        if cur.match(":"):
            character_limit = self._parse_character_limit()
            self._expect_spec_end("Character limit not followed by ',' or '}'",
                                  ParseErrorKind.ILLEGAL_CHARACTER_LIMIT)
        elif cur.match("*"):
            explode = True
            self._expect_spec_end("Explode indicator not followed by ',' or '}'",
                                  ParseErrorKind.ILLEGAL_EXPLODE_MODIFIER)
        elif cur.is_at_end():
            self._fail_unterminated()

        return VariableReference(name=name, character_limit=character_limit, explode=explode)

    def _parse_variable_name(self) -> str:
        cur = self.cursor
        name_start = cur.position

        while not cur.is_at_end():
            ch = cur.current()
            if ch in _NAME_TERMINATORS:
                break
            if ch == ".":
                if cur.position == name_start or cur.previous() == ".":
                    self._fail(ParseErrorKind.ILLEGAL_DOT, "Illegal dot in variable name", cur.position)
                cur.advance()
            elif ch == "%":
                self._parse_percent_triplet()
            elif is_varchar(ch):
                cur.advance()
            else:
                self._fail(ParseErrorKind.ILLEGAL_CHARACTER, "Illegal character in variable", cur.position)

        if cur.is_at_end():
            self._fail_unterminated()
        if cur.position == name_start:
            self._fail(ParseErrorKind.EMPTY_VARIABLE_NAME, "Variable name is empty", cur.position)
        if cur.previous() == ".":
            self._fail(ParseErrorKind.ILLEGAL_DOT, "Illegal dot in variable name", cur.position - 1)

        return cur.slice(name_start, cur.position)

    def _parse_character_limit(self) -> int:
        """Разбирает число после ':'; курсор стоит за двоеточием."""
        cur = self.cursor
        digits_start = cur.position
        digits = cur.take_while(lambda c: c in _DIGITS)

        if not digits:
            self._fail(ParseErrorKind.ILLEGAL_CHARACTER_LIMIT,
                       "Character limit colon not followed by number", digits_start)

        limit = int(digits)
        if limit > MAX_CHARACTER_LIMIT:
            self._fail(ParseErrorKind.ILLEGAL_CHARACTER_LIMIT,
                       f"Character limit too high ({digits})", digits_start)
        if limit == 0:
            self._fail(ParseErrorKind.ILLEGAL_CHARACTER_LIMIT,
                       f"Illegal character limit ({digits})", digits_start)
        return limit

    def _expect_spec_end(self, message: str, kind: ParseErrorKind) -> None:
        cur = self.cursor
        if cur.is_at_end():
            self._fail_unterminated()
        if cur.current() not in _SPEC_TERMINATORS:
            self._fail(kind, message, cur.position)

    # ---------- ошибки ----------

    @staticmethod
    def _fail(kind: ParseErrorKind, message: str, offset: int) -> NoReturn:
        raise ParseError(kind, message, offset)

    @staticmethod
    def _fail_unterminated() -> NoReturn:
        raise ParseError(ParseErrorKind.UNTERMINATED_EXPRESSION, 'Missing end of expression ("}")')


def parse_template(text: str) -> List[TemplateElement]:
    """
    Удобная функция для разбора строки шаблона.

    Raises:
        ParseError: При ошибке синтаксического анализа
    """
    return TemplateParser(text).parse()


__all__ = ["TemplateParser", "parse_template", "MAX_CHARACTER_LIMIT"]
