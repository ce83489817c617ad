"""
Движок раскрытия URI-шаблонов.

Проходит по последовательности элементов один раз и выводит результат
в приёмник. Литеральный текст копируется как есть; выражения
раскрываются по атрибутам своего оператора и модификаторам переменных.

Раскрытие не может завершиться ошибкой: отсутствующие значения
просто ничего не добавляют к результату.
"""

from __future__ import annotations

import io
from typing import Any, Callable, Iterable, Iterator, Optional, Protocol, Tuple

from .nodes import ExpressionElement, TemplateElement, TextElement
from .resolvers import Resolver
from .values import ClassifiedValue, ValueKind, classify
from ..encoding import apply_character_limit, encode


class TextSink(Protocol):
    """Приёмник вывода: любой объект с методом write (io.StringIO, файл и т.п.)."""

    def write(self, text: str) -> Any:
        ...


def serialize_value(value: Any, reserved: bool, character_limit: Optional[int] = None) -> Optional[str]:
    """
    Сериализует значение как одну единицу подстановки.

    Скаляр обрезается до character_limit кодовых точек и кодируется.
    Последовательность и Mapping (без explode) сериализуются как список
    через запятую, каждый элемент (ключ и значение) кодируется отдельно;
    ограничение длины к составным значениям не применяется.

    Args:
        value: Значение в любом поддерживаемом представлении
        reserved: Политика кодирования (True для операторов + и #)
        character_limit: Модификатор префикса :N

    Returns:
        Закодированный текст или None для отсутствующего значения
    """
    return serialize_classified(classify(value), reserved, character_limit)


def serialize_classified(
    classified: ClassifiedValue, reserved: bool, character_limit: Optional[int] = None
) -> Optional[str]:
    """Сериализует уже классифицированное значение (см. serialize_value)."""
    if classified.kind is ValueKind.SCALAR:
        return encode(apply_character_limit(classified.data, character_limit), reserved)
    if classified.kind is ValueKind.SEQUENCE:
        return _join(serialize_value(item, reserved) for item in classified.data)
    if classified.kind is ValueKind.MAPPING:
        return _join(
            part
            for key, text in _serialize_pairs(classified.data, reserved)
            for part in (key, text)
        )
    return None


def _serialize_pairs(pairs: Iterable[Tuple[Any, Any]], reserved: bool) -> Iterator[Tuple[str, str]]:
    """Сериализует пары Mapping, пропуская пары с пустым составным значением."""
    for key, item in pairs:
        text = serialize_value(item, reserved)
        if text is not None:
            yield serialize_value(key, reserved) or "", text


def _join(parts: Iterable[Optional[str]]) -> Optional[str]:
    present = [part for part in parts if part is not None]
    if not present:
        return None
    return ",".join(present)


class TemplateExpander:
    """
    Раскрывает последовательность элементов шаблона с данным резолвером.

    Экземпляр не хранит состояния между вызовами и может использоваться
    повторно для разных последовательностей элементов.
    """

    def __init__(self, resolver: Resolver):
        """
        Args:
            resolver: Функция имя → значение (или None)
        """
        self.resolver = resolver

    def expand(self, elements: Iterable[TemplateElement]) -> str:
        """Раскрывает элементы в строку."""
        buffer = io.StringIO()
        self.expand_to(buffer, elements)
        return buffer.getvalue()

    def expand_to(self, sink: TextSink, elements: Iterable[TemplateElement]) -> None:
        """Раскрывает элементы, дописывая результат в приёмник."""
        write = sink.write
        for element in elements:
            if isinstance(element, TextElement):
                write(element.text)
            elif isinstance(element, ExpressionElement):
                self._expand_expression(element, write)
            else:
                raise TypeError(f"Unknown template element: {type(element).__name__}")

    def _expand_expression(self, element: ExpressionElement, write: Callable[[str], Any]) -> None:
        operator = element.operator
        emitted = False

        for ref in element.variables:
            classified = classify(self.resolver(ref.name))
            if classified.is_absent:
                continue

            if ref.explode and classified.kind is ValueKind.MAPPING:
                # Раскрытие Mapping всегда именует каждую пару
                for key, text in _serialize_pairs(classified.data, operator.reserved):
                    self._emit(write, element, emitted, key, text, add_name=True)
                    emitted = True
            elif ref.explode and classified.kind is ValueKind.SEQUENCE:
                for item in classified.data:
                    text = serialize_value(item, operator.reserved)
                    if text is None:
                        continue
                    self._emit(write, element, emitted, ref.name, text, add_name=operator.add_names)
                    emitted = True
            else:
                text = serialize_classified(classified, operator.reserved, ref.character_limit)
                if text is None:
                    continue
                self._emit(write, element, emitted, ref.name, text, add_name=operator.add_names)
                emitted = True

    @staticmethod
    def _emit(
        write: Callable[[str], Any],
        element: ExpressionElement,
        continuation: bool,
        name: Optional[str],
        text: Optional[str],
        add_name: bool,
    ) -> None:
        """
        Выводит одну единицу подстановки.

        Перед первой единицей выражения выводится префикс оператора,
        перед остальными — разделитель. Для именующих операторов
        выводится name, затем '=' (для операторов ? и & всегда,
        для ; — только при непустом значении).
        """
        operator = element.operator
        if continuation:
            write(operator.separator)
        elif operator.prefix:
            write(operator.prefix)

        text = text or ""
        if add_name:
            write(name or "")
            if operator.forms_equals or text:
                write("=")
        write(text)


def expand_elements(elements: Iterable[TemplateElement], resolver: Resolver) -> str:
    """Удобная функция для раскрытия последовательности элементов."""
    return TemplateExpander(resolver).expand(elements)


__all__ = ["TextSink", "TemplateExpander", "serialize_value", "serialize_classified", "expand_elements"]
