"""
Классификация подставляемых значений.

Движок раскрытия не зависит от конкретных типов значений: каждое значение
один раз классифицируется как отсутствующее, скалярное, упорядоченная
последовательность или ассоциативная структура.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Tuple


class ValueKind(enum.Enum):
    """Виды значений с точки зрения раскрытия."""
    ABSENT = "absent"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"


@dataclass(frozen=True)
class ClassifiedValue:
    """
    Значение, приведённое к одному из четырёх видов.

    Attributes:
        kind: Вид значения
        data: Для SCALAR — текст; для SEQUENCE — кортеж элементов без None;
              для MAPPING — кортеж пар (ключ, значение) без значений None
    """
    kind: ValueKind
    data: Any = None

    @property
    def is_absent(self) -> bool:
        return self.kind is ValueKind.ABSENT


ABSENT = ClassifiedValue(ValueKind.ABSENT)


def to_text(value: Any) -> str:
    """
    Преобразует скалярное значение в текст.

    Некорректные UTF-8 последовательности в байтах заменяются на U+FFFD.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


def is_scalar(value: Any) -> bool:
    return isinstance(value, (str, bytes, bytearray)) or not isinstance(value, Iterable)


def classify(value: Any) -> ClassifiedValue:
    """
    Классифицирует значение.

    Правила:
    - None → ABSENT
    - строки, байты и любые неитерируемые объекты → SCALAR
    - Mapping → MAPPING (пары со значением None отбрасываются)
    - прочие итерируемые объекты → SEQUENCE (элементы None отбрасываются)
    - пустая последовательность или пустой Mapping → ABSENT

    Пустая строка остаётся скаляром: она не меняет результат подстановки,
    но выражение всё равно выводит префикс или разделитель.
    """
    if value is None:
        return ABSENT
    if is_scalar(value):
        return ClassifiedValue(ValueKind.SCALAR, to_text(value))
    if isinstance(value, Mapping):
        pairs: Tuple[Tuple[Any, Any], ...] = tuple(
            (key, item) for key, item in value.items() if item is not None
        )
        if not pairs:
            return ABSENT
        return ClassifiedValue(ValueKind.MAPPING, pairs)
    items = tuple(item for item in value if item is not None)
    if not items:
        return ABSENT
    return ClassifiedValue(ValueKind.SEQUENCE, items)


__all__ = ["ValueKind", "ClassifiedValue", "ABSENT", "to_text", "is_scalar", "classify"]
