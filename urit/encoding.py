"""
Процентное кодирование подставляемых значений.

Содержит предикаты классификации символов, которыми пользуется парсер
(допустимые символы литерального текста и имён переменных), и функции
кодирования значений по двум политикам:
- только unreserved-символы проходят как есть (большинство операторов)
- unreserved и reserved-символы проходят как есть (операторы + и #)
"""

from __future__ import annotations

from typing import Optional

# ALPHA / DIGIT / "-" / "." / "_" / "~"
UNRESERVED = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
    "0123456789"
    "-._~"
)

# gen-delims и sub-delims
RESERVED = frozenset(":/?#[]@!$&'()*+,;=")

HEX_DIGITS = frozenset("0123456789ABCDEFabcdef")

# Символы, запрещённые в литеральном тексте шаблона ('%' и '{' обрабатываются парсером отдельно)
_ILLEGAL_LITERALS = frozenset("\"'<>\\^`|}")

_VARCHAR_PUNCTUATION = frozenset("_")


def is_unreserved(ch: str) -> bool:
    """Проверяет, входит ли символ в множество unreserved."""
    return ch in UNRESERVED


def is_reserved(ch: str) -> bool:
    """Проверяет, является ли символ разделителем из множества reserved."""
    return ch in RESERVED


def is_hex_digit(ch: str) -> bool:
    return ch in HEX_DIGITS


def is_literal_char(ch: str) -> bool:
    """
    Проверяет, допустим ли символ в литеральном тексте шаблона.

    Запрещены управляющие символы C0 и пробел, символы
    " ' < > \\ ^ ` | } а также DEL и управляющие символы C1.
    """
    code = ord(ch)
    if code <= 0x20 or 0x7F <= code <= 0x9F:
        return False
    return ch not in _ILLEGAL_LITERALS


def is_varchar(ch: str) -> bool:
    """
    Проверяет, допустим ли символ в имени переменной.

    Точка и процентные триплеты проверяются парсером отдельно,
    так как их допустимость зависит от позиции.
    """
    return ch.isascii() and (ch.isalnum() or ch in _VARCHAR_PUNCTUATION)


def normalize_surrogates(text: str) -> str:
    """
    Склеивает UTF-16 суррогатные пары в единые кодовые точки.

    Строка может содержать пару '\\ud83d\\udca9' как два отдельных символа
    (например, после декодирования JSON). После нормализации такая пара
    становится одним символом U+1F4A9. Одиночные суррогаты сохраняются.
    """
    if not any(0xD800 <= ord(ch) <= 0xDFFF for ch in text):
        return text
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


def apply_character_limit(text: str, limit: Optional[int]) -> str:
    """
    Обрезает строку до указанного количества кодовых точек.

    Суррогатная пара считается одной кодовой точкой и никогда не разрывается.

    Args:
        text: Исходная строка
        limit: Максимальное количество кодовых точек или None

    Returns:
        Префикс строки не длиннее limit кодовых точек
    """
    if limit is None:
        return text
    text = normalize_surrogates(text)
    if len(text) <= limit:
        return text
    return text[:limit]


def _percent_encode_char(ch: str) -> str:
    return "".join(f"%{byte:02X}" for byte in ch.encode("utf-8", "surrogatepass"))


def encode(text: str, reserved: bool = False) -> str:
    """
    Выполняет процентное кодирование строки.

    Строка обходится по кодовым точкам (суррогатные пары предварительно
    склеиваются), каждая кодовая точка кодируется в UTF-8, и каждый байт,
    не покрытый активной политикой, заменяется на %XX (заглавные hex-цифры).

    Args:
        text: Строка для кодирования
        reserved: True — reserved-символы пропускаются без кодирования

    Returns:
        Закодированная строка
    """
    parts = []
    for ch in normalize_surrogates(text):
        if ch in UNRESERVED or (reserved and ch in RESERVED):
            parts.append(ch)
        else:
            parts.append(_percent_encode_char(ch))
    return "".join(parts)


def encode_simple(text: str) -> str:
    """Кодирование с политикой «только unreserved»."""
    return encode(text, reserved=False)


def encode_reserved(text: str) -> str:
    """Кодирование с политикой «unreserved и reserved»."""
    return encode(text, reserved=True)


__all__ = [
    "UNRESERVED",
    "RESERVED",
    "is_unreserved",
    "is_reserved",
    "is_hex_digit",
    "is_literal_char",
    "is_varchar",
    "normalize_surrogates",
    "apply_character_limit",
    "encode",
    "encode_simple",
    "encode_reserved",
]
