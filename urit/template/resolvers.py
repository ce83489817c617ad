"""
Резолверы переменных.

Резолвер — это возможность отобразить имя переменной в значение
(или None, если значения нет). Шаблон никогда не хранит резолвер:
он передаётся в каждый вызов раскрытия отдельно.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Optional, Protocol, runtime_checkable

Resolver = Callable[[str], Any]


@runtime_checkable
class VariableResolver(Protocol):
    """
    Протокол объекта-резолвера.

    Позволяет передавать в шаблон объекты, вычисляющие значения лениво
    (например, обёртки над структурированными документами).
    """

    def resolve(self, name: str) -> Any:
        """
        Возвращает значение переменной.

        Args:
            name: Имя переменной, как записано в шаблоне

        Returns:
            Значение или None, если переменная не определена
        """
        ...


def null_resolver(name: str) -> Any:
    """Резолвер, для которого все переменные не определены."""
    return None


def mapping_resolver(values: Mapping[str, Any]) -> Resolver:
    """Резолвер поверх отображения имя → значение."""
    return values.get


def pair_resolver(name: str, value: Any) -> Resolver:
    """Резолвер для единственной пары имя/значение."""
    def resolve(requested: str) -> Any:
        return value if requested == name else None
    return resolve


def chain_resolvers(*resolvers: Resolver) -> Resolver:
    """
    Объединяет резолверы: побеждает первое значение, отличное от None.
    """
    def resolve(name: str) -> Any:
        for resolver in resolvers:
            value = resolver(name)
            if value is not None:
                return value
        return None
    return resolve


def _single_resolver(source: Any) -> Resolver:
    if source is None:
        return null_resolver
    if isinstance(source, Mapping):
        return mapping_resolver(source)
    if isinstance(source, VariableResolver):
        return source.resolve
    if callable(source):
        return source
    if isinstance(source, tuple) and len(source) == 2 and isinstance(source[0], str):
        return pair_resolver(source[0], source[1])
    raise TypeError(f"Cannot use {type(source).__name__} as a variable resolver")


def as_resolver(*args: Any, **values: Any) -> Resolver:
    """
    Приводит аргументы вызова раскрытия к резолверу.

    Поддерживаемые формы:
    - as_resolver() — все переменные не определены
    - as_resolver(resolver) — функция или объект с методом resolve
    - as_resolver(mapping) — отображение имя → значение
    - as_resolver((name, value)) или as_resolver(name, value) — одна пара
    - as_resolver(**values) — именованные значения; вместе с позиционным
      источником имеют приоритет над ним

    Raises:
        TypeError: Если аргументы не образуют ни одну из форм
    """
    resolver: Optional[Resolver]
    if not args:
        resolver = None
    elif len(args) == 1:
        resolver = _single_resolver(args[0])
    elif len(args) == 2 and isinstance(args[0], str):
        resolver = pair_resolver(args[0], args[1])
    else:
        raise TypeError(f"Expected at most a name/value pair, got {len(args)} positional arguments")

    if values:
        if resolver is None:
            return mapping_resolver(values)
        return chain_resolvers(mapping_resolver(values), resolver)
    return resolver if resolver is not None else null_resolver


__all__ = [
    "Resolver",
    "VariableResolver",
    "null_resolver",
    "mapping_resolver",
    "pair_resolver",
    "chain_resolvers",
    "as_resolver",
]
