"""
Изменяемая привязка значений к шаблону.

Значения хранятся в привязке и задаются присваиванием по имени;
шаблон при этом остаётся неизменяемым. Привязка не предназначена
для одновременного изменения из нескольких потоков.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from .errors import UnknownVariableError

if TYPE_CHECKING:
    from .template import Template


class BoundTemplate:
    """
    Шаблон с набором присвоенных значений.

    Пример:
        >>> bound = Template("/users/{id}").bind()
        >>> bound["id"] = 42
        >>> str(bound)
        '/users/42'
    """

    def __init__(self, template: "Template", values: Dict[str, Any] | None = None):
        self.template = template
        self._declared = frozenset(template.variables)
        self._values: Dict[str, Any] = dict(values or {})

    def _check(self, name: str) -> None:
        if name not in self._declared:
            raise UnknownVariableError(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self._check(name)
        self._values[name] = value

    def __getitem__(self, name: str) -> Any:
        self._check(name)
        return self._values.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._declared

    def clear(self) -> None:
        """Сбрасывает все присвоенные значения."""
        self._values.clear()

    def copy(self) -> "BoundTemplate":
        """Создаёт независимую копию привязки с теми же значениями."""
        return BoundTemplate(self.template, self._values)

    def expand(self) -> str:
        return self.template.expand(self._values)

    def __str__(self) -> str:
        return self.expand()

    def __repr__(self) -> str:
        return f"BoundTemplate({str(self.template)!r}, {self._values!r})"


__all__ = ["BoundTemplate"]
