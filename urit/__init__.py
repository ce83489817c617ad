"""
urit — URI Template (RFC 6570) toolkit.
"""

from __future__ import annotations

from .errors import UritUserError
from .template import (
    BoundTemplate,
    ParseError,
    ParseErrorKind,
    Template,
    UnknownVariableError,
    VariableResolver,
)


def expand(template: str, /, *args, **values) -> str:
    """Разбирает и сразу раскрывает шаблон."""
    return Template(template).expand(*args, **values)


__all__ = [
    "Template",
    "BoundTemplate",
    "ParseError",
    "ParseErrorKind",
    "UnknownVariableError",
    "UritUserError",
    "VariableResolver",
    "expand",
]
