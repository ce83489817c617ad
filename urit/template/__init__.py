"""
Движок URI-шаблонов (RFC 6570).

Разбор строки шаблона в неизменяемую последовательность элементов
и раскрытие этой последовательности с подставляемыми значениями.
"""

from __future__ import annotations

from .bound import BoundTemplate
from .errors import ParseError, ParseErrorKind, UnknownVariableError
from .expander import TemplateExpander, expand_elements
from .nodes import ExpressionElement, TemplateElement, TextElement, VariableReference
from .operators import Operator
from .parser import TemplateParser, parse_template
from .resolvers import VariableResolver, as_resolver, chain_resolvers
from .template import Template
from .values import ValueKind, classify

__all__ = [
    "Template",
    "BoundTemplate",
    "ParseError",
    "ParseErrorKind",
    "UnknownVariableError",
    "TemplateParser",
    "parse_template",
    "TemplateExpander",
    "expand_elements",
    "TemplateElement",
    "TextElement",
    "ExpressionElement",
    "VariableReference",
    "Operator",
    "VariableResolver",
    "as_resolver",
    "chain_resolvers",
    "ValueKind",
    "classify",
]
