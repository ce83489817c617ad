"""
Common base for errors that urit reports to the user.

The command line prints these as a single line on stderr and exits
with status 2. Anything else is a bug and keeps its traceback.
"""

from __future__ import annotations


class UritUserError(Exception):
    """
    Problem in user input: template text, catalog file or variable name.

    Subclasses:
        ParseError: malformed template text
        UnknownVariableError: value assigned to an undeclared variable
        CatalogError: unreadable or invalid template catalog
    """
    pass


__all__ = ["UritUserError"]
