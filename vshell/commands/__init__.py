"""
Builtin commands.

Importing this package registers every builtin in BUILTINS.
"""

from .registry import (
    BUILTINS,
    CATEGORIES,
    Builtin,
    DocSections,
    builtin,
    commands_in,
    get_builtin,
    parse_docstring,
)

# Category modules register their builtins on import
from . import navigation, files, text, encoding, utility, easter  # noqa: F401,E402

__all__ = [
    "BUILTINS",
    "CATEGORIES",
    "Builtin",
    "DocSections",
    "builtin",
    "commands_in",
    "get_builtin",
    "parse_docstring",
]
