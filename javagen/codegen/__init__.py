"""
Java Code Generation Module

Renders a single top-level Java type into a complete compilation unit,
with its package declaration and computed imports.
"""

from .core import *  # noqa: F401,F403
from .core import __all__ as _core_all
from .core import type_names

# Primitive types, re-exported for convenience
VOID = type_names.VOID
BOOLEAN = type_names.BOOLEAN
BYTE = type_names.BYTE
SHORT = type_names.SHORT
INT = type_names.INT
LONG = type_names.LONG
CHAR = type_names.CHAR
FLOAT = type_names.FLOAT
DOUBLE = type_names.DOUBLE


def render_description(description, config=None) -> str:
    """
    Render a JSON type description to Java source text.

    Args:
        description: Description dict (see ``core.schema``)
        config: Optional JavaFileConfig

    Returns:
        Java source code
    """
    from .core.schema import java_file_from_dict

    return str(java_file_from_dict(description, config))


__all__ = list(_core_all) + [
    "VOID",
    "BOOLEAN",
    "BYTE",
    "SHORT",
    "INT",
    "LONG",
    "CHAR",
    "FLOAT",
    "DOUBLE",
    "render_description",
]
