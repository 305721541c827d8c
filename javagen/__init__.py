"""
javagen: generate complete Java source files from Python.

Build a TypeSpec, wrap it in a JavaFile, and write it anywhere; imports are
computed from the types the file actually references.
"""

from .codegen import (
    ClassName,
    CodeBlock,
    FieldSpec,
    IndentChar,
    JavaFile,
    MethodSpec,
    Modifier,
    ParameterSpec,
    TypeKind,
    TypeSpec,
    render_description,
)

__version__ = "0.1.0"

__all__ = [
    "ClassName",
    "CodeBlock",
    "FieldSpec",
    "IndentChar",
    "JavaFile",
    "MethodSpec",
    "Modifier",
    "ParameterSpec",
    "TypeKind",
    "TypeSpec",
    "render_description",
    "__version__",
]
