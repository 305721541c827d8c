"""
Core Java source generation components.

Provides the type model, the code block format language, the writer bridge
and the JavaFile compilation unit with its output destinations.
"""

from .errors import (
    GeneratorError,
    InvalidArgumentError,
    InvalidStateError,
    RenderInvariantError,
)
from .type_names import (
    TypeName,
    ClassName,
    ParameterizedTypeName,
    ArrayTypeName,
    PrimitiveTypeName,
)
from .code_block import CodeBlock, CodeBlockBuilder
from .code_writer import CodeWriter, NullWriter
from .specs import Modifier, TypeKind, FieldSpec, ParameterSpec, MethodSpec, TypeSpec
from .java_file import JavaFile, JavaFileBuilder, IndentChar
from .file_objects import JavaFileObject, Kind, Filer, FilerSourceFile
from .config import JavaFileConfig, ConfigManager, ConfigError, load_config
from .schema import SchemaError, java_file_from_dict, type_spec_from_dict, parse_type_name

__all__ = [
    # Errors
    "GeneratorError",
    "InvalidArgumentError",
    "InvalidStateError",
    "RenderInvariantError",
    # Type model
    "TypeName",
    "ClassName",
    "ParameterizedTypeName",
    "ArrayTypeName",
    "PrimitiveTypeName",
    # Code fragments and writing
    "CodeBlock",
    "CodeBlockBuilder",
    "CodeWriter",
    "NullWriter",
    # Declarations
    "Modifier",
    "TypeKind",
    "FieldSpec",
    "ParameterSpec",
    "MethodSpec",
    "TypeSpec",
    # Compilation unit and destinations
    "JavaFile",
    "JavaFileBuilder",
    "IndentChar",
    "JavaFileObject",
    "Kind",
    "Filer",
    "FilerSourceFile",
    # Configuration
    "JavaFileConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Descriptions
    "SchemaError",
    "java_file_from_dict",
    "type_spec_from_dict",
    "parse_type_name",
]
