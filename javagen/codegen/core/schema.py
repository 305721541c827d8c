"""
JSON type descriptions.

Converts a plain dictionary (typically loaded from a JSON file) into a
JavaFile. A description looks like::

    {
      "package": "com.example",
      "file_comment": "Generated code",
      "static_imports": ["java.util.Collections.emptyList"],
      "type": {
        "kind": "class",
        "name": "Greeter",
        "modifiers": ["public", "final"],
        "fields": [{"name": "names", "type": "java.util.List<java.lang.String>"}],
        "methods": [
          {
            "name": "greet",
            "parameters": [{"name": "name", "type": "java.lang.String"}],
            "body": [{"code": "$T.out.println($S + name)",
                      "args": [{"type": "java.lang.System"}, "Hello, "]}]
          }
        ]
      }
    }

Type strings are canonical names with optional type arguments and array
brackets, e.g. ``java.util.Map<java.lang.String, int[]>``.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from .code_block import CodeBlock, CodeBlockBuilder
from .errors import GeneratorError
from .java_file import JavaFile
from .naming import is_package_name
from .specs import FieldSpec, MethodSpec, Modifier, ParameterSpec, TypeKind, TypeSpec
from .type_names import (
    ArrayTypeName,
    ClassName,
    ParameterizedTypeName,
    PRIMITIVES,
    TypeName,
)

_TOKEN = re.compile(r"\s*(?:(?P<name>[\w.$]+)|(?P<punct>[<>,]|\[\]))")


class SchemaError(GeneratorError):
    """Exception raised for malformed type descriptions."""

    pass


def parse_type_name(text: str) -> TypeName:
    """Parse a type string such as ``java.util.List<java.lang.String>[]``."""
    if not isinstance(text, str):
        raise SchemaError(f"Type must be a string, got {text!r}")
    tokens = _tokenize(text)
    type_name, position = _parse_type(tokens, 0, text)
    if position != len(tokens):
        raise SchemaError(f"Unexpected {tokens[position]!r} in type {text!r}")
    return type_name


def _tokenize(text: str) -> List[str]:
    tokens = []
    position = 0
    stripped = text.rstrip()
    while position < len(stripped):
        match = _TOKEN.match(stripped, position)
        if not match:
            raise SchemaError(f"Cannot parse type {text!r} at offset {position}")
        tokens.append(match.group("name") or match.group("punct"))
        position = match.end()
    if not tokens:
        raise SchemaError("Empty type")
    return tokens


def _parse_type(tokens: List[str], position: int, text: str) -> Tuple[TypeName, int]:
    if position >= len(tokens) or tokens[position] in ("<", ">", ",", "[]"):
        raise SchemaError(f"Expected a type name in {text!r}")
    name = tokens[position]
    position += 1

    type_name: TypeName
    if name in PRIMITIVES:
        type_name = PRIMITIVES[name]
    else:
        try:
            raw_type = ClassName.best_guess(name)
        except GeneratorError as e:
            raise SchemaError(f"Invalid class name {name!r} in type {text!r}: {e}") from e
        type_name = raw_type
        if position < len(tokens) and tokens[position] == "<":
            arguments = []
            position += 1
            while True:
                argument, position = _parse_type(tokens, position, text)
                arguments.append(argument)
                if position < len(tokens) and tokens[position] == ",":
                    position += 1
                    continue
                if position < len(tokens) and tokens[position] == ">":
                    position += 1
                    break
                raise SchemaError(f"Unterminated type arguments in {text!r}")
            try:
                type_name = ParameterizedTypeName(raw_type, tuple(arguments))
            except GeneratorError as e:
                raise SchemaError(str(e)) from e

    while position < len(tokens) and tokens[position] == "[]":
        type_name = ArrayTypeName(type_name)
        position += 1
    return type_name, position


def _require_object(data: Any, what: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise SchemaError(f"{what} must be a JSON object, got {type(data).__name__}: {data!r}")
    return data


def _list(data: Dict[str, Any], key: str, what: str) -> List[Any]:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise SchemaError(f"{what} {key!r} must be a list, got {value!r}")
    return value


def _strings(data: Dict[str, Any], key: str, what: str) -> List[str]:
    values = _list(data, key, what)
    for value in values:
        if not isinstance(value, str):
            raise SchemaError(f"{what} {key!r} must hold strings, got {value!r}")
    return values


def _modifiers(data: Dict[str, Any], what: str) -> Tuple[Modifier, ...]:
    values = _strings(data, "modifiers", what)
    try:
        return tuple(Modifier.parse(value) for value in values)
    except ValueError as e:
        raise SchemaError(f"Unknown modifier in {values}") from e


def _class_names(data: Dict[str, Any], key: str, what: str) -> Tuple[ClassName, ...]:
    names = []
    for value in _strings(data, key, what):
        try:
            names.append(ClassName.best_guess(value))
        except GeneratorError as e:
            raise SchemaError(f"Invalid class name {value!r} in {what}: {e}") from e
    return tuple(names)


def _code_arg(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == {"type"}:
        return parse_type_name(value["type"])
    return value


def _code_block(value: Any, statements: bool = False) -> Optional[CodeBlock]:
    """Build a code block from a string, a {"code", "args"} dict, or a list of those."""
    if value is None:
        return None
    entries = value if isinstance(value, list) else [value]
    builder = CodeBlockBuilder()
    for entry in entries:
        if isinstance(entry, str):
            format_, args = "$L", [entry]
        elif isinstance(entry, dict) and isinstance(entry.get("code"), str):
            args = entry.get("args", [])
            if not isinstance(args, list):
                raise SchemaError(f"Code args must be a list: {entry!r}")
            format_, args = entry["code"], [_code_arg(a) for a in args]
        else:
            raise SchemaError(f"Invalid code entry: {entry!r}")
        if statements:
            builder.add_statement(format_, *args)
        else:
            builder.add(format_, *args)
    return builder.build()


def _text(value: Any, what: str) -> Optional[str]:
    """Accept a string or a list of lines."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, list) and all(isinstance(line, str) for line in value):
        return "\n".join(value)
    raise SchemaError(f"{what} must be a string or a list of strings, got {value!r}")


def _javadoc(value: Any) -> Optional[CodeBlock]:
    text = _text(value, "javadoc")
    if text is None:
        return None
    return CodeBlock.of("$L\n", text)


def _require(data: Dict[str, Any], key: str, what: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise SchemaError(f"{what} is missing {key!r}: {data!r}")
    return data[key]


def field_spec_from_dict(data: Dict[str, Any]) -> FieldSpec:
    _require_object(data, "field")
    return FieldSpec(
        type=parse_type_name(_require(data, "type", "field")),
        name=_require(data, "name", "field"),
        modifiers=_modifiers(data, "field"),
        javadoc=_javadoc(data.get("javadoc")),
        initializer=_code_block(data.get("initializer")),
    )


def parameter_spec_from_dict(data: Dict[str, Any]) -> ParameterSpec:
    _require_object(data, "parameter")
    return ParameterSpec(
        type=parse_type_name(_require(data, "type", "parameter")),
        name=_require(data, "name", "parameter"),
        modifiers=_modifiers(data, "parameter"),
    )


def method_spec_from_dict(data: Dict[str, Any]) -> MethodSpec:
    _require_object(data, "method")
    options = dict(
        modifiers=_modifiers(data, "method"),
        parameters=tuple(parameter_spec_from_dict(p) for p in _list(data, "parameters", "method")),
        exceptions=tuple(parse_type_name(e) for e in _list(data, "exceptions", "method")),
        annotations=_class_names(data, "annotations", "method"),
        javadoc=_javadoc(data.get("javadoc")),
        code=_code_block(data.get("body"), statements=True),
    )
    if data.get("constructor"):
        return MethodSpec.constructor(**options)
    return MethodSpec(
        name=_require(data, "name", "method"),
        return_type=parse_type_name(data.get("returns", "void")),
        **options,
    )


def type_spec_from_dict(data: Dict[str, Any]) -> TypeSpec:
    """Convert a type description into a TypeSpec."""
    _require_object(data, "type")
    kind = data.get("kind", "class")
    if kind not in [k.value for k in TypeKind]:
        raise SchemaError(f"Unknown type kind: {kind!r}")

    superclass = data.get("superclass")
    try:
        return TypeSpec(
            name=_require(data, "name", "type"),
            kind=TypeKind(kind),
            modifiers=_modifiers(data, "type"),
            javadoc=_javadoc(data.get("javadoc")),
            annotations=_class_names(data, "annotations", "type"),
            superclass=parse_type_name(superclass) if superclass is not None else None,
            superinterfaces=tuple(parse_type_name(i) for i in _list(data, "interfaces", "type")),
            enum_constants=tuple(_strings(data, "enum_constants", "type")),
            fields=tuple(field_spec_from_dict(f) for f in _list(data, "fields", "type")),
            methods=tuple(method_spec_from_dict(m) for m in _list(data, "methods", "type")),
            type_specs=tuple(type_spec_from_dict(t) for t in _list(data, "types", "type")),
            originating_elements=tuple(_list(data, "originating_elements", "type")),
        )
    except SchemaError:
        raise
    except GeneratorError as e:
        raise SchemaError(f"Invalid type {data.get('name')!r}: {e}") from e


def java_file_from_dict(data: Dict[str, Any], config=None) -> JavaFile:
    """
    Convert a file description into a JavaFile.

    Args:
        data: File description
        config: Optional JavaFileConfig applied after the description's own settings

    Returns:
        The built JavaFile

    Raises:
        SchemaError: If the description is malformed
        ConfigError: If config holds invalid settings
    """
    _require_object(data, "Description")

    type_spec = type_spec_from_dict(_require(data, "type", "description"))
    package_name = data.get("package", "")
    if not isinstance(package_name, str) or not is_package_name(package_name):
        raise SchemaError(f"Invalid package name: {package_name!r}")

    try:
        builder = JavaFile.builder(package_name, type_spec)

        comment = _text(data.get("file_comment"), "file_comment")
        if comment:
            builder.add_file_comment("$L", comment)

        for signature in _strings(data, "static_imports", "description"):
            class_part, _, member = signature.rpartition(".")
            if not class_part or not member:
                raise SchemaError(f"Invalid static import: {signature!r}")
            builder.add_static_import(class_part, member)

        if "indent" in data:
            builder.indent(data["indent"])
        if data.get("skip_java_lang_imports"):
            builder.skip_java_lang_imports(True)
    except SchemaError:
        raise
    except GeneratorError as e:
        raise SchemaError(f"Invalid description: {e}") from e

    if config is not None:
        config.apply_to(builder)

    return builder.build()
