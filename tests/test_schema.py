"""Tests for building JavaFiles from JSON descriptions."""

from __future__ import annotations

import pytest

from javagen.codegen import (
    INT,
    ArrayTypeName,
    ClassName,
    ConfigError,
    JavaFileConfig,
    ParameterizedTypeName,
    SchemaError,
    java_file_from_dict,
    parse_type_name,
    render_description,
    type_spec_from_dict,
)

from .conftest import HELLO_WORLD_SOURCE, STRING


def test_parse_type_name() -> None:
    parsed = parse_type_name("java.util.Map<java.lang.String, int[]>")

    assert parsed == ParameterizedTypeName(ClassName.get("java.util", "Map"), (STRING, ArrayTypeName(INT)))
    assert str(parsed) == "java.util.Map<java.lang.String, int[]>"


def test_parse_nested_class_and_primitive() -> None:
    assert parse_type_name("java.util.Map.Entry") == ClassName.get("java.util", "Map", "Entry")
    assert parse_type_name("int") is INT
    assert parse_type_name("java.lang.String[][]") == ArrayTypeName(ArrayTypeName(STRING))


@pytest.mark.parametrize(
    "text",
    ["", "java.util.List<", "int<java.lang.String>", "java.util.List<int>", "lowercase", "A B"],
)
def test_parse_type_name_rejects(text: str) -> None:
    with pytest.raises(SchemaError):
        parse_type_name(text)


def test_hello_world(hello_world_description) -> None:
    assert render_description(hello_world_description) == HELLO_WORLD_SOURCE


def test_full_description() -> None:
    description = {
        "package": "com.example",
        "file_comment": ["Generated code", "Do not edit"],
        "static_imports": ["java.util.Collections.emptyList"],
        "indent": "    ",
        "type": {
            "kind": "class",
            "name": "Greeter",
            "modifiers": ["public"],
            "interfaces": ["java.lang.Runnable"],
            "fields": [
                {
                    "name": "names",
                    "type": "java.util.List<java.lang.String>",
                    "modifiers": ["private", "final"],
                    "initializer": {"code": "$T.emptyList()", "args": [{"type": "java.util.Collections"}]},
                }
            ],
            "methods": [
                {"constructor": True, "modifiers": ["public"]},
                {
                    "name": "run",
                    "modifiers": ["public"],
                    "annotations": ["java.lang.Override"],
                    "body": ["names.clear()"],
                },
            ],
        },
    }

    source = str(java_file_from_dict(description))

    assert source == (
        "// Generated code\n"
        "// Do not edit\n"
        "package com.example;\n"
        "\n"
        "import static java.util.Collections.emptyList;\n"
        "\n"
        "import java.lang.Override;\n"
        "import java.lang.Runnable;\n"
        "import java.lang.String;\n"
        "import java.util.List;\n"
        "\n"
        "public class Greeter implements Runnable {\n"
        "    private final List<String> names = emptyList();\n"
        "\n"
        "    public Greeter() {\n"
        "    }\n"
        "\n"
        "    @Override\n"
        "    public void run() {\n"
        "        names.clear();\n"
        "    }\n"
        "}\n"
    )


def test_enum_and_interface_descriptions() -> None:
    enum_spec = type_spec_from_dict({"kind": "enum", "name": "Suit", "enum_constants": ["HEARTS", "SPADES"]})
    interface_spec = type_spec_from_dict(
        {
            "kind": "interface",
            "name": "Shape",
            "methods": [{"name": "area", "returns": "double", "modifiers": ["public", "abstract"]}],
        }
    )

    assert enum_spec.enum_constants == ("HEARTS", "SPADES")
    assert interface_spec.methods[0].return_type == parse_type_name("double")


def test_config_is_applied_after_description(hello_world_description) -> None:
    hello_world_description["indent"] = "\t"

    java_file = java_file_from_dict(hello_world_description, JavaFileConfig(indent_size=4))

    assert java_file.indent == "    "


@pytest.mark.parametrize(
    "description",
    [
        [],
        {"package": "com.example"},
        {"package": "com.example", "type": {"kind": "record", "name": "Point"}},
        {"package": "com.example", "type": {"name": "Point", "modifiers": ["sealed"]}},
        {"package": "com.example", "type": {"name": "class"}},
        {"package": "com.example", "type": {"name": "Point", "fields": [{"name": "x"}]}},
        {"package": "com.example", "static_imports": ["emptyList"], "type": {"name": "Point"}},
        {"package": "com.example", "indent": -1, "type": {"name": "Point"}},
        {"package": "com.example", "type": {"name": "Point", "methods": [{"name": "f", "body": [42]}]}},
    ],
)
def test_invalid_descriptions(description) -> None:
    with pytest.raises(SchemaError):
        java_file_from_dict(description)


@pytest.mark.parametrize(
    "description",
    [
        {"package": "com.example", "type": "Foo"},
        {"package": "com.example", "type": {"name": "Point", "methods": ["area"]}},
        {"package": "com.example", "type": {"name": "Point", "fields": [{"name": "x", "type": 5}]}},
        {"package": "com.example", "type": {"name": "Point", "fields": "x"}},
        {"package": "com.example", "type": {"name": "Point", "modifiers": "public"}},
        {"package": "com.example", "type": {"name": "Point", "modifiers": [1]}},
        {"package": "com.example", "type": {"name": "Point", "kind": ["class"]}},
        {"package": "com.example", "type": {"name": "Point", "interfaces": [None]}},
        {"package": "com.example", "type": {"name": "Point", "annotations": [7]}},
        {"package": "com.example", "type": {"name": "Point", "javadoc": ["ok", 3]}},
        {"package": "com.example", "static_imports": [42], "type": {"name": "Point"}},
        {"package": "com.example", "static_imports": "java.lang.Math.max", "type": {"name": "Point"}},
        {"package": 5, "type": {"name": "Point"}},
        {"package": "com..example", "type": {"name": "Point"}},
        {"package": "com.example", "file_comment": {"text": "hi"}, "type": {"name": "Point"}},
        {
            "package": "com.example",
            "type": {"name": "Point", "methods": [{"name": "f", "body": [{"code": "$L", "args": "x"}]}]},
        },
    ],
)
def test_wrongly_typed_values_are_schema_errors(description) -> None:
    with pytest.raises(SchemaError):
        java_file_from_dict(description)


def test_invalid_config_is_not_reported_as_description_error(hello_world_description) -> None:
    with pytest.raises(ConfigError, match="Invalid indent_char"):
        java_file_from_dict(hello_world_description, JavaFileConfig(indent_char="bogus"))
