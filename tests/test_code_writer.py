"""Tests for javagen.codegen.core.code_writer."""

from __future__ import annotations

import io

import pytest

from javagen.codegen import ClassName, CodeBlock, CodeWriter, InvalidStateError, NullWriter

from .conftest import DATE, STRING

WIDGET_A = ClassName.get("com.a", "Widget")
WIDGET_B = ClassName.get("com.b", "Widget")
ENTRY = ClassName.get("java.util", "Map", "Entry")
COLLECTIONS = ClassName.get("java.util", "Collections")


def _render(writer: CodeWriter, format_: str, *args) -> str:
    writer.push_package("com.example")
    writer.emit(format_, *args)
    writer.pop_package()
    return writer.out.getvalue()


def test_discovery_suggests_first_type_for_each_simple_name() -> None:
    writer = CodeWriter(NullWriter())
    writer.push_package("com.example")
    writer.emit("$T $T $T", WIDGET_A, WIDGET_B, ENTRY)
    writer.pop_package()

    suggested = writer.suggested_imports()

    assert list(suggested) == ["Widget", "Map"]
    assert suggested["Widget"] == WIDGET_A
    assert suggested["Map"] == ClassName.get("java.util", "Map")


def test_same_package_type_reserves_its_simple_name() -> None:
    writer = CodeWriter(NullWriter())
    writer.push_package("com.example")
    writer.emit("$T $T", ClassName.get("com.example", "Date"), DATE)
    writer.pop_package()

    assert writer.suggested_imports() == {}


def test_default_package_types_are_never_importable() -> None:
    writer = CodeWriter(NullWriter())
    writer.push_package("com.example")
    writer.emit("$T", ClassName("", ("Foo",)))
    writer.pop_package()

    assert writer.suggested_imports() == {}


def test_imported_types_abbreviate_and_conflicts_stay_qualified() -> None:
    writer = CodeWriter(io.StringIO(), imported_types={"Widget": WIDGET_A, "Map": ENTRY.top_level_class_name()})

    assert _render(writer, "$T, $T, $T", WIDGET_A, WIDGET_B, ENTRY) == "Widget, com.b.Widget, Map.Entry"


def test_static_import_member_is_emitted_without_type() -> None:
    writer = CodeWriter(io.StringIO(), static_imports={"java.util.Collections.emptyList"})

    assert _render(writer, "$T.emptyList()", COLLECTIONS) == "emptyList()"


def test_static_import_wildcard() -> None:
    writer = CodeWriter(io.StringIO(), static_imports={"java.util.Collections.*"})

    assert _render(writer, "$T.emptyMap()", COLLECTIONS) == "emptyMap()"


def test_member_that_is_not_statically_imported_keeps_the_type() -> None:
    writer = CodeWriter(io.StringIO(), static_imports={"java.util.Collections.emptyList"})

    assert _render(writer, "$T.EMPTY_MAP", COLLECTIONS) == "java.util.Collections.EMPTY_MAP"


def test_comment_lines_are_prefixed() -> None:
    writer = CodeWriter(io.StringIO())
    writer.emit_comment(CodeBlock.of("A\n\nB"))

    assert writer.out.getvalue() == "// A\n//\n// B\n"


def test_javadoc_is_wrapped_and_prefixed() -> None:
    writer = CodeWriter(io.StringIO())
    writer.emit_javadoc(CodeBlock.of("Hello\nWorld"))

    assert writer.out.getvalue() == "/**\n * Hello\n * World\n */\n"


def test_annotated_type_reference() -> None:
    nullable = ClassName.get("javax.annotation", "Nullable")
    writer = CodeWriter(io.StringIO(), imported_types={"String": STRING})

    assert _render(writer, "$T", STRING.annotated(nullable)) == "@javax.annotation.Nullable String"


def test_indentation_uses_indent_unit() -> None:
    writer = CodeWriter(io.StringIO(), indent="\t")
    writer.emit("{\n$>a;\n$<}\n")

    assert writer.out.getvalue() == "{\n\ta;\n}\n"


def test_package_push_pop_must_balance() -> None:
    writer = CodeWriter(NullWriter())
    with pytest.raises(InvalidStateError):
        writer.pop_package()
    writer.push_package("")
    with pytest.raises(InvalidStateError):
        writer.push_package("com.example")


def test_cannot_unindent_below_zero() -> None:
    with pytest.raises(InvalidStateError):
        CodeWriter(NullWriter()).unindent()
