"""Tests for the JavaFile output destinations."""

from __future__ import annotations

import contextlib
import io
from pathlib import Path
from typing import Any, Iterator

import pytest

from javagen.codegen import (
    FieldSpec,
    InvalidArgumentError,
    JavaFile,
    JavaFileObject,
    Kind,
    RenderInvariantError,
    TypeSpec,
)

from .conftest import DATE


@pytest.fixture
def taco_file() -> JavaFile:
    type_spec = TypeSpec("Taco", fields=(FieldSpec(DATE, "madeFreshDate"),), originating_elements=("element",))
    return JavaFile.builder("com.squareup.tacos", type_spec).add_file_comment("Señor Taco").build()


class RecordingSourceFile:
    def __init__(self, fail_with: Exception | None = None, delete_error: Exception | None = None):
        self.buffer = io.StringIO()
        self.fail_with = fail_with
        self.delete_error = delete_error
        self.delete_calls = 0

    @contextlib.contextmanager
    def open_writer(self) -> Iterator[Any]:
        if self.fail_with is not None:
            raise self.fail_with
        yield self.buffer

    def delete(self) -> bool:
        self.delete_calls += 1
        if self.delete_error is not None:
            raise self.delete_error
        return True


class RecordingFiler:
    def __init__(self, source_file: RecordingSourceFile):
        self.source_file = source_file
        self.created: list[tuple[str, list[Any]]] = []

    def create_source_file(self, name: str, originating_elements: Any) -> RecordingSourceFile:
        self.created.append((name, list(originating_elements)))
        return self.source_file


def test_write_to_stream(taco_file: JavaFile) -> None:
    out = io.StringIO()

    taco_file.write_to(out)

    assert out.getvalue() == str(taco_file)
    assert out.getvalue().startswith("// Señor Taco\npackage com.squareup.tacos;\n")


def test_write_to_path_creates_package_directories(tmp_path: Path, taco_file: JavaFile) -> None:
    path = taco_file.write_to_path(tmp_path)

    assert path == tmp_path / "com" / "squareup" / "tacos" / "Taco.java"
    assert path.read_bytes() == str(taco_file).encode("utf-8")
    assert sorted(p.relative_to(tmp_path).as_posix() for p in tmp_path.rglob("*")) == [
        "com",
        "com/squareup",
        "com/squareup/tacos",
        "com/squareup/tacos/Taco.java",
    ]


def test_write_to_path_accepts_strings_and_missing_root(tmp_path: Path) -> None:
    java_file = JavaFile.builder("", TypeSpec("Taco")).build()
    root = tmp_path / "generated"

    path = java_file.write_to_path(str(root))

    assert path == root / "Taco.java"
    assert path.read_text(encoding="utf-8") == "class Taco {\n}\n"


def test_write_to_path_overwrites_existing_file(tmp_path: Path, taco_file: JavaFile) -> None:
    target = tmp_path / "com" / "squareup" / "tacos" / "Taco.java"
    target.parent.mkdir(parents=True)
    target.write_text("stale", encoding="utf-8")

    taco_file.write_to_path(tmp_path)

    assert target.read_text(encoding="utf-8") == str(taco_file)


def test_write_to_path_rejects_file_root(tmp_path: Path, taco_file: JavaFile) -> None:
    not_a_directory = tmp_path / "file.txt"
    not_a_directory.write_text("", encoding="utf-8")

    with pytest.raises(InvalidArgumentError, match="exists but is not a directory"):
        taco_file.write_to_path(not_a_directory)

    assert list(tmp_path.iterdir()) == [not_a_directory]


def test_write_to_filer(taco_file: JavaFile) -> None:
    source_file = RecordingSourceFile()
    filer = RecordingFiler(source_file)

    taco_file.write_to_filer(filer)

    assert filer.created == [("com.squareup.tacos.Taco", ["element"])]
    assert source_file.buffer.getvalue() == str(taco_file)
    assert source_file.delete_calls == 0


def test_write_to_filer_uses_simple_name_in_default_package() -> None:
    filer = RecordingFiler(RecordingSourceFile())

    JavaFile.builder("", TypeSpec("Taco")).build().write_to_filer(filer)

    assert filer.created == [("Taco", [])]


def test_write_to_filer_deletes_entry_on_failure(taco_file: JavaFile) -> None:
    failure = OSError("disk full")
    source_file = RecordingSourceFile(fail_with=failure)

    with pytest.raises(OSError) as excinfo:
        taco_file.write_to_filer(RecordingFiler(source_file))

    assert excinfo.value is failure
    assert source_file.delete_calls == 1


def test_write_to_filer_keeps_original_error_when_delete_fails(taco_file: JavaFile) -> None:
    failure = OSError("disk full")
    source_file = RecordingSourceFile(fail_with=failure, delete_error=PermissionError("read-only"))

    with pytest.raises(OSError) as excinfo:
        taco_file.write_to_filer(RecordingFiler(source_file))

    assert excinfo.value is failure
    assert source_file.delete_calls == 1


def test_java_file_object(taco_file: JavaFile) -> None:
    file_object = taco_file.to_java_file_object()

    assert isinstance(file_object, JavaFileObject)
    assert file_object.path == "com/squareup/tacos/Taco.java"
    assert file_object.name == file_object.path
    assert file_object.kind is Kind.SOURCE
    assert file_object.char_content() == str(taco_file)
    assert file_object.open_input_stream().read() == str(taco_file).encode("utf-8")
    assert file_object.open_reader().read() == str(taco_file)
    assert file_object.is_name_compatible("Taco", Kind.SOURCE)
    assert not file_object.is_name_compatible("Taco", Kind.CLASS)
    assert not file_object.is_name_compatible("Burrito", Kind.SOURCE)


def test_java_file_object_last_modified_is_fixed() -> None:
    file_object = JavaFile.builder("", TypeSpec("Taco")).build().to_java_file_object()

    assert file_object.path == "Taco.java"
    assert file_object.last_modified > 0
    assert file_object.last_modified == file_object.last_modified


def test_in_memory_failure_is_an_invariant_violation(
    monkeypatch: pytest.MonkeyPatch, taco_file: JavaFile
) -> None:
    def broken_write_to(self: JavaFile, out: Any) -> None:
        raise OSError("unexpected")

    monkeypatch.setattr(JavaFile, "write_to", broken_write_to)

    with pytest.raises(RenderInvariantError):
        str(taco_file)


class FailingWriter:
    def write(self, text: str) -> int:
        raise OSError("stream closed")


def test_write_to_filer_deletes_entry_when_rendering_fails(taco_file: JavaFile) -> None:
    source_file = RecordingSourceFile()
    source_file.buffer = FailingWriter()

    with pytest.raises(OSError, match="stream closed"):
        taco_file.write_to_filer(RecordingFiler(source_file))

    assert source_file.delete_calls == 1


def test_write_to_stream_propagates_stream_errors(taco_file: JavaFile) -> None:
    with pytest.raises(OSError, match="stream closed"):
        taco_file.write_to(FailingWriter())
