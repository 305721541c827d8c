"""
A Java file containing a single top-level type.

``JavaFile`` renders in two passes. The first pass writes the whole file to
a discarding sink only to learn which types are referenced; the second pass
writes for real, importing what the first pass suggested. The rendered text
is also the file's identity: equality and hashing compare the text.
"""

import io
import os
from enum import Enum
from pathlib import Path
from typing import Any, Union

from ...logging_config import get_logger
from .code_block import CodeBlock, CodeBlockBuilder
from .code_writer import CodeWriter, NullWriter
from .errors import check_argument, check_not_none, InvalidArgumentError, RenderInvariantError
from .file_objects import JavaFileObject, Kind, UTF_8
from .specs import TypeSpec
from .type_names import ClassName

logger = get_logger(__name__)

JAVA_LANG = "java.lang"


class IndentChar(Enum):
    """Characters allowed in an indent."""

    TAB = "\t"
    SPACE = " "

    @classmethod
    def parse(cls, value: Union["IndentChar", str]) -> "IndentChar":
        """Accept a member, its character, or its name (``"tab"``, ``"space"``)."""
        if isinstance(value, IndentChar):
            return value
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError(f"invalid indent char: {value!r}") from e

    def __str__(self) -> str:
        return self.value


_ALLOWED_INDENT_CHARS = frozenset(char.value for char in IndentChar)


class JavaFile:
    """An immutable Java compilation unit."""

    def __init__(self, builder: "JavaFileBuilder"):
        self.file_comment: CodeBlock = builder.file_comment.build()
        self.package_name: str = builder.package_name
        self.type_spec: TypeSpec = builder.type_spec
        self.skip_java_lang_imports: bool = builder.skip_java_lang_imports_flag
        self.static_imports = tuple(sorted(builder.static_imports))
        self.indent: str = builder.indent_string

    @classmethod
    def builder(cls, package_name: str, type_spec: TypeSpec) -> "JavaFileBuilder":
        check_not_none(package_name, "package_name == None")
        check_not_none(type_spec, "type_spec == None")
        return JavaFileBuilder(package_name, type_spec)

    def to_builder(self) -> "JavaFileBuilder":
        builder = JavaFileBuilder(self.package_name, self.type_spec)
        builder.file_comment.add_code_block(self.file_comment)
        builder.static_imports.update(self.static_imports)
        builder.skip_java_lang_imports_flag = self.skip_java_lang_imports
        builder.indent_string = self.indent
        return builder

    @property
    def file_name(self) -> str:
        """Fully qualified name of the top-level type."""
        if not self.package_name:
            return self.type_spec.name
        return f"{self.package_name}.{self.type_spec.name}"

    def write_to(self, out) -> None:
        """Render into ``out``, any object with a text ``write`` method."""
        # First pass: emit the entire file, just to collect the types we'll need to import.
        imports_collector = CodeWriter(NullWriter(), self.indent, self.static_imports)
        self._emit(imports_collector)
        suggested_imports = imports_collector.suggested_imports()
        logger.debug(
            "Collected %d importable types for %s", len(suggested_imports), self.file_name
        )

        # Second pass: write the code, taking advantage of the imports.
        code_writer = CodeWriter(out, self.indent, self.static_imports, suggested_imports)
        self._emit(code_writer)

    def write_to_path(self, directory: Union[str, "os.PathLike[str]"]) -> Path:
        """
        Write this file as UTF-8 below directory using the package directory layout.

        Returns:
            Path of the written ``.java`` file

        Raises:
            InvalidArgumentError: If directory exists but is not a directory
            OSError: If directories cannot be created or the file cannot be written
        """
        directory = Path(directory)
        check_argument(
            not directory.exists() or directory.is_dir(),
            "path %s exists but is not a directory.",
            directory,
        )
        output_directory = directory
        if self.package_name:
            for package_component in self.package_name.split("."):
                output_directory = output_directory / package_component
        # Also creates a missing root when the package is empty.
        output_directory.mkdir(parents=True, exist_ok=True)

        output_path = output_directory / (self.type_spec.name + Kind.SOURCE.extension)
        logger.debug("Writing %s to %s", self.file_name, output_path)
        with open(output_path, "w", encoding=UTF_8, newline="") as writer:
            self.write_to(writer)
        return output_path

    def write_to_filer(self, filer) -> None:
        """
        Write this file through a processing host's filer.

        On failure the partially written entry is deleted before the original
        exception propagates.
        """
        source_file = filer.create_source_file(
            self.file_name, list(self.type_spec.originating_elements)
        )
        try:
            with source_file.open_writer() as writer:
                self.write_to(writer)
        except Exception:
            try:
                source_file.delete()
            except Exception as delete_error:
                logger.debug("Could not delete %s: %s", self.file_name, delete_error)
            raise

    def to_java_file_object(self) -> JavaFileObject:
        if self.package_name:
            path = self.package_name.replace(".", "/") + "/" + self.type_spec.name
        else:
            path = self.type_spec.name
        return JavaFileObject(path + Kind.SOURCE.extension, Kind.SOURCE, self.__str__)

    def _emit(self, code_writer: CodeWriter) -> None:
        code_writer.push_package(self.package_name)

        if not self.file_comment.is_empty():
            code_writer.emit_comment(self.file_comment)

        if self.package_name:
            code_writer.emit("package $L;\n", self.package_name)
            code_writer.emit("\n")

        if self.static_imports:
            for signature in self.static_imports:
                code_writer.emit("import static $L;\n", signature)
            code_writer.emit("\n")

        imported_types_count = 0
        for class_name in sorted(
            code_writer.imported_types.values(), key=lambda c: c.canonical_name
        ):
            if self.skip_java_lang_imports and class_name.package_name == JAVA_LANG:
                continue
            code_writer.emit("import $L;\n", class_name.without_annotations())
            imported_types_count += 1

        if imported_types_count > 0:
            code_writer.emit("\n")

        self.type_spec.emit(code_writer, None, frozenset())

        code_writer.pop_package()

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if other is None or type(self) is not type(other):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __str__(self) -> str:
        result = io.StringIO()
        try:
            self.write_to(result)
        except OSError as e:
            raise RenderInvariantError(f"rendering {self.file_name} to memory failed") from e
        return result.getvalue()

    def __repr__(self) -> str:
        return f"JavaFile({self.file_name!r})"


class JavaFileBuilder:
    """Mutable staging area for a JavaFile; confine to a single owner."""

    def __init__(self, package_name: str, type_spec: TypeSpec):
        self.package_name = package_name
        self.type_spec = type_spec
        self.file_comment = CodeBlockBuilder()
        self.static_imports: set = set()
        self.skip_java_lang_imports_flag = False
        self.selected_indent_char = IndentChar.SPACE
        self.indent_string = "  "

    def add_file_comment(self, format_: str, *args: Any) -> "JavaFileBuilder":
        self.file_comment.add(format_, *args)
        return self

    def add_static_import(self, target: Any, *names: str) -> "JavaFileBuilder":
        """
        Add static imports of members of a type.

        target may be an enum member (which imports itself), a ClassName,
        a Python class, or a canonical class name string.
        """
        if isinstance(target, Enum) and not names:
            return self.add_static_import(type(target), target.name)

        check_argument(target is not None, "class_name == None")
        if isinstance(target, str):
            class_name = ClassName.best_guess(target)
        elif isinstance(target, type):
            class_name = ClassName.from_class(target)
        else:
            check_argument(isinstance(target, ClassName), "not a class name: %r", target)
            class_name = target

        check_argument(len(names) > 0, "names array is empty")
        for name in names:
            check_argument(name is not None, "null entry in names array: %s", list(names))
        for name in names:
            self.static_imports.add(class_name.canonical_name + "." + name)
        return self

    def skip_java_lang_imports(self, skip_java_lang_imports: bool) -> "JavaFileBuilder":
        """
        Omit imports for classes in ``java.lang``, such as ``java.lang.String``.

        By default ``java.lang`` types are imported explicitly to defend against
        naming conflicts: if a class ``com.example.String`` exists, code in
        ``com.example`` referencing ``java.lang.String`` would otherwise get the
        wrong type.
        """
        self.skip_java_lang_imports_flag = skip_java_lang_imports
        return self

    def indent(
        self, indent: Union[str, int], indent_char: Union[IndentChar, str, None] = None
    ) -> "JavaFileBuilder":
        """
        Set the indent unit.

        A string is used as-is after dropping every character that is not an
        allowed indent character. A count builds the unit from the selected
        indent character, after selecting indent_char if one is given.
        """
        if isinstance(indent, str):
            check_argument(indent_char is None, "indent_char only applies to an indent count")
            self.indent_string = "".join(c for c in indent if c in _ALLOWED_INDENT_CHARS)
            return self

        check_argument(
            isinstance(indent, int) and not isinstance(indent, bool),
            "indent must be a string or a count: %r",
            indent,
        )
        check_argument(indent >= 0, "negative indent count: %d", indent)
        if indent_char is not None:
            self.selected_indent_char = IndentChar.parse(indent_char)
        self.indent_string = self.selected_indent_char.value * indent
        return self

    def indent_char(self, indent_char: Union[IndentChar, str]) -> "JavaFileBuilder":
        """
        Select the indent character.

        Every character of the current indent unit is rewritten to the new
        character; its length is kept, even when the unit was set from a string.
        """
        self.selected_indent_char = IndentChar.parse(indent_char)
        self.indent_string = self.selected_indent_char.value * len(self.indent_string)
        return self

    def build(self) -> JavaFile:
        return JavaFile(self)
