"""
Writer bridge that turns code blocks into indented Java text.

Besides emitting text, a CodeWriter tracks every class referenced while
rendering. A writer constructed without an import table abbreviates nothing
from other packages, and afterwards reports which simple names could be
imported (see ``suggested_imports``). A writer constructed with that table
writes the abbreviated form.
"""

from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from .code_block import CodeBlock, string_literal
from .errors import check_state
from .naming import extract_member_name, is_member_name_start
from .type_names import ClassName, TypeName

_NO_PACKAGE = object()


class NullWriter:
    """A text sink that accepts and discards everything."""

    def write(self, text: str) -> int:
        return len(text)

    def flush(self) -> None:
        pass


class CodeWriter:
    """Emits code blocks into ``out``, resolving type references against imports."""

    def __init__(
        self,
        out,
        indent: str = "  ",
        static_imports: Iterable[str] = (),
        imported_types: Optional[Dict[str, ClassName]] = None,
    ):
        self.out = out
        self.indent_unit = indent
        self.indent_level = 0
        self.static_imports: FrozenSet[str] = frozenset(static_imports)
        self._imported_types: Dict[str, ClassName] = dict(imported_types or {})
        self._static_import_class_names = {
            signature[: signature.rindex(".")]
            for signature in self.static_imports
            if "." in signature
        }

        self._package_name: Any = _NO_PACKAGE
        self._type_spec_stack: List[Any] = []
        self._importable_types: Dict[str, ClassName] = {}
        self._referenced_names: set = set()

        self._javadoc = False
        self._comment = False
        self._trailing_newline = False

    @property
    def imported_types(self) -> Dict[str, ClassName]:
        return dict(self._imported_types)

    def indent(self, levels: int = 1) -> "CodeWriter":
        self.indent_level += levels
        return self

    def unindent(self, levels: int = 1) -> "CodeWriter":
        check_state(self.indent_level - levels >= 0, "cannot unindent %d from %d", levels, self.indent_level)
        self.indent_level -= levels
        return self

    def push_package(self, package_name: str) -> "CodeWriter":
        check_state(self._package_name is _NO_PACKAGE, "package already set: %s", self._package_name)
        self._package_name = package_name
        return self

    def pop_package(self) -> "CodeWriter":
        check_state(self._package_name is not _NO_PACKAGE, "package not set")
        self._package_name = _NO_PACKAGE
        return self

    def push_type(self, type_spec) -> "CodeWriter":
        self._type_spec_stack.append(type_spec)
        return self

    def pop_type(self) -> "CodeWriter":
        self._type_spec_stack.pop()
        return self

    def emit_comment(self, code_block: CodeBlock) -> None:
        self._trailing_newline = True  # Force the '//' prefix for the comment.
        self._comment = True
        try:
            self.emit_code_block(code_block)
            self.emit("\n")
        finally:
            self._comment = False

    def emit_javadoc(self, javadoc: Optional[CodeBlock]) -> None:
        if javadoc is None or javadoc.is_empty():
            return
        self.emit("/**\n")
        self._javadoc = True
        try:
            self.emit_code_block(javadoc, ensure_trailing_newline=True)
        finally:
            self._javadoc = False
        self.emit(" */\n")

    def emit_annotations(self, annotations: Iterable[ClassName]) -> None:
        for annotation in annotations:
            self.emit("@$T\n", annotation)

    def emit_modifiers(self, modifiers: Iterable, implicit_modifiers: Iterable = ()) -> None:
        """Emit modifiers in declaration order, skipping implicit ones."""
        implicit = set(implicit_modifiers)
        for modifier in sorted(modifiers, key=lambda m: m.order):
            if modifier in implicit:
                continue
            self.emit_and_indent(modifier.value)
            self.emit_and_indent(" ")

    def emit(self, format_: str, *args: Any) -> "CodeWriter":
        return self.emit_code_block(CodeBlock.of(format_, *args))

    def emit_code_block(
        self, code_block: CodeBlock, ensure_trailing_newline: bool = False
    ) -> "CodeWriter":
        a = 0
        deferred_type_name: Optional[ClassName] = None
        parts = code_block.format_parts
        for i, part in enumerate(parts):
            if part == "$L":
                self._emit_literal(code_block.args[a])
                a += 1
            elif part == "$N":
                self.emit_and_indent(code_block.args[a])
                a += 1
            elif part == "$S":
                value = code_block.args[a]
                a += 1
                self.emit_and_indent("null" if value is None else string_literal(value))
            elif part == "$T":
                type_name: TypeName = code_block.args[a]
                a += 1
                # Defer emitting the type if a member access follows it; it may be statically imported.
                if (
                    isinstance(type_name, ClassName)
                    and i + 1 < len(parts)
                    and not parts[i + 1].startswith("$")
                    and type_name.canonical_name in self._static_import_class_names
                ):
                    check_state(deferred_type_name is None, "pending type for static import?!")
                    deferred_type_name = type_name
                    continue
                type_name.emit(self)
            elif part == "$$":
                self.emit_and_indent("$")
            elif part == "$>":
                self.indent()
            elif part == "$<":
                self.unindent()
            else:
                if deferred_type_name is not None:
                    if part.startswith(".") and self._emit_static_import_member(
                        deferred_type_name.canonical_name, part
                    ):
                        deferred_type_name = None
                        continue
                    deferred_type_name.emit(self)
                    deferred_type_name = None
                self.emit_and_indent(part)

        if ensure_trailing_newline and not self._trailing_newline:
            self.emit("\n")
        return self

    def _emit_static_import_member(self, canonical: str, part: str) -> bool:
        member_part = part[1:]
        if not member_part or not is_member_name_start(member_part[0]):
            return False
        explicit = canonical + "." + extract_member_name(member_part)
        wildcard = canonical + ".*"
        if explicit in self.static_imports or wildcard in self.static_imports:
            self.emit_and_indent(member_part)
            return True
        return False

    def _emit_literal(self, value: Any) -> None:
        if isinstance(value, CodeBlock):
            self.emit_code_block(value)
        else:
            self.emit_and_indent(str(value))

    def lookup_name(self, class_name: ClassName) -> str:
        """
        Return the best name to refer to class_name in the current context.

        Records the class as importable when it has to be written qualified.
        """
        name_resolved = False
        c = class_name
        while c is not None:
            resolved = self._resolve(c.simple_name)
            name_resolved = resolved is not None

            if resolved is not None and resolved.canonical_name == c.canonical_name:
                suffix_offset = len(c.simple_names) - 1
                return ".".join(class_name.simple_names[suffix_offset:])

            c = c.enclosing_class_name()

        # The simple name is taken by another type; only the qualified name is safe.
        if name_resolved:
            return class_name.canonical_name

        if self._package_name == class_name.package_name:
            self._referenced_names.add(class_name.top_level_class_name().simple_name)
            return ".".join(class_name.simple_names)

        if not self._javadoc:
            self._importable_type(class_name)

        return class_name.canonical_name

    def _importable_type(self, class_name: ClassName) -> None:
        if not class_name.package_name:
            return
        top_level = class_name.top_level_class_name().without_annotations()
        # First reference wins the simple name.
        self._importable_types.setdefault(top_level.simple_name, top_level)

    def _resolve(self, simple_name: str) -> Optional[ClassName]:
        # Match a member type of the current (possibly nested) type.
        for depth in range(len(self._type_spec_stack) - 1, -1, -1):
            type_spec = self._type_spec_stack[depth]
            if simple_name in type_spec.nested_type_names:
                return self._stack_class_name(depth, simple_name)

        # Match the top-level type.
        if self._type_spec_stack and self._type_spec_stack[0].name == simple_name:
            return ClassName(self._current_package(), (simple_name,))

        return self._imported_types.get(simple_name)

    def _stack_class_name(self, depth: int, simple_name: str) -> ClassName:
        names = [spec.name for spec in self._type_spec_stack[: depth + 1]]
        return ClassName(self._current_package(), tuple(names) + (simple_name,))

    def _current_package(self) -> str:
        return "" if self._package_name is _NO_PACKAGE else self._package_name

    def emit_and_indent(self, text: str) -> "CodeWriter":
        """Emit text, indenting every line and prefixing comment lines."""
        first = True
        for line in text.split("\n"):
            if not first:
                if (self._javadoc or self._comment) and self._trailing_newline:
                    self._emit_indentation()
                    self.out.write(" *" if self._javadoc else "//")
                self.out.write("\n")
                self._trailing_newline = True
            first = False
            if not line:
                continue

            if self._trailing_newline:
                self._emit_indentation()
                if self._javadoc:
                    self.out.write(" * ")
                elif self._comment:
                    self.out.write("// ")

            self.out.write(line)
            self._trailing_newline = False
        return self

    def _emit_indentation(self) -> None:
        for _ in range(self.indent_level):
            self.out.write(self.indent_unit)

    def suggested_imports(self) -> Dict[str, ClassName]:
        """
        Return the simple name to class mapping that is safe to import.

        Simple names already used for same-package types are left out.
        """
        return {
            simple_name: class_name
            for simple_name, class_name in self._importable_types.items()
            if simple_name not in self._referenced_names
        }
