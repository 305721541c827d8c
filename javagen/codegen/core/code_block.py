"""
Fragments of Java code with placeholder substitution.

Format strings use ``$`` placeholders:

    $L  literal, emitted as-is (a nested CodeBlock is emitted in place)
    $S  string, emitted as a quoted and escaped Java string literal
    $T  type, a TypeName whose reference may be abbreviated by imports
    $N  name of a declaration (anything with a ``name``) or a plain string
    $$  a literal dollar sign
    $>  increase the indentation level
    $<  decrease the indentation level

Arguments are consumed either positionally (``$L``) or by 1-based index
(``$1L``); a single format may not mix the two styles.
"""

import io
from dataclasses import dataclass, field
from typing import Any, List, Tuple

from .errors import check_argument, InvalidArgumentError
from .type_names import TypeName

_ARGUMENT_CHARS = "LSTN"
_CONTROL_CHARS = "$><"


@dataclass(frozen=True)
class CodeBlock:
    """An immutable, already validated code fragment."""

    format_parts: Tuple[str, ...] = ()
    args: Tuple[Any, ...] = field(default=())

    @classmethod
    def of(cls, format_: str, *args: Any) -> "CodeBlock":
        return CodeBlockBuilder().add(format_, *args).build()

    @classmethod
    def builder(cls) -> "CodeBlockBuilder":
        return CodeBlockBuilder()

    def is_empty(self) -> bool:
        return not self.format_parts

    def to_builder(self) -> "CodeBlockBuilder":
        builder = CodeBlockBuilder()
        builder.format_parts.extend(self.format_parts)
        builder.args.extend(self.args)
        return builder

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        out = io.StringIO()
        CodeWriter(out).emit_code_block(self)
        return out.getvalue()


class CodeBlockBuilder:
    """Mutable accumulator for a CodeBlock."""

    def __init__(self):
        self.format_parts: List[str] = []
        self.args: List[Any] = []

    def is_empty(self) -> bool:
        return not self.format_parts

    def add(self, format_: str, *args: Any) -> "CodeBlockBuilder":
        check_argument(isinstance(format_, str), "format must be a string: %r", format_)
        has_relative = False
        has_indexed = False
        relative_index = 0
        indexed_used = [False] * len(args)

        p = 0
        while p < len(format_):
            if format_[p] != "$":
                next_p = format_.find("$", p + 1)
                if next_p == -1:
                    next_p = len(format_)
                self.format_parts.append(format_[p:next_p])
                p = next_p
                continue

            p += 1  # '$'

            index_start = p
            while p < len(format_) and format_[p].isdigit():
                p += 1
            index_end = p
            if p >= len(format_):
                raise InvalidArgumentError(f"dangling format characters in '{format_}'")
            c = format_[p]
            p += 1

            if c in _CONTROL_CHARS:
                check_argument(
                    index_start == index_end, "$$, $>, $< may not have an index"
                )
                self.format_parts.append("$" + c)
                continue

            if c not in _ARGUMENT_CHARS:
                raise InvalidArgumentError(f"invalid format string: '{format_}'")

            if index_start < index_end:
                index = int(format_[index_start:index_end]) - 1
                has_indexed = True
            else:
                index = relative_index
                has_relative = True
                relative_index += 1

            check_argument(
                0 <= index < len(args),
                "index %d for '%s' not in range (received %d arguments)",
                index + 1,
                format_[index_start - 1 : index_end + 1],
                len(args),
            )
            check_argument(
                not (has_indexed and has_relative),
                "cannot mix indexed and positional parameters",
            )
            if index_start < index_end:
                indexed_used[index] = True

            self._add_argument(format_, c, args[index])
            self.format_parts.append("$" + c)

        if has_relative:
            check_argument(
                relative_index >= len(args),
                "unused arguments: expected %d, received %d",
                relative_index,
                len(args),
            )
        if has_indexed:
            unused = [f"${i + 1}" for i, used in enumerate(indexed_used) if not used]
            check_argument(
                not unused,
                "unused argument%s: %s",
                "s" if len(unused) > 1 else "",
                ", ".join(unused),
            )
        return self

    def _add_argument(self, format_: str, c: str, arg: Any) -> None:
        if c == "N":
            self.args.append(_arg_to_name(arg))
        elif c == "L":
            self.args.append(arg)
        elif c == "S":
            self.args.append(None if arg is None else str(arg))
        elif c == "T":
            check_argument(
                isinstance(arg, TypeName), "expected type but was %r in '%s'", arg, format_
            )
            self.args.append(arg)
        else:
            raise InvalidArgumentError(f"invalid format string: '{format_}'")

    def add_statement(self, format_: str, *args: Any) -> "CodeBlockBuilder":
        self.add(format_, *args)
        self.format_parts.append(";\n")
        return self

    def begin_control_flow(self, control_flow: str, *args: Any) -> "CodeBlockBuilder":
        """Open a ``{`` block, e.g. ``if (x)`` or ``for (int i = 0; i < n; i++)``."""
        self.add(control_flow + " {\n", *args)
        return self.indent()

    def next_control_flow(self, control_flow: str, *args: Any) -> "CodeBlockBuilder":
        """Close the current block and open a sibling, e.g. ``else if (y)``."""
        self.unindent()
        self.add("} " + control_flow + " {\n", *args)
        return self.indent()

    def end_control_flow(self) -> "CodeBlockBuilder":
        self.unindent()
        self.add("}\n")
        return self

    def add_code_block(self, code_block: CodeBlock) -> "CodeBlockBuilder":
        self.format_parts.extend(code_block.format_parts)
        self.args.extend(code_block.args)
        return self

    def indent(self) -> "CodeBlockBuilder":
        self.format_parts.append("$>")
        return self

    def unindent(self) -> "CodeBlockBuilder":
        self.format_parts.append("$<")
        return self

    def build(self) -> CodeBlock:
        return CodeBlock(tuple(self.format_parts), tuple(self.args))


def _arg_to_name(arg: Any) -> str:
    if isinstance(arg, str):
        return arg
    name = getattr(arg, "name", None)
    if isinstance(name, str):
        return name
    raise InvalidArgumentError(f"expected name but was {arg!r}")


def string_literal(value: str) -> str:
    """Quote and escape value as a Java string literal."""
    out = ['"']
    for char in value:
        if char == '"':
            out.append('\\"')
        elif char == "\\":
            out.append("\\\\")
        elif char == "\n":
            out.append("\\n")
        elif char == "\t":
            out.append("\\t")
        elif char == "\r":
            out.append("\\r")
        elif char == "\b":
            out.append("\\b")
        elif char == "\f":
            out.append("\\f")
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    out.append('"')
    return "".join(out)
