"""
Compiler- and processor-facing views of a generated Java file.

``Filer`` and ``FilerSourceFile`` describe what an annotation-processing
style host must provide to receive generated sources. ``JavaFileObject`` is
an in-memory source file for handing generated code to a compiler toolchain
without going through the filesystem.
"""

import io
import time
from enum import Enum
from typing import Any, Callable, ContextManager, Protocol, Sequence, TextIO

UTF_8 = "utf-8"


class Kind(Enum):
    """Kinds of compiler file objects, by file extension."""

    SOURCE = ".java"
    CLASS = ".class"
    HTML = ".html"
    OTHER = ""

    @property
    def extension(self) -> str:
        return self.value


class FilerSourceFile(Protocol):
    """A source entry created by a Filer."""

    def open_writer(self) -> ContextManager[TextIO]:
        ...

    def delete(self) -> bool:
        ...


class Filer(Protocol):
    """Host facility that creates named source entries."""

    def create_source_file(
        self, name: str, originating_elements: Sequence[Any]
    ) -> FilerSourceFile:
        ...


class JavaFileObject:
    """
    Read-only source file object backed by a rendering function.

    The last-modified time is captured once, when the object is created.
    """

    def __init__(self, path: str, kind: Kind, content: Callable[[], str]):
        self.path = path
        self.kind = kind
        self._content = content
        self._last_modified = int(time.time() * 1000)

    @property
    def name(self) -> str:
        return self.path

    @property
    def last_modified(self) -> int:
        """Milliseconds since the epoch."""
        return self._last_modified

    def char_content(self, ignore_encoding_errors: bool = False) -> str:
        return self._content()

    def open_input_stream(self) -> io.BytesIO:
        return io.BytesIO(self.char_content(True).encode(UTF_8))

    def open_reader(self, ignore_encoding_errors: bool = False) -> io.StringIO:
        return io.StringIO(self.char_content(ignore_encoding_errors))

    def is_name_compatible(self, simple_name: str, kind: Kind) -> bool:
        base_name = simple_name + kind.extension
        return kind is self.kind and (
            self.path == base_name or self.path.endswith("/" + base_name)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}[{self.path}]"
