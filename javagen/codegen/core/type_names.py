"""
Type references used by generated code.

A ``TypeName`` knows how to emit itself through a ``CodeWriter``; the writer
decides whether a ``ClassName`` can be abbreviated to its simple name.
"""

import io
from dataclasses import dataclass, field
from typing import Tuple

from .errors import check_argument, InvalidArgumentError
from .naming import is_package_name, is_source_name


class TypeName:
    """Base class for everything that can be substituted for ``$T``."""

    def emit(self, code_writer) -> None:
        raise NotImplementedError

    @property
    def is_primitive(self) -> bool:
        return False

    def __str__(self) -> str:
        from .code_writer import CodeWriter

        out = io.StringIO()
        self.emit(CodeWriter(out))
        return out.getvalue()


@dataclass(frozen=True)
class PrimitiveTypeName(TypeName):
    """A Java primitive, or ``void``."""

    keyword: str

    @property
    def is_primitive(self) -> bool:
        return self.keyword != "void"

    def emit(self, code_writer) -> None:
        code_writer.emit_and_indent(self.keyword)


VOID = PrimitiveTypeName("void")
BOOLEAN = PrimitiveTypeName("boolean")
BYTE = PrimitiveTypeName("byte")
SHORT = PrimitiveTypeName("short")
INT = PrimitiveTypeName("int")
LONG = PrimitiveTypeName("long")
CHAR = PrimitiveTypeName("char")
FLOAT = PrimitiveTypeName("float")
DOUBLE = PrimitiveTypeName("double")

PRIMITIVES = {
    t.keyword: t for t in (VOID, BOOLEAN, BYTE, SHORT, INT, LONG, CHAR, FLOAT, DOUBLE)
}


@dataclass(frozen=True)
class ClassName(TypeName):
    """
    A fully-qualified class name for top-level and member classes.

    Attributes:
        package_name: Dotted package, ``""`` for the default package
        simple_names: Outermost class first, e.g. ``("Map", "Entry")``
        annotations: Type annotations emitted before the name
    """

    package_name: str
    simple_names: Tuple[str, ...]
    annotations: Tuple["ClassName", ...] = field(default=(), compare=True)

    def __post_init__(self):
        check_argument(
            isinstance(self.package_name, str) and is_package_name(self.package_name),
            "invalid package name: %r",
            self.package_name,
        )
        object.__setattr__(self, "simple_names", tuple(self.simple_names))
        object.__setattr__(self, "annotations", tuple(self.annotations))
        check_argument(len(self.simple_names) > 0, "simple_names is empty")
        for name in self.simple_names:
            check_argument(is_source_name(name), "part %r is keyword or not a name", name)

    @classmethod
    def get(cls, package_name: str, simple_name: str, *simple_names: str) -> "ClassName":
        return cls(package_name, (simple_name,) + simple_names)

    @classmethod
    def best_guess(cls, class_name_string: str) -> "ClassName":
        """
        Guess a class name from a canonical name string.

        Package segments are expected to start lowercase and class segments
        uppercase, e.g. ``java.util.Map.Entry``.
        """
        p = 0
        while p < len(class_name_string) and class_name_string[p].islower():
            dot = class_name_string.find(".", p)
            if dot == -1:
                raise InvalidArgumentError(
                    f"couldn't make a guess for {class_name_string}"
                )
            p = dot + 1
        package_name = class_name_string[: p - 1] if p else ""
        simple_names = class_name_string[p:].split(".")
        for name in simple_names:
            check_argument(
                bool(name) and name[0].isupper(),
                "couldn't make a guess for %s",
                class_name_string,
            )
        return cls(package_name, tuple(simple_names))

    @classmethod
    def from_class(cls, python_class: type) -> "ClassName":
        """Name a Python class by its module and qualified name."""
        check_argument(isinstance(python_class, type), "not a class: %r", python_class)
        package_name = python_class.__module__
        if package_name in ("builtins", "__main__"):
            package_name = ""
        return cls(package_name, tuple(python_class.__qualname__.split(".")))

    @property
    def simple_name(self) -> str:
        return self.simple_names[-1]

    @property
    def canonical_name(self) -> str:
        if self.package_name:
            return ".".join((self.package_name,) + self.simple_names)
        return ".".join(self.simple_names)

    @property
    def reflection_name(self) -> str:
        """Binary name, with ``$`` separating member classes."""
        joined = "$".join(self.simple_names)
        return f"{self.package_name}.{joined}" if self.package_name else joined

    def enclosing_class_name(self):
        if len(self.simple_names) == 1:
            return None
        return ClassName(self.package_name, self.simple_names[:-1])

    def top_level_class_name(self) -> "ClassName":
        return ClassName(self.package_name, self.simple_names[:1])

    def nested_class(self, name: str) -> "ClassName":
        return ClassName(self.package_name, self.simple_names + (name,))

    def peer_class(self, name: str) -> "ClassName":
        return ClassName(self.package_name, self.simple_names[:-1] + (name,))

    def annotated(self, *annotations: "ClassName") -> "ClassName":
        return ClassName(self.package_name, self.simple_names, self.annotations + annotations)

    def without_annotations(self) -> "ClassName":
        if not self.annotations:
            return self
        return ClassName(self.package_name, self.simple_names)

    def emit(self, code_writer) -> None:
        for annotation in self.annotations:
            code_writer.emit_and_indent("@")
            annotation.emit(code_writer)
            code_writer.emit_and_indent(" ")
        code_writer.emit_and_indent(code_writer.lookup_name(self))


@dataclass(frozen=True)
class ParameterizedTypeName(TypeName):
    """A generic type such as ``List<String>``."""

    raw_type: ClassName
    type_arguments: Tuple[TypeName, ...]

    def __post_init__(self):
        object.__setattr__(self, "type_arguments", tuple(self.type_arguments))
        check_argument(len(self.type_arguments) > 0, "no type arguments: %s", self.raw_type)
        for argument in self.type_arguments:
            check_argument(
                isinstance(argument, TypeName) and argument != VOID and not argument.is_primitive,
                "invalid type parameter: %s",
                argument,
            )

    @classmethod
    def get(cls, raw_type: ClassName, *type_arguments: TypeName) -> "ParameterizedTypeName":
        return cls(raw_type, type_arguments)

    def emit(self, code_writer) -> None:
        self.raw_type.emit(code_writer)
        code_writer.emit_and_indent("<")
        for index, argument in enumerate(self.type_arguments):
            if index:
                code_writer.emit_and_indent(", ")
            argument.emit(code_writer)
        code_writer.emit_and_indent(">")


@dataclass(frozen=True)
class ArrayTypeName(TypeName):
    """An array type such as ``String[]``."""

    component_type: TypeName

    def __post_init__(self):
        check_argument(self.component_type != VOID, "void is not an array component")

    @classmethod
    def of(cls, component_type: TypeName) -> "ArrayTypeName":
        return cls(component_type)

    def emit(self, code_writer) -> None:
        self.component_type.emit(code_writer)
        code_writer.emit_and_indent("[]")
