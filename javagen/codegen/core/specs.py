"""
Declarations that make up a Java type: fields, parameters, methods and types.

Each spec is an immutable dataclass that knows how to emit itself through a
CodeWriter. Members of a type are separated by one blank line.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, Optional, Tuple

from .code_block import CodeBlock
from .errors import check_argument
from .naming import is_source_name
from .type_names import ClassName, TypeName, VOID

CONSTRUCTOR = "<init>"


class Modifier(Enum):
    """Java modifiers, declared in their conventional order."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    ABSTRACT = "abstract"
    DEFAULT = "default"
    STATIC = "static"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"
    SYNCHRONIZED = "synchronized"
    NATIVE = "native"
    STRICTFP = "strictfp"

    @property
    def order(self) -> int:
        return list(Modifier).index(self)

    @classmethod
    def parse(cls, value: str) -> "Modifier":
        return cls(value.lower())


class TypeKind(Enum):
    """The kind of a type declaration and the modifiers its members get implicitly."""

    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"

    @property
    def implicit_field_modifiers(self) -> FrozenSet[Modifier]:
        if self is TypeKind.INTERFACE:
            return frozenset({Modifier.PUBLIC, Modifier.STATIC, Modifier.FINAL})
        return frozenset()

    @property
    def implicit_method_modifiers(self) -> FrozenSet[Modifier]:
        if self is TypeKind.INTERFACE:
            return frozenset({Modifier.PUBLIC, Modifier.ABSTRACT})
        return frozenset()

    @property
    def implicit_type_modifiers(self) -> FrozenSet[Modifier]:
        if self is TypeKind.INTERFACE:
            return frozenset({Modifier.PUBLIC, Modifier.STATIC})
        return frozenset()

    @property
    def as_member_modifiers(self) -> FrozenSet[Modifier]:
        if self is TypeKind.CLASS:
            return frozenset()
        return frozenset({Modifier.STATIC})


def _frozen_tuple(spec, *names: str) -> None:
    for name in names:
        object.__setattr__(spec, name, tuple(getattr(spec, name)))


@dataclass(frozen=True)
class FieldSpec:
    type: TypeName
    name: str
    modifiers: Tuple[Modifier, ...] = ()
    javadoc: Optional[CodeBlock] = None
    initializer: Optional[CodeBlock] = None

    def __post_init__(self):
        _frozen_tuple(self, "modifiers")
        check_argument(isinstance(self.type, TypeName), "field type is not a TypeName: %r", self.type)
        check_argument(is_source_name(self.name), "not a valid name: %s", self.name)

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def emit(self, code_writer, implicit_modifiers: Iterable[Modifier] = ()) -> None:
        code_writer.emit_javadoc(self.javadoc)
        code_writer.emit_modifiers(self.modifiers, implicit_modifiers)
        code_writer.emit("$T $L", self.type, self.name)
        if self.initializer is not None and not self.initializer.is_empty():
            code_writer.emit(" = ")
            code_writer.emit_code_block(self.initializer)
        code_writer.emit(";\n")


@dataclass(frozen=True)
class ParameterSpec:
    type: TypeName
    name: str
    modifiers: Tuple[Modifier, ...] = ()

    def __post_init__(self):
        _frozen_tuple(self, "modifiers")
        check_argument(is_source_name(self.name), "not a valid name: %s", self.name)

    def emit(self, code_writer) -> None:
        code_writer.emit_modifiers(self.modifiers)
        code_writer.emit("$T $L", self.type, self.name)


@dataclass(frozen=True)
class MethodSpec:
    name: str
    return_type: TypeName = VOID
    modifiers: Tuple[Modifier, ...] = ()
    parameters: Tuple[ParameterSpec, ...] = ()
    exceptions: Tuple[TypeName, ...] = ()
    annotations: Tuple[ClassName, ...] = ()
    javadoc: Optional[CodeBlock] = None
    code: Optional[CodeBlock] = None

    def __post_init__(self):
        _frozen_tuple(self, "modifiers", "parameters", "exceptions", "annotations")
        check_argument(
            self.name == CONSTRUCTOR or is_source_name(self.name),
            "not a valid name: %s",
            self.name,
        )
        check_argument(
            not (Modifier.ABSTRACT in self.modifiers and self.code is not None and not self.code.is_empty()),
            "abstract method %s cannot have code",
            self.name,
        )

    @classmethod
    def constructor(cls, **kwargs: Any) -> "MethodSpec":
        return cls(name=CONSTRUCTOR, **kwargs)

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR

    def has_modifier(self, modifier: Modifier) -> bool:
        return modifier in self.modifiers

    def emit(
        self,
        code_writer,
        enclosing_name: Optional[str],
        implicit_modifiers: Iterable[Modifier] = (),
    ) -> None:
        implicit_modifiers = frozenset(implicit_modifiers)
        code_writer.emit_javadoc(self.javadoc)
        code_writer.emit_annotations(self.annotations)
        code_writer.emit_modifiers(self.modifiers, implicit_modifiers)

        if self.is_constructor:
            code_writer.emit("$L(", enclosing_name)
        else:
            code_writer.emit("$T $L(", self.return_type, self.name)

        for index, parameter in enumerate(self.parameters):
            if index:
                code_writer.emit(", ")
            parameter.emit(code_writer)
        code_writer.emit(")")

        if self.exceptions:
            code_writer.emit(" throws")
            for index, exception in enumerate(self.exceptions):
                code_writer.emit("," if index else "")
                code_writer.emit(" $T", exception)

        if self._is_abstract(implicit_modifiers):
            code_writer.emit(";\n")
        else:
            code_writer.emit(" {\n")
            code_writer.indent()
            if self.code is not None:
                code_writer.emit_code_block(self.code, ensure_trailing_newline=True)
            code_writer.unindent()
            code_writer.emit("}\n")

    def _is_abstract(self, implicit_modifiers: FrozenSet[Modifier]) -> bool:
        if Modifier.ABSTRACT in self.modifiers or Modifier.NATIVE in self.modifiers:
            return True
        return (
            Modifier.ABSTRACT in implicit_modifiers
            and self.code is None
            and Modifier.DEFAULT not in self.modifiers
            and Modifier.STATIC not in self.modifiers
        )


@dataclass(frozen=True)
class TypeSpec:
    """
    A single class, interface or enum declaration.

    ``originating_elements`` is carried unmodified for incremental build hosts;
    nothing in rendering looks at it.
    """

    name: str
    kind: TypeKind = TypeKind.CLASS
    modifiers: Tuple[Modifier, ...] = ()
    javadoc: Optional[CodeBlock] = None
    annotations: Tuple[ClassName, ...] = ()
    superclass: Optional[TypeName] = None
    superinterfaces: Tuple[TypeName, ...] = ()
    enum_constants: Tuple[str, ...] = ()
    fields: Tuple[FieldSpec, ...] = ()
    methods: Tuple[MethodSpec, ...] = ()
    type_specs: Tuple["TypeSpec", ...] = ()
    originating_elements: Tuple[Any, ...] = field(default=(), compare=False)

    def __post_init__(self):
        _frozen_tuple(
            self,
            "modifiers",
            "annotations",
            "superinterfaces",
            "enum_constants",
            "fields",
            "methods",
            "type_specs",
            "originating_elements",
        )
        check_argument(is_source_name(self.name), "not a valid name: %s", self.name)
        check_argument(
            self.superclass is None or self.kind is TypeKind.CLASS,
            "only classes have super classes, not %s",
            self.kind.value,
        )
        check_argument(
            not self.enum_constants or self.kind is TypeKind.ENUM,
            "%s is not an enum",
            self.name,
        )
        for constant in self.enum_constants:
            check_argument(is_source_name(constant), "not a valid enum constant: %s", constant)

    @property
    def nested_type_names(self) -> FrozenSet[str]:
        return frozenset(spec.name for spec in self.type_specs)

    def emit(
        self,
        code_writer,
        enclosing_name: Optional[str] = None,
        implicit_modifiers: Iterable[Modifier] = (),
    ) -> None:
        code_writer.emit_javadoc(self.javadoc)
        code_writer.emit_annotations(self.annotations)
        code_writer.emit_modifiers(self.modifiers, frozenset(implicit_modifiers) | self.kind.as_member_modifiers)
        code_writer.emit("$L $L", self.kind.value, self.name)

        if self.superclass is not None:
            code_writer.emit(" extends $T", self.superclass)
        if self.superinterfaces:
            keyword = "extends" if self.kind is TypeKind.INTERFACE else "implements"
            code_writer.emit(" $L", keyword)
            for index, interface in enumerate(self.superinterfaces):
                code_writer.emit("," if index else "")
                code_writer.emit(" $T", interface)

        code_writer.push_type(self)
        code_writer.emit(" {\n")
        code_writer.indent()

        first_member = True
        if self.enum_constants:
            needs_separator = bool(self.fields or self.methods or self.type_specs)
            for index, constant in enumerate(self.enum_constants):
                code_writer.emit("$L", constant)
                if index + 1 < len(self.enum_constants):
                    code_writer.emit(",\n")
                elif needs_separator:
                    code_writer.emit(";\n")
                else:
                    code_writer.emit("\n")
            first_member = False

        # Static fields first, then instance fields.
        ordered_fields = [f for f in self.fields if f.has_modifier(Modifier.STATIC)]
        ordered_fields += [f for f in self.fields if not f.has_modifier(Modifier.STATIC)]
        for field_spec in ordered_fields:
            if not first_member:
                code_writer.emit("\n")
            field_spec.emit(code_writer, self.kind.implicit_field_modifiers)
            first_member = False

        # Constructors before the remaining methods.
        ordered_methods = [m for m in self.methods if m.is_constructor]
        ordered_methods += [m for m in self.methods if not m.is_constructor]
        for method_spec in ordered_methods:
            if not first_member:
                code_writer.emit("\n")
            method_spec.emit(code_writer, self.name, self.kind.implicit_method_modifiers)
            first_member = False

        for type_spec in self.type_specs:
            if not first_member:
                code_writer.emit("\n")
            type_spec.emit(code_writer, None, self.kind.implicit_type_modifiers)
            first_member = False

        code_writer.unindent()
        code_writer.pop_type()
        code_writer.emit("}\n")
