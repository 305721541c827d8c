"""
Naming rules for generated Java code.

Java identifiers follow roughly the same lexical rules as Python ones, so
``str.isidentifier`` does the heavy lifting; the Java reserved words are
rejected on top of that.
"""

from typing import Set

JAVA_KEYWORDS: Set[str] = {
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
    "class", "const", "continue", "default", "do", "double", "else", "enum",
    "extends", "final", "finally", "float", "for", "goto", "if", "implements",
    "import", "instanceof", "int", "interface", "long", "native", "new",
    "package", "private", "protected", "public", "return", "short", "static",
    "strictfp", "super", "switch", "synchronized", "this", "throw", "throws",
    "transient", "try", "void", "volatile", "while",
    # Literals, not keywords, but equally unusable as names
    "true", "false", "null",
}


def is_source_name(name: str) -> bool:
    """True if name is usable as a Java identifier."""
    return isinstance(name, str) and name.isidentifier() and name not in JAVA_KEYWORDS


def is_package_name(package_name: str) -> bool:
    """True for the empty (default) package or a dotted sequence of identifiers."""
    if package_name == "":
        return True
    return all(is_source_name(part) for part in package_name.split("."))


def is_member_name_start(char: str) -> bool:
    """True if char may begin a Java member name."""
    return char.isidentifier()


def extract_member_name(part: str) -> str:
    """Return the leading identifier of part (e.g. ``"emptyList()"`` -> ``"emptyList"``)."""
    for index, char in enumerate(part):
        if not ("_" + char).isidentifier():
            return part[:index]
    return part
