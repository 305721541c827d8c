from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from javagen.codegen import ClassName


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, Any], Path]:
    """Write data as JSON below tmp_path and return the file path."""

    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def hello_world_description() -> dict[str, Any]:
    return {
        "package": "com.example.helloworld",
        "skip_java_lang_imports": True,
        "type": {
            "name": "HelloWorld",
            "modifiers": ["public", "final"],
            "methods": [
                {
                    "name": "main",
                    "modifiers": ["public", "static"],
                    "parameters": [{"name": "args", "type": "java.lang.String[]"}],
                    "body": [
                        {
                            "code": "$T.out.println($S)",
                            "args": [{"type": "java.lang.System"}, "Hello, World!"],
                        }
                    ],
                }
            ],
        },
    }


HELLO_WORLD_SOURCE = (
    "package com.example.helloworld;\n"
    "\n"
    "public final class HelloWorld {\n"
    "  public static void main(String[] args) {\n"
    '    System.out.println("Hello, World!");\n'
    "  }\n"
    "}\n"
)

DATE = ClassName.get("java.util", "Date")
STRING = ClassName.get("java.lang", "String")
