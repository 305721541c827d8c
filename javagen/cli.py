"""
Command-line interface: render a JSON type description as a Java file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Sequence

from rich.console import Console
from rich.syntax import Syntax

from .codegen.core.config import ConfigError, get_config_manager, load_config
from .codegen.core.errors import GeneratorError
from .codegen.core.java_file import JavaFile
from .codegen.core.schema import java_file_from_dict
from .logging_config import configure_logging, get_logger
from .utils import JSONLoaderError, load_description

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the ``javagen`` command."""
    parser = argparse.ArgumentParser(
        prog="javagen",
        description="Render a JSON type description as a complete Java source file.",
    )
    parser.add_argument("description", help="JSON file describing the package and type")
    parser.add_argument(
        "--output",
        "-o",
        metavar="DIR",
        help="Write into DIR using the package directory layout (default: stdout)",
    )
    parser.add_argument("--config", "-c", metavar="FILE", help="JSON configuration file")

    style_group = parser.add_argument_group("formatting options")
    style_group.add_argument(
        "--indent", type=int, metavar="N", help="Number of indent characters per level"
    )
    style_group.add_argument(
        "--tabs", action="store_true", help="Indent with tabs instead of spaces"
    )
    style_group.add_argument(
        "--skip-java-lang-imports",
        action="store_true",
        help="Do not write import lines for java.lang types",
    )
    style_group.add_argument(
        "--plain", action="store_true", help="Print source without syntax highlighting"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


class CLIHandler:
    """Handle command-line operations for Java file generation."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self._config_output_dir: str | None = None
        logger.debug("CLIHandler initialized")

    def run(self, args: Any) -> int:
        """Run the command for parsed arguments.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        try:
            java_file = self._build_java_file(args)
        except (JSONLoaderError, FileNotFoundError, ConfigError, GeneratorError) as e:
            self.console.print(f"❌ [red]{e}[/red]")
            logger.error("Could not build Java file: %s", e)
            return 1

        output_dir = args.output or self._config_output_dir
        if output_dir:
            return self._write(java_file, output_dir)

        source = str(java_file)
        if args.plain:
            sys.stdout.write(source)
        else:
            self.console.print(Syntax(source, "java", theme="monokai", line_numbers=False))
        logger.info("Rendered %s", java_file.file_name)
        return 0

    def _build_java_file(self, args: Any) -> JavaFile:
        overrides: dict[str, Any] = {}
        if args.tabs:
            overrides["indent_char"] = "tab"
        if args.indent is not None:
            overrides["indent_size"] = args.indent
        if args.skip_java_lang_imports:
            overrides["skip_java_lang_imports"] = True

        config = load_config(custom_config=overrides, config_file=args.config)
        for warning in get_config_manager().validate_config(config):
            self.console.print(f"[yellow]⚠ {warning}[/yellow]")
            logger.warning(warning)
        self._config_output_dir = config.output_dir

        description = load_description(args.description)
        return java_file_from_dict(description, config)

    def _write(self, java_file: JavaFile, output_dir: str) -> int:
        try:
            path = java_file.write_to_path(output_dir)
        except (GeneratorError, OSError) as e:
            self.console.print(f"❌ [red]Failed to write {java_file.file_name}: {e}[/red]")
            logger.error("Write failed for %s: %s", java_file.file_name, e)
            return 1
        self.console.print(f"✅ [green]Wrote {path}[/green]")
        logger.info("Wrote %s", path)
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    return CLIHandler().run(args)
