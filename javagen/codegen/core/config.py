"""
File-level settings for generated Java files.

Settings come from built-in defaults, an optional JSON file and explicit
overrides, merged in that order.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .errors import GeneratorError, InvalidArgumentError
from .java_file import IndentChar, JavaFileBuilder


class ConfigError(GeneratorError):
    """Raised for unreadable or malformed configuration files."""

    pass


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


@dataclass
class JavaFileConfig:
    """File-level settings applied to a JavaFileBuilder."""

    # Indentation: literal unit, then character, then count
    indent: Optional[str] = None
    indent_char: Optional[str] = None  # "space" or "tab"
    indent_size: Optional[int] = None

    # Imports
    skip_java_lang_imports: bool = False

    # Header
    file_comment: Optional[str] = None

    # Output settings
    output_dir: Optional[str] = None

    # Anything else found in a config file
    custom: Dict[str, Any] = field(default_factory=dict)

    def apply_to(self, builder: JavaFileBuilder) -> JavaFileBuilder:
        """
        Apply these settings to builder.

        The indent character is selected after a literal indent, so it
        rewrites that indent's characters.

        Raises:
            ConfigError: If an indent setting has the wrong type or value
        """
        if self.indent is not None:
            if not isinstance(self.indent, str):
                raise ConfigError(f"indent must be a string: {self.indent!r}")
            builder.indent(self.indent)
        if self.indent_char is not None:
            try:
                builder.indent_char(IndentChar.parse(self.indent_char))
            except InvalidArgumentError as e:
                raise ConfigError(f"Invalid indent_char: {self.indent_char!r}") from e
        if self.indent_size is not None:
            if not _is_count(self.indent_size):
                raise ConfigError(f"Invalid indent_size: {self.indent_size!r}")
            builder.indent(self.indent_size)
        if self.skip_java_lang_imports:
            builder.skip_java_lang_imports(True)
        if self.file_comment:
            builder.add_file_comment("$L", self.file_comment)
        return builder


class ConfigManager:
    """Loads, merges, saves and checks JavaFileConfig settings."""

    def __init__(self):
        self._defaults: Dict[str, Any] = {
            "skip_java_lang_imports": False,
        }

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> JavaFileConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Configuration overrides, applied last
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Read a JSON object of settings from config_path."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> JavaFileConfig:
        """Convert dictionary to JavaFileConfig instance."""
        known_fields = {f.name for f in fields(JavaFileConfig)}

        config_args: Dict[str, Any] = {}
        custom_args: Dict[str, Any] = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        return JavaFileConfig(**config_args)

    def save_config(self, config: JavaFileConfig, output_path: Union[str, Path]) -> None:
        """Write every setting of config that is not None as a JSON object."""
        path = Path(output_path)

        config_dict = {
            f.name: getattr(config, f.name)
            for f in fields(JavaFileConfig)
            if f.name != "custom" and getattr(config, f.name) is not None
        }
        config_dict.update(config.custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: JavaFileConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        if config.indent is not None and not isinstance(config.indent, str):
            warnings.append(f"Invalid indent: {config.indent!r}")
        elif config.indent is not None:
            invalid = sorted({c for c in config.indent if c not in " \t"})
            if invalid:
                warnings.append(f"indent contains characters that will be dropped: {invalid}")

        if config.indent_char is not None:
            try:
                IndentChar.parse(config.indent_char)
            except ValueError:
                warnings.append(f"Invalid indent_char: {config.indent_char}")

        if config.indent_size is not None and not _is_count(config.indent_size):
            warnings.append(f"Invalid indent_size: {config.indent_size}")

        for key in config.custom:
            warnings.append(f"Unknown configuration key: {key}")

        return warnings


# Shared instance used by load_config and the CLI
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Return the shared ConfigManager, creating it on first use."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> JavaFileConfig:
    """
    Merge defaults, config_file and custom_config into one JavaFileConfig.

    Args:
        custom_config: Configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)


EXAMPLE_CONFIG = {
    "indent_size": 4,
    "indent_char": "space",
    "skip_java_lang_imports": True,
    "file_comment": "Generated by javagen. Do not edit.",
}
