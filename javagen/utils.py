"""Loading of JSON type descriptions from disk."""

import json
from pathlib import Path
from typing import Any

from .logging_config import get_logger

logger = get_logger(__name__)


class JSONLoaderError(Exception):
    """Raised when a description file cannot be read or parsed."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Read and parse one JSON document.

    Returns:
        Tuple of (path as given, parsed document).

    Raises:
        FileNotFoundError: If there is no such file.
        JSONLoaderError: If the file is unreadable or not valid JSON.
    """
    path = Path(file_path)
    logger.debug(f"Reading description {path}")

    if not path.is_file():
        logger.error(f"Description not found: {path}")
        raise FileNotFoundError(f"File not found: {path}")

    if path.suffix.lower() != ".json":
        logger.warning(f"Description {path} has no .json suffix; parsing it as JSON anyway")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error(f"{path} is not valid JSON: {e}")
        raise JSONLoaderError(f"Invalid JSON in file {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Cannot read {path}: {e}")
        raise JSONLoaderError(f"Error reading file {path}: {e}") from e

    logger.info(f"Loaded description from {path}")
    return str(path), data


def load_description(file_path: str | Path) -> dict[str, Any]:
    """Load a type description; the document must be a JSON object."""
    source, data = load_json_from_file(file_path)
    if not isinstance(data, dict):
        logger.error(f"{source} holds a {type(data).__name__}, not an object")
        raise JSONLoaderError(f"Description must be a JSON object: {source}")
    return data
