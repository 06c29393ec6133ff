"""Helper utility functions for bundlesqueeze."""

import json
from pathlib import Path
from typing import Any

from .logging import logger


def load_json_file(file_path: str | Path) -> Any:
    """
    Load and parse a JSON file.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed JSON value

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug(f"JSON file not found: {file_path}")
        raise
    except json.JSONDecodeError as e:
        logger.warning(f"Invalid JSON in file {file_path}: {e}")
        raise


def save_json_file(data: Any, file_path: str | Path) -> None:
    """
    Save data as indented JSON.

    Args:
        data: Data to save
        file_path: Path to output file
    """
    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
