"""Read-only filesystem access used by the discoverer."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from portal.core.errors import DegradedRead

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"
CONFIG_FILE = "mcp-config.json"
README_FILE = "README.md"


def list_entries(root: Path) -> List[Path]:
    """Return the immediate, non-hidden subdirectories of root in name order."""
    try:
        return sorted(
            (p for p in root.iterdir() if p.is_dir() and not p.name.startswith('.')),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise DegradedRead(root, f"could not enumerate directory: {e}") from e


def read_json_object(path: Path) -> Dict[str, Any]:
    """Load a JSON file that must contain an object."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DegradedRead(path, f"could not parse JSON: {e}") from e

    if not isinstance(data, dict):
        raise DegradedRead(path, f"expected a JSON object, got {type(data).__name__}")
    return data


def read_preview(path: Path, limit: int) -> str:
    """Read the first `limit` bytes of a text file, dropping a split trailing character."""
    try:
        with open(path, "rb") as f:
            head = f.read(limit)
    except OSError as e:
        raise DegradedRead(path, f"could not read file: {e}") from e
    return head.decode("utf-8", errors="ignore")


def read_text(path: Path) -> str:
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise DegradedRead(path, f"could not read file: {e}") from e
