"""Helpers for merging dedicated config, manifest and default values."""

import re
from typing import Any, Dict, Iterable, List, Optional

FALLBACK_ICON = "fas fa-server"

# Checked in order; the first keyword found in the folder name wins.
ICON_KEYWORDS = [
    (("time",), "fas fa-clock"),
    (("weather",), "fas fa-cloud-sun"),
    (("database", "db"), "fas fa-database"),
    (("api",), "fas fa-plug"),
    (("file",), "fas fa-file"),
    (("web", "http"), "fas fa-globe"),
    (("git",), "fab fa-git-alt"),
    (("mail", "email"), "fas fa-envelope"),
    (("chat", "message"), "fas fa-comment"),
    (("search",), "fas fa-search"),
]

BOLD_BULLET_PATTERN = re.compile(r'^\s*[-*]\s+\*\*([^*]+)\*\*')


def is_missing(value: Any) -> bool:
    """None and empty strings/collections count as missing; False and 0 do not."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    return False


def resolve(*candidates: Any, default: Any = None) -> Any:
    """Return the first candidate that is not missing, else the default."""
    for candidate in candidates:
        if not is_missing(candidate):
            return candidate
    return default


def section(config: Dict[str, Any], key: str) -> Dict[str, Any]:
    """Return config[key] when it is a mapping, otherwise an empty one."""
    value = config.get(key)
    return value if isinstance(value, dict) else {}


def string_list(value: Any) -> Optional[List[str]]:
    """Keep only the string items of a list; anything else is treated as missing."""
    if not isinstance(value, list):
        return None
    return [item for item in value if isinstance(item, str)]


def list_value(value: Any) -> Optional[List[Any]]:
    """Sequences the frontend iterates over; a non-list is treated as missing."""
    return value if isinstance(value, list) else None


def person_name(value: Any) -> Optional[str]:
    """package.json allows "author" to be a string or an object with a name."""
    if isinstance(value, dict):
        return value.get("name")
    if isinstance(value, str):
        return value
    return None


def unique(items: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def extract_features(readme_preview: str, manifest: Dict[str, Any]) -> List[str]:
    """
    Collect feature names from bold bullet items in a README preview
    (e.g. "- **Timezone conversion** between zones") followed by the
    manifest keywords.
    """
    features = []
    for line in (readme_preview or "").splitlines():
        match = BOLD_BULLET_PATTERN.match(line)
        if match:
            features.append(match.group(1).strip())

    features.extend(string_list(manifest.get("keywords")) or [])
    return unique(features)


def default_icon(folder_name: str) -> str:
    name = folder_name.lower()
    for keywords, icon in ICON_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return icon
    return FALLBACK_ICON
