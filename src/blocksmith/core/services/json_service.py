# src/blocksmith/core/services/json_service.py
import json
from typing import Any


def to_json(data: Any, indent: int = 2, ensure_ascii: bool = False) -> str:
    """
    Convert Python object to a pretty-printed JSON string.

    Args:
        data: Python object (dict, list, etc.)
        indent: Indentation level for pretty-printing (default: 2)
        ensure_ascii: If True, escape non-ASCII chars (default: False)
    """
    return json.dumps(data, ensure_ascii=ensure_ascii, indent=indent)


def to_compact_json(data: Any) -> str:
    """Serializes without any whitespace between tokens."""
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))
