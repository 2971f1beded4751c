# src/blocksmith/core/utils/text_utils.py
import math
import re
from typing import List, Sequence, TypeVar

T = TypeVar("T")


def escape_html(value: str) -> str:
    """Escapes text content for inclusion between tags."""
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def escape_attr(value: str) -> str:
    """Escapes a value for a double-quoted HTML attribute."""
    return (
        value.replace("&", "&amp;")
        .replace('"', "&quot;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
    )


def slugify(name: str) -> str:
    """'My AI Theme' -> 'my-ai-theme'"""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def chunk_list(items: Sequence[T], buckets: int) -> List[List[T]]:
    """
    Splits items into `buckets` consecutive chunks (not round-robin).
    [a, b, c, d, e] with 2 buckets -> [[a, b, c], [d, e]]. Empty chunks are dropped.
    """
    if not items or buckets < 1:
        return []
    size = math.ceil(len(items) / buckets)
    chunks = [list(items[i * size:(i + 1) * size]) for i in range(buckets)]
    return [chunk for chunk in chunks if chunk]
