# src/reconciler/services/stylesheet_service.py
import re
from typing import List, Optional, Set, Union

CLASS_SELECTOR_RE = re.compile(r"\.([A-Za-z_][\w-]*)")


def extract_css_classes(css: Optional[str]) -> Set[str]:
    """Returns every `.name` class selector found in the stylesheet text."""
    if not css:
        return set()
    return set(CLASS_SELECTOR_RE.findall(css))


def qualifying_classes(raw: Union[str, List[str], None], css_classes: Set[str]) -> List[str]:
    """
    Keeps the classes of an element that the stylesheet actually defines.
    BeautifulSoup hands `class` over as a list; plain strings are split on whitespace.
    """
    if not raw:
        return []
    tokens = raw.split() if isinstance(raw, str) else [c for part in raw for c in part.split()]
    out: List[str] = []
    for cls in tokens:
        if cls in css_classes and cls not in out:
            out.append(cls)
    return out


def merge_class_name(existing: Optional[str], additions: List[str]) -> Optional[str]:
    """Space-joined union of existing and added class names, first occurrence wins."""
    if not additions:
        return existing
    merged: List[str] = []
    for cls in (existing or "").split() + list(additions):
        if cls and cls not in merged:
            merged.append(cls)
    return " ".join(merged) if merged else None
