# src/reconciler/services/fingerprint_service.py
"""
Fingerprint keys shared by the original markup and the IR.

The same key must come out of an original `<h2>Pricing</h2>` and an IR
heading node (level 2, content "Pricing"), which is what lets the two
trees be matched without any preserved identifier.
"""
import re
from typing import Iterable, List, Optional, Tuple

from bs4 import Tag

from blocksmith.model import IRNode, NodeType, iter_nodes

HEADING_TAG_RE = re.compile(r"^h[1-6]$")

LEAF_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "img", "button", "a", "ul", "ol"]
CONTAINER_TAGS = ["div", "section", "article", "nav", "header", "footer", "aside", "main"]


def normalize_text(text: Optional[str]) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def build_leaf_key(tag: str, text: str = "", extra: str = "") -> Optional[str]:
    """
    Builds the fingerprint key for a leaf, or None when it has nothing to identify it by.

    heading -> h2|text, paragraph -> p|text, image -> img|src,
    link/button -> btn|text|href, list -> list|ul|item1|item2
    """
    norm = normalize_text(text)
    if HEADING_TAG_RE.match(tag):
        return f"{tag}|{norm}" if norm else None
    if tag == "p":
        return f"p|{norm}" if norm else None
    if tag == "img":
        return f"img|{extra}" if extra else None
    if tag in ("button", "a"):
        return f"btn|{norm}|{extra}" if norm else None
    if tag in ("ul", "ol"):
        return f"list|{tag}|{extra}" if extra else None
    return None


def _join_items(items: Iterable[str]) -> str:
    return "|".join(t for t in (normalize_text(i) for i in items) if t)


def tag_leaf_kind(tag_name: str) -> Optional[str]:
    if HEADING_TAG_RE.match(tag_name):
        return "heading"
    return {
        "p": "paragraph",
        "img": "image",
        "button": "button",
        "a": "button",
        "ul": "list",
        "ol": "list",
    }.get(tag_name)


def tag_leaf_key(tag: Tag) -> Optional[str]:
    """Fingerprint of an original-markup leaf tag."""
    name = (tag.name or "").lower()
    if name == "img":
        return build_leaf_key(name, extra=tag.get("src") or "")
    if name in ("ul", "ol"):
        items = [li.get_text() for li in tag.find_all("li")]
        return build_leaf_key(name, extra=_join_items(items))
    href = (tag.get("href") or "") if name == "a" else ""
    return build_leaf_key(name, tag.get_text(), href)


def collect_tag_leaf_keys(root: Tag) -> List[str]:
    """Unique fingerprint keys of all leaf tags below `root`, in document order."""
    keys: List[str] = []
    for el in root.find_all(LEAF_TAGS):
        key = tag_leaf_key(el)
        if key and key not in keys:
            keys.append(key)
    return keys


def ir_leaf_key(node: IRNode) -> Optional[Tuple[str, str]]:
    """(kind, key) for a content-bearing IR node, None for structural or empty nodes."""
    attrs = node.attributes
    if node.type == NodeType.HEADING.value:
        key = build_leaf_key(f"h{attrs.level or 2}", node.content or "")
    elif node.type == NodeType.PARAGRAPH.value:
        key = build_leaf_key("p", node.content or "")
    elif node.type == NodeType.IMAGE.value:
        key = build_leaf_key("img", extra=attrs.src or "")
    elif node.type == NodeType.BUTTON.value:
        key = build_leaf_key("button", node.content or "", attrs.href or "")
    elif node.type == NodeType.LIST.value:
        key = build_leaf_key("ol" if attrs.ordered else "ul", extra=_join_items(attrs.items or []))
    else:
        return None
    return (node.type, key) if key else None


def collect_ir_leaf_keys(children: Optional[List[IRNode]]) -> List[str]:
    """Unique fingerprint keys of all content nodes below a group or section."""
    keys: List[str] = []
    for node in iter_nodes(children):
        found = ir_leaf_key(node)
        if found and found[1] not in keys:
            keys.append(found[1])
    return keys
