# src/renderer/markup.py
"""
Block markup primitives.

The block comment JSON and the HTML it wraps are checked against each other
by the editor's strict parser. The inline style attribute is therefore always
derived from the same style object that goes into the JSON, never written by hand.
"""
from typing import Any, Dict, List, Optional

from blocksmith.core.services.json_service import to_compact_json


def clean_obj(obj: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively drops keys whose value is None or "".
    Nested dicts that end up empty are dropped too. Lists are kept as-is.
    """
    result: Dict[str, Any] = {}
    for key, value in obj.items():
        if value is None or (isinstance(value, str) and value == ""):
            continue
        if isinstance(value, dict):
            nested = clean_obj(value)
            if nested:
                result[key] = nested
        else:
            result[key] = value
    return result


def _attrs_json(attrs: Dict[str, Any]) -> str:
    cleaned = clean_obj(attrs)
    if not cleaned:
        return ""
    return " " + to_compact_json(cleaned)


def block(name: str, attrs: Dict[str, Any], inner: str) -> str:
    """<!-- wp:name {json} -->\\ninner\\n<!-- /wp:name -->"""
    return f"<!-- wp:{name}{_attrs_json(attrs)} -->\n{inner}\n<!-- /wp:{name} -->"


def self_closing_block(name: str, attrs: Dict[str, Any]) -> str:
    """<!-- wp:name {json} /--> (template-part references only)."""
    return f"<!-- wp:{name}{_attrs_json(attrs)} /-->"


def _sides(prefix: str, box: Any, out: List[str]) -> None:
    if not isinstance(box, dict):
        return
    for side in ("top", "right", "bottom", "left"):
        if box.get(side):
            out.append(f"{prefix}-{side}:{box[side]}")


def inline_style(block_style: Optional[Dict[str, Any]]) -> str:
    """
    Builds ` style="..."` from a block style object, or "" when nothing applies.
    Property order is fixed: typography, color, padding, margin, gap, border.
    """
    if not block_style:
        return ""
    styles: List[str] = []

    typography = block_style.get("typography") or {}
    if typography.get("fontSize"):
        styles.append(f"font-size:{typography['fontSize']}")
    if typography.get("lineHeight"):
        styles.append(f"line-height:{typography['lineHeight']}")
    if typography.get("letterSpacing"):
        styles.append(f"letter-spacing:{typography['letterSpacing']}")
    if typography.get("textTransform"):
        styles.append(f"text-transform:{typography['textTransform']}")

    color = block_style.get("color") or {}
    if color.get("text"):
        styles.append(f"color:{color['text']}")
    if color.get("background"):
        styles.append(f"background-color:{color['background']}")
    if color.get("gradient"):
        styles.append(f"background:{color['gradient']}")

    spacing = block_style.get("spacing") or {}
    _sides("padding", spacing.get("padding"), styles)
    _sides("margin", spacing.get("margin"), styles)

    gap = spacing.get("blockGap")
    if isinstance(gap, str) and gap:
        styles.append(f"gap:{gap}")
    elif isinstance(gap, dict):
        top, left = gap.get("top"), gap.get("left")
        if top and left:
            styles.append(f"gap:{top} {left}")
        elif top or left:
            styles.append(f"gap:{top or left}")

    border = block_style.get("border") or {}
    if border.get("radius"):
        styles.append(f"border-radius:{border['radius']}")
    if border.get("width"):
        styles.append(f"border-width:{border['width']}")
    if border.get("style"):
        styles.append(f"border-style:{border['style']}")
    if border.get("color"):
        styles.append(f"border-color:{border['color']}")

    if not styles:
        return ""
    return f' style="{";".join(styles)}"'
