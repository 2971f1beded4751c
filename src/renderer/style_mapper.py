# src/renderer/style_mapper.py
"""
Maps IR style tokens and free-form CSS onto the block editor's style object.

Only property groups the editor understands (typography, color, spacing,
border) go into the structured object. Everything else stays in the node's
free-form style map and reaches the page through class names and custom.css.
"""
from typing import Any, Dict, List, NamedTuple, Optional

from blocksmith.model import NodeAttributes

PADDING_MAP: Dict[str, str] = {
    "sm": "10px",
    "md": "20px",
    "lg": "40px",
    "xl": "60px",
}

GAP_MAP: Dict[str, str] = {
    "sm": "10px",
    "md": "20px",
    "lg": "40px",
}

FONT_SIZE_MAP: Dict[str, str] = {
    "sm": "small",
    "md": "medium",
    "lg": "large",
    "xl": "x-large",
}

BORDER_RADIUS_MAP: Dict[str, str] = {
    "none": "0",
    "sm": "4px",
    "md": "8px",
    "lg": "16px",
    "full": "9999px",
}

# free-form CSS property -> typography key
_TYPOGRAPHY_PROPS = (
    ("font-size", "fontSize"),
    ("line-height", "lineHeight"),
    ("letter-spacing", "letterSpacing"),
    ("text-transform", "textTransform"),
)


class StyleResult(NamedTuple):
    block_style: Dict[str, Any]
    classes: List[str]


def map_font_size(size: Optional[str]) -> Optional[str]:
    """IR font size token -> font size preset slug."""
    if not size:
        return None
    return FONT_SIZE_MAP.get(size)


def map_border_radius(radius: Optional[str]) -> str:
    return BORDER_RADIUS_MAP.get(radius or "md", BORDER_RADIUS_MAP["md"])


def layout_class(layout_type: Optional[str]) -> Optional[str]:
    return {
        "constrained": "is-layout-constrained",
        "grid": "is-layout-grid",
        "flex": "is-layout-flex",
        "default": "is-layout-flow",
    }.get(layout_type or "")


def style_value(value: Optional[str]) -> Optional[str]:
    """A value usable inside a double-quoted style attribute, else None."""
    if not value or '"' in value:
        return None
    return value


def build_block_style(attrs: NodeAttributes, ir_style: Optional[Dict[str, str]] = None) -> StyleResult:
    """
    Builds the block style object and the semantic classes it implies.
    Explicit attributes win over the same property in the free-form map.
    Values containing a double quote are dropped.
    """
    block_style: Dict[str, Any] = {}
    classes: List[str] = []

    text_color = style_value(attrs.text_color)
    background_color = style_value(attrs.background_color)
    if text_color:
        block_style.setdefault("color", {})["text"] = text_color
        classes.append("has-text-color")
    if background_color:
        block_style.setdefault("color", {})["background"] = background_color
        classes.append("has-background")

    padding = PADDING_MAP.get(attrs.padding or "")
    if padding:
        block_style["spacing"] = {
            "padding": {"top": padding, "right": padding, "bottom": padding, "left": padding}
        }

    if ir_style:
        for css_prop, key in _TYPOGRAPHY_PROPS:
            value = style_value(ir_style.get(css_prop))
            if value:
                block_style.setdefault("typography", {})[key] = value
        free_background = style_value(ir_style.get("background-color"))
        if free_background and not background_color:
            block_style.setdefault("color", {})["background"] = free_background
            classes.append("has-background")
        free_color = style_value(ir_style.get("color"))
        if free_color and not text_color:
            block_style.setdefault("color", {})["text"] = free_color
            classes.append("has-text-color")

    return StyleResult(block_style, classes)


def apply_class_name(class_name: Optional[str], block_attrs: Dict[str, Any], css_classes: List[str]) -> None:
    """Copies recovered class names into both the block JSON and the HTML class list."""
    if not class_name:
        return
    block_attrs["className"] = class_name
    css_classes.extend(c for c in class_name.split(" ") if c)
