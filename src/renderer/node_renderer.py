# src/renderer/node_renderer.py
import logging
from typing import Any, Callable, Dict, List, Optional

from blocksmith.core.utils.text_utils import escape_attr, escape_html
from blocksmith.model import DesignTokens, IRNode, NodeType
from .markup import block, inline_style
from .style_mapper import (
    PADDING_MAP,
    apply_class_name,
    build_block_style,
    layout_class,
    map_font_size,
    style_value,
)

logger = logging.getLogger(__name__)

NESTED_GRID_MIN_COLUMN_WIDTH = "280px"

NodeRenderer = Callable[[IRNode, DesignTokens], str]


def _class_attr(css_classes: List[str]) -> str:
    return f' class="{" ".join(css_classes)}"' if css_classes else ""


def _apply_text_tokens(node: IRNode, block_attrs: Dict[str, Any], css_classes: List[str], align_key: str) -> None:
    """Alignment and font size preset, mirrored into JSON and classes."""
    attrs = node.attributes
    if attrs.text_align:
        block_attrs[align_key] = attrs.text_align
        css_classes.append(f"has-text-align-{attrs.text_align}")

    font_size = map_font_size(attrs.font_size)
    if font_size:
        block_attrs["fontSize"] = font_size
        css_classes.append(f"has-{font_size}-font-size")


def _apply_block_style(node: IRNode, block_attrs: Dict[str, Any], css_classes: List[str]) -> None:
    block_style, classes = build_block_style(node.attributes, node.style)
    if block_style:
        block_attrs["style"] = block_style
    css_classes.extend(classes)
    apply_class_name(node.class_name, block_attrs, css_classes)


def render_heading(node: IRNode, tokens: DesignTokens) -> str:
    level = node.attributes.level or 2
    tag = f"h{level}"

    block_attrs: Dict[str, Any] = {"level": level}
    css_classes = ["wp-block-heading"]
    _apply_text_tokens(node, block_attrs, css_classes, "textAlign")

    if tokens.fonts.heading:
        block_attrs["fontFamily"] = "heading"
        css_classes.append("has-heading-font-family")

    _apply_block_style(node, block_attrs, css_classes)
    style_attr = inline_style(block_attrs.get("style"))

    return block(
        "heading",
        block_attrs,
        f"<{tag}{_class_attr(css_classes)}{style_attr}>{escape_html(node.content or '')}</{tag}>",
    )


def render_paragraph(node: IRNode, tokens: DesignTokens) -> str:
    block_attrs: Dict[str, Any] = {}
    css_classes: List[str] = []
    _apply_text_tokens(node, block_attrs, css_classes, "align")

    if tokens.fonts.body:
        block_attrs["fontFamily"] = "body"
        css_classes.append("has-body-font-family")

    _apply_block_style(node, block_attrs, css_classes)
    style_attr = inline_style(block_attrs.get("style"))

    return block(
        "paragraph",
        block_attrs,
        f"<p{_class_attr(css_classes)}{style_attr}>{escape_html(node.content or '')}</p>",
    )


def render_image(node: IRNode, _tokens: DesignTokens) -> str:
    attrs = node.attributes
    block_attrs: Dict[str, Any] = {"sizeSlug": "full", "linkDestination": "none"}
    css_classes = ["wp-block-image", "size-full"]

    if attrs.width:
        block_attrs["width"] = attrs.width
    if attrs.height:
        block_attrs["height"] = attrs.height
    apply_class_name(node.class_name, block_attrs, css_classes)

    img_attrs = [f'src="{escape_attr(attrs.src or "")}"', f'alt="{escape_attr(attrs.alt or "")}"']
    if attrs.width:
        img_attrs.append(f'width="{attrs.width}"')
    if attrs.height:
        img_attrs.append(f'height="{attrs.height}"')

    return block(
        "image",
        block_attrs,
        f'<figure class="{" ".join(css_classes)}"><img {" ".join(img_attrs)}/></figure>',
    )


def render_button(node: IRNode, _tokens: DesignTokens) -> str:
    """
    Renders a single button inside its mandatory wp:buttons wrapper.
    Primary/secondary use palette presets so a palette edit restyles every button.
    """
    attrs = node.attributes
    href = attrs.href or "#"
    variant = attrs.variant or "primary"

    btn_attrs: Dict[str, Any] = {}
    btn_classes = ["wp-block-button__link", "wp-element-button"]

    if variant in ("primary", "secondary"):
        btn_attrs["backgroundColor"] = variant
        btn_attrs["textColor"] = "background"
        btn_classes.extend([
            f"has-{variant}-background-color",
            "has-background-color-color",
            "has-text-color",
            "has-background",
        ])
    elif variant == "outline":
        btn_attrs["textColor"] = "primary"
        btn_attrs["style"] = {"border": {"width": "2px", "style": "solid"}}
        btn_classes.extend(["has-primary-color", "has-text-color", "is-style-outline"])

    apply_class_name(node.class_name, btn_attrs, btn_classes)
    style_attr = inline_style(btn_attrs.get("style"))

    inner_button = block(
        "button",
        btn_attrs,
        f'<div class="wp-block-button"><a class="{" ".join(btn_classes)}" href="{escape_attr(href)}"{style_attr}>'
        f'{escape_html(node.content or "")}</a></div>',
    )
    return block("buttons", {}, f'<div class="wp-block-buttons is-layout-flex">\n{inner_button}\n</div>')


def render_list(node: IRNode, _tokens: DesignTokens) -> str:
    ordered = bool(node.attributes.ordered)
    tag = "ol" if ordered else "ul"

    block_attrs: Dict[str, Any] = {}
    css_classes = ["wp-block-list"]
    if ordered:
        block_attrs["ordered"] = True
    apply_class_name(node.class_name, block_attrs, css_classes)

    list_items = "\n".join(f"<li>{escape_html(item)}</li>" for item in node.attributes.items or [])
    return block(
        "list",
        block_attrs,
        f'<{tag} class="{" ".join(css_classes)}">\n{list_items}\n</{tag}>',
    )


def render_spacer(node: IRNode, _tokens: DesignTokens) -> str:
    height = PADDING_MAP.get(node.attributes.padding or "md", PADDING_MAP["md"])
    return block(
        "spacer",
        {"height": height},
        f'<div style="height:{height}" aria-hidden="true" class="wp-block-spacer"></div>',
    )


def render_children(children: Optional[List[IRNode]], tokens: DesignTokens) -> str:
    return "\n\n".join(render_node(child, tokens) for child in children or [])


def render_group(node: IRNode, tokens: DesignTokens) -> str:
    ir_style = node.style or {}
    display = ir_style.get("display")
    if display == "grid":
        layout: Dict[str, Any] = {"type": "grid", "minimumColumnWidth": NESTED_GRID_MIN_COLUMN_WIDTH}
    elif display == "flex":
        layout = {"type": "flex", "flexWrap": "nowrap"}
    else:
        layout = {"type": "constrained"}

    block_attrs: Dict[str, Any] = {"layout": layout}
    css_classes = ["wp-block-group"]
    css_layout = layout_class(layout["type"])
    if css_layout:
        css_classes.append(css_layout)

    block_style, classes = build_block_style(node.attributes, node.style)
    gap = style_value(ir_style.get("gap"))
    if gap:
        block_style.setdefault("spacing", {})["blockGap"] = gap
    if block_style:
        block_attrs["style"] = block_style
    css_classes.extend(classes)
    apply_class_name(node.class_name, block_attrs, css_classes)

    style_attr = inline_style(block_attrs.get("style"))
    inner = render_children(node.children, tokens)

    return block("group", block_attrs, f"<div{_class_attr(css_classes)}{style_attr}>\n{inner}\n</div>")


def render_navigation(node: IRNode, _tokens: DesignTokens) -> str:
    """
    Navigation is downgraded to a flex group of paragraph links.
    A real wp:navigation block needs a saved menu entity on the site.
    """
    block_attrs: Dict[str, Any] = {"layout": {"type": "flex", "flexWrap": "nowrap"}}
    css_classes = ["wp-block-group", layout_class("flex")]
    apply_class_name(node.class_name, block_attrs, css_classes)

    link_blocks = "\n\n".join(
        block("paragraph", {}, f'<p><a href="{escape_attr(link.href)}">{escape_html(link.text)}</a></p>')
        for link in node.attributes.links or []
    )
    return block("group", block_attrs, f'<div class="{" ".join(css_classes)}">\n{link_blocks}\n</div>')


# Keyed by the wire value so plain-string node types resolve directly.
RENDERERS: Dict[str, NodeRenderer] = {
    NodeType.HEADING.value: render_heading,
    NodeType.PARAGRAPH.value: render_paragraph,
    NodeType.IMAGE.value: render_image,
    NodeType.BUTTON.value: render_button,
    NodeType.LIST.value: render_list,
    NodeType.SPACER.value: render_spacer,
    NodeType.GROUP.value: render_group,
    NodeType.NAVIGATION.value: render_navigation,
}

_missing = {t.value for t in NodeType} - set(RENDERERS)
if _missing:
    raise RuntimeError(f"No renderer registered for node types: {sorted(_missing)}")


def render_node(node: IRNode, tokens: DesignTokens) -> str:
    """Renders one IR node; unknown kinds become an inert comment instead of failing."""
    renderer = RENDERERS.get(node.type)
    if renderer is None:
        logger.warning("Unsupported node type '%s'; emitting placeholder.", node.type)
        return f"<!-- Unsupported node type: {node.type} -->"
    return renderer(node, tokens)
