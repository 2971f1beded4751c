# src/renderer/section_renderer.py
from typing import Any, Dict

from blocksmith.core.utils.text_utils import chunk_list, escape_attr
from blocksmith.model import DesignTokens, IRSection
from .markup import block, inline_style
from .node_renderer import render_children
from .style_mapper import GAP_MAP, apply_class_name, layout_class, style_value

DEFAULT_COLUMNS = 2
SECTION_GRID_MIN_COLUMN_WIDTH = "300px"
COVER_DIM_RATIO = 50


def render_layout(section: IRSection, tokens: DesignTokens) -> str:
    """Composes the section's children according to its layout kind."""
    layout = section.layout

    if layout.type == "columns":
        columns = chunk_list(section.children, layout.columns or DEFAULT_COLUMNS)
        gap = GAP_MAP.get(layout.gap or "")

        cols_attrs: Dict[str, Any] = {}
        if gap:
            cols_attrs["style"] = {"spacing": {"blockGap": {"top": gap, "left": gap}}}

        column_blocks = "\n\n".join(
            block(
                "column",
                {},
                f'<div class="wp-block-column is-layout-flow">\n{render_children(chunk, tokens)}\n</div>',
            )
            for chunk in columns
        )
        style_attr = inline_style(cols_attrs.get("style"))
        return block(
            "columns",
            cols_attrs,
            f'<div class="wp-block-columns is-layout-flex"{style_attr}>\n{column_blocks}\n</div>',
        )

    if layout.type == "grid":
        grid_attrs = {"layout": {"type": "grid", "minimumColumnWidth": SECTION_GRID_MIN_COLUMN_WIDTH}}
        return block(
            "group",
            grid_attrs,
            f'<div class="wp-block-group is-layout-grid">\n{render_children(section.children, tokens)}\n</div>',
        )

    # full-width / constrained: the outer wrapper carries the layout
    return render_children(section.children, tokens)


def _outer_layout_type(section: IRSection) -> str:
    return "default" if section.layout.type == "full-width" else "constrained"


def render_section(section: IRSection, tokens: DesignTokens) -> str:
    """
    Wraps the composed layout according to the background kind:
    image -> wp:cover, color/gradient/none -> wp:group.
    """
    inner = render_layout(section, tokens)
    background = section.background

    if background is not None and background.type == "image":
        cover_attrs: Dict[str, Any] = {
            "url": background.value,
            "dimRatio": COVER_DIM_RATIO,
            "layout": {"type": _outer_layout_type(section)},
        }
        cover_classes = ["wp-block-cover"]
        apply_class_name(section.class_name, cover_attrs, cover_classes)

        return block(
            "cover",
            cover_attrs,
            "\n".join([
                f'<div class="{" ".join(cover_classes)}">',
                '<span aria-hidden="true" class="wp-block-cover__background has-background-dim"></span>',
                f'<img class="wp-block-cover__image-background" alt="" '
                f'src="{escape_attr(background.value)}" data-object-fit="cover"/>',
                '<div class="wp-block-cover__inner-container">',
                inner,
                "</div>",
                "</div>",
            ]),
        )

    group_layout = _outer_layout_type(section)
    group_attrs: Dict[str, Any] = {"layout": {"type": group_layout}}
    css_classes = ["wp-block-group"]
    css_layout = layout_class(group_layout)
    if css_layout:
        css_classes.append(css_layout)

    group_style: Dict[str, Any] = {}
    background_value = style_value(background.value) if background is not None else None
    if background_value and background.type == "color":
        group_style["color"] = {"background": background_value}
        css_classes.append("has-background")
    elif background_value and background.type == "gradient":
        group_style["color"] = {"gradient": background_value}
        css_classes.append("has-background")

    gap = GAP_MAP.get(section.layout.gap or "")
    if gap:
        group_style["spacing"] = {"padding": {"top": gap, "bottom": gap}}

    if group_style:
        group_attrs["style"] = group_style
    apply_class_name(section.class_name, group_attrs, css_classes)

    style_attr = inline_style(group_attrs.get("style"))
    return block(
        "group",
        group_attrs,
        f'<div class="{" ".join(css_classes)}"{style_attr}>\n{inner}\n</div>',
    )
