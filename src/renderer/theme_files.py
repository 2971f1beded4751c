# src/renderer/theme_files.py
"""
Generators for the non-template files of a block theme.
Each returns file content as text; writing them out is the caller's job.
"""
from typing import Any, Dict, List, Optional

from blocksmith.core.services.json_service import to_json
from blocksmith.core.utils.text_utils import slugify
from blocksmith.model import FontTokens, IRDocument
from .style_mapper import map_border_radius

DEFAULT_THEME_TITLE = "AI Generated Theme"

FONT_SIZE_SCALE = [
    {"slug": "small", "size": "14px", "name": "Small"},
    {"slug": "medium", "size": "18px", "name": "Medium"},
    {"slug": "large", "size": "24px", "name": "Large"},
    {"slug": "x-large", "size": "36px", "name": "Extra Large"},
    {"slug": "xx-large", "size": "48px", "name": "2X Large"},
    {"slug": "huge", "size": "64px", "name": "Huge"},
    {"slug": "gigantic", "size": "96px", "name": "Gigantic"},
    {"slug": "display", "size": "140px", "name": "Display"},
]


def theme_slug(document: IRDocument) -> str:
    return slugify(document.metadata.title or "ai-theme") or "ai-theme"


def _drop_none(obj: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in obj.items() if v is not None}


def _template_parts(document: IRDocument) -> List[Dict[str, str]]:
    parts = []
    if document.header:
        parts.append({"name": "header", "title": "Header", "area": "header"})
    if document.footer:
        parts.append({"name": "footer", "title": "Footer", "area": "footer"})
    return parts or [{"name": "header", "title": "Header", "area": "header"}]


def generate_theme_json(document: IRDocument) -> str:
    """theme.json (schema v2) built from the document's design tokens."""
    tokens = document.design_tokens
    colors, fonts = tokens.colors, tokens.fonts

    palette = [
        {"slug": "primary", "color": colors.primary, "name": "Primary"},
        {"slug": "secondary", "color": colors.secondary, "name": "Secondary"},
        {"slug": "background", "color": colors.background, "name": "Background"},
        {"slug": "foreground", "color": colors.foreground, "name": "Foreground"},
    ]
    if colors.accent:
        palette.append({"slug": "accent", "color": colors.accent, "name": "Accent"})
    if colors.muted:
        palette.append({"slug": "muted", "color": colors.muted, "name": "Muted"})

    font_families = []
    if fonts.heading:
        font_families.append({"fontFamily": f"{fonts.heading}, sans-serif", "slug": "heading", "name": "Heading"})
    if fonts.body:
        font_families.append({"fontFamily": f"{fonts.body}, sans-serif", "slug": "body", "name": "Body"})

    button: Dict[str, Any] = {
        "color": {"background": "var(--wp--preset--color--primary)", "text": "#ffffff"},
    }
    if tokens.border_radius:
        button["border"] = {"radius": map_border_radius(tokens.border_radius)}

    theme = {
        "$schema": "https://schemas.wp.org/trunk/theme.json",
        "version": 2,
        "settings": {
            "color": {"palette": palette, "defaultPalette": False},
            "typography": _drop_none({
                "fontFamilies": font_families or None,
                "fontSizes": FONT_SIZE_SCALE,
            }),
            "layout": {"contentSize": "1200px", "wideSize": "1920px"},
            "spacing": {"units": ["px", "em", "rem", "%"]},
            "appearanceTools": True,
        },
        "styles": _drop_none({
            "color": {"background": colors.background, "text": colors.foreground},
            "typography": {"fontFamily": "var(--wp--preset--font-family--body)"} if fonts.body else None,
            "elements": _drop_none({
                "heading": (
                    {"typography": {"fontFamily": "var(--wp--preset--font-family--heading)"}}
                    if fonts.heading else None
                ),
                "button": button,
                "link": {"color": {"text": "var(--wp--preset--color--primary)"}},
            }),
        }),
        "templateParts": _template_parts(document),
    }
    return to_json(theme)


def generate_style_css(document: IRDocument) -> str:
    """The required theme declaration header; all real styling lives elsewhere."""
    title = document.metadata.title or DEFAULT_THEME_TITLE
    description = (
        document.metadata.description
        or "WordPress Block Theme generated from AI HTML by Blocksmith."
    )
    return (
        "/*\n"
        f"Theme Name: {title}\n"
        f"Description: {description}\n"
        "Version: 1.0.0\n"
        "Requires at least: 6.0\n"
        "Tested up to: 6.7\n"
        "Requires PHP: 7.4\n"
        "License: GPL-2.0-or-later\n"
        "License URI: https://www.gnu.org/licenses/gpl-2.0.html\n"
        f"Text Domain: {theme_slug(document)}\n"
        "*/\n"
    )


def build_google_fonts_url(fonts: FontTokens) -> Optional[str]:
    """Returns a css2 URL for the declared families, or None when no font is set."""
    families: List[str] = []
    for font in (fonts.heading, fonts.body):
        if not font:
            continue
        entry = f"family={font.replace(' ', '+')}:wght@400;500;600;700"
        if entry not in families:
            families.append(entry)
    if not families:
        return None
    return f"https://fonts.googleapis.com/css2?{'&'.join(families)}&display=swap"


def generate_functions_php(document: IRDocument) -> str:
    slug = theme_slug(document)
    prefix = slug.replace("-", "_")
    fonts_url = build_google_fonts_url(document.design_tokens.fonts)

    fonts_line = f"\twp_enqueue_style( '{slug}-google-fonts', '{fonts_url}', array(), null );\n" if fonts_url else ""
    custom_line = (
        f"\twp_enqueue_style( '{slug}-custom', get_template_directory_uri() "
        f". '/assets/css/custom.css', array(), '1.0.0' );\n"
    )

    return (
        "<?php\n"
        "/**\n"
        " * Theme functions and definitions.\n"
        " *\n"
        f" * @package {slug}\n"
        " */\n"
        "\n"
        "if ( ! defined( 'ABSPATH' ) ) {\n"
        "\texit;\n"
        "}\n"
        "\n"
        f"function {prefix}_setup() {{\n"
        "\tadd_theme_support( 'wp-block-styles' );\n"
        "\tadd_theme_support( 'editor-styles' );\n"
        "}\n"
        f"add_action( 'after_setup_theme', '{prefix}_setup' );\n"
        "\n"
        f"function {prefix}_enqueue_styles() {{\n"
        f"{fonts_line}{custom_line}"
        "}\n"
        f"add_action( 'wp_enqueue_scripts', '{prefix}_enqueue_styles' );\n"
        "\n"
        f"function {prefix}_enqueue_editor_assets() {{\n"
        f"{fonts_line}{custom_line}"
        "}\n"
        f"add_action( 'enqueue_block_editor_assets', '{prefix}_enqueue_editor_assets' );\n"
    )


def generate_custom_css(raw_css: Optional[str]) -> str:
    """custom.css always exists; it is header-only when there is no stylesheet."""
    header = "/* Custom CSS extracted from AI-generated HTML */\n\n"
    if not raw_css or not raw_css.strip():
        return header
    return header + raw_css.strip() + "\n"
