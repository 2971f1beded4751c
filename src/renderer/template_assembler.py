# src/renderer/template_assembler.py
from typing import Optional, Sequence

from pydantic import BaseModel

from blocksmith.model import DesignTokens, IRDocument, IRSection
from .markup import self_closing_block
from .section_renderer import render_section


class RenderedTemplates(BaseModel):
    """Text fragments handed to the packaging step, one file each."""
    index: str
    header: Optional[str] = None
    footer: Optional[str] = None


def template_part(area: str) -> str:
    return self_closing_block("template-part", {"slug": area, "area": area})


def render_template(
        sections: Sequence[IRSection],
        tokens: DesignTokens,
        has_header: bool,
        has_footer: bool,
) -> str:
    """
    Builds the index template: header reference, body sections in order,
    footer reference. Parts are separated by a blank line.
    """
    parts = []
    if has_header:
        parts.append(template_part("header"))
    parts.extend(render_section(section, tokens) for section in sections)
    if has_footer:
        parts.append(template_part("footer"))
    return "\n\n".join(parts)


def render_part(section: IRSection, tokens: DesignTokens) -> str:
    """Header/footer are standalone fragments written to their own part files."""
    return render_section(section, tokens)


def render_document(document: IRDocument) -> RenderedTemplates:
    tokens = document.design_tokens
    return RenderedTemplates(
        index=render_template(
            document.sections,
            tokens,
            has_header=document.header is not None,
            has_footer=document.footer is not None,
        ),
        header=render_part(document.header, tokens) if document.header else None,
        footer=render_part(document.footer, tokens) if document.footer else None,
    )
