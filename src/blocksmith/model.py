# src/blocksmith/model.py (IR Layer)
from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IRModel(BaseModel):
    """
    Base model for the IR wire format.
    JSON keys are camelCase; Python attributes are snake_case. Both are accepted on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NodeType(str, Enum):
    """The closed set of node kinds the renderer owns."""
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    BUTTON = "button"
    LIST = "list"
    SPACER = "spacer"
    GROUP = "group"
    NAVIGATION = "navigation"


class MotionIntent(str, Enum):
    """Animation intent label. Rendering downgrades everything to static."""
    STATIC = "static"
    FADE_IN = "fade-in"
    SLIDE_UP = "slide-up"
    PARALLAX = "parallax"
    HOVER_REVEAL = "hover-reveal"
    COMPLEX = "complex"


SizeToken = Literal["sm", "md", "lg", "xl"]
GapToken = Literal["sm", "md", "lg"]


class NavLink(IRModel):
    text: str
    href: str


class NodeAttributes(IRModel):
    # heading
    level: Optional[Literal[1, 2, 3, 4, 5, 6]] = None

    # image
    src: Optional[str] = None
    alt: Optional[str] = None
    width: Optional[Union[int, float]] = None
    height: Optional[Union[int, float]] = None

    # button
    href: Optional[str] = None
    variant: Optional[Literal["primary", "secondary", "outline"]] = None

    # list
    ordered: Optional[bool] = None
    items: Optional[List[str]] = None

    # navigation
    links: Optional[List[NavLink]] = None

    # shared style tokens
    font_size: Optional[SizeToken] = None
    text_align: Optional[Literal["left", "center", "right"]] = None
    background_color: Optional[str] = None
    text_color: Optional[str] = None
    padding: Optional[SizeToken] = None


class IRNode(IRModel):
    """
    A recursive content node. `type` stays a plain string so that kinds the
    renderer does not know yet still load and degrade to a placeholder.
    """
    type: str
    content: Optional[str] = None
    attributes: NodeAttributes = Field(default_factory=NodeAttributes)
    children: Optional[List["IRNode"]] = None
    motion_intent: Optional[MotionIntent] = None
    style: Optional[Dict[str, str]] = None
    class_name: Optional[str] = None


class LayoutDescriptor(IRModel):
    type: Literal["full-width", "constrained", "grid", "columns"]
    columns: Optional[int] = None
    gap: Optional[GapToken] = None
    content_width: Optional[str] = None
    vertical_align: Optional[Literal["top", "center", "bottom"]] = None


class Background(IRModel):
    type: Literal["color", "image", "gradient"]
    value: str


class IRSection(IRModel):
    """A visual region of the page. `section_intent` is advisory and never affects rendering."""
    section_intent: str = "generic"
    layout: LayoutDescriptor
    children: List[IRNode] = Field(default_factory=list)
    motion_intent: Optional[MotionIntent] = None
    background: Optional[Background] = None
    style: Optional[Dict[str, str]] = None
    class_name: Optional[str] = None


class ColorTokens(IRModel):
    primary: str
    secondary: str
    background: str
    foreground: str
    accent: Optional[str] = None
    muted: Optional[str] = None


class FontTokens(IRModel):
    heading: Optional[str] = None
    body: Optional[str] = None


class DesignTokens(IRModel):
    colors: ColorTokens
    fonts: FontTokens = Field(default_factory=FontTokens)
    border_radius: Optional[Literal["none", "sm", "md", "lg", "full"]] = None


class DocumentMetadata(IRModel):
    title: str
    description: Optional[str] = None
    source_url: Optional[str] = None


class IRDocument(IRModel):
    """
    Root of the validated IR.

    `custom_css` carries the stylesheet text extracted from the original
    markup; it feeds class-name reconciliation and the custom.css passthrough.
    """
    version: Literal["1.0"] = "1.0"
    metadata: DocumentMetadata
    design_tokens: DesignTokens
    header: Optional[IRSection] = None
    sections: List[IRSection] = Field(min_length=1)
    footer: Optional[IRSection] = None
    custom_css: Optional[str] = Field(default=None, alias="customCSS")

    def regions(self) -> List[IRSection]:
        """Header, body sections and footer in document order."""
        out: List[IRSection] = []
        if self.header:
            out.append(self.header)
        out.extend(self.sections)
        if self.footer:
            out.append(self.footer)
        return out


class AnalysisSummary(IRModel):
    section_count: int
    has_header: bool
    has_footer: bool
    design_tokens: DesignTokens
    motion_downgrades: int = 0
    external_images: int = 0
    has_custom_css: bool = False
    class_name_count: int = 0


def iter_nodes(nodes: Optional[List[IRNode]]):
    """Depth-first, document-order walk over a node list."""
    for node in nodes or []:
        yield node
        yield from iter_nodes(node.children)


def summarize(document: IRDocument) -> AnalysisSummary:
    """Collects the headline numbers shown after a conversion."""
    motion_downgrades = 0
    external_images = 0
    class_name_count = 0

    for section in document.regions():
        if section.motion_intent and section.motion_intent != MotionIntent.STATIC:
            motion_downgrades += 1
        if section.class_name:
            class_name_count += 1

        for node in iter_nodes(section.children):
            if node.motion_intent and node.motion_intent != MotionIntent.STATIC:
                motion_downgrades += 1
            if node.class_name:
                class_name_count += 1
            if node.type == NodeType.IMAGE.value and (node.attributes.src or "").startswith(("http://", "https://")):
                external_images += 1

    return AnalysisSummary(
        section_count=len(document.sections),
        has_header=document.header is not None,
        has_footer=document.footer is not None,
        design_tokens=document.design_tokens,
        motion_downgrades=motion_downgrades,
        external_images=external_images,
        has_custom_css=bool(document.custom_css and document.custom_css.strip()),
        class_name_count=class_name_count,
    )


class ThemeBundle(BaseModel):
    """Generated theme files keyed by their path relative to the theme directory."""
    slug: str
    files: Dict[str, str] = Field(default_factory=dict)
    summary: AnalysisSummary
