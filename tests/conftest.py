# tests/conftest.py
import pytest

from blocksmith.core.managers.config_manager import config_manager
from blocksmith.model import (
    ColorTokens,
    DesignTokens,
    DocumentMetadata,
    FontTokens,
    IRDocument,
    IRNode,
    IRSection,
    LayoutDescriptor,
    NodeAttributes,
)


@pytest.fixture(autouse=True)
def fresh_config():
    """In-memory config changes made by a test are dropped afterwards."""
    yield
    config_manager.reset()


@pytest.fixture
def tokens():
    """Design tokens without font families, so no font classes are emitted."""
    return DesignTokens(
        colors=ColorTokens(primary="#0055ff", secondary="#222222", background="#ffffff", foreground="#111111"),
    )


@pytest.fixture
def font_tokens():
    """Design tokens with heading and body fonts declared."""
    return DesignTokens(
        colors=ColorTokens(primary="#0055ff", secondary="#222222", background="#ffffff", foreground="#111111"),
        fonts=FontTokens(heading="Playfair Display", body="Inter"),
        border_radius="lg",
    )


@pytest.fixture
def make_node():
    """Factory: make_node('heading', 'Hello', level=1, style={...}, class_name='x')."""
    def _make(node_type, content=None, children=None, style=None, class_name=None, **attrs):
        return IRNode(
            type=node_type,
            content=content,
            attributes=NodeAttributes(**attrs),
            children=children,
            style=style,
            class_name=class_name,
        )
    return _make


@pytest.fixture
def make_section():
    """Factory: make_section([...children], layout_type='constrained', columns=2, gap='md', background=...)."""
    def _make(children, layout_type="constrained", columns=None, gap=None, background=None, class_name=None):
        return IRSection(
            section_intent="generic",
            layout=LayoutDescriptor(type=layout_type, columns=columns, gap=gap),
            children=children,
            background=background,
            class_name=class_name,
        )
    return _make


@pytest.fixture
def make_document(tokens):
    """Factory building a document around the given sections."""
    def _make(sections, header=None, footer=None, custom_css=None, title="My AI Theme"):
        return IRDocument(
            metadata=DocumentMetadata(title=title),
            design_tokens=tokens,
            header=header,
            sections=sections,
            footer=footer,
            custom_css=custom_css,
        )
    return _make
