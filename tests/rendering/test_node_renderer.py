# tests/rendering/test_node_renderer.py
import pytest

from blocksmith.model import IRNode, NavLink, NodeAttributes, NodeType
from renderer.node_renderer import RENDERERS, render_node


# --- Dispatch ---

def test_every_node_type_has_a_renderer():
    assert set(RENDERERS) == {t.value for t in NodeType}


def test_unknown_node_type_renders_placeholder_comment(tokens):
    """Kinds the renderer does not know degrade to an inert comment."""
    assert render_node(IRNode(type="carousel"), tokens) == "<!-- Unsupported node type: carousel -->"


# --- heading ---

def test_heading_level_one(make_node, tokens):
    """A plain level-1 heading renders exactly."""
    assert render_node(make_node("heading", "Hello", level=1), tokens) == (
        '<!-- wp:heading {"level":1} -->\n'
        '<h1 class="wp-block-heading">Hello</h1>\n'
        '<!-- /wp:heading -->'
    )


def test_heading_defaults_to_level_two(make_node, tokens):
    out = render_node(make_node("heading", "Sub"), tokens)
    assert out.startswith('<!-- wp:heading {"level":2} -->')
    assert "<h2 " in out and out.count("</h2>") == 1


def test_heading_tokens_are_mirrored_into_json_and_classes(make_node, font_tokens):
    node = make_node("heading", "Big", level=3, text_align="center", font_size="lg")
    assert render_node(node, font_tokens) == (
        '<!-- wp:heading {"level":3,"textAlign":"center","fontSize":"large","fontFamily":"heading"} -->\n'
        '<h3 class="wp-block-heading has-text-align-center has-large-font-size has-heading-font-family">Big</h3>\n'
        '<!-- /wp:heading -->'
    )


def test_heading_escapes_content(make_node, tokens):
    out = render_node(make_node("heading", "Fish & <Chips>", level=2), tokens)
    assert ">Fish &amp; &lt;Chips&gt;</h2>" in out


# --- paragraph ---

def test_paragraph_without_attributes(make_node, tokens):
    assert render_node(make_node("paragraph", "Hi"), tokens) == (
        "<!-- wp:paragraph -->\n<p>Hi</p>\n<!-- /wp:paragraph -->"
    )


def test_paragraph_uses_body_font_and_align_key(make_node, font_tokens):
    out = render_node(make_node("paragraph", "Hi", text_align="right"), font_tokens)
    assert out.startswith('<!-- wp:paragraph {"align":"right","fontFamily":"body"} -->')
    assert '<p class="has-text-align-right has-body-font-family">Hi</p>' in out


def test_paragraph_free_form_style_keeps_only_recognized_properties(make_node, tokens):
    """Recognized CSS goes into JSON and inline style; the rest never reaches the markup."""
    node = make_node(
        "paragraph", "Hi",
        style={"line-height": "1.5", "color": "#f00", "box-shadow": "0 0 4px #000"},
        class_name="intro",
    )
    assert render_node(node, tokens) == (
        '<!-- wp:paragraph {"style":{"typography":{"lineHeight":"1.5"},"color":{"text":"#f00"}},'
        '"className":"intro"} -->\n'
        '<p class="has-text-color intro" style="line-height:1.5;color:#f00">Hi</p>\n'
        '<!-- /wp:paragraph -->'
    )


def test_paragraph_color_and_padding_attributes(make_node, tokens):
    node = make_node("paragraph", "Boxed", background_color="#eee", padding="sm")
    out = render_node(node, tokens)
    assert (
        '{"style":{"color":{"background":"#eee"},'
        '"spacing":{"padding":{"top":"10px","right":"10px","bottom":"10px","left":"10px"}}}}'
    ) in out
    assert (
        '<p class="has-background" style="background-color:#eee;'
        'padding-top:10px;padding-right:10px;padding-bottom:10px;padding-left:10px">Boxed</p>'
    ) in out


# --- image ---

def test_image_with_dimensions(make_node, tokens):
    node = make_node("image", src="https://x/a.png", alt='A "quoted" alt', width=640, height=480)
    assert render_node(node, tokens) == (
        '<!-- wp:image {"sizeSlug":"full","linkDestination":"none","width":640,"height":480} -->\n'
        '<figure class="wp-block-image size-full">'
        '<img src="https://x/a.png" alt="A &quot;quoted&quot; alt" width="640" height="480"/></figure>\n'
        '<!-- /wp:image -->'
    )


def test_image_never_emits_caption(make_node, tokens):
    out = render_node(make_node("image", "caption text", src="/a.png"), tokens)
    assert "figcaption" not in out
    assert "caption text" not in out


# --- button ---

def test_primary_button_is_wrapped_in_buttons_group(make_node, tokens):
    node = make_node("button", "Buy", href="/buy", variant="primary")
    assert render_node(node, tokens) == (
        '<!-- wp:buttons -->\n'
        '<div class="wp-block-buttons is-layout-flex">\n'
        '<!-- wp:button {"backgroundColor":"primary","textColor":"background"} -->\n'
        '<div class="wp-block-button"><a class="wp-block-button__link wp-element-button '
        'has-primary-background-color has-background-color-color has-text-color has-background" '
        'href="/buy">Buy</a></div>\n'
        '<!-- /wp:button -->\n'
        '</div>\n'
        '<!-- /wp:buttons -->'
    )


def test_outline_button_uses_border_json_without_background(make_node, tokens):
    out = render_node(make_node("button", "More", href="/more", variant="outline"), tokens)
    assert '<!-- wp:button {"textColor":"primary","style":{"border":{"width":"2px","style":"solid"}}} -->' in out
    assert "backgroundColor" not in out
    assert 'class="wp-block-button__link wp-element-button has-primary-color has-text-color is-style-outline"' in out
    assert 'style="border-width:2px;border-style:solid"' in out


def test_button_defaults(make_node, tokens):
    """No href falls back to '#', no variant falls back to primary."""
    out = render_node(make_node("button", "Go"), tokens)
    assert 'href="#"' in out
    assert '"backgroundColor":"primary"' in out


@pytest.mark.parametrize("variant", ["primary", "secondary", "outline", None])
def test_every_button_has_exactly_one_wrapper_and_one_button(make_node, tokens, variant):
    out = render_node(make_node("button", "X", href="/x", variant=variant), tokens)
    assert out.startswith("<!-- wp:buttons -->\n")
    assert out.endswith("<!-- /wp:buttons -->")
    assert out.count("<!-- wp:buttons") == 1
    assert out.count("<!-- wp:button ") + out.count("<!-- wp:button -->") == 1


def test_button_class_name_is_merged(make_node, tokens):
    out = render_node(make_node("button", "X", href="/x", variant="secondary", class_name="cta big"), tokens)
    assert '"className":"cta big"' in out
    assert "has-background cta big" in out


# --- list ---

def test_ordered_list(make_node, tokens):
    assert render_node(make_node("list", ordered=True, items=["One", "Two"]), tokens) == (
        '<!-- wp:list {"ordered":true} -->\n'
        '<ol class="wp-block-list">\n<li>One</li>\n<li>Two</li>\n</ol>\n'
        '<!-- /wp:list -->'
    )


def test_unordered_list_has_no_ordered_attribute(make_node, tokens):
    out = render_node(make_node("list", items=["a < b"]), tokens)
    assert out.startswith("<!-- wp:list -->\n<ul class=\"wp-block-list\">")
    assert "<li>a &lt; b</li>" in out


# --- spacer ---

def test_spacer_defaults_to_medium(make_node, tokens):
    assert render_node(make_node("spacer"), tokens) == (
        '<!-- wp:spacer {"height":"20px"} -->\n'
        '<div style="height:20px" aria-hidden="true" class="wp-block-spacer"></div>\n'
        '<!-- /wp:spacer -->'
    )


def test_spacer_size_lookup(make_node, tokens):
    assert '{"height":"60px"}' in render_node(make_node("spacer", padding="xl"), tokens)


def test_spacer_unrecognized_size_falls_back_to_medium(tokens):
    node = IRNode(type="spacer", attributes=NodeAttributes.model_construct(padding="huge"))
    assert '{"height":"20px"}' in render_node(node, tokens)


# --- group ---

def test_group_defaults_to_constrained_and_joins_children(make_node, tokens):
    node = make_node("group", children=[make_node("paragraph", "A"), make_node("paragraph", "B")])
    assert render_node(node, tokens) == (
        '<!-- wp:group {"layout":{"type":"constrained"}} -->\n'
        '<div class="wp-block-group is-layout-constrained">\n'
        '<!-- wp:paragraph -->\n<p>A</p>\n<!-- /wp:paragraph -->\n\n'
        '<!-- wp:paragraph -->\n<p>B</p>\n<!-- /wp:paragraph -->\n'
        '</div>\n'
        '<!-- /wp:group -->'
    )


def test_group_grid_display_with_gap(make_node, tokens):
    node = make_node("group", children=[make_node("paragraph", "A")], style={"display": "grid", "gap": "24px"})
    out = render_node(node, tokens)
    assert out.startswith(
        '<!-- wp:group {"layout":{"type":"grid","minimumColumnWidth":"280px"},'
        '"style":{"spacing":{"blockGap":"24px"}}} -->\n'
        '<div class="wp-block-group is-layout-grid" style="gap:24px">'
    )


def test_group_flex_display(make_node, tokens):
    node = make_node("group", children=[make_node("paragraph", "A")], style={"display": "flex"})
    out = render_node(node, tokens)
    assert '{"layout":{"type":"flex","flexWrap":"nowrap"}}' in out
    assert 'class="wp-block-group is-layout-flex"' in out


def test_group_renders_nested_unknown_child_without_aborting_siblings(make_node, tokens):
    node = make_node("group", children=[IRNode(type="video"), make_node("paragraph", "After")])
    out = render_node(node, tokens)
    assert "<!-- Unsupported node type: video -->" in out
    assert "<p>After</p>" in out


# --- navigation ---

def test_navigation_is_downgraded_to_flex_group_of_links(tokens):
    node = IRNode(
        type="navigation",
        attributes=NodeAttributes(links=[NavLink(text="Home", href="/"), NavLink(text="About", href="/about")]),
    )
    assert render_node(node, tokens) == (
        '<!-- wp:group {"layout":{"type":"flex","flexWrap":"nowrap"}} -->\n'
        '<div class="wp-block-group is-layout-flex">\n'
        '<!-- wp:paragraph -->\n<p><a href="/">Home</a></p>\n<!-- /wp:paragraph -->\n\n'
        '<!-- wp:paragraph -->\n<p><a href="/about">About</a></p>\n<!-- /wp:paragraph -->\n'
        '</div>\n'
        '<!-- /wp:group -->'
    )
    assert "wp:navigation" not in render_node(node, tokens)


def test_quoted_style_values_never_break_the_style_attribute(make_node, tokens):
    node = make_node("paragraph", "Hi", style={"font-size": '1px"x', "line-height": "2"})
    assert render_node(node, tokens) == (
        '<!-- wp:paragraph {"style":{"typography":{"lineHeight":"2"}}} -->\n'
        '<p style="line-height:2">Hi</p>\n'
        '<!-- /wp:paragraph -->'
    )


def test_group_gap_with_quote_is_dropped(make_node, tokens):
    node = make_node("group", children=[make_node("paragraph", "A")], style={"display": "flex", "gap": '1em"'})
    out = render_node(node, tokens)
    assert "blockGap" not in out
    assert 'class="wp-block-group is-layout-flex">' in out


def test_image_with_fractional_width(make_node, tokens):
    out = render_node(make_node("image", src="/a.png", width=300.5), tokens)
    assert '{"sizeSlug":"full","linkDestination":"none","width":300.5}' in out
    assert 'width="300.5"' in out
