# tests/reconciliation/test_reconcile_controller.py
from reconciler.controllers.reconcile_controller import reconcile_class_names, thresholds_from_config
from reconciler.model import MatchThresholds


# --- Skips ---

def test_missing_markup_or_stylesheet_returns_document_unchanged(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "Hi")])])
    assert reconcile_class_names(document, None, ".foo{}") is document
    assert reconcile_class_names(document, '<p class="foo">Hi</p>', None) is document
    assert reconcile_class_names(document, '<p class="foo">Hi</p>', "") is document


def test_stylesheet_without_class_selectors_is_a_no_op(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "Hi")])])
    assert reconcile_class_names(document, '<p class="foo">Hi</p>', "p { color: red; }") is document


# --- Leaves ---

def test_paragraph_recovers_its_original_class(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "Hi")])])
    result = reconcile_class_names(document, '<p class="foo">Hi</p>', ".foo{color:red}")

    assert "foo" in result.sections[0].children[0].class_name.split()
    assert document.sections[0].children[0].class_name is None


def test_stylesheet_defaults_to_document_custom_css(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "Hi")])], custom_css=".foo{color:red}")
    result = reconcile_class_names(document, '<p class="foo">Hi</p>')
    assert result.sections[0].children[0].class_name == "foo"


def test_only_stylesheet_classes_are_recovered(make_node, make_section, make_document):
    document = make_document([make_section([make_node("heading", "Hi", level=2)])])
    result = reconcile_class_names(document, '<h2 class="text-xl title">Hi</h2>', ".title{}")
    assert result.sections[0].children[0].class_name == "title"


def test_existing_class_name_is_merged(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "Hi", class_name="intro foo")])])
    result = reconcile_class_names(document, '<p class="foo bar">Hi</p>', ".foo{} .bar{}")
    assert result.sections[0].children[0].class_name == "intro foo bar"


def test_reworded_text_falls_back_to_same_kind(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "Hello, there!")])])
    result = reconcile_class_names(document, '<p class="lead">Hello there</p>', ".lead{}")
    assert result.sections[0].children[0].class_name == "lead"


def test_each_original_leaf_is_used_at_most_once(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "Same"), make_node("paragraph", "Same")])])
    result = reconcile_class_names(document, '<p class="a">Same</p>', ".a{}")
    first, second = result.sections[0].children
    assert first.class_name == "a"
    assert second.class_name is None


def test_duplicate_content_is_matched_in_document_order(make_node, make_section, make_document):
    document = make_document([make_section([make_node("paragraph", "X"), make_node("paragraph", "X")])])
    result = reconcile_class_names(document, '<p class="a">X</p><p class="b">X</p>', ".a{} .b{}")
    assert [n.class_name for n in result.sections[0].children] == ["a", "b"]


def test_unstyled_match_still_consumes_the_original_leaf(make_node, make_section, make_document):
    """A matched leaf without classes is spent; the next node does not fall back onto it."""
    document = make_document([make_section([make_node("paragraph", "Plain"), make_node("paragraph", "Reworded")])])
    result = reconcile_class_names(document, '<p>Plain</p><p class="x">Other</p>', ".x{}")
    assert [n.class_name for n in result.sections[0].children] == [None, "x"]


def test_header_is_reconciled_before_body(make_node, make_section, make_document):
    document = make_document(
        [make_section([make_node("paragraph", "Same")])],
        header=make_section([make_node("paragraph", "Same")]),
    )
    result = reconcile_class_names(document, '<p class="top">Same</p><p class="bottom">Same</p>', ".top{} .bottom{}")
    assert result.header.children[0].class_name == "top"
    assert result.sections[0].children[0].class_name == "bottom"


# --- Containers ---

_CARDS_HTML = """
<section class="features">
  <div class="card"><h3>Fast</h3><p>Really fast.</p></div>
  <div class="card featured"><h3>Safe</h3><p>Really safe.</p></div>
</section>
"""
_CARDS_CSS = ".features{padding:40px} .card{border:1px solid} .featured{background:#eee}"


def _cards_document(make_node, make_section, make_document):
    def card(title, text):
        return make_node("group", children=[make_node("heading", title, level=3), make_node("paragraph", text)])
    return make_document([make_section([card("Fast", "Really fast."), card("Safe", "Really safe.")])])


def test_sections_and_groups_recover_container_classes(make_node, make_section, make_document):
    document = _cards_document(make_node, make_section, make_document)
    result = reconcile_class_names(document, _CARDS_HTML, _CARDS_CSS, MatchThresholds())

    section = result.sections[0]
    assert section.class_name == "features"
    assert [group.class_name for group in section.children] == ["card", "card featured"]


def test_reconciliation_is_deterministic(make_node, make_section, make_document):
    document = _cards_document(make_node, make_section, make_document)
    first = reconcile_class_names(document, _CARDS_HTML, _CARDS_CSS, MatchThresholds())
    second = reconcile_class_names(document, _CARDS_HTML, _CARDS_CSS, MatchThresholds())
    assert first.model_dump() == second.model_dump()


def test_thresholds_from_config_uses_settings(monkeypatch):
    from blocksmith.core.managers.config_manager import config_manager

    monkeypatch.setattr(
        config_manager, "get_nested",
        lambda key, default=None: {"min_overlap_ratio": 0.5} if key == "reconciler" else default,
    )
    thresholds = thresholds_from_config()
    assert thresholds.min_overlap_ratio == 0.5
    assert thresholds.small_target_max_keys == 3
