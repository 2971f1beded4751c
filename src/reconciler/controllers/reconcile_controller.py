# src/reconciler/controllers/reconcile_controller.py
from __future__ import annotations

import logging
from typing import List, Optional, Union

from bs4 import BeautifulSoup

from blocksmith.core.managers.config_manager import config_manager
from blocksmith.model import IRDocument, IRNode, IRSection, NodeType
from ..model import ContainerElement, LeafIndex, MatchThresholds, ReconcileState
from ..services.container_service import build_containers, find_container_match
from ..services.fingerprint_service import collect_ir_leaf_keys, ir_leaf_key
from ..services.leaf_index_service import build_leaf_index, find_leaf_match
from ..services.stylesheet_service import extract_css_classes, merge_class_name

logger = logging.getLogger(__name__)


def thresholds_from_config() -> MatchThresholds:
    """Container matching thresholds, with settings.json overriding the defaults."""
    defaults = MatchThresholds()
    cfg = config_manager.get_nested("reconciler", {}) or {}
    return MatchThresholds(
        small_target_max_keys=cfg.get("small_target_max_keys", defaults.small_target_max_keys),
        small_target_min_overlap=cfg.get("small_target_min_overlap", defaults.small_target_min_overlap),
        min_overlap_ratio=cfg.get("min_overlap_ratio", defaults.min_overlap_ratio),
    )


class ReconcileController:
    """
    Recovers original stylesheet class names for IR nodes and sections.

    One instance serves one reconciliation call: it owns the leaf index, the
    container candidates and the consumed-identifier state for that call only.
    """

    def __init__(
            self,
            index: LeafIndex,
            containers: List[ContainerElement],
            thresholds: Optional[MatchThresholds] = None,
    ) -> None:
        self.index = index
        self.containers = containers
        self.thresholds = thresholds or MatchThresholds()
        self.state = ReconcileState()
        self.leaf_matches = 0
        self.container_matches = 0

    def _apply_leaf(self, node: IRNode) -> None:
        found = ir_leaf_key(node)
        if not found:
            return
        kind, key = found
        match = find_leaf_match(self.index, key, kind, self.state)
        if match is None:
            return
        self.state.used_leaf_ids.add(match.id)
        if match.classes:
            node.class_name = merge_class_name(node.class_name, list(match.classes))
            self.leaf_matches += 1
            logger.debug("Leaf %d (%s) -> %s node: %s", match.id, match.key, node.type, match.classes)

    def _apply_container(self, target: Union[IRNode, IRSection]) -> None:
        keys = collect_ir_leaf_keys(target.children)
        if not keys:
            return
        match = find_container_match(keys, self.containers, self.state, self.thresholds)
        if match is None:
            return
        self.state.used_container_ids.add(match.id)
        target.class_name = merge_class_name(target.class_name, list(match.classes))
        self.container_matches += 1
        logger.debug("Container %d -> %s: %s", match.id, type(target).__name__, match.classes)

    def walk_node(self, node: IRNode) -> None:
        self._apply_leaf(node)
        if node.type == NodeType.GROUP.value:
            self._apply_container(node)
        for child in node.children or []:
            self.walk_node(child)

    def walk_section(self, section: IRSection) -> None:
        self._apply_container(section)
        for child in section.children:
            self.walk_node(child)

    def run(self, document: IRDocument) -> IRDocument:
        """Walks header, sections and footer in place; shared state keeps every match single-use."""
        for section in document.regions():
            self.walk_section(section)
        logger.info(
            "Reconciled class names: %d leaf matches, %d container matches.",
            self.leaf_matches, self.container_matches,
        )
        return document


def reconcile_class_names(
        document: IRDocument,
        raw_html: Optional[str],
        css: Optional[str] = None,
        thresholds: Optional[MatchThresholds] = None,
) -> IRDocument:
    """
    Returns a copy of `document` with recovered `class_name` values merged in.

    `css` defaults to the document's extracted stylesheet. When the markup or
    the stylesheet is missing, or the stylesheet defines no class selectors,
    the document is returned unchanged.
    """
    stylesheet = css if css is not None else document.custom_css
    if not raw_html or not stylesheet:
        logger.debug("Reconciliation skipped: original markup or stylesheet missing.")
        return document

    css_classes = extract_css_classes(stylesheet)
    if not css_classes:
        logger.debug("Reconciliation skipped: stylesheet defines no class selectors.")
        return document

    soup = BeautifulSoup(raw_html, "html.parser")
    controller = ReconcileController(
        index=build_leaf_index(soup, css_classes),
        containers=build_containers(soup, css_classes),
        thresholds=thresholds or thresholds_from_config(),
    )
    return controller.run(document.model_copy(deep=True))
