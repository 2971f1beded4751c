# src/reconciler/services/leaf_index_service.py
import logging
from typing import Dict, List, Optional, Set

from bs4 import BeautifulSoup

from ..model import LeafElement, LeafIndex, ReconcileState
from .fingerprint_service import LEAF_TAGS, tag_leaf_key, tag_leaf_kind
from .stylesheet_service import qualifying_classes

logger = logging.getLogger(__name__)


def build_leaf_index(soup: BeautifulSoup, css_classes: Set[str]) -> LeafIndex:
    """
    Indexes every leaf tag of the original markup in document order.
    Identifiers are assigned here, once, by position.
    """
    leaves: List[LeafElement] = []
    by_key: Dict[str, List[LeafElement]] = {}
    by_kind: Dict[str, List[LeafElement]] = {}

    for el in soup.find_all(LEAF_TAGS):
        kind = tag_leaf_kind(el.name.lower())
        key = tag_leaf_key(el)
        if not kind or not key:
            continue

        leaf = LeafElement(
            id=len(leaves),
            kind=kind,
            key=key,
            classes=tuple(qualifying_classes(el.get("class"), css_classes)),
        )
        leaves.append(leaf)
        by_key.setdefault(key, []).append(leaf)
        by_kind.setdefault(kind, []).append(leaf)

    logger.debug("Indexed %d leaf elements (%d distinct keys).", len(leaves), len(by_key))
    return LeafIndex(leaves=tuple(leaves), by_key=by_key, by_kind=by_kind)


def find_leaf_match(index: LeafIndex, key: str, kind: str, state: ReconcileState) -> Optional[LeafElement]:
    """First unused leaf with the exact key, else the first unused leaf of the same kind."""
    for bucket in (index.by_key.get(key, []), index.by_kind.get(kind, [])):
        for leaf in bucket:
            if leaf.id not in state.used_leaf_ids:
                return leaf
    return None
