# src/reconciler/services/container_service.py
import logging
import math
from typing import List, Optional, Sequence, Set

from bs4 import BeautifulSoup

from ..model import ContainerElement, MatchThresholds, ReconcileState
from .fingerprint_service import CONTAINER_TAGS, collect_tag_leaf_keys
from .stylesheet_service import qualifying_classes

logger = logging.getLogger(__name__)


def build_containers(soup: BeautifulSoup, css_classes: Set[str]) -> List[ContainerElement]:
    """
    Collects wrapper tags that carry at least one stylesheet class and
    contain at least one fingerprinted leaf.
    """
    containers: List[ContainerElement] = []
    for el in soup.find_all(CONTAINER_TAGS):
        classes = qualifying_classes(el.get("class"), css_classes)
        if not classes:
            continue
        leaf_keys = collect_tag_leaf_keys(el)
        if not leaf_keys:
            continue
        containers.append(ContainerElement(
            id=len(containers),
            classes=tuple(classes),
            leaf_keys=tuple(leaf_keys),
        ))

    logger.debug("Collected %d candidate containers.", len(containers))
    return containers


def min_overlap(target_size: int, thresholds: MatchThresholds) -> int:
    """Never below one shared key."""
    if target_size <= thresholds.small_target_max_keys:
        return max(1, thresholds.small_target_min_overlap)
    # round() first: 10 * 0.3 is 3.0000000000000004 in binary floating point
    return max(1, math.ceil(round(target_size * thresholds.min_overlap_ratio, 9)))


def find_container_match(
        leaf_keys: Sequence[str],
        containers: Sequence[ContainerElement],
        state: ReconcileState,
        thresholds: Optional[MatchThresholds] = None,
) -> Optional[ContainerElement]:
    """
    Greedy best match for a structural target.

    Ranking: overlap count, then overlap / candidate size (tighter candidates
    win), then smaller candidate. Earlier candidates win exact ties.
    """
    if not leaf_keys:
        return None
    thresholds = thresholds or MatchThresholds()
    target = set(leaf_keys)
    required = min_overlap(len(target), thresholds)

    best: Optional[ContainerElement] = None
    best_rank = None
    for container in containers:
        if container.id in state.used_container_ids:
            continue
        overlap = len(container.leaf_key_set & target)
        if overlap < required:
            continue
        size = len(container.leaf_keys)
        rank = (overlap, overlap / size, -size)
        if best_rank is None or rank > best_rank:
            best, best_rank = container, rank
    return best
