# src/reconciler/model.py
from __future__ import annotations

from typing import Dict, FrozenSet, List, Literal, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

LeafKind = Literal["heading", "paragraph", "image", "button", "list"]


class LeafElement(BaseModel):
    """An original-markup tag carrying content, identified by its fingerprint key."""
    model_config = ConfigDict(frozen=True)

    id: int
    kind: LeafKind
    key: str
    classes: Tuple[str, ...] = ()


class ContainerElement(BaseModel):
    """An original-markup wrapper described by the fingerprints of the leaves inside it."""
    model_config = ConfigDict(frozen=True)

    id: int
    classes: Tuple[str, ...]
    leaf_keys: Tuple[str, ...]

    @property
    def leaf_key_set(self) -> FrozenSet[str]:
        return frozenset(self.leaf_keys)


class LeafIndex(BaseModel):
    """Immutable leaf records plus lookup buckets by key and by kind."""
    model_config = ConfigDict(frozen=True)

    leaves: Tuple[LeafElement, ...] = ()
    by_key: Dict[str, List[LeafElement]] = Field(default_factory=dict)
    by_kind: Dict[str, List[LeafElement]] = Field(default_factory=dict)


class MatchThresholds(BaseModel):
    """
    Minimum overlap a container needs to match a target key set:
    `small_target_min_overlap` keys when the target has at most
    `small_target_max_keys` keys, otherwise ceil(ratio * target size).
    """
    small_target_max_keys: int = 3
    small_target_min_overlap: int = 1
    min_overlap_ratio: float = 0.3


class ReconcileState(BaseModel):
    """Identifiers consumed during one reconciliation call."""
    used_leaf_ids: Set[int] = Field(default_factory=set)
    used_container_ids: Set[int] = Field(default_factory=set)
