"""Hierarchical category taxonomy with top-level scoped leaf lookups."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import cached_property

from catalog_resolver.models import DEFAULT_CATEGORY_ICON
from catalog_resolver.text import fold_label

_ROOT_ICONS = {
    "women": "👗",
    "men": "👔",
    "kids": "👶",
    "home": "🏠",
    "beauty": "💄",
}

_TYPE_ICONS = {
    "clothing": "👕",
    "shoes": "👟",
    "bags": "👜",
    "accessories": "💍",
    "jewelry": "💎",
}


@dataclass(frozen=True)
class CategoryNode:
    id: str
    label: str
    children: tuple["CategoryNode", ...] = ()


@dataclass(frozen=True)
class FlatCategory:
    id: str
    label: str
    full_label: str
    path: tuple[str, ...]
    depth: int
    is_leaf: bool

    @property
    def top_level(self) -> str:
        return self.path[0]


@dataclass
class Taxonomy:
    """Flattened view over a category tree.

    Leaf lookups are scoped by top-level id (``women``, ``men``, ``kids``);
    an empty scope means every leaf of the tree.
    """

    roots: Sequence[CategoryNode]
    separator: str = " > "
    _by_id: dict[str, FlatCategory] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._by_id = {category.id: category for category in self.flat}

    @cached_property
    def flat(self) -> tuple[FlatCategory, ...]:
        flattened: list[FlatCategory] = []
        self._flatten(self.roots, (), (), flattened)
        return tuple(flattened)

    def _flatten(
        self,
        nodes: Sequence[CategoryNode],
        path: tuple[str, ...],
        labels: tuple[str, ...],
        out: list[FlatCategory],
    ) -> None:
        for node in nodes:
            current_path = (*path, node.id)
            current_labels = (*labels, node.label)
            out.append(
                FlatCategory(
                    id=node.id,
                    label=node.label,
                    full_label=self.separator.join(current_labels),
                    path=current_path,
                    depth=len(current_path),
                    is_leaf=not node.children,
                )
            )
            self._flatten(node.children, current_path, current_labels, out)

    @property
    def top_level_ids(self) -> tuple[str, ...]:
        return tuple(root.id for root in self.roots)

    def find_by_id(self, category_id: str) -> FlatCategory | None:
        return self._by_id.get(category_id)

    def leaves(self, top_level: str = "") -> list[FlatCategory]:
        if top_level and top_level not in self.top_level_ids:
            top_level = ""
        return [
            category
            for category in self.flat
            if category.is_leaf and category.depth > 1 and (not top_level or category.top_level == top_level)
        ]

    def find_leaf_by_label(self, label: str, top_level: str = "") -> FlatCategory | None:
        """Exact, accent- and case-insensitive label lookup among scoped leaves."""

        key = fold_label(label)
        if not key:
            return None
        for category in self.leaves(top_level):
            if fold_label(category.label) == key:
                return category
        return None

    def icon_for(self, path: Sequence[str]) -> str:
        if not path:
            return DEFAULT_CATEGORY_ICON
        root = path[0]
        kind = ""
        if len(path) > 1:
            kind = path[1].removeprefix(f"{root}_")
        return _TYPE_ICONS.get(kind) or _ROOT_ICONS.get(root) or DEFAULT_CATEGORY_ICON
