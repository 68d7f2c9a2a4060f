from catalog_resolver.datasets.categories import CATEGORY_TREE, DEFAULT_TAXONOMY, GENRE_TO_TOP_LEVEL
from catalog_resolver.datasets.colors import COLOR_HEX, COLOR_RECORDS
from catalog_resolver.datasets.conditions import CONDITION_ALIASES, CONDITION_LABELS, DEFAULT_CONDITION
from catalog_resolver.datasets.materials import MATERIAL_RECORDS

__all__ = [
    "CATEGORY_TREE",
    "DEFAULT_TAXONOMY",
    "GENRE_TO_TOP_LEVEL",
    "COLOR_HEX",
    "COLOR_RECORDS",
    "CONDITION_ALIASES",
    "CONDITION_LABELS",
    "DEFAULT_CONDITION",
    "MATERIAL_RECORDS",
]
