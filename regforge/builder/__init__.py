"""regforge.builder

Configuration-time registry layer: plugins declare and enable features here,
and the builder turns the result into component factories.
"""

from .builder import CATEGORIES, Builder
from .category import Category, FeatureDeclaration
from .component_entry import ComponentEntry
from .component_registry import ComponentRegistry
from .feature_entry import ListFeatureEntry, SimpleFeatureEntry
from .feature_registry import FeatureRegistry

__all__ = [
    "CATEGORIES",
    "Builder",
    "Category",
    "ComponentEntry",
    "ComponentRegistry",
    "FeatureDeclaration",
    "FeatureRegistry",
    "ListFeatureEntry",
    "SimpleFeatureEntry",
]
