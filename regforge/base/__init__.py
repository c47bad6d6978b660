"""regforge.base

Schema-agnostic object model: components, features and their factories.
"""

from .component import Component
from .component_factory import ComponentFactory
from .feature import Feature
from .feature_factory import FeatureFactory
from .hierarchical_accessors import HierarchicalAccessors

__all__ = [
    "Component",
    "ComponentFactory",
    "Feature",
    "FeatureFactory",
    "HierarchicalAccessors",
]
