"""regforge.configuration

Flat settings tree (one component, no children) read before the register map.
Its features are declared on the ``global`` category.
"""

from .component import ConfigurationComponent
from .component_factory import ConfigurationComponentFactory
from .feature import ConfigurationFeature
from .setup import setup

__all__ = [
    "ConfigurationComponent",
    "ConfigurationComponentFactory",
    "ConfigurationFeature",
    "setup",
]
