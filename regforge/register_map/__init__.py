"""regforge.register_map

Four-level register-map tree: ``register_map`` -> ``register_block`` ->
``register`` -> ``bit_field``. Each level has its own feature category of the
same name, and every component of the tree receives the configuration
component as its extra argument.
"""

from .component import RegisterMapComponent
from .component_factory import RegisterMapComponentFactory
from .feature import RegisterMapFeature
from .hierarchy import LAYERS, RegisterMapHierarchy
from .input_data import RegisterMapInputData
from .setup import setup

__all__ = [
    "LAYERS",
    "RegisterMapComponent",
    "RegisterMapComponentFactory",
    "RegisterMapFeature",
    "RegisterMapHierarchy",
    "RegisterMapInputData",
    "setup",
]
