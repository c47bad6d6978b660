from __future__ import annotations

from typing import Any

from regforge.input_base.loader import DEFAULT_LOADERS

from .component import RegisterMapComponent
from .component_factory import RegisterMapComponentFactory
from .feature import RegisterMapFeature
from .hierarchy import LAYERS

NAME = "register_map"


def _register(registry: Any) -> None:
    for layer in LAYERS:
        registry.register_component(
            layer,
            component=RegisterMapComponent,
            component_factory=RegisterMapComponentFactory,
            base_feature=RegisterMapFeature,
        )
    registry.register_loaders(DEFAULT_LOADERS)


def setup(builder: Any) -> None:
    """Register the register-map input tree with ``builder``."""
    builder.input_component_registry(NAME, _register)
