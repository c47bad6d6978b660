from __future__ import annotations

from typing import Any

from regforge.input_base.loader import DEFAULT_LOADERS

from .component import ConfigurationComponent
from .component_factory import ConfigurationComponentFactory
from .feature import ConfigurationFeature

NAME = "configuration"
CATEGORY = "global"


def _register(registry: Any) -> None:
    registry.register_component(
        category=CATEGORY,
        component=ConfigurationComponent,
        component_factory=ConfigurationComponentFactory,
        base_feature=ConfigurationFeature,
    )
    registry.register_loaders(DEFAULT_LOADERS)


def setup(builder: Any) -> None:
    """Register the configuration input tree with ``builder``."""
    builder.input_component_registry(NAME, _register)
