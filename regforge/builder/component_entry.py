"""regforge.builder.component_entry

Everything needed to build one level of an input tree: the component class,
its factory class, the base feature class and the feature registry holding the
features defined for that level.
"""

from __future__ import annotations

from typing import Optional, Type

from regforge.input_base.component import Component
from regforge.input_base.component_factory import ComponentFactory
from regforge.input_base.feature import Feature
from regforge.input_base.feature_factory import FeatureFactory

from .feature_registry import FeatureRegistry


class ComponentEntry:
    def __init__(
        self,
        component_name: str,
        layer: Optional[str] = None,
        *,
        component: Type[Component] = Component,
        component_factory: Type[ComponentFactory] = ComponentFactory,
        base_feature: Type[Feature] = Feature,
        feature_factory: Type[FeatureFactory] = FeatureFactory,
    ) -> None:
        self.component_name = component_name
        self.layer = layer
        self.component = component
        self.component_factory = component_factory
        self.base_feature = base_feature
        self.feature_factory = feature_factory
        self.feature_registry = FeatureRegistry(base_feature, feature_factory)

    def build_factory(self) -> ComponentFactory:
        return self.component_factory(
            self.component_name,
            target_component=self.component,
            feature_factories=self.feature_registry.build_factories(),
            layer=self.layer,
        )

    def __repr__(self) -> str:
        return f"<ComponentEntry {self.component_name!r} layer={self.layer!r}>"
