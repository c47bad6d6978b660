"""regforge.base.component_factory

Recursive builder of component trees.

``create`` has two forms:

- root factory (``root_factory()`` was called): ``create(*args)`` allocates a
  component without parent and runs :meth:`finalize` once the whole tree is
  assembled
- child factory: ``create(parent, *args)`` allocates a component under
  ``parent`` and registers it with ``parent.add_child``

Per node: allocate -> features -> children (unless the component says it needs
none) -> :meth:`post_build` -> attach to the parent.

The positional arguments following the parent go through :meth:`preprocess`
at every node and are then forwarded unchanged to every feature factory and to
the child factory.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from .component import Component
from .feature_factory import FeatureFactory


class ComponentFactory:
    def __init__(
        self,
        component_name: str,
        *,
        target_component: Type[Component] = Component,
        feature_factories: Optional[Mapping[str, FeatureFactory]] = None,
        child_factory: Optional["ComponentFactory"] = None,
        layer: Optional[str] = None,
    ) -> None:
        self.component_name = component_name
        self.target_component = target_component
        self.feature_factories: Dict[str, FeatureFactory] = dict(feature_factories or {})
        self.child_factory = child_factory
        self.layer = layer
        self._root = False

    def root_factory(self) -> "ComponentFactory":
        self._root = True
        return self

    @property
    def is_root(self) -> bool:
        return self._root

    def create(self, *args: Any) -> Component:
        parent, sources = self._split_arguments(args)
        sources = self.process_sources(list(sources))
        component = self.create_component(parent, *sources)
        self.build_component(parent, component, sources)
        if self._root:
            self.finalize(component)
        return component

    def _split_arguments(self, args: Sequence[Any]) -> Tuple[Optional[Component], Sequence[Any]]:
        if self._root:
            return None, args
        if not args:
            raise TypeError(f"{type(self).__name__}.create() needs the parent component")
        return args[0], args[1:]

    # ----------------------------
    # Hooks
    # ----------------------------

    def process_sources(self, sources: List[Any]) -> List[Any]:
        return list(self.preprocess(sources))

    def preprocess(self, args: Sequence[Any]) -> Sequence[Any]:
        return args

    def post_build(self, component: Component) -> None:
        pass

    def finalize(self, component: Component) -> None:
        pass

    # ----------------------------
    # Assembly
    # ----------------------------

    def create_component(self, parent: Optional[Component], *args: Any) -> Component:
        return self.target_component(parent, self.component_name, self.layer, *args)

    def build_component(self, parent: Optional[Component], component: Component, args: Sequence[Any]) -> None:
        self.create_features(component, *args)
        if component.need_children:
            self.create_children(component, *args)
        self.post_build(component)
        if parent is not None:
            parent.add_child(component)

    def create_features(self, component: Component, *args: Any) -> None:
        for factory in self.feature_factories.values():
            self.create_feature(component, factory, *args)

    def create_feature(self, component: Component, factory: FeatureFactory, *args: Any) -> Any:
        feature = factory.create(component, *args)
        if feature is None or not feature.available():
            return None
        component.add_feature(factory.feature_name, feature)
        return feature

    def create_children(self, component: Component, *args: Any) -> None:
        if self.child_factory is not None:
            self.create_child(component, *args)

    def create_child(self, component: Component, *args: Any) -> Component:
        return self.child_factory.create(component, *args)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.component_name!r} layer={self.layer!r}>"
