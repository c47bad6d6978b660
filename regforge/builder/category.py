"""regforge.builder.category

A category groups the feature registries that describe the same level of the
model across several component registries (for instance the ``register`` level
of both the register-map input and an output writer).

Declaring a feature on a category fans out to every registry of that category.
The declaration body receives a :class:`FeatureDeclaration` and attaches one
class body per registry::

    def bit_width(declaration):
        declaration.shared_context()
        declaration.body("register_map", define_bit_width)

    builder.define_simple_feature("global", "bit_width", bit_width)

Registries without a body still get the feature, as a plain subclass of their
base feature.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Sequence

from regforge.errors import BuilderError

from .feature_registry import FeatureRegistry, Names, coerce_names, single_list_name


class FeatureDeclaration:
    def __init__(self, category_name: str, registry_names: Sequence[str]) -> None:
        self.category_name = category_name
        self.registry_names = tuple(registry_names)
        self._bodies: Dict[str, Any] = {}
        self._context: Optional[Any] = None

    def body(self, registry_name: str, body: Any) -> None:
        if registry_name not in self.registry_names:
            raise BuilderError(f"unknown feature registry: {registry_name} (category {self.category_name})")
        self._bodies[registry_name] = body

    def body_for(self, registry_name: str) -> Any:
        return self._bodies.get(registry_name)

    def shared_context(self, init: Optional[Callable[[], Any]] = None) -> Any:
        """Object shared by the classes of every registry of this declaration."""
        if self._context is None:
            self._context = init() if init is not None else SimpleNamespace()
        return self._context

    @property
    def context(self) -> Optional[Any]:
        return self._context


class Category:
    def __init__(self, name: str) -> None:
        self.name = name
        self._registries: Dict[str, FeatureRegistry] = {}
        self._list_names: List[str] = []

    def add_feature_registry(self, registry_name: str, registry: FeatureRegistry) -> None:
        self._registries[registry_name] = registry

    @property
    def registry_names(self):
        return list(self._registries)

    def feature_registry(self, registry_name: str) -> FeatureRegistry:
        if registry_name not in self._registries:
            raise BuilderError(f"unknown feature registry: {registry_name} (category {self.name})")
        return self._registries[registry_name]

    def declare(self, body: Optional[Callable[[FeatureDeclaration], Any]]) -> FeatureDeclaration:
        declaration = FeatureDeclaration(self.name, list(self._registries))
        if body is not None:
            body(declaration)
        return declaration

    def _check_list(self, list_name: str) -> None:
        if list_name not in self._list_names:
            raise BuilderError(f"unknown list feature: {list_name}")

    def define_simple_feature(self, names: Names, body: Optional[Callable[..., Any]] = None) -> None:
        for name in coerce_names(names):
            declaration = self.declare(body)
            for registry_name, registry in self._registries.items():
                registry.define_simple_feature(name, declaration.body_for(registry_name), declaration.context)

    def define_list_feature(self, list_names: Names, body: Optional[Callable[..., Any]] = None) -> None:
        for list_name in coerce_names(list_names):
            if list_name not in self._list_names:
                self._list_names.append(list_name)
            declaration = self.declare(body)
            for registry_name, registry in self._registries.items():
                registry.define_list_feature(
                    list_name, declaration.body_for(registry_name), declaration.context
                )

    def define_list_item_feature(
        self, list_name: str, item_names: Names, body: Optional[Callable[..., Any]] = None
    ) -> None:
        self._check_list(list_name)
        for item_name in coerce_names(item_names):
            declaration = self.declare(body)
            for registry_name, registry in self._registries.items():
                registry.define_list_item_feature(
                    list_name, item_name, declaration.body_for(registry_name), declaration.context
                )

    def enable(self, names: Names, item_names: Names = None) -> None:
        if item_names is not None:
            self._check_list(single_list_name(names))
        for registry in self._registries.values():
            registry.enable(names, item_names)

    def disable(self, names: Names = None, item_names: Names = None) -> None:
        for registry in self._registries.values():
            registry.disable(names, item_names)

    def delete(self, names: Names = None, item_names: Names = None) -> None:
        if names is None:
            self._list_names.clear()
        elif item_names is None:
            dropped = set(coerce_names(names))
            self._list_names = [n for n in self._list_names if n not in dropped]
        for registry in self._registries.values():
            registry.delete(names, item_names)
