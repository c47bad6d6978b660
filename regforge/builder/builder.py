"""regforge.builder.builder

Entry point used by plugins.

The builder owns:

- the fixed feature categories (``global``, ``register_map``,
  ``register_block``, ``register``, ``bit_field``)
- the input component registries (``configuration``, ``register_map``, ...)

Plugins receive it in their ``setup(builder)`` function::

    def setup(builder):
        builder.define_simple_feature("register", "name", define_name)
        builder.enable("register", "name")

Plugins are loaded either by module name or from a ``.py`` file.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
from pathlib import Path
from types import ModuleType
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Type

from regforge.errors import BuilderError
from regforge.input_base.component_factory import ComponentFactory
from regforge.input_base.loader import Loader

from .category import Category
from .component_registry import ComponentRegistry
from .feature_registry import FeatureRegistry, Names

logger = logging.getLogger(__name__)

CATEGORIES = ("global", "register_map", "register_block", "register", "bit_field")


def _load_module_from_path(path: Path) -> ModuleType:
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise BuilderError(f"plugin file not found: {p}")
    if p.suffix.lower() != ".py":
        raise BuilderError(f"plugin file must be a .py file: {p}")
    mod_name = f"regforge_plugin_{p.stem}_{abs(hash(str(p)))}"
    spec = importlib.util.spec_from_file_location(mod_name, str(p))
    if spec is None or spec.loader is None:
        raise BuilderError(f"unable to import plugin file: {p}")
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)  # type: ignore[union-attr]
    return mod


class Builder:
    def __init__(self) -> None:
        self._categories: Dict[str, Category] = {name: Category(name) for name in CATEGORIES}
        self._component_registries: Dict[str, ComponentRegistry] = {}
        self._plugins: List[str] = []

    # ----------------------------
    # Registries
    # ----------------------------

    def category(self, name: str) -> Category:
        if name not in self._categories:
            raise BuilderError(f"unknown category: {name}")
        return self._categories[name]

    def component_registry(self, name: str) -> ComponentRegistry:
        if name not in self._component_registries:
            raise BuilderError(f"unknown component: {name}")
        return self._component_registries[name]

    def input_component_registry(
        self, name: str, body: Optional[Callable[[ComponentRegistry], Any]] = None
    ) -> ComponentRegistry:
        registry = self._component_registries.get(name)
        if registry is None:
            registry = self._component_registries[name] = ComponentRegistry(name, self)
        if body is not None:
            body(registry)
        return registry

    def add_feature_registry(self, name: str, category: Optional[str], registry: FeatureRegistry) -> None:
        categories = [self.category(category)] if category else list(self._categories.values())
        for c in categories:
            c.add_feature_registry(name, registry)

    def register_loader(self, component: str, loader: Type[Loader]) -> None:
        self.component_registry(component).register_loader(loader)

    def register_loaders(self, component: str, loaders: Iterable[Type[Loader]]) -> None:
        self.component_registry(component).register_loaders(loaders)

    def define_loader(
        self, component: str, support_types: Sequence[str], read_file: Callable[..., Any], **kwargs: Any
    ) -> Type[Loader]:
        return self.component_registry(component).define_loader(support_types, read_file, **kwargs)

    # ----------------------------
    # Features
    # ----------------------------

    def define_simple_feature(
        self, category: str, names: Names, body: Optional[Callable[..., Any]] = None
    ) -> None:
        self.category(category).define_simple_feature(names, body)

    def define_list_feature(
        self, category: str, list_names: Names, body: Optional[Callable[..., Any]] = None
    ) -> None:
        self.category(category).define_list_feature(list_names, body)

    def define_list_item_feature(
        self, category: str, list_name: str, item_names: Names, body: Optional[Callable[..., Any]] = None
    ) -> None:
        self.category(category).define_list_item_feature(list_name, item_names, body)

    def enable(self, category: str, names: Names, item_names: Names = None) -> None:
        self.category(category).enable(names, item_names)

    def disable(self, category: Optional[str] = None, names: Names = None, item_names: Names = None) -> None:
        categories = [self.category(category)] if category else list(self._categories.values())
        for c in categories:
            c.disable(names, item_names)

    def delete(self, category: Optional[str] = None, names: Names = None, item_names: Names = None) -> None:
        categories = [self.category(category)] if category else list(self._categories.values())
        for c in categories:
            c.delete(names, item_names)

    # ----------------------------
    # Factories
    # ----------------------------

    def build_input_component_factory(self, component: str) -> ComponentFactory:
        return self.component_registry(component).build_root_factory()

    def register_input_components(self) -> None:
        from regforge import configuration, register_map

        configuration.setup(self)
        register_map.setup(self)

    # ----------------------------
    # Plugins
    # ----------------------------

    @property
    def plugins(self) -> List[str]:
        return list(self._plugins)

    def load_plugin(self, plugin: str | Path) -> ModuleType:
        """Import a plugin (module name or ``.py`` path) and run its ``setup(builder)``."""
        text = str(plugin)
        if isinstance(plugin, Path) or text.endswith(".py"):
            module = _load_module_from_path(Path(text))
        else:
            try:
                module = importlib.import_module(text)
            except ImportError as e:
                raise BuilderError(f"cannot load plugin: {text} ({e})") from e

        setup = getattr(module, "setup", None)
        if not callable(setup):
            raise BuilderError(f"plugin has no setup(builder) function: {text}")
        setup(self)
        self._plugins.append(text)
        logger.info("loaded plugin %s", text)
        return module

    def load_plugins(self, plugins: Iterable[str | Path]) -> None:
        for plugin in plugins:
            self.load_plugin(plugin)
