"""regforge.builder.component_registry

Registry of one input tree (``configuration``, ``register_map``, ...).

It holds one :class:`ComponentEntry` per level, top-down, and the loaders that
may read its sources. ``build_root_factory`` chains the per-level factories
into a root factory ready to ``create`` a tree from files.

Registering a level also registers its feature registry with the builder's
category for that level, so feature declarations made on the category reach it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Optional, Sequence, Type

from regforge.errors import BuilderError
from regforge.input_base.component_factory import ComponentFactory
from regforge.input_base.loader import HashLoader, Loader

from .component_entry import ComponentEntry

if TYPE_CHECKING:
    from .builder import Builder

logger = logging.getLogger(__name__)


class ComponentRegistry:
    def __init__(self, name: str, builder: "Builder") -> None:
        self.name = name
        self.builder = builder
        self._entries: List[ComponentEntry] = []
        self._loaders: List[Type[Loader]] = []

    @property
    def entries(self) -> List[ComponentEntry]:
        return list(self._entries)

    @property
    def loaders(self) -> List[Type[Loader]]:
        return list(self._loaders)

    def register_component(
        self,
        layer: Optional[str] = None,
        *,
        category: Optional[str] = None,
        **options: Any,
    ) -> ComponentEntry:
        """Add the next level down.

        ``category`` defaults to ``layer``; ``options`` are the component,
        factory and feature classes of :class:`ComponentEntry`.
        """
        entry = ComponentEntry(self.name, layer, **options)
        self._entries.append(entry)
        self.builder.add_feature_registry(self.name, category or layer, entry.feature_registry)
        return entry

    def register_loader(self, loader: Type[Loader]) -> None:
        if not (isinstance(loader, type) and issubclass(loader, Loader)):
            raise BuilderError(f"not a loader class: {loader!r}")
        self._loaders.append(loader)

    def register_loaders(self, loaders: Iterable[Type[Loader]]) -> None:
        for loader in loaders:
            self.register_loader(loader)

    def define_loader(
        self,
        support_types: Sequence[str],
        read_file: Callable[[Path], Any],
        base: Type[Loader] = HashLoader,
    ) -> Type[Loader]:
        """Register a loader made from a reader function.

        The reader returns the parsed structure of one file; the base class
        (mapping-shaped by default) stores it into the input data.
        """
        loader = type(
            f"{self.name.title().replace('_', '')}Loader",
            (base,),
            {
                "support_types": tuple(support_types),
                "read_file": lambda self, path: read_file(path),
            },
        )
        self.register_loader(loader)
        return loader

    def build_root_factory(self) -> ComponentFactory:
        if not self._entries:
            raise BuilderError(f"no component is registered: {self.name}")
        factories = [entry.build_factory() for entry in self._entries]
        for parent, child in zip(factories, factories[1:]):
            parent.child_factory = child
        root = factories[0].root_factory()
        root.loaders(self._loaders)
        logger.debug("%s: built %d level(s), %d loader(s)", self.name, len(factories), len(self._loaders))
        return root
