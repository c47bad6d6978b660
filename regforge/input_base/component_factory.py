"""regforge.input_base.component_factory

Builds a component tree from input files.

Arguments
---------
The last positional argument of ``create`` carries the input:

- root factory: the list of source files (a single path is accepted too, and so
  is a ready :class:`InputData`). The files are loaded into one InputData tree
  whose per-depth valid names come from the active features of this factory
  and of its descendants.
- child factory: the :class:`InputData` record for the new component.

Everything before it (after the parent, for child factories) is an *extra*
argument: it goes through ``preprocess`` and is handed to every feature factory
and child factory unchanged. Register-map trees use this to pass the
configuration component down.

Per node: active features (each with its input value), then passive features,
then one child per child record, then ``post_build``, then component-local
verification, then ``parent.add_child``. The root additionally runs
``finalize`` and whole-tree verification.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple, Type

from regforge.base.component_factory import ComponentFactory as BaseComponentFactory
from regforge.errors import LoadError

from .component import Component
from .feature import VERIFY_ALL, VERIFY_COMPONENT
from .input_data import InputData
from .loader import Loader

logger = logging.getLogger(__name__)


class ComponentFactory(BaseComponentFactory):
    input_data_class: Type[InputData] = InputData

    def __init__(
        self, component_name: str, *, target_component: Type[Component] = Component, **kwargs: Any
    ) -> None:
        super().__init__(component_name, target_component=target_component, **kwargs)
        self._loaders: List[Type[Loader]] = []

    def loaders(self, loaders: Sequence[Type[Loader]]) -> "ComponentFactory":
        self._loaders = list(loaders)
        return self

    def create(self, *args: Any) -> Component:
        component = super().create(*args)
        if self.is_root:
            component.verify(VERIFY_ALL)
        return component

    # ----------------------------
    # Input
    # ----------------------------

    def process_sources(self, sources: List[Any]) -> List[Any]:
        if not sources:
            if not self.is_root:
                raise TypeError(f"{type(self).__name__}.create() needs the input data")
            extras, input_source = [], []
        else:
            *extras, input_source = sources
        input_data = self.load_files(input_source) if self.is_root else input_source
        return [*self.preprocess(extras), input_data]

    @property
    def valid_value_lists(self) -> List[List[str]]:
        lists = [self.active_feature_names()]
        if self.child_factory is not None:
            lists.extend(self.child_factory.valid_value_lists)
        return lists

    def active_feature_names(self) -> List[str]:
        return [name for name, f in self.feature_factories.items() if f.active_feature_factory()]

    def create_input_data(self) -> InputData:
        return self.input_data_class(self.valid_value_lists)

    def load_files(self, sources: Any) -> InputData:
        if isinstance(sources, InputData):
            return sources
        if isinstance(sources, (str, Path)):
            sources = [sources]
        paths = [Path(s) for s in sources]
        input_data = self.create_input_data()
        valid_value_lists = input_data.valid_value_lists
        for path in paths:
            self.find_loader(path).load_file(path, input_data, valid_value_lists)
        logger.debug("%s: loaded %d source file(s)", self.component_name, len(paths))
        return input_data

    def find_loader(self, path: Path) -> Type[Loader]:
        for loader in self._loaders:
            if loader.supports(path):
                return loader
        raise LoadError("unsupported file type", path)

    # ----------------------------
    # Assembly
    # ----------------------------

    def _split_input(self, args: Sequence[Any]) -> Tuple[List[Any], InputData]:
        *extras, input_data = args
        return extras, input_data

    def create_component(self, parent: Optional[Component], *args: Any) -> Component:
        extras, input_data = self._split_input(args)
        component = self.target_component(parent, self.component_name, self.layer, *extras)
        component.position = input_data.position
        return component

    def build_component(self, parent: Optional[Component], component: Component, args: Sequence[Any]) -> None:
        self.create_features(component, *args)
        if component.need_children:
            self.create_children(component, *args)
        self.post_build(component)
        component.verify(VERIFY_COMPONENT)
        if parent is not None:
            parent.add_child(component)

    def create_features(self, component: Component, *args: Any) -> None:
        extras, input_data = self._split_input(args)
        factories = list(self.feature_factories.items())
        for name, factory in factories:
            if factory.active_feature_factory():
                self.create_feature(component, factory, *extras, input_data[name])
        for name, factory in factories:
            if factory.passive_feature_factory():
                self.create_feature(component, factory, *extras)

    def create_children(self, component: Component, *args: Any) -> None:
        if self.child_factory is None:
            return
        extras, input_data = self._split_input(args)
        for child_data in input_data.children:
            self.create_child(component, *extras, child_data)
