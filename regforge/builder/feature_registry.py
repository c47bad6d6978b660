"""regforge.builder.feature_registry

Per-component registry of feature definitions and of which of them are enabled.

Definition and enablement are independent:

- ``define_*`` records what a feature *is*
- ``enable`` records that it should be *built*, in enable order
- ``build_factories`` joins the two: only slots that are both defined and
  enabled get a factory

Variants of a list slot are enabled per list (``enable("type", ["rw", "ro"])``).
Enabled variants of a list that is not itself enabled are kept but unused;
``disable("type")`` removes the slot but keeps its enabled variants.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, Union

from regforge.errors import BuilderError
from regforge.input_base.feature_factory import FeatureFactory

from .feature_entry import ListFeatureEntry, SimpleFeatureEntry

Names = Union[str, Sequence[str], None]
FeatureEntry = Union[SimpleFeatureEntry, ListFeatureEntry]


def coerce_names(names: Names) -> Tuple[str, ...]:
    """Normalise one name or many names into an ordered, de-duplicated tuple."""
    if names is None:
        return ()
    if isinstance(names, str):
        names = [names]
    out: List[str] = []
    seen = set()
    for n in names:
        s = str(n).strip()
        if not s or s in seen:
            continue
        seen.add(s)
        out.append(s)
    return tuple(out)


def single_list_name(names: Names) -> str:
    list_names = coerce_names(names)
    if len(list_names) != 1:
        raise BuilderError(f"list item operations take exactly one list name: {names!r}")
    return list_names[0]


class FeatureRegistry:
    def __init__(self, base_feature: Type[Any], factory_class: Type[FeatureFactory] = FeatureFactory) -> None:
        self.base_feature = base_feature
        self.factory_class = factory_class
        self._entries: Dict[str, FeatureEntry] = {}
        self._enabled_features: List[str] = []
        self._enabled_items: Dict[str, List[str]] = {}

    # ----------------------------
    # Definition
    # ----------------------------

    def define_simple_feature(
        self, name: str, body: Any = None, shared_context: Optional[Any] = None
    ) -> SimpleFeatureEntry:
        entry = SimpleFeatureEntry(name, self.base_feature, self.factory_class)
        entry.define(body, shared_context)
        self._entries[name] = entry
        return entry

    def define_list_feature(
        self, name: str, body: Any = None, shared_context: Optional[Any] = None
    ) -> ListFeatureEntry:
        entry = ListFeatureEntry(name, self.base_feature, self.factory_class)
        entry.define(body, shared_context)
        self._entries[name] = entry
        return entry

    def define_list_item_feature(
        self, list_name: str, item_name: str, body: Any = None, shared_context: Optional[Any] = None
    ) -> Type[Any]:
        return self.list_entry(list_name).define_feature(item_name, body, shared_context)

    def list_entry(self, list_name: str) -> ListFeatureEntry:
        entry = self._entries.get(list_name)
        if not isinstance(entry, ListFeatureEntry):
            raise BuilderError(f"unknown list feature: {list_name}")
        return entry

    def feature(self, name: str) -> FeatureEntry:
        return self._entries[name]

    def defined(self, name: str) -> bool:
        return name in self._entries

    @property
    def feature_names(self) -> List[str]:
        return list(self._entries)

    # ----------------------------
    # Enablement
    # ----------------------------

    def enable(self, names: Names, item_names: Names = None) -> None:
        if item_names is None:
            for name in coerce_names(names):
                if name not in self._enabled_features:
                    self._enabled_features.append(name)
            return

        list_name = single_list_name(names)
        entry = self.list_entry(list_name)
        enabled = self._enabled_items.setdefault(list_name, [])
        for item_name in coerce_names(item_names):
            if not entry.defines(item_name):
                raise BuilderError(f"unknown list feature: {list_name}.{item_name}")
            if item_name not in enabled:
                enabled.append(item_name)

    def enabled(self, name: str, item_name: Optional[str] = None) -> bool:
        entry = self._entries.get(name)
        if item_name is None:
            return entry is not None and name in self._enabled_features
        return (
            isinstance(entry, ListFeatureEntry)
            and entry.defines(item_name)
            and item_name in self._enabled_items.get(name, ())
        )

    @property
    def enabled_features(self) -> List[str]:
        return list(self._enabled_features)

    def disable(self, names: Names = None, item_names: Names = None) -> None:
        if names is None:
            self._enabled_features.clear()
            self._enabled_items.clear()
            return
        if item_names is None:
            dropped = set(coerce_names(names))
            self._enabled_features = [n for n in self._enabled_features if n not in dropped]
            return

        list_name = single_list_name(names)
        dropped = set(coerce_names(item_names))
        if list_name in self._enabled_items:
            self._enabled_items[list_name] = [i for i in self._enabled_items[list_name] if i not in dropped]

    def delete(self, names: Names = None, item_names: Names = None) -> None:
        if names is None:
            self._entries.clear()
            return
        if item_names is None:
            for name in coerce_names(names):
                self._entries.pop(name, None)
            return

        list_name = single_list_name(names)
        entry = self._entries.get(list_name)
        if isinstance(entry, ListFeatureEntry):
            entry.delete_features(coerce_names(item_names))

    # ----------------------------
    # Factories
    # ----------------------------

    def build_factories(self) -> Dict[str, FeatureFactory]:
        factories: Dict[str, FeatureFactory] = {}
        for name in self._enabled_features:
            entry = self._entries.get(name)
            if entry is None:
                continue
            factories[name] = entry.build_factory(self._enabled_items.get(name, ()))
        return factories
