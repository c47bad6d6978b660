"""regforge.base.component

One node of the hierarchical domain tree.

A component owns its children and its features, and exposes the properties of
its features as its own attributes::

    register.name        # resolved through the feature that declared "name"

Resolution goes through a name -> feature map filled by :meth:`add_feature`;
nothing is generated per name.

The parent is held through a weak reference: the tree is owned top-down.
"""

from __future__ import annotations

import weakref
from typing import Any, Dict, Iterator, List, Optional


class Component:
    def __init__(
        self,
        parent: Optional["Component"],
        component_name: str,
        layer: Optional[str] = None,
        *args: Any,
    ) -> None:
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self.component_name = component_name
        self.layer = layer
        self.level = parent.level + 1 if parent is not None else 0
        self.arguments = tuple(args)
        self._children: List[Component] = []
        self._features: Dict[str, Any] = {}
        self._property_owners: Dict[str, Any] = {}
        self._need_children = True
        self.post_initialize(*args)

    def post_initialize(self, *args: Any) -> None:
        pass

    @property
    def parent(self) -> Optional["Component"]:
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> List["Component"]:
        return list(self._children)

    @property
    def features(self) -> List[Any]:
        return list(self._features.values())

    @property
    def need_children(self) -> bool:
        return self._need_children

    def need_no_children(self) -> None:
        self._need_children = False

    def add_child(self, child: "Component") -> None:
        if any(c is child for c in self._children):
            return
        child._parent_ref = weakref.ref(self)
        self._children.append(child)

    def add_feature(self, key: str, feature: Any) -> None:
        if key in self._features:
            raise ValueError(f"Duplicate feature '{key}' on {self!r}")
        self._features[key] = feature
        for name in getattr(feature, "properties", list)():
            self._property_owners[name] = feature

    def feature(self, key: str) -> Any:
        return self._features[key]

    def has_feature(self, key: str) -> bool:
        return key in self._features

    @property
    def properties(self) -> List[str]:
        return list(self._property_owners)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        owners = self.__dict__.get("_property_owners") or {}
        if name not in owners:
            raise AttributeError(
                f"{type(self).__name__} ({self.component_name}) has no property '{name}'"
            )
        return getattr(owners[name], name)

    def walk(self) -> Iterator["Component"]:
        """Depth-first, pre-order traversal of this subtree."""
        yield self
        for child in self._children:
            yield from child.walk()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.component_name!r} level={self.level}>"
