"""regforge.base.hierarchical_accessors

Level-indexed lookup of ancestors and descendants.

A schema names its levels once (``hierarchy_layers``); a component at level
``n`` then answers ``hierarchy`` with the ``n``-th name and can reach:

- any ancestor-or-self by layer name (``ancestor("register_block")``)
- every descendant at a deeper layer (``descendants("bit_field")``)

The mixin works on components directly, and on features through their
``component`` attribute.
"""

from __future__ import annotations

from typing import Any, List, Tuple


class HierarchicalAccessors:
    hierarchy_layers: Tuple[str, ...] = ()

    def _hierarchy_node(self) -> Any:
        # Features reach the tree through their component.
        return getattr(self, "component", self)

    def _layer_level(self, layer: str) -> int:
        try:
            return self.hierarchy_layers.index(layer)
        except ValueError:
            raise AttributeError(f"Unknown hierarchy layer: {layer}") from None

    @property
    def hierarchy(self) -> str:
        level = self._hierarchy_node().level
        if level >= len(self.hierarchy_layers):
            raise AttributeError(f"No hierarchy layer at level {level}")
        return self.hierarchy_layers[level]

    def ancestor(self, layer: str) -> Any:
        target = self._layer_level(layer)
        node = self._hierarchy_node()
        if target > node.level:
            raise AttributeError(f"{layer} is below {self.hierarchy}")
        while node.level > target:
            node = node.parent
        return node

    def descendants(self, layer: str) -> List[Any]:
        target = self._layer_level(layer)
        node = self._hierarchy_node()
        if target <= node.level:
            raise AttributeError(f"{layer} is not below {self.hierarchy}")
        nodes = [node]
        for _ in range(target - node.level):
            nodes = [child for n in nodes for child in n.children]
        return nodes
