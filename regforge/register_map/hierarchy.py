"""regforge.register_map.hierarchy

Named accessors over the register-map levels.

On any register-map component or feature:

- ``register_map`` / ``register_block`` / ``register`` / ``bit_field``: the
  ancestor-or-self at that level
- ``register_blocks`` / ``registers`` / ``bit_fields``: every descendant at
  that level, in input order
"""

from __future__ import annotations

from typing import Any, List

from regforge.base.hierarchical_accessors import HierarchicalAccessors

LAYERS = ("register_map", "register_block", "register", "bit_field")


class RegisterMapHierarchy(HierarchicalAccessors):
    hierarchy_layers = LAYERS

    @property
    def register_map(self) -> Any:
        return self.ancestor("register_map")

    @property
    def register_block(self) -> Any:
        return self.ancestor("register_block")

    @property
    def register(self) -> Any:
        return self.ancestor("register")

    @property
    def bit_field(self) -> Any:
        return self.ancestor("bit_field")

    @property
    def register_blocks(self) -> List[Any]:
        return self.descendants("register_block")

    @property
    def registers(self) -> List[Any]:
        return self.descendants("register")

    @property
    def bit_fields(self) -> List[Any]:
        return self.descendants("bit_field")
