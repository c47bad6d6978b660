"""regforge.register_map.input_data

Input data whose child records are named after the next level down.

At depth 0 a child is opened with ``register_block(...)`` (Python sources) or
listed under ``register_blocks`` (YAML/JSON sources); likewise ``register`` /
``registers`` at depth 1 and ``bit_field`` / ``bit_fields`` at depth 2. Bit
fields take no children.
"""

from __future__ import annotations

from typing import Optional, Tuple

from regforge.input_base.input_data import InputData

from .hierarchy import LAYERS


class RegisterMapInputData(InputData):
    @property
    def child_layer(self) -> Optional[str]:
        index = self.depth + 1
        return LAYERS[index] if index < len(LAYERS) else None

    @property
    def child_keywords(self) -> Tuple[str, ...]:
        layer = self.child_layer
        return (layer,) if layer else ()

    @property
    def child_collection_keys(self) -> Tuple[str, ...]:
        layer = self.child_layer
        return (f"{layer}s",) if layer else ()
