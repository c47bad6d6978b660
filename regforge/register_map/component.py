from __future__ import annotations

from typing import Any, Optional

from regforge.input_base.component import Component

from .hierarchy import RegisterMapHierarchy


class RegisterMapComponent(RegisterMapHierarchy, Component):
    """Register-map node; ``configuration`` is the configuration tree's root."""

    def post_initialize(self, configuration: Optional[Any] = None, *args: Any) -> None:
        self.configuration = configuration
