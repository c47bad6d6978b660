"""regforge.input_base.component

Input-side component: remembers where its record was declared and drives
feature verification.
"""

from __future__ import annotations

from typing import Any, Optional

from regforge.base.component import Component as BaseComponent

from .feature import VERIFY_ALL, VERIFY_COMPONENT, VERIFY_SCOPES
from .input_value import Position


class Component(BaseComponent):
    def __init__(
        self,
        parent: Optional[BaseComponent],
        component_name: str,
        layer: Optional[str] = None,
        *args: Any,
    ) -> None:
        self.position: Optional[Position] = None
        super().__init__(parent, component_name, layer, *args)

    def verify(self, scope: str) -> None:
        """Verify this node; with ``scope="all"`` the whole subtree follows."""
        if scope not in VERIFY_SCOPES:
            raise ValueError(f"Unknown verification scope: {scope}")
        for feature in self.features:
            feature.verify(VERIFY_COMPONENT)
        if scope == VERIFY_ALL:
            for feature in self.features:
                feature.verify(VERIFY_ALL)
            for child in self.children:
                child.verify(scope)
