"""regforge.base.feature

Schema-agnostic feature base.

A feature is one unit of domain logic attached to exactly one component. This
base only knows its component, its key (``feature_name``), the optional shared
context of the declaration that created its class, and two hooks:

- ``post_initialize()``: runs at the end of ``__init__``
- ``available()``: when it returns ``False`` the factory does not attach the
  feature to its component
"""

from __future__ import annotations

from typing import Any, Optional


class Feature:
    shared_context: Optional[Any] = None

    def __init__(self, component: Any, feature_name: str) -> None:
        self.component = component
        self.feature_name = feature_name
        self.post_initialize()

    @classmethod
    def attach_shared_context(cls, context: Any) -> None:
        cls.shared_context = context

    def post_initialize(self) -> None:
        pass

    def available(self) -> bool:
        return True

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.feature_name!r}>"
