"""regforge.base.feature_factory

Instantiates one feature class for one component.

Subclasses pick the class through :meth:`FeatureFactory.select_feature`
(list slots choose among variants there) and may act on the new instance in
:meth:`FeatureFactory.create` before it is attached.
"""

from __future__ import annotations

from typing import Any, Optional, Type


class FeatureFactory:
    def __init__(self, feature_name: str, target_feature: Optional[Type[Any]] = None) -> None:
        self.feature_name = feature_name
        self.target_feature = target_feature

    def create(self, component: Any, *args: Any) -> Any:
        return self.create_feature(component, *args)

    def create_feature(self, component: Any, *args: Any) -> Any:
        feature_class = self.select_feature(*args)
        if feature_class is None:
            return None
        return feature_class(component, self.feature_name)

    def select_feature(self, *args: Any) -> Optional[Type[Any]]:
        return self.target_feature

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.feature_name!r}>"
