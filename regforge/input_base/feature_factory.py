"""regforge.input_base.feature_factory

Feature factory for input-side features.

A *simple* factory always instantiates its one feature class. A *list* factory
holds the enabled variants of a list slot and chooses one per component:

- the key is the raw input value, or whatever ``variant_selector(value)``
  returns for it
- a key with no enabled variant falls back to ``default_feature``; without a
  default it raises the base feature's ``error_class``
- when the input is not available the default (or else the base) feature is
  used

Active factories receive the input value as their last argument and build the
new feature with it before it is attached.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from regforge.base.feature_factory import FeatureFactory as BaseFeatureFactory

from .input_value import as_input_value


class FeatureFactory(BaseFeatureFactory):
    def __init__(
        self,
        feature_name: str,
        target_feature: Optional[Type[Any]] = None,
        *,
        target_features: Optional[Mapping[Any, Type[Any]]] = None,
        default_feature: Optional[Type[Any]] = None,
        variant_selector: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        super().__init__(feature_name, target_feature)
        self.target_features: Optional[Dict[Any, Type[Any]]] = (
            None if target_features is None else dict(target_features)
        )
        self.default_feature = default_feature
        self.variant_selector = variant_selector

    @property
    def list_factory(self) -> bool:
        return self.target_features is not None

    def candidate_features(self) -> List[Type[Any]]:
        if not self.list_factory:
            return [self.target_feature] if self.target_feature is not None else []
        candidates = list(self.target_features.values())
        for fallback in (self.default_feature, self.target_feature):
            if fallback is not None:
                candidates.append(fallback)
        return candidates

    def active_feature_factory(self) -> bool:
        return any(f.active_feature() for f in self.candidate_features())

    def passive_feature_factory(self) -> bool:
        return not self.active_feature_factory()

    def create(self, component: Any, *args: Any) -> Any:
        feature = self.create_feature(component, *args)
        if feature is not None and self.active_feature_factory():
            feature.build(*args)
        return feature

    def select_feature(self, *args: Any) -> Optional[Type[Any]]:
        if not self.list_factory:
            return self.target_feature
        fallback = self.default_feature or self.target_feature
        if not args or not self.active_feature_factory():
            return fallback

        input_value = as_input_value(args[-1])
        if not input_value.available:
            return fallback

        key = input_value.value
        if self.variant_selector is not None:
            key = self.variant_selector(key)
        try:
            feature_class = self.target_features.get(key)
        except TypeError:
            # unhashable keys (lists, mappings) never name a variant
            feature_class = None
        if feature_class is not None:
            return feature_class
        if self.default_feature is not None:
            return self.default_feature

        error_class = getattr(self.target_feature, "error_class", None)
        if error_class is None:
            raise ValueError(f"unknown {self.feature_name}: {key!r}")
        raise error_class(f"unknown {self.feature_name}: {key!r}", input_value.position)
