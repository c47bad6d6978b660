"""regforge.builder.feature_entry

Definitions held by a :class:`~regforge.builder.feature_registry.FeatureRegistry`.

A *body* turns into a feature class in one of two ways:

- a class: it must subclass the entry's base feature; a fresh subclass of it
  is registered so later edits stay local to this registry
- a callable: it is applied to a freshly created subclass of the base feature
  (``body(feature_class)``) and may declare properties, build actions and
  validators on it

The shared context of the declaration (if any) is attached before the body
runs.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, Optional, Type

from regforge.errors import BuilderError
from regforge.input_base.feature_factory import FeatureFactory


def _class_name(*names: str) -> str:
    parts = [p for name in names for p in str(name).replace(".", "_").split("_") if p]
    return "".join(p[:1].upper() + p[1:] for p in parts) or "Feature"


def create_feature_class(
    base: Type[Any],
    body: Any,
    name: str,
    shared_context: Optional[Any] = None,
    mixin_base: Optional[Type[Any]] = None,
) -> Type[Any]:
    """Build the feature class for one body on top of ``base``.

    ``mixin_base`` is the registry's base feature when ``base`` is derived from
    it (list variants): class bodies then only need to subclass ``mixin_base``.
    """
    if body is None or (callable(body) and not isinstance(body, type)):
        feature_class = type(name, (base,), {})
    elif isinstance(body, type):
        if issubclass(body, base):
            feature_class = type(name, (body,), {})
        elif mixin_base is not None and issubclass(body, mixin_base):
            feature_class = type(name, (body, base), {})
        else:
            raise BuilderError(f"{body.__name__} must be a subclass of {(mixin_base or base).__name__}")
    else:
        raise BuilderError(f"feature body must be a class or a callable: {body!r}")

    if shared_context is not None:
        feature_class.attach_shared_context(shared_context)
    if body is not None and not isinstance(body, type):
        body(feature_class)
    return feature_class


class SimpleFeatureEntry:
    def __init__(
        self, name: str, base_feature: Type[Any], factory_class: Type[FeatureFactory] = FeatureFactory
    ) -> None:
        self.name = name
        self.base_feature = base_feature
        self.factory_class = factory_class
        self.feature_class: Type[Any] = create_feature_class(base_feature, None, _class_name(name))

    def define(self, body: Any, shared_context: Optional[Any] = None) -> None:
        self.feature_class = create_feature_class(
            self.base_feature, body, _class_name(self.name), shared_context
        )

    def build_factory(self, enabled_items: Iterable[str] = ()) -> FeatureFactory:
        return self.factory_class(self.name, self.feature_class)


class ListFeatureEntry:
    """A list slot: one base feature plus named variants derived from it.

    A callable list body receives the entry itself and may call
    :meth:`base_feature`, :meth:`default_feature`, :meth:`variant_selector`
    and :meth:`define_feature` on it::

        def bit_field_type(entry):
            entry.base_feature(lambda cls: cls.define_property("type"))
            entry.variant_selector(str.lower)
    """

    def __init__(
        self, name: str, base_feature: Type[Any], factory_class: Type[FeatureFactory] = FeatureFactory
    ) -> None:
        self.name = name
        self.registry_base = base_feature
        self.factory_class = factory_class
        self.base_feature_class: Type[Any] = create_feature_class(base_feature, None, _class_name(name))
        self.default_feature_class: Optional[Type[Any]] = None
        self.selector: Optional[Callable[[Any], Any]] = None
        self.features: Dict[str, Type[Any]] = {}
        self.shared_context: Optional[Any] = None

    def define(self, body: Any, shared_context: Optional[Any] = None) -> None:
        self.shared_context = shared_context
        if isinstance(body, type):
            self.base_feature(body)
        elif body is not None:
            if shared_context is not None:
                self.base_feature_class.attach_shared_context(shared_context)
            body(self)

    def base_feature(self, body: Any) -> Type[Any]:
        self.base_feature_class = create_feature_class(
            self.registry_base, body, _class_name(self.name), self.shared_context
        )
        return self.base_feature_class

    def default_feature(self, body: Any = None) -> Type[Any]:
        self.default_feature_class = create_feature_class(
            self.base_feature_class,
            body,
            _class_name(self.name, "default"),
            self.shared_context,
            mixin_base=self.registry_base,
        )
        return self.default_feature_class

    def variant_selector(self, selector: Callable[[Any], Any]) -> None:
        self.selector = selector

    def define_feature(
        self, item_name: str, body: Any = None, shared_context: Optional[Any] = None
    ) -> Type[Any]:
        feature_class = create_feature_class(
            self.base_feature_class,
            body,
            _class_name(self.name, item_name),
            shared_context or self.shared_context,
            mixin_base=self.registry_base,
        )
        self.features[item_name] = feature_class
        return feature_class

    def defines(self, item_name: str) -> bool:
        return item_name in self.features

    def delete_features(self, item_names: Optional[Iterable[str]] = None) -> None:
        if item_names is None:
            self.features.clear()
            return
        for item_name in item_names:
            self.features.pop(item_name, None)

    def build_factory(self, enabled_items: Iterable[str] = ()) -> FeatureFactory:
        target_features = {item: self.features[item] for item in enabled_items if item in self.features}
        return self.factory_class(
            self.name,
            self.base_feature_class,
            target_features=target_features,
            default_feature=self.default_feature_class,
            variant_selector=self.selector,
        )
