"""regforge.input_base.property

Declared, read-only properties of input features.

A :class:`Property` is a descriptor bound to a feature class. Reading it from a
feature instance resolves the value in one of three ways:

1. a custom ``body(feature, *args)``
2. forwarding to another method, on the instance (``forward_to="name"``) or on
   the class (``on_class=True``), passing arguments through unchanged
3. the stored field ``_<name>`` when the feature set it, else ``default``

``method=True`` exposes the property as a callable taking arguments instead of
a plain attribute. ``need_validation=True`` validates the feature before the
value is resolved.

Declaring a property never touches existing instance state.

Usage::

    class Width(RegisterMapFeature):
        width = Property(default=1)

        @Property(need_validation=True)
        def msb(self):
            return self.lsb + self.width - 1
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Optional

_UNSET = object()


class Property:
    def __init__(
        self,
        body: Optional[Callable[..., Any]] = None,
        *,
        forward_to: Optional[str] = None,
        on_class: bool = False,
        default: Any = None,
        need_validation: bool = False,
        method: bool = False,
        name: Optional[str] = None,
    ) -> None:
        self.body = body
        self.forward_to = forward_to
        self.on_class = on_class
        self.default = default
        self.need_validation = need_validation
        self.method = method
        self.name = name
        if body is not None:
            functools.update_wrapper(self, body)

    def __call__(self, body: Callable[..., Any]) -> "Property":
        # Decorator form: @Property(need_validation=True)
        return Property(
            body,
            forward_to=self.forward_to,
            on_class=self.on_class,
            default=self.default,
            need_validation=self.need_validation,
            method=self.method,
            name=self.name,
        )

    def __set_name__(self, owner: type, name: str) -> None:
        if self.name is None:
            self.name = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if instance is None:
            return self
        # Only the declarations copied at subclass time count; a property added
        # to a parent afterwards is still visible through the MRO.
        declared = getattr(type(instance), "_properties", None)
        if declared is not None:
            prop = declared.get(self.name)
            if prop is None:
                raise AttributeError(f"{type(instance).__name__!r} has no property {self.name!r}")
            if prop is not self:
                return prop.__get__(instance, owner)
        if self.method:
            return functools.partial(self.resolve, instance)
        return self.resolve(instance)

    def resolve(self, feature: Any, *args: Any, **kwargs: Any) -> Any:
        if self.need_validation:
            feature.validate()
        if self.body is not None:
            return self.body(feature, *args, **kwargs)
        if self.forward_to is not None:
            receiver = type(feature) if self.on_class else feature
            return getattr(receiver, self.forward_to)(*args, **kwargs)
        value = feature.__dict__.get(f"_{self.name}", _UNSET)
        if value is _UNSET:
            return self.default
        return value

    def __repr__(self) -> str:
        return f"Property({self.name!r})"
