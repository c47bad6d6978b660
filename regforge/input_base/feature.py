"""regforge.input_base.feature

Input-side feature: declared properties, build actions, validators and an
optional input pattern.

Lifecycle
---------
Each instance moves ``constructed -> built -> validated``; both steps are
one-shot. A property declared with ``need_validation=True`` validates the
feature on first access, so the order in which properties are read never
changes the result.

Declaring behaviour
-------------------
In a class body::

    class Name(RegisterMapFeature):
        name = Property()

        @build_action
        def _parse(self, value):
            self._name = value

        @validator
        def _check(self):
            if self.name is None:
                self.error("no name is given")

Or at run time on a class object (used by registry declaration bodies)::

    feature_class.define_property("name")
    feature_class.add_build_action(parse)
    feature_class.add_validator(check)
    feature_class.input_pattern(r"(\\d+):(\\d+)")

Subclassing copies the whole declared set; later edits to either class do not
leak into the other.

A feature without build actions is *passive*: ``build`` and ``validate`` are
no-ops for it.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, NoReturn, Optional, Tuple, Type

from regforge.base.feature import Feature as BaseFeature
from regforge.errors import SourceError

from .input_matcher import InputMatcher, MatchResult
from .input_value import Position, as_input_value
from .property import Property

VERIFY_COMPONENT = "component"
VERIFY_ALL = "all"
VERIFY_SCOPES = (VERIFY_COMPONENT, VERIFY_ALL)

_ROLE_ATTR = "_regforge_role"


def build_action(fn: Callable[..., Any]) -> Callable[..., Any]:
    setattr(fn, _ROLE_ATTR, ("build", None))
    return fn


def validator(fn: Optional[Callable[..., Any]] = None, *, scope: str = VERIFY_COMPONENT):
    """Mark a method as a validator; ``scope="all"`` defers it to the whole-tree pass."""
    if scope not in VERIFY_SCOPES:
        raise ValueError(f"Unknown validation scope: {scope}")

    def _decorator(f: Callable[..., Any]) -> Callable[..., Any]:
        setattr(f, _ROLE_ATTR, ("validate", scope))
        return f

    if fn is not None:
        return _decorator(fn)
    return _decorator


class Feature(BaseFeature):
    error_class: Type[SourceError] = SourceError
    input_matcher: Optional[InputMatcher] = None

    _properties: Dict[str, Property] = {}
    _build_actions: List[Callable[..., Any]] = []
    _validators: List[Tuple[Callable[..., Any], str]] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        properties: Dict[str, Property] = {}
        build_actions: List[Callable[..., Any]] = []
        validators: List[Tuple[Callable[..., Any], str]] = []
        for base in reversed(cls.__mro__[1:]):
            if not issubclass(base, Feature):
                continue
            properties.update(base.__dict__.get("_properties", {}))
            for action in base.__dict__.get("_build_actions", ()):
                if action not in build_actions:
                    build_actions.append(action)
            for entry in base.__dict__.get("_validators", ()):
                if entry not in validators:
                    validators.append(entry)

        for attr_name, attr in list(cls.__dict__.items()):
            if isinstance(attr, Property):
                properties[attr.name or attr_name] = attr
                continue
            role = getattr(attr, _ROLE_ATTR, None)
            if role is None:
                continue
            kind, scope = role
            if kind == "build":
                build_actions.append(attr)
            else:
                validators.append((attr, scope))

        cls._properties = properties
        cls._build_actions = build_actions
        cls._validators = validators
        # Pin the inherited matcher so a later input_pattern() on the parent
        # does not reach this class.
        cls.input_matcher = cls.input_matcher

    # ----------------------------
    # Class-level declarations
    # ----------------------------

    @classmethod
    def define_property(
        cls, name: str, body: Optional[Callable[..., Any]] = None, **options: Any
    ) -> Property:
        prop = Property(body, name=name, **options)
        setattr(cls, name, prop)
        cls._properties[name] = prop
        return prop

    @classmethod
    def add_build_action(cls, fn: Callable[..., Any]) -> None:
        cls._build_actions.append(fn)

    @classmethod
    def add_validator(cls, fn: Callable[..., Any], scope: str = VERIFY_COMPONENT) -> None:
        if scope not in VERIFY_SCOPES:
            raise ValueError(f"Unknown validation scope: {scope}")
        cls._validators.append((fn, scope))

    @classmethod
    def input_pattern(
        cls, patterns: Any, converter: Optional[Callable[..., Any]] = None, **options: Any
    ) -> InputMatcher:
        cls.input_matcher = InputMatcher(patterns, converter, **options)
        return cls.input_matcher

    @classmethod
    def properties(cls) -> List[str]:
        return list(cls._properties)

    @classmethod
    def active_feature(cls) -> bool:
        return bool(cls._build_actions)

    @classmethod
    def passive_feature(cls) -> bool:
        return not cls._build_actions

    # ----------------------------
    # Instance lifecycle
    # ----------------------------

    def __init__(self, component: Any, feature_name: str) -> None:
        self._position: Optional[Position] = None
        self._built = False
        self._validated = False
        self._verified_all = False
        super().__init__(component, feature_name)

    @property
    def position(self) -> Optional[Position]:
        if self._position is not None:
            return self._position
        return getattr(self.component, "position", None)

    @property
    def built(self) -> bool:
        return self._built

    @property
    def validated(self) -> bool:
        return self._validated

    def build(self, *args: Any) -> None:
        """Run the build actions against the extracted arguments.

        The last argument is the input value; its raw value replaces it in the
        argument list handed to the actions. A not-available value is recorded
        as consumed but no action runs.
        """
        if self.passive_feature() or self._built:
            return
        if not args:
            raise TypeError("build() needs the input value as its last argument")

        *extras, last = args
        input_value = as_input_value(last)
        self._built = True
        if input_value.position is not None:
            self._position = input_value.position
        if not input_value.available:
            return

        values = [*extras, input_value.value]
        kwargs: Dict[str, Any] = {}
        matcher = type(self).input_matcher
        if matcher is not None and matcher.match_automatically:
            kwargs["match"] = matcher.match(input_value.value)

        for action in self._build_actions:
            action(self, *values, **kwargs)

    def pattern_match(self, value: Any) -> Optional[MatchResult]:
        matcher = type(self).input_matcher
        if matcher is None:
            raise TypeError(f"{type(self).__name__} declares no input pattern")
        return matcher.match(value)

    def validate(self) -> None:
        if self.passive_feature() or self._validated:
            return
        self._validated = True
        for fn, scope in self._validators:
            if scope == VERIFY_COMPONENT:
                fn(self)

    def verify(self, scope: str) -> None:
        if scope not in VERIFY_SCOPES:
            raise ValueError(f"Unknown verification scope: {scope}")
        self.validate()
        if scope != VERIFY_ALL or self.passive_feature() or self._verified_all:
            return
        self._verified_all = True
        for fn, fn_scope in self._validators:
            if fn_scope == VERIFY_ALL:
                fn(self)

    def error(self, message: str, position: Optional[Any] = None) -> NoReturn:
        raise self.error_class(message, position or self.position)
