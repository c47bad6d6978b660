"""regforge.input_base

Input side of the framework: loaders, input data, and the feature/component
classes that build and validate a tree from it.
"""

from .component import Component
from .component_factory import ComponentFactory
from .feature import VERIFY_ALL, VERIFY_COMPONENT, Feature, build_action, validator
from .feature_factory import FeatureFactory
from .input_data import InputData
from .input_matcher import InputMatcher, MatchResult
from .input_value import NA_VALUE, InputValue, Position
from .loader import DEFAULT_LOADERS, HashLoader, JSONLoader, Loader, PythonLoader, YAMLLoader
from .property import Property

__all__ = [
    "DEFAULT_LOADERS",
    "NA_VALUE",
    "VERIFY_ALL",
    "VERIFY_COMPONENT",
    "Component",
    "ComponentFactory",
    "Feature",
    "FeatureFactory",
    "HashLoader",
    "InputData",
    "InputMatcher",
    "InputValue",
    "JSONLoader",
    "Loader",
    "MatchResult",
    "Position",
    "Property",
    "PythonLoader",
    "YAMLLoader",
    "build_action",
    "validator",
]
