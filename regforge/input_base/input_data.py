"""regforge.input_base.input_data

Position-tracked, pre-validation mirror of the component tree.

An :class:`InputData` node holds the values for one future component and its
child records. Which names may be stored is governed by the *valid value
lists*: one list per depth, built from the active feature names of each
component factory in the chain. Names outside the list for the current depth
are silently dropped, which keeps old inputs loading under newer schemas and
vice versa.

Loaders populate the tree exclusively through :meth:`InputData.value` and
:meth:`InputData.child`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .input_value import NA_VALUE, InputValue, Position, as_input_value


class InputData:
    # Keywords a loader may use to open a child record (Python loader) and
    # keys holding a list of child records (YAML/JSON loaders).
    child_keywords: Tuple[str, ...] = ("child",)
    child_collection_keys: Tuple[str, ...] = ("children",)

    def __init__(
        self,
        valid_value_lists: Sequence[Sequence[str]],
        *,
        depth: int = 0,
        position: Optional[Position] = None,
    ) -> None:
        self._valid_value_lists: Tuple[Tuple[str, ...], ...] = tuple(
            tuple(str(n) for n in names) for names in valid_value_lists
        )
        self.depth = depth
        self.position = position
        self._values: Dict[str, InputValue] = {}
        self._children: List[InputData] = []

    @property
    def valid_values(self) -> Tuple[str, ...]:
        if not self._valid_value_lists:
            return ()
        return self._valid_value_lists[0]

    @property
    def valid_value_lists(self) -> Tuple[Tuple[str, ...], ...]:
        return self._valid_value_lists

    def valid_value(self, name: str) -> bool:
        return str(name) in self.valid_values

    def value(self, name: str, value: Any, position: Optional[Position] = None) -> None:
        key = str(name)
        if not self.valid_value(key):
            return
        self._values[key] = as_input_value(value, position)

    def __getitem__(self, name: str) -> InputValue:
        return self._values.get(str(name), NA_VALUE)

    def __setitem__(self, name: str, value: Any) -> None:
        self.value(name, value)

    def __contains__(self, name: object) -> bool:
        return str(name) in self._values

    def values(
        self,
        value_map: Optional[Mapping[str, Any]] = None,
        position: Optional[Position] = None,
    ) -> Dict[str, InputValue]:
        """Store every pair of ``value_map`` (if given) and return the stored values."""
        for name, value in (value_map or {}).items():
            self.value(name, value, position)
        return dict(self._values)

    @property
    def children(self) -> List["InputData"]:
        return list(self._children)

    def child(
        self,
        value_map: Optional[Mapping[str, Any]] = None,
        position: Optional[Position] = None,
    ) -> "InputData":
        child_data = self.create_child_data(position)
        child_data.values(value_map, position)
        self._children.append(child_data)
        return child_data

    def create_child_data(self, position: Optional[Position]) -> "InputData":
        return type(self)(
            self._valid_value_lists[1:],
            depth=self.depth + 1,
            position=position,
        )

    def is_child_keyword(self, name: str) -> bool:
        return name in self.child_keywords

    def is_child_collection_key(self, name: str) -> bool:
        return name in self.child_collection_keys

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(depth={self.depth}, values={sorted(self._values)}, "
            f"children={len(self._children)})"
        )
