"""regforge.input_base.input_value

Raw input scalars paired with the place they were written.

Every value a loader stores is wrapped in an :class:`InputValue` so that a
feature rejecting it can point the user at ``file:line:column`` instead of at
the framework internals.

``NA_VALUE`` is the "not available" sentinel returned for any name a source
never set. Features treat it as "fall back to the default".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Position:
    """Source location of an input value."""

    path: str
    line: Optional[int] = None
    column: Optional[int] = None

    def __str__(self) -> str:
        parts = [str(self.path)]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


@dataclass(frozen=True)
class InputValue:
    value: Any
    position: Optional[Position] = None

    @property
    def available(self) -> bool:
        return True

    @property
    def empty(self) -> bool:
        if self.value is None:
            return True
        return isinstance(self.value, str) and not self.value.strip()


@dataclass(frozen=True)
class _NotAvailable(InputValue):
    @property
    def available(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NA_VALUE"


NA_VALUE: InputValue = _NotAvailable(None, None)


def as_input_value(value: Any, position: Optional[Position] = None) -> InputValue:
    """Wrap ``value`` unless it already is an :class:`InputValue`."""
    if isinstance(value, InputValue):
        return value
    return InputValue(value, position)
