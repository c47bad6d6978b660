"""regforge.errors

Error taxonomy shared by every layer of the framework.

Three kinds of failure are distinguished:

- :class:`BuilderError`: the registry API was misused while plugins were
  being configured (unknown category, unregistered list slot, ...). Raised
  before any input is read.
- :class:`LoadError`: a source could not be read, parsed or matched to a
  loader. Always names the offending path.
- :class:`SourceError` subclasses: a feature found structurally invalid input.
  One subclass exists per schema namespace (see
  :mod:`regforge.configuration` and :mod:`regforge.register_map`).
"""

from __future__ import annotations

from typing import Any, Optional


class RegforgeError(Exception):
    """Base class of every error raised by regforge."""


class BuilderError(RegforgeError):
    """Configuration-time misuse of the registry/builder API."""


class LoadError(RegforgeError):
    def __init__(self, message: str, path: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.path = None if path is None else str(path)

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.message} -- {self.path}"


class SourceError(RegforgeError):
    """Domain validation failure, carrying the position of the offending input."""

    def __init__(self, message: str, position: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} -- {self.position}"


class ConfigurationError(SourceError):
    pass


class RegisterMapError(SourceError):
    pass
