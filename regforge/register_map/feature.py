from __future__ import annotations

from typing import Any

from regforge.errors import RegisterMapError
from regforge.input_base.feature import Feature

from .hierarchy import RegisterMapHierarchy


class RegisterMapFeature(RegisterMapHierarchy, Feature):
    error_class = RegisterMapError

    @property
    def configuration(self) -> Any:
        return self.component.configuration
