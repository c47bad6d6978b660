from __future__ import annotations

from regforge.errors import ConfigurationError
from regforge.input_base.feature import Feature


class ConfigurationFeature(Feature):
    error_class = ConfigurationError
