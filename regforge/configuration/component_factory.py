"""regforge.configuration.component_factory

Root factory of the configuration tree: ``create(files)``.
"""

from __future__ import annotations

from regforge.input_base.component_factory import ComponentFactory

from .component import ConfigurationComponent


class ConfigurationComponentFactory(ComponentFactory):
    def __init__(self, component_name: str, *, target_component=ConfigurationComponent, **kwargs) -> None:
        super().__init__(component_name, target_component=target_component, **kwargs)
