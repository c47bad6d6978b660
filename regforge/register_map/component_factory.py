"""regforge.register_map.component_factory

Factories of the register-map tree. The root is created with
``create(configuration, files)``.
"""

from __future__ import annotations

from regforge.input_base.component_factory import ComponentFactory

from .component import RegisterMapComponent
from .input_data import RegisterMapInputData


class RegisterMapComponentFactory(ComponentFactory):
    input_data_class = RegisterMapInputData

    def __init__(self, component_name: str, *, target_component=RegisterMapComponent, **kwargs) -> None:
        super().__init__(component_name, target_component=target_component, **kwargs)
