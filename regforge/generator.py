"""regforge.generator

Run facade: load the configuration, load the register map against it, hand
both verified trees to a render callable.

Rendering (templates, file writing) is outside this package; ``render`` only
has to accept ``(configuration, register_map)`` and must not mutate them.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional, Sequence, Union

from regforge.builder import Builder
from regforge.input_base.component import Component

logger = logging.getLogger(__name__)

Sources = Sequence[Union[str, Path]]
Render = Callable[[Component, Component], Any]


class Generator:
    def __init__(self, builder: Builder) -> None:
        self.builder = builder

    def load_configuration(self, files: Sources) -> Component:
        factory = self.builder.build_input_component_factory("configuration")
        return factory.create(list(files))

    def load_register_map(self, configuration: Component, files: Sources) -> Component:
        factory = self.builder.build_input_component_factory("register_map")
        return factory.create(configuration, list(files))

    def run(
        self,
        configuration_files: Optional[Sources],
        register_map_files: Sources,
        render: Render,
    ) -> Any:
        configuration_files = list(configuration_files or [])
        register_map_files = list(register_map_files)

        logger.info("loading configuration (%d file(s))", len(configuration_files))
        configuration = self.load_configuration(configuration_files)

        logger.info("loading register map (%d file(s))", len(register_map_files))
        register_map = self.load_register_map(configuration, register_map_files)

        logger.info("rendering")
        return render(configuration, register_map)
