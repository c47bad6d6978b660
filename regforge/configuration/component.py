from __future__ import annotations

from regforge.input_base.component import Component


class ConfigurationComponent(Component):
    def post_initialize(self, *args) -> None:
        self.need_no_children()
