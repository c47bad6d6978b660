"""End-to-end runs through the builder, both schemas and the generator."""

from pathlib import Path
from typing import Any, List

import pytest

from regforge.builder import Builder
from regforge.errors import LoadError, RegisterMapError
from regforge.generator import Generator
from regforge.input_base.feature import build_action, validator
from regforge.input_base.property import Property
from regforge.register_map.feature import RegisterMapFeature


class Name(RegisterMapFeature):
    name = Property()

    @build_action
    def _parse(self, configuration, value):
        self._name = value

    @validator
    def _require_name(self):
        if self.name is None:
            self.error("no name is given")


def _define_name(declaration):
    declaration.body("register_map", Name)


def _builder() -> Builder:
    builder = Builder()
    builder.register_input_components()
    return builder


def _write(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_simple_feature_property_reads_the_built_value(tmp_path: Path) -> None:
    builder = _builder()
    builder.define_simple_feature("register_map", "name", _define_name)
    builder.enable("register_map", "name")

    source = _write(tmp_path, "map.yaml", "name: reg0\n")
    configuration = builder.build_input_component_factory("configuration").create([])
    register_map = builder.build_input_component_factory("register_map").create(configuration, [source])

    assert register_map.name == "reg0"
    assert register_map.configuration is configuration


def test_unknown_extension_is_rejected_with_its_path() -> None:
    builder = _builder()
    factory = builder.build_input_component_factory("register_map")
    with pytest.raises(LoadError) as exc:
        factory.create(None, ["spec.unknownext"])
    assert exc.value.path == "spec.unknownext"
    assert "spec.unknownext" in str(exc.value)


def test_missing_required_field_reports_the_record_position_and_renders_nothing(tmp_path: Path) -> None:
    builder = _builder()
    builder.define_simple_feature("register", "name", _define_name)
    builder.enable("register", "name")

    source = _write(
        tmp_path,
        "map.yaml",
        "register_blocks:\n"
        "  - name: b0\n"
        "    registers:\n"
        "      - offset: 0\n",
    )
    rendered: List[Any] = []
    with pytest.raises(RegisterMapError) as exc:
        Generator(builder).run([], [source], lambda *trees: rendered.append(trees))

    assert exc.value.message == "no name is given"
    assert str(exc.value) == f"no name is given -- {source}:4:9"
    assert rendered == []


def test_feature_enabled_in_one_category_only_reaches_that_schema(tmp_path: Path) -> None:
    builder = _builder()

    def configuration_width(declaration):
        declaration.body("configuration", lambda cls: cls.define_property("width", default=32))

    def register_width(declaration):
        declaration.body("register_map", lambda cls: cls.define_property("width", default=8))

    builder.define_simple_feature("global", "width", configuration_width)
    builder.define_simple_feature("register", "width", register_width)
    builder.enable("register", "width")

    source = _write(
        tmp_path,
        "map.yaml",
        "register_blocks:\n"
        "  - registers:\n"
        "      - {}\n",
    )
    trees = Generator(builder).run([], [source], lambda configuration, register_map: (configuration, register_map))
    configuration, register_map = trees

    assert not configuration.has_feature("width")
    (register,) = register_map.registers
    assert register.has_feature("width")
    assert register.width == 8


def test_full_register_map_from_python_source(tmp_path: Path) -> None:
    builder = _builder()

    class Lsb(RegisterMapFeature):
        lsb = Property()

        @build_action
        def _parse(self, configuration, value, match=None):
            if match is None:
                self.error(f"illegal lsb: {value}")
            self._lsb = int(match.captures[0], 0)

        @validator(scope="all")
        def _fits_the_bus(self):
            if self.lsb is not None and self.lsb >= self.configuration.bus_width:
                self.error("lsb is beyond the bus width")

    Lsb.input_pattern(r"(0x[0-9a-f]+|\d+)")

    def bus_width(cls):
        cls.define_property("bus_width", default=32)
        cls.add_build_action(lambda self, value: setattr(self, "_bus_width", int(value)))

    builder.define_simple_feature("global", "bus_width", lambda d: d.body("configuration", bus_width))
    builder.enable("global", "bus_width")
    for layer in ("register_block", "register", "bit_field"):
        builder.define_simple_feature(layer, "name", _define_name)
        builder.enable(layer, "name")
    builder.define_simple_feature("bit_field", "lsb", lambda d: d.body("register_map", Lsb))
    builder.enable("bit_field", "lsb")

    config_source = _write(tmp_path, "config.json", '{"bus_width": 16}')
    map_source = _write(
        tmp_path,
        "map.py",
        "with register_block(name='block_0'):\n"
        "    with register(name='ctrl'):\n"
        "        bit_field(name='enable', lsb=0)\n"
        "        bit_field(name='mode', lsb='0x4')\n",
    )

    def render(configuration, register_map):
        return [(f.register.name, f.name, f.lsb) for f in register_map.bit_fields]

    result = Generator(builder).run([config_source], [map_source], render)
    assert result == [("ctrl", "enable", 0), ("ctrl", "mode", 4)]

    too_wide = _write(
        tmp_path,
        "wide.py",
        "with register_block(name='b'):\n"
        "    with register(name='r'):\n"
        "        bit_field(name='f', lsb=20)\n",
    )
    with pytest.raises(RegisterMapError) as exc:
        Generator(builder).run([config_source], [too_wide], render)
    assert exc.value.message == "lsb is beyond the bus width"
    assert exc.value.position.line == 3
