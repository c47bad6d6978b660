"""regforge.input_base.loader

Format-specific readers that populate an :class:`InputData` tree.

Each loader declares the file extensions it handles (``support_types``,
compared case-insensitively) and implements two steps:

- ``read_file(path)``: parse raw bytes into the loader's native structure
- ``format(read_data, input_data, path)``: walk that structure and store values
  through ``input_data.value`` / ``input_data.child`` only

Shipped loaders
---------------
- :class:`YAMLLoader` (``.yaml``/``.yml``): values carry line and column.
- :class:`JSONLoader` (``.json``): values carry the file path.
- :class:`PythonLoader` (``.py``): a sequence of call-like statements, evaluated
  as trusted code in the host process. Values carry line and column.

Mapping-shaped sources (YAML/JSON) nest child records under the collection keys
of the current depth (``children`` by default, ``register_blocks`` /
``registers`` / ``bit_fields`` for register maps).
"""

from __future__ import annotations

import ast
import builtins
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from regforge.errors import LoadError

from .input_data import InputData
from .input_value import Position

logger = logging.getLogger(__name__)


class Loader:
    support_types: Tuple[str, ...] = ()

    def __init__(self, input_data: InputData, valid_value_lists: Sequence[Sequence[str]]) -> None:
        self.input_data = input_data
        self.valid_value_lists = valid_value_lists

    @classmethod
    def supports(cls, path: str | Path) -> bool:
        ext = Path(path).suffix.lstrip(".").lower()
        if not ext:
            return False
        return ext in {t.lower().lstrip(".") for t in cls.support_types}

    @classmethod
    def load_file(
        cls,
        path: str | Path,
        input_data: InputData,
        valid_value_lists: Sequence[Sequence[str]],
    ) -> None:
        cls(input_data, valid_value_lists).load(Path(path))

    def load(self, path: Path) -> None:
        if not path.is_file() or not os.access(path, os.R_OK):
            raise LoadError("cannot load such file", path)
        logger.debug("loading %s with %s", path, type(self).__name__)
        read_data = self.read_file(path)
        if self.input_data.position is None:
            self.input_data.position = Position(str(path))
        self.format(read_data, self.input_data, path)

    def read_file(self, path: Path) -> Any:
        raise NotImplementedError

    def format(self, read_data: Any, input_data: InputData, path: Path) -> None:
        raise NotImplementedError


# ----------------------------
# Mapping-shaped sources
# ----------------------------


class PositionedMapping(dict):
    """dict remembering where each of its values was written."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.position: Optional[Position] = None
        self.positions: Dict[Any, Position] = {}


def _value_position(mapping: Mapping[Any, Any], key: Any, path: Path) -> Position:
    positions = getattr(mapping, "positions", None)
    if positions and key in positions:
        return positions[key]
    return Position(str(path))


def _record_position(mapping: Mapping[Any, Any], path: Path) -> Position:
    return getattr(mapping, "position", None) or Position(str(path))


def _as_records(value: Any) -> List[Any]:
    if value is None:
        return []
    if isinstance(value, Mapping):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class HashLoader(Loader):
    """Common formatter for sources that parse into nested mappings."""

    def format(self, read_data: Any, input_data: InputData, path: Path) -> None:
        if read_data is None:
            return
        if not isinstance(read_data, Mapping):
            raise LoadError("top-level value must be a mapping", path)
        self.format_mapping(read_data, input_data, path)

    def format_mapping(self, mapping: Mapping[Any, Any], input_data: InputData, path: Path) -> None:
        for key, value in mapping.items():
            name = str(key)
            if input_data.is_child_collection_key(name):
                self.format_children(value, input_data, path)
            else:
                input_data.value(name, value, _value_position(mapping, key, path))

    def format_children(self, records: Any, input_data: InputData, path: Path) -> None:
        for record in _as_records(records):
            if not isinstance(record, Mapping):
                raise LoadError(f"child record must be a mapping: {record!r}", path)
            child_data = input_data.child(position=_record_position(record, path))
            self.format_mapping(record, child_data, path)


class JSONLoader(HashLoader):
    support_types = ("json",)

    def read_file(self, path: Path) -> Any:
        try:
            return json.loads(path.read_bytes().decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise LoadError(f"invalid JSON: {e}", path) from e


def _positioned_yaml_loader(path: Path):
    import yaml

    class _PositionedSafeLoader(yaml.SafeLoader):
        pass

    def _mark_position(node: Any) -> Position:
        mark = node.start_mark
        return Position(str(path), mark.line + 1, mark.column + 1)

    def _construct_mapping(loader: Any, node: Any) -> PositionedMapping:
        loader.flatten_mapping(node)
        mapping = PositionedMapping()
        mapping.position = _mark_position(node)
        for key_node, value_node in node.value:
            key = loader.construct_object(key_node, deep=True)
            try:
                hash(key)
            except TypeError as e:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    f"found unhashable key ({e})", key_node.start_mark,
                ) from e
            mapping[key] = loader.construct_object(value_node, deep=True)
            mapping.positions[key] = _mark_position(value_node)
        return mapping

    _PositionedSafeLoader.add_constructor(
        yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, _construct_mapping
    )
    return _PositionedSafeLoader


class YAMLLoader(HashLoader):
    support_types = ("yaml", "yml")

    def read_file(self, path: Path) -> Any:
        import yaml

        try:
            text = path.read_bytes().decode("utf-8")
            return yaml.load(text, Loader=_positioned_yaml_loader(path))
        except (UnicodeDecodeError, yaml.YAMLError) as e:
            raise LoadError(f"invalid YAML: {e}", path) from e


# ----------------------------
# Embedded Python source
# ----------------------------


def _bare_call(node: Any) -> Optional[ast.Call]:
    if isinstance(node, ast.Call) and isinstance(node.func, ast.Name):
        return node
    return None


def _node_position(node: ast.AST, path: Path) -> Position:
    return Position(str(path), getattr(node, "lineno", None), getattr(node, "col_offset", -1) + 1)


class PythonLoader(Loader):
    """Load ``name(value)`` statements, nesting records with ``with child(...):``.

    Statements that are not field or child statements (imports, assignments,
    helper definitions, ...) run in a namespace shared by the whole file, so
    values may be computed. A call to a name valid at the current depth is
    always a field; other calls to names bound in that namespace or to
    builtins are ordinary code.
    """

    support_types = ("py",)

    def read_file(self, path: Path) -> Any:
        try:
            source = path.read_bytes().decode("utf-8")
            return ast.parse(source, filename=str(path))
        except UnicodeDecodeError as e:
            raise LoadError(f"invalid Python source: {e}", path) from e
        except SyntaxError as e:
            raise LoadError(f"invalid Python source: {e.msg}", Position(str(path), e.lineno)) from e

    def format(self, read_data: Any, input_data: InputData, path: Path) -> None:
        namespace: Dict[str, Any] = {"__name__": "__regforge_input__", "__file__": str(path)}
        self._run_statements(read_data.body, input_data, namespace, path)

    def _run_statements(
        self,
        statements: Iterable[ast.stmt],
        input_data: InputData,
        namespace: Dict[str, Any],
        path: Path,
    ) -> None:
        for stmt in statements:
            if isinstance(stmt, ast.Expr) and self._is_input_call(stmt.value, input_data, namespace):
                self._run_input_call(stmt.value, input_data, namespace, path)
            elif isinstance(stmt, ast.With) and self._is_child_block(stmt, input_data):
                call = stmt.items[0].context_expr
                child_data = input_data.child(
                    self._keyword_values(call, namespace, path),
                    _node_position(stmt, path),
                )
                self._run_statements(stmt.body, child_data, namespace, path)
            else:
                self._exec(stmt, namespace, path)

    def _is_input_call(self, node: Any, input_data: InputData, namespace: Dict[str, Any]) -> bool:
        call = _bare_call(node)
        if call is None:
            return False
        name = call.func.id
        if input_data.valid_value(name) or input_data.is_child_keyword(name):
            return True
        return name not in namespace and not hasattr(builtins, name)

    def _is_child_block(self, stmt: ast.With, input_data: InputData) -> bool:
        if len(stmt.items) != 1 or stmt.items[0].optional_vars is not None:
            return False
        call = stmt.items[0].context_expr
        return _bare_call(call) is not None and input_data.is_child_keyword(call.func.id)

    def _run_input_call(
        self, call: ast.Call, input_data: InputData, namespace: Dict[str, Any], path: Path
    ) -> None:
        name = call.func.id
        position = _node_position(call, path)
        if input_data.is_child_keyword(name):
            input_data.child(self._keyword_values(call, namespace, path), position)
            return
        if not input_data.valid_value(name):
            return
        if len(call.args) != 1 or call.keywords:
            raise LoadError(f"field statement '{name}' takes exactly one value", position)
        input_data.value(name, self._eval(call.args[0], namespace, path), position)

    def _keyword_values(self, call: ast.Call, namespace: Dict[str, Any], path: Path) -> Dict[str, Any]:
        if call.args:
            raise LoadError(
                f"'{call.func.id}' takes keyword values only", _node_position(call, path)
            )
        values: Dict[str, Any] = {}
        for keyword in call.keywords:
            if keyword.arg is None:
                values.update(self._eval(keyword.value, namespace, path))
            else:
                values[keyword.arg] = self._eval(keyword.value, namespace, path)
        return values

    def _eval(self, node: ast.expr, namespace: Dict[str, Any], path: Path) -> Any:
        expression = ast.Expression(body=node)
        ast.fix_missing_locations(expression)
        try:
            return eval(compile(expression, str(path), "eval"), namespace)
        except Exception as e:
            raise LoadError(f"{type(e).__name__}: {e}", _node_position(node, path)) from e

    def _exec(self, stmt: ast.stmt, namespace: Dict[str, Any], path: Path) -> None:
        module = ast.Module(body=[stmt], type_ignores=[])
        try:
            exec(compile(module, str(path), "exec"), namespace)
        except Exception as e:
            raise LoadError(f"{type(e).__name__}: {e}", _node_position(stmt, path)) from e


DEFAULT_LOADERS: Tuple[type, ...] = (YAMLLoader, JSONLoader, PythonLoader)
