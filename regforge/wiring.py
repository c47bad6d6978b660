"""regforge.wiring

Composition root.

The single place where a run is assembled from its building blocks:

- load ``.env`` into the environment (python-dotenv; variables already set win)
- configure logging from ``REGFORGE_LOG_LEVEL``
- create the :class:`~regforge.builder.Builder`, register the configuration
  and register-map schemas and load the plugins named in ``REGFORGE_PLUGINS``
  (comma separated module names or ``.py`` paths)

Entry points and tests call :func:`build_builder` / :func:`build_generator`
instead of repeating this setup.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from dotenv import load_dotenv as _load_dotenv

from regforge.builder import Builder
from regforge.generator import Generator

ENV_PATH: Path = Path.cwd() / ".env"
PLUGINS_ENV = "REGFORGE_PLUGINS"
LOG_LEVEL_ENV = "REGFORGE_LOG_LEVEL"


def configure_logging(level: Optional[str] = None) -> None:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or "WARNING").upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level: {name}")
    logging.basicConfig(level=numeric, format="%(levelname)s %(name)s: %(message)s")


def plugins_from_env() -> List[str]:
    raw = os.environ.get(PLUGINS_ENV, "")
    return [p.strip() for p in raw.split(",") if p.strip()]


def build_builder(
    plugins: Optional[Iterable[str]] = None,
    *,
    load_dotenv: bool = True,
    dotenv_path: Path = ENV_PATH,
) -> Builder:
    """Builder with both input schemas registered and the plugins loaded.

    ``plugins`` defaults to ``REGFORGE_PLUGINS``.
    """
    if load_dotenv:
        _load_dotenv(dotenv_path)
    configure_logging()

    builder = Builder()
    builder.register_input_components()
    builder.load_plugins(plugins_from_env() if plugins is None else list(plugins))
    return builder


def build_generator(plugins: Optional[Iterable[str]] = None, *, load_dotenv: bool = True) -> Generator:
    return Generator(build_builder(plugins, load_dotenv=load_dotenv))
