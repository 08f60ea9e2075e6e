# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""StructlogAdapter: renders interactor events with structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from interactor.config.properties.logging import LoggingProperties
from interactor.core.config import Config
from interactor.logging.processors import ContextRenderer


class StructlogAdapter:
    """Default :class:`~interactor.logging.port.LoggingPort`.

    Contexts passed as event values (``failure_absorbed`` carries one) go
    through :class:`ContextRenderer`, masking the attribute names listed
    under ``interactor.logging.redact``. Levels come from
    ``interactor.logging.level``: ``root`` for the stdlib root logger,
    any other key for that logger, e.g. ``interactor.context: DEBUG``.
    """

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}
        self._context_renderer = ContextRenderer()

    def configure(self, config: Config) -> None:
        properties = config.bind(LoggingProperties)
        levels = {name: str(level).upper() for name, level in properties.level.items()}
        self._root_level = levels.pop("root", "INFO")
        self._module_levels = levels
        self._format = str(properties.format).lower()
        self._context_renderer = ContextRenderer(properties.redact)

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, self._root_level, logging.INFO),
            force=True,
        )
        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))

    def _processors(self) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            self._context_renderer,
        ]
        if self._format == "json":
            processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
        else:
            processors.append(structlog.dev.ConsoleRenderer())
        return processors
