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
"""Bootstrap: apply configuration to logging and rollback defaults."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import structlog

from interactor.compensation.handlers import CompensationErrorHandlerFactory, set_default_error_handler
from interactor.compensation.types import CompensationErrorStrategy
from interactor.config.properties.rollback import RollbackProperties
from interactor.core.config import Config
from interactor.logging.port import LoggingPort
from interactor.logging.structlog_adapter import StructlogAdapter

logger = structlog.get_logger("interactor.bootstrap")


def configure(
    config: Config | str | Path | None = None,
    logging_port: LoggingPort | None = None,
) -> RollbackProperties:
    """Configure logging and the default compensation error handler.

    Args:
        config: A :class:`Config`, a path to ``interactor.yaml`` /
            ``interactor.toml``, or ``None`` for the library defaults.
        logging_port: Logging adapter to configure; defaults to
            :class:`StructlogAdapter`.

    Returns:
        The bound :class:`RollbackProperties`.

    Raises:
        ValueError: If the rollback section holds invalid values.
    """
    if config is None:
        config = Config.defaults()
    elif not isinstance(config, Config):
        config = Config.from_file(config)

    (logging_port or StructlogAdapter()).configure(config)

    properties = config.bind(RollbackProperties)
    kwargs: dict[str, Any] = {}
    if properties.error_handler is CompensationErrorStrategy.RETRY_WITH_BACKOFF:
        kwargs = {
            "max_retries": properties.max_retries,
            "backoff_ms": properties.backoff_ms,
            "backoff_multiplier": properties.backoff_multiplier,
        }
    set_default_error_handler(CompensationErrorHandlerFactory.create(properties.error_handler, **kwargs))

    logger.info(
        "interactor_configured",
        error_handler=str(properties.error_handler),
        sources=config.loaded_sources,
    )
    return properties
