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
"""Compensation error handlers used by :meth:`Context.rollback`.

Four implementations of :class:`CompensationErrorHandlerPort`:

* :class:`FailFastErrorHandler` -- re-raises immediately
* :class:`LogAndContinueErrorHandler` -- logs and continues (the default)
* :class:`RetryWithBackoffErrorHandler` -- retries with exponential backoff
* :class:`CompositeCompensationErrorHandler` -- primary with fallback

Plus a :class:`CompensationErrorHandlerFactory` for creating handlers by name
and the process-wide default used by contexts without their own handler.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, cast

from interactor.compensation.ports.outbound import CompensationErrorHandlerPort
from interactor.compensation.types import CompensationErrorStrategy

if TYPE_CHECKING:
    from interactor.context.context import Context

logger = logging.getLogger(__name__)


def _name(interactor: Any) -> str:
    return type(interactor).__name__


class FailFastErrorHandler:
    """Re-raises the compensation error immediately, stopping the rollback."""

    def handle(self, interactor: Any, error: Exception, context: Context) -> None:
        raise error


class LogAndContinueErrorHandler:
    """Logs the compensation error and continues with the next compensation."""

    def handle(self, interactor: Any, error: Exception, context: Context) -> None:
        logger.error(
            "Compensation failed for interactor '%s': %s",
            _name(interactor),
            error,
            exc_info=error,
        )


class RetryWithBackoffErrorHandler:
    """Retries ``interactor.rollback()`` with exponential backoff.

    The first retry waits *backoff_ms*; every further retry multiplies the
    delay by *backoff_multiplier*. When all retries fail, the last retry error
    is raised chained from the original one.

    Args:
        max_retries: Maximum number of retry attempts.
        backoff_ms: Initial backoff delay in milliseconds.
        backoff_multiplier: Multiplier applied to the delay after each retry.
    """

    def __init__(
        self,
        max_retries: int = 3,
        backoff_ms: int = 1000,
        backoff_multiplier: float = 2.0,
    ) -> None:
        self.max_retries = max_retries
        self.backoff_ms = backoff_ms
        self.backoff_multiplier = backoff_multiplier

    def handle(self, interactor: Any, error: Exception, context: Context) -> None:
        if self.max_retries <= 0:
            raise error

        delay_s = self.backoff_ms / 1000.0

        for attempt in range(self.max_retries):
            time.sleep(delay_s)
            try:
                interactor.rollback()
                logger.info(
                    "Compensation for interactor '%s' succeeded on retry %d",
                    _name(interactor),
                    attempt + 1,
                )
                return
            except Exception as retry_error:  # noqa: BLE001
                if attempt == self.max_retries - 1:
                    raise retry_error from error
                delay_s *= self.backoff_multiplier


class CompositeCompensationErrorHandler:
    """Tries a primary handler first; falls back to a secondary handler on failure.

    Args:
        primary: The first handler to attempt.
        fallback: The handler invoked when *primary* raises.
    """

    def __init__(
        self,
        primary: CompensationErrorHandlerPort,
        fallback: CompensationErrorHandlerPort,
    ) -> None:
        self._primary = primary
        self._fallback = fallback

    def handle(self, interactor: Any, error: Exception, context: Context) -> None:
        try:
            self._primary.handle(interactor, error, context)
        except Exception:  # noqa: BLE001
            self._fallback.handle(interactor, error, context)


class CompensationErrorHandlerFactory:
    """Factory for creating compensation error handlers by strategy name."""

    @staticmethod
    def create(handler_type: str, **kwargs: Any) -> CompensationErrorHandlerPort:
        """Create a compensation error handler by strategy name.

        Args:
            handler_type: One of ``"fail_fast"``, ``"log_and_continue"``,
                ``"retry_with_backoff"``.
            **kwargs: Handler-specific configuration passed to the constructor.

        Returns:
            A handler instance satisfying :class:`CompensationErrorHandlerPort`.

        Raises:
            ValueError: If *handler_type* is not recognised.
        """
        handlers: dict[str, type] = {
            CompensationErrorStrategy.FAIL_FAST: FailFastErrorHandler,
            CompensationErrorStrategy.LOG_AND_CONTINUE: LogAndContinueErrorHandler,
            CompensationErrorStrategy.RETRY_WITH_BACKOFF: RetryWithBackoffErrorHandler,
        }

        handler_cls = handlers.get(str(handler_type))
        if handler_cls is None:
            raise ValueError(
                f"Unknown compensation error handler type: '{handler_type}'. "
                f"Available types: {', '.join(sorted(handlers))}"
            )

        return cast(CompensationErrorHandlerPort, handler_cls(**kwargs))


# ── process-wide default ──────────────────────────────────────

_default_handler: CompensationErrorHandlerPort = LogAndContinueErrorHandler()


def get_default_error_handler() -> CompensationErrorHandlerPort:
    """Return the handler used by contexts that have none of their own."""
    return _default_handler


def set_default_error_handler(handler: CompensationErrorHandlerPort) -> None:
    """Replace the process-wide default compensation error handler."""
    global _default_handler
    _default_handler = handler
