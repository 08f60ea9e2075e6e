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
"""Interactor: a single unit of business logic invoked with a Context."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog

from interactor.context.context import Context
from interactor.hooks.hooks import Hooks
from interactor.kernel.exceptions import Failure
from interactor.validation.validations import Validations

logger = structlog.get_logger("interactor.core")


class Interactor(Hooks, Validations):
    """Base class for units of work.

    Subclasses override :meth:`call` with the business logic, reading and
    writing ``self.context``, and optionally :meth:`rollback` to undo it when
    a later interactor in the same chain fails.

    Usage::

        class PlaceOrder(Interactor):
            def call(self) -> None:
                if not self.context.items:
                    self.context.fail(reason="empty_cart")
                self.context.order = create_order(self.context.items)

            def rollback(self) -> None:
                cancel_order(self.context.order)

        ctx = PlaceOrder.run(items=[...])
        ctx.success   # True or False
    """

    context: Context

    def __init__(self, context: Context | Mapping[Any, Any] | None = None, /, **attributes: Any) -> None:
        self.context = Context.build(context, **attributes)

    # ── entry points ──────────────────────────────────────────

    @classmethod
    def run(cls, context: Context | Mapping[Any, Any] | None = None, /, **attributes: Any) -> Context:
        """Invoke the interactor and return its context.

        A :class:`Failure` raised for this context is absorbed: the returned
        context is then failed. Every other exception propagates, including a
        :class:`Failure` carrying some other context.
        """
        instance = cls(context, **attributes)
        instance.invoke()
        return instance.context

    @classmethod
    def run_or_raise(cls, context: Context | Mapping[Any, Any] | None = None, /, **attributes: Any) -> Context:
        """Invoke the interactor and return its context, letting :class:`Failure` propagate."""
        instance = cls(context, **attributes)
        instance.invoke_or_raise()
        return instance.context

    # ── instance execution ────────────────────────────────────

    def invoke(self) -> None:
        """Run hooks and :meth:`call`, absorbing a :class:`Failure` of this context.

        A :class:`Failure` carrying any other context propagates.
        """
        try:
            self.invoke_or_raise()
        except Failure as exc:
            if exc.context is not self.context:
                raise
            logger.debug("failure_absorbed", interactor=type(self).__name__, context=exc.context)

    def invoke_or_raise(self) -> None:
        """Run hooks and :meth:`call`; on any error roll the context back and re-raise."""
        try:
            self.run_with_hooks(self._call_and_record)
        except Exception as exc:
            logger.info(
                "interactor_failed",
                interactor=type(self).__name__,
                error=type(exc).__name__,
            )
            self.context.rollback()
            raise

    def _call_and_record(self) -> None:
        self.call()
        self.context.record_completion(self)
        logger.debug("interactor_completed", interactor=type(self).__name__)

    # ── overridable ───────────────────────────────────────────

    def call(self) -> None:
        """Business logic. The default does nothing."""

    def rollback(self) -> None:
        """Compensation for :meth:`call`. The default does nothing."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} context={self.context!r}>"
