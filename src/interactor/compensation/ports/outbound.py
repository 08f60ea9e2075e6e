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
"""Outbound port protocols for context rollback.

These ``@runtime_checkable`` ``Protocol`` definitions form the boundary
between :meth:`Context.rollback` and the strategies that decide what happens
when a compensating action itself fails.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from interactor.context.context import Context


@runtime_checkable
class CompensationErrorHandlerPort(Protocol):
    """Port for handling errors that occur *during* compensation.

    When an interactor's ``rollback()`` raises, the context delegates to this
    port instead of letting the error escape mid-traversal. Returning normally
    lets the rollback continue with the earlier entries of the ledger; raising
    stops it.
    """

    def handle(self, interactor: Any, error: Exception, context: Context) -> None:
        """Handle a compensation failure for *interactor*.

        Args:
            interactor: The ledgered object whose ``rollback()`` raised.
            error:      The exception raised by the compensating action.
            context:    The context being rolled back.
        """
        ...
