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
"""Organizer: an interactor that runs other interactors in sequence."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TypeVar

from interactor.core.interactor import Interactor

T = TypeVar("T", bound=type)


def _flatten(interactors: Iterable[type[Interactor] | Iterable[type[Interactor]]]) -> list[type[Interactor]]:
    flat: list[type[Interactor]] = []
    for item in interactors:
        if isinstance(item, type):
            if not issubclass(item, Interactor):
                raise TypeError(f"{item.__name__} is not an Interactor subclass")
            flat.append(item)
        else:
            flat.extend(_flatten(item))
    return flat


class Organizer(Interactor):
    """Runs its organized interactors, in order, against one shared context.

    Each interactor is invoked with :meth:`Interactor.run_or_raise`, so the
    first failure stops the chain, rolls back what already completed and
    propagates to the organizer (which absorbs it when started with ``run``).

    Usage::

        class PlaceOrder(Organizer):
            pass

        PlaceOrder.organize(ReserveStock, ChargeCard, ShipOrder)
        ctx = PlaceOrder.run(order_id=42)
    """

    _organized: tuple[type[Interactor], ...] = ()

    @classmethod
    def organize(cls, *interactors: type[Interactor] | Iterable[type[Interactor]]) -> None:
        """Replace the interactors run by this organizer; lists are flattened."""
        cls._organized = tuple(_flatten(interactors))

    @classmethod
    def organized(cls) -> tuple[type[Interactor], ...]:
        return cls._organized

    def call(self) -> None:
        for interactor in self.organized():
            interactor.run_or_raise(self.context)


def organize(*interactors: type[Interactor] | Iterable[type[Interactor]]) -> Callable[[T], T]:
    """Class decorator equivalent to ``cls.organize(*interactors)``.

    Usage::

        @organize(ReserveStock, ChargeCard, ShipOrder)
        class PlaceOrder(Organizer):
            pass
    """

    def decorator(cls: T) -> T:
        if not issubclass(cls, Organizer):
            raise TypeError(f"@organize can only decorate Organizer subclasses, got {cls.__name__}")
        cls.organize(*interactors)
        return cls

    return decorator
