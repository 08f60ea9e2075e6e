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
"""Validation decorators for declaring required context attributes."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from interactor.validation.validations import Validations

T = TypeVar("T", bound=type)


def requires(*attributes: str) -> Callable[[T], T]:
    """Class decorator equivalent to ``cls.requires(*attributes)``.

    Usage::

        @requires("email", "password")
        class AuthenticateUser(Interactor):
            def call(self) -> None:
                self.context.user = authenticate(self.email, self.password)

    Raises:
        TypeError: If the decorated class does not use :class:`Validations`.
    """

    def decorator(cls: T) -> T:
        if not issubclass(cls, Validations):
            raise TypeError(f"@requires can only decorate interactor classes, got {cls.__name__}")
        cls.requires(*attributes)
        return cls

    return decorator
