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
"""Required context attributes, declared per interactor class.

Usage::

    class AuthenticateUser(Interactor):
        def call(self) -> None:
            # email and password are guaranteed to be present
            self.context.user = authenticate(self.email, self.password)

    AuthenticateUser.requires("email", "password")

    AuthenticateUser.run(email="a@example.com")
    # MissingAttributeException: Required attribute password is missing
"""

from __future__ import annotations

from typing import Any

import structlog

from interactor.kernel.exceptions import InvalidArgumentException, MissingAttributeException

logger = structlog.get_logger("interactor.validation")

VALIDATION_HOOK = "validate_required_attributes"

_DECLARED_ATTR = "__interactor_required__"

# Instance attributes every interactor sets itself.
_RESERVED = frozenset({"context"})


class ContextAttribute:
    """Read-only descriptor forwarding an instance attribute to ``self.context``."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return instance.context.get(self.name)

    def __set__(self, instance: Any, value: Any) -> None:
        raise AttributeError(
            f"'{self.name}' is read from the context; assign context.{self.name} instead"
        )

    def __repr__(self) -> str:
        return f"ContextAttribute({self.name!r})"


class Validations:
    """Mixin enforcing required context attributes before an interactor runs.

    Must be combined with :class:`~interactor.hooks.Hooks` (placed before it
    in the bases), since it installs ``validate_required_attributes`` at the
    front of ``before_hooks``, once per class.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        hooks = cls.before_hooks  # type: ignore[attr-defined]
        if VALIDATION_HOOK not in hooks:
            hooks.insert(0, VALIDATION_HOOK)

    @classmethod
    def requires(cls, *attributes: str) -> None:
        """Declare context attributes that must not be ``None`` when invoked.

        Repeated calls accumulate. Each name that is a valid identifier also
        becomes a read-only attribute of the interactor forwarding to the
        context, so ``self.email`` reads ``self.context.email``.

        Names are all checked before any is declared, so a rejected call
        leaves the class unchanged.

        Raises:
            InvalidArgumentException: If a name is not a string, or would
                shadow a member the class already defines.
        """
        for attribute in attributes:
            cls._check_required_name(attribute)

        declared: list[str] = list(cls.__dict__.get(_DECLARED_ATTR) or [])
        for attribute in attributes:
            if attribute.isidentifier() and not isinstance(cls.__dict__.get(attribute), ContextAttribute):
                setattr(cls, attribute, ContextAttribute(attribute))
            if attribute not in declared:
                declared.append(attribute)
        setattr(cls, _DECLARED_ATTR, declared)

    @classmethod
    def _check_required_name(cls, name: Any) -> None:
        if not isinstance(name, str):
            raise InvalidArgumentException(
                f"Required attribute names must be strings, got {type(name).__name__}",
                code="INVALID_ARGUMENT",
                context={"interactor": cls.__name__},
            )
        if not name.isidentifier():
            return
        for klass in cls.__mro__:
            member = klass.__dict__.get(name)
            if name in _RESERVED or (member is not None and not isinstance(member, ContextAttribute)):
                raise InvalidArgumentException(
                    f"Required attribute {name} would shadow {klass.__name__}.{name}",
                    code="INVALID_ARGUMENT",
                    context={"interactor": cls.__name__, "attribute": name},
                )

    @classmethod
    def required_attributes(cls) -> tuple[str, ...]:
        """Return the effective required attributes, inherited names first."""
        names: list[str] = []
        for klass in reversed(cls.__mro__):
            for name in klass.__dict__.get(_DECLARED_ATTR, ()):
                if name not in names:
                    names.append(name)
        return tuple(names)

    def validate_required_attributes(self) -> None:
        """Raise for the first required attribute the context does not hold.

        Raises:
            MissingAttributeException: Naming the first missing attribute in
                declaration order.
        """
        context = self.context  # type: ignore[attr-defined]
        missing = [name for name in type(self).required_attributes() if context.get(name) is None]
        if not missing:
            return

        logger.warning(
            "required_attribute_missing",
            interactor=type(self).__name__,
            attribute=missing[0],
            missing=missing,
        )
        raise MissingAttributeException(missing[0], missing=missing)
