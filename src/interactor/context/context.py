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
"""Context: mutable state carrier threaded through a chain of interactors."""

from __future__ import annotations

from collections.abc import Mapping
from reprlib import recursive_repr
from typing import Any, NoReturn

import structlog

from interactor.compensation.handlers import get_default_error_handler
from interactor.compensation.ports.outbound import CompensationErrorHandlerPort
from interactor.kernel.exceptions import Failure, InvalidArgumentException

logger = structlog.get_logger("interactor.context")

_INTERNAL = frozenset({"_table", "_failed", "_rolled_back", "_ledger", "_error_handler"})


def _key(key: Any) -> str:
    return key if type(key) is str else str(key)


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


class Context:
    """Attribute bag, outcome flag and call ledger shared by a chain of interactors.

    Any attribute name can be read or written without being declared first::

        ctx = Context(email="a@example.com")
        ctx.user = "alice"
        ctx.user          # "alice"
        ctx.nickname      # None: absent attributes read as None

    Names defined on the class (``fail``, ``rollback``, ``success`` ...) win
    on attribute reads; ``ctx.get(name)`` and ``ctx[name]`` always reach the
    stored value.

    A context is successful until :meth:`fail` is called, which merges the
    given attributes, flags the context and raises :class:`Failure`. Every
    interactor that completes against the context is appended to its ledger,
    and :meth:`rollback` asks each of them, most recent first, to undo itself.
    """

    __slots__ = ("_table", "_failed", "_rolled_back", "_ledger", "_error_handler")

    # not iterable; use to_dict()
    __iter__ = None

    def __init__(self, attributes: Mapping[Any, Any] | None = None, /, **kwargs: Any) -> None:
        object.__setattr__(self, "_table", {})
        object.__setattr__(self, "_failed", False)
        object.__setattr__(self, "_rolled_back", False)
        object.__setattr__(self, "_ledger", [])
        object.__setattr__(self, "_error_handler", None)
        self._merge(attributes or {})
        self._merge(kwargs)

    @classmethod
    def build(cls, source: Context | Mapping[Any, Any] | None = None, /, **attributes: Any) -> Context:
        """Return *source* if it is already a context, otherwise wrap it in a new one.

        Keyword *attributes* are set on the returned context in both cases, so
        ``Context.build(ctx, order_id=42)`` is the same object as ``ctx``.

        Raises:
            InvalidArgumentException: If *source* is neither a context, a
                mapping nor ``None``.
        """
        if isinstance(source, cls):
            source._merge(attributes)
            return source
        if source is not None and not isinstance(source, Mapping):
            raise InvalidArgumentException(
                f"Cannot build {cls.__name__} from {type(source).__name__}",
                code="INVALID_ARGUMENT",
                context={"source_type": type(source).__name__},
            )
        return cls(source, **attributes)

    # ── attribute store ───────────────────────────────────────

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the attribute stored under *key*, or *default* if absent."""
        return self._table.get(_key(key), default)

    def set(self, key: Any, value: Any) -> Any:
        """Store *value* under *key*, overwriting any previous value."""
        self._table[_key(key)] = value
        return value

    def to_dict(self) -> dict[str, Any]:
        """Return a shallow copy of all attributes."""
        return dict(self._table)

    def deconstruct(self) -> dict[str, Any]:
        """Return the attributes merged with the ``success`` / ``failure`` flags.

        Meant for ``match`` statements; the flags win over attributes that
        happen to share their names::

            match ctx.deconstruct():
                case {"success": True, "user": user}:
                    ...
                case {"failure": True, "reason": reason}:
                    ...
        """
        return {**self._table, "success": self.success, "failure": self.failure}

    def _merge(self, attributes: Mapping[Any, Any]) -> list[str]:
        keys = []
        for key, value in attributes.items():
            self.set(key, value)
            keys.append(_key(key))
        return keys

    def __getitem__(self, key: Any) -> Any:
        return self._table.get(_key(key))

    def __setitem__(self, key: Any, value: Any) -> None:
        self._table[_key(key)] = value

    def __contains__(self, key: object) -> bool:
        return _key(key) in self._table

    def __getattr__(self, name: str) -> Any:
        # Only reached for names the class does not define.
        if _is_dunder(name) or name in _INTERNAL:
            raise AttributeError(name)
        return self._table.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _INTERNAL:
            object.__setattr__(self, name, value)
        else:
            self._table[name] = value

    def __delattr__(self, name: str) -> None:
        try:
            del self._table[name]
        except KeyError:
            raise AttributeError(name) from None

    def __dir__(self) -> list[str]:
        return sorted(set(super().__dir__()) | set(self._table))

    @recursive_repr()
    def __repr__(self) -> str:
        pairs = "".join(f" {key}={value!r}" for key, value in self._table.items())
        state = " failed" if self._failed else ""
        return f"<{type(self).__name__}{pairs}{state}>"

    # ── outcome ───────────────────────────────────────────────

    @property
    def success(self) -> bool:
        """``True`` until the context is failed."""
        return not self.failure

    @property
    def failure(self) -> bool:
        """``True`` once :meth:`fail` has been called."""
        return self._failed

    def fail(self, extra: Mapping[Any, Any] | None = None, /, **attributes: Any) -> NoReturn:
        """Merge *extra* and *attributes*, flag the context as failed and raise.

        The merge happens before the flag is set, so whoever rescues the
        :class:`Failure` sees the merged values. Failing an already failed
        context merges and raises again.

        Raises:
            Failure: Always, carrying this context.
        """
        keys = self._merge(extra or {}) + self._merge(attributes)
        object.__setattr__(self, "_failed", True)
        logger.info("context_failed", attributes=keys)
        raise Failure(self)

    # ── ledger & rollback ─────────────────────────────────────

    @property
    def ledger(self) -> tuple[Any, ...]:
        """Interactors that completed against this context, in completion order."""
        return tuple(self._ledger)

    @property
    def rolled_back(self) -> bool:
        return self._rolled_back

    @property
    def error_handler(self) -> CompensationErrorHandlerPort:
        """Handler for compensation errors; the process-wide default unless overridden."""
        return self._error_handler or get_default_error_handler()

    def use_error_handler(self, handler: CompensationErrorHandlerPort | None) -> None:
        """Override the compensation error handler for this context only."""
        object.__setattr__(self, "_error_handler", handler)

    def record_completion(self, interactor: Any) -> None:
        """Append *interactor* to the ledger after its body returned normally."""
        self._ledger.append(interactor)
        logger.debug(
            "interactor_recorded",
            interactor=type(interactor).__name__,
            position=len(self._ledger),
        )

    def rollback(self) -> bool:
        """Compensate every ledgered interactor, most recent first.

        Entries without a ``rollback()`` method are skipped. Errors raised by
        a compensation go to :attr:`error_handler`; if the handler re-raises,
        the traversal stops and the context is not marked rolled back.

        Returns:
            ``True`` after a full traversal, ``False`` if the context had
            already been rolled back.
        """
        if self._rolled_back:
            logger.debug("rollback_skipped", reason="already_rolled_back")
            return False

        handler = self.error_handler
        compensated = errors = 0
        for interactor in reversed(tuple(self._ledger)):
            compensate = getattr(interactor, "rollback", None)
            if compensate is None:
                continue
            try:
                compensate()
            except Exception as exc:
                errors += 1
                handler.handle(interactor, exc, self)
            else:
                compensated += 1

        object.__setattr__(self, "_rolled_back", True)
        logger.info(
            "context_rolled_back",
            compensated=compensated,
            errors=errors,
            ledger_size=len(self._ledger),
        )
        return True
