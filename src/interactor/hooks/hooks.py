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
"""Hooks: per-class before/after/around hook lists and the code that runs them."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

from interactor.hooks.decorators import HOOK_ATTR

Hook = str | Callable[..., Any]


class Hooks:
    """Mixin giving every subclass its own ordered hook lists.

    A hook is either the name of a method on the instance or a callable that
    receives the instance as first argument. Around hooks additionally receive
    a zero-argument callable that continues the chain and must call it.

    Lists are copied from the parent when a subclass is created, so hooks are
    inherited but additions never leak into the parent or into siblings.
    """

    before_hooks: list[Hook] = []
    after_hooks: list[Hook] = []
    around_hooks: list[Hook] = []

    def __init_subclass__(cls, **kwargs: Any) -> None:
        cls.before_hooks = list(cls.before_hooks)
        cls.after_hooks = list(cls.after_hooks)
        cls.around_hooks = list(cls.around_hooks)
        super().__init_subclass__(**kwargs)

        for name, member in cls.__dict__.items():
            kind = getattr(member, HOOK_ATTR, None)
            if kind is None:
                continue
            hooks = getattr(cls, f"{kind}_hooks")
            if name not in hooks:
                getattr(cls, kind)(name)

    # ── registration ──────────────────────────────────────────

    @classmethod
    def before(cls, *hooks: Hook) -> None:
        """Append *hooks*; before hooks run in declaration order."""
        cls.before_hooks.extend(hooks)

    @classmethod
    def after(cls, *hooks: Hook) -> None:
        """Prepend *hooks*; after hooks run in reverse declaration order."""
        for hook in hooks:
            cls.after_hooks.insert(0, hook)

    @classmethod
    def around(cls, *hooks: Hook) -> None:
        """Append *hooks*; the first declared around hook is the outermost."""
        cls.around_hooks.extend(hooks)

    # ── execution ─────────────────────────────────────────────

    def run_with_hooks(self, block: Callable[[], Any]) -> None:
        """Run *block* between the before and after hooks, inside the around hooks."""

        def _inner() -> None:
            self._run_hooks(type(self).before_hooks)
            block()
            self._run_hooks(type(self).after_hooks)

        chain: Callable[[], None] = _inner
        for hook in reversed(type(self).around_hooks):
            chain = functools.partial(self._run_hook, hook, chain)
        chain()

    def _run_hooks(self, hooks: list[Hook]) -> None:
        for hook in list(hooks):
            self._run_hook(hook)

    def _run_hook(self, hook: Hook, *args: Any) -> None:
        if isinstance(hook, str):
            getattr(self, hook)(*args)
        else:
            hook(self, *args)
