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
"""Hook decorators: register interactor methods as before/after/around hooks.

Method-level decorators:
    @before_hook   run the method before ``call()``
    @after_hook    run the method after ``call()``
    @around_hook   wrap ``before hooks → call() → after hooks``; the method
                   receives the continuation and must call it

The decorators only mark the function; :class:`~interactor.hooks.Hooks`
registers marked methods by name when the class is created.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])

HOOK_ATTR = "__interactor_hook__"


def _mark(kind: str) -> Callable[[F], F]:
    def decorator(func: F) -> F:
        setattr(func, HOOK_ATTR, kind)
        return func

    return decorator


def before_hook(func: F) -> F:
    """Mark *func* as a before hook of its interactor class."""
    return _mark("before")(func)


def after_hook(func: F) -> F:
    """Mark *func* as an after hook of its interactor class."""
    return _mark("after")(func)


def around_hook(func: F) -> F:
    """Mark *func* as an around hook of its interactor class."""
    return _mark("around")(func)
