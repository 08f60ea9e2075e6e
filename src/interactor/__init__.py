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
"""interactor: composable units of business logic over a shared context.

Each :class:`Interactor` reads and writes a :class:`Context`, may declare
required attributes, may fail explicitly with :meth:`Context.fail`, and is
compensated in reverse order when a later step of the same chain fails.
"""

from interactor.bootstrap import configure
from interactor.context import Context
from interactor.core import Config, Interactor, Organizer, organize
from interactor.hooks import after_hook, around_hook, before_hook
from interactor.kernel import (
    BusinessException,
    Failure,
    InteractorException,
    InvalidArgumentException,
    MissingAttributeException,
)
from interactor.validation import requires

__all__ = [
    "BusinessException",
    "Config",
    "Context",
    "Failure",
    "Interactor",
    "InteractorException",
    "InvalidArgumentException",
    "MissingAttributeException",
    "Organizer",
    "after_hook",
    "around_hook",
    "before_hook",
    "configure",
    "organize",
    "requires",
]
