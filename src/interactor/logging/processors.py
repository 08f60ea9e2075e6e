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
"""structlog processors for interactor events."""

from __future__ import annotations

from collections.abc import Iterable, MutableMapping
from typing import Any

from interactor.context.context import Context

MASK = "***"


class ContextRenderer:
    """Replace :class:`Context` values in an event with a plain summary.

    The summary holds the outcome flags and the attributes, with the values
    of *redact* names masked, so a failed context can be logged without
    leaking credentials it carries::

        {"failure": True, "rolled_back": True,
         "attributes": {"email": "a@example.com", "password": "***"}}
    """

    def __init__(self, redact: Iterable[str] = ()) -> None:
        self.redact = frozenset(redact)

    def __call__(self, logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
        for key, value in list(event_dict.items()):
            if isinstance(value, Context):
                event_dict[key] = self.summarize(value)
        return event_dict

    def summarize(self, context: Context) -> dict[str, Any]:
        attributes = {
            name: MASK if name in self.redact else value
            for name, value in context.to_dict().items()
        }
        return {
            "failure": context.failure,
            "rolled_back": context.rolled_back,
            "attributes": attributes,
        }
