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
"""Rollback configuration properties."""

from __future__ import annotations

from pydantic import BaseModel, Field

from interactor.compensation.types import CompensationErrorStrategy
from interactor.core.config import config_properties


@config_properties(prefix="interactor.rollback")
class RollbackProperties(BaseModel):
    """How contexts react when a compensating ``rollback()`` raises (interactor.rollback.*)."""

    error_handler: CompensationErrorStrategy = CompensationErrorStrategy.LOG_AND_CONTINUE
    max_retries: int = Field(default=3, ge=0)
    backoff_ms: int = Field(default=1000, ge=0)
    backoff_multiplier: float = Field(default=2.0, ge=1.0)
