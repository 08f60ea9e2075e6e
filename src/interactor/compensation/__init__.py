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
"""Interactor Compensation: strategies for errors raised during rollback."""

from interactor.compensation.handlers import (
    CompensationErrorHandlerFactory,
    CompositeCompensationErrorHandler,
    FailFastErrorHandler,
    LogAndContinueErrorHandler,
    RetryWithBackoffErrorHandler,
    get_default_error_handler,
    set_default_error_handler,
)
from interactor.compensation.ports.outbound import CompensationErrorHandlerPort
from interactor.compensation.types import CompensationErrorStrategy

__all__ = [
    "CompensationErrorHandlerFactory",
    "CompensationErrorHandlerPort",
    "CompensationErrorStrategy",
    "CompositeCompensationErrorHandler",
    "FailFastErrorHandler",
    "LogAndContinueErrorHandler",
    "RetryWithBackoffErrorHandler",
    "get_default_error_handler",
    "set_default_error_handler",
]
