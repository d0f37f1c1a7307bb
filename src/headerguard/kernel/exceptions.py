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
"""Unified exception hierarchy for headerguard.

All errors inherit from HeaderGuardException so that callers can catch the
whole family at once, or a specific subclass for targeted handling.

Categories:
- ConfigError: invalid or unknown configuration, raised at startup
- AlreadyCommittedError: headers could not be attached at request time
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class HeaderGuardException(Exception):
    """Base exception for all headerguard errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_ERROR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Startup
# =============================================================================


class ConfigError(HeaderGuardException):
    """A configuration option is unknown or its value cannot be converted.

    Raised while resolving configuration; it must abort application startup.
    """

    def __init__(
        self,
        message: str,
        option: str | None = None,
        value: object = None,
    ) -> None:
        context: dict = {}
        if option is not None:
            context["option"] = option
            context["value"] = value
        super().__init__(message, code="CONFIG_ERROR", context=context)
        self.option = option
        self.value = value


# =============================================================================
# Request time
# =============================================================================


class AlreadyCommittedError(HeaderGuardException):
    """The response was already sent when a header stage was entered.

    Indicates a middleware ordering defect; fatal to the current request.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(
            message,
            code="RESPONSE_COMMITTED",
            context={"path": path} if path is not None else None,
        )
