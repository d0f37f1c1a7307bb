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
"""Response commit tracking on the ASGI scope.

A response is committed once its ``http.response.start`` message has been
forwarded; after that its headers can no longer change.
"""

from __future__ import annotations

from typing import Any

from starlette.types import Scope, Send

RESPONSE_COMMITTED = "headerguard.response_committed"

_SECURE_SCHEMES = frozenset({"https", "wss"})


def is_committed(scope: Scope) -> bool:
    return bool(scope.get(RESPONSE_COMMITTED, False))


def is_secure(scope: Scope) -> bool:
    """Whether the request arrived over a secure transport."""
    return scope.get("scheme") in _SECURE_SCHEMES


def track_commit(scope: Scope, send: Send) -> Send:
    """Wrap *send* so that the scope is marked committed after the response start."""

    async def _send(message: Any) -> None:
        await send(message)
        if message["type"] == "http.response.start":
            scope[RESPONSE_COMMITTED] = True

    return _send
