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
"""Security headers middleware for Starlette — pure ASGI."""

from __future__ import annotations

from typing import Any

import structlog
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

from headerguard.kernel.exceptions import AlreadyCommittedError
from headerguard.web.adapters.starlette.commit import is_committed, is_secure, track_commit
from headerguard.web.security_headers import SecurityHeadersConfig, apply_security_headers

logger = structlog.get_logger("headerguard.web")


class SecurityHeadersMiddleware:
    """Adds the configured security headers to every HTTP response.

    Headers are written onto the ``http.response.start`` message on its way
    out, replacing any value the downstream app set for the same name.
    Entering the middleware for a response that is already committed raises
    :class:`AlreadyCommittedError` without calling the downstream app.

    A response counts as committed only once a headerguard stage has
    forwarded its ``http.response.start`` (see :func:`track_commit`). A start
    message sent by some other ASGI stage earlier in the stack is not
    visible in the scope and is not detected.
    """

    def __init__(self, app: ASGIApp, config: SecurityHeadersConfig | None = None) -> None:
        self.app = app
        self._config = config or SecurityHeadersConfig()

    @property
    def config(self) -> SecurityHeadersConfig:
        return self._config

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        if is_committed(scope):
            path = scope.get("path")
            logger.error("security_headers_response_committed", path=path)
            raise AlreadyCommittedError(
                "Unable to add HTTP security headers: response is already committed",
                path=path,
            )

        cfg = self._config
        secure = is_secure(scope)

        async def send_with_headers(message: Any) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                apply_security_headers(MutableHeaders(scope=message), cfg, secure=secure)
            await send(message)

        await self.app(scope, receive, track_commit(scope, send_with_headers))
