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
"""Security headers filter — adds the configured security headers to every response."""

from __future__ import annotations

from typing import cast

import structlog
from starlette.requests import Request
from starlette.responses import Response

from headerguard.kernel.exceptions import AlreadyCommittedError
from headerguard.web.adapters.starlette.commit import is_committed, is_secure
from headerguard.web.filters import OncePerRequestFilter
from headerguard.web.ordering import HIGHEST_PRECEDENCE, order
from headerguard.web.ports.filter import CallNext
from headerguard.web.security_headers import SecurityHeadersConfig, apply_security_headers

logger = structlog.get_logger("headerguard.web")


@order(HIGHEST_PRECEDENCE + 300)
class SecurityHeadersFilter(OncePerRequestFilter):
    """Filter-chain counterpart of :class:`SecurityHeadersMiddleware`.

    Commit detection has the same reach as the middleware: only responses
    started through a headerguard stage are seen as committed.
    """

    def __init__(self, config: SecurityHeadersConfig | None = None) -> None:
        self._config = config or SecurityHeadersConfig()

    @property
    def config(self) -> SecurityHeadersConfig:
        return self._config

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        if is_committed(request.scope):
            logger.error("security_headers_response_committed", path=request.url.path)
            raise AlreadyCommittedError(
                "Unable to add HTTP security headers: response is already committed",
                path=request.url.path,
            )

        response = cast(Response, await call_next(request))
        apply_security_headers(response.headers, self._config, secure=is_secure(request.scope))
        return response
