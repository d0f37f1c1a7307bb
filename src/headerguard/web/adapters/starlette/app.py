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
"""headerguard web application factory built on Starlette."""

from __future__ import annotations

from collections.abc import Sequence

import structlog
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from headerguard.core.config import Config
from headerguard.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from headerguard.web.adapters.starlette.filters import SecurityHeadersFilter
from headerguard.web.ordering import get_order
from headerguard.web.ports.filter import WebFilter
from headerguard.web.security_headers import SecurityHeadersConfig, load_security_headers_config

logger = structlog.get_logger("headerguard.web")


def create_app(
    config: Config | None = None,
    security_headers: SecurityHeadersConfig | None = None,
    filters: Sequence[WebFilter] = (),
    routes: Sequence[BaseRoute] | None = None,
    debug: bool = False,
) -> Starlette:
    """Create a Starlette application whose responses carry security headers.

    When ``security_headers`` is not given it is resolved from the
    ``headerguard.security-headers`` section of ``config``; a
    :class:`~headerguard.kernel.exceptions.ConfigError` aborts creation.
    User ``filters`` join the chain and everything is sorted by ``@order``.
    """
    if security_headers is None:
        security_headers = load_security_headers_config(config or Config({}))

    chain: list[WebFilter] = [SecurityHeadersFilter(security_headers), *filters]
    chain.sort(key=lambda f: get_order(type(f)))

    logger.info(
        "security_headers_configured",
        filters=[type(f).__name__ for f in chain],
        csp_enabled=security_headers.csp_enabled,
        hsts=security_headers.hsts_header_value if security_headers.hsts_enabled else None,
        frame_options=(
            security_headers.anti_click_jacking_header_value
            if security_headers.anti_click_jacking_enabled
            else None
        ),
    )

    return Starlette(
        debug=debug,
        routes=list(routes or []),
        middleware=[Middleware(WebFilterChainMiddleware, filters=chain)],
    )
