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
"""headerguard web — security header configuration, filters and middleware.

Framework-agnostic types are exported directly; the default adapter
(Starlette) is re-exported for convenience.
"""

from headerguard.web.adapters.starlette import (
    SecurityHeadersFilter,
    SecurityHeadersMiddleware,
    WebFilterChainMiddleware,
    create_app,
)
from headerguard.web.filters import OncePerRequestFilter
from headerguard.web.ordering import HIGHEST_PRECEDENCE, LOWEST_PRECEDENCE, get_order, order
from headerguard.web.ports.filter import CallNext, WebFilter
from headerguard.web.security_headers import (
    SecurityHeadersConfig,
    XFrameOption,
    apply_security_headers,
    load_security_headers_config,
    resolve_config,
    security_headers,
)

__all__ = [
    # Framework-agnostic
    "CallNext",
    "HIGHEST_PRECEDENCE",
    "LOWEST_PRECEDENCE",
    "OncePerRequestFilter",
    "SecurityHeadersConfig",
    "WebFilter",
    "XFrameOption",
    "apply_security_headers",
    "get_order",
    "load_security_headers_config",
    "order",
    "resolve_config",
    "security_headers",
    # Default adapter (Starlette)
    "SecurityHeadersFilter",
    "SecurityHeadersMiddleware",
    "WebFilterChainMiddleware",
    "create_app",
]
