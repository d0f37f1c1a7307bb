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
"""Security headers configuration, option resolution and header computation.

Framework-agnostic: adapters call :func:`apply_security_headers` with
whatever case-insensitive header mapping their response exposes.
"""

from __future__ import annotations

import enum
import re
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import structlog

from headerguard.kernel.exceptions import ConfigError

if TYPE_CHECKING:
    from headerguard.core.config import Config

logger = structlog.get_logger("headerguard.web.security_headers")

# Header names
CONTENT_SECURITY_POLICY = "Content-Security-Policy"
CONTENT_SECURITY_POLICY_REPORT_ONLY = "Content-Security-Policy-Report-Only"
X_CONTENT_SECURITY_POLICY = "X-Content-Security-Policy"  # IE 10/11
X_WEBKIT_CSP = "X-Webkit-CSP"  # older Safari / iOS
STRICT_TRANSPORT_SECURITY = "Strict-Transport-Security"
X_FRAME_OPTIONS = "X-Frame-Options"
X_CONTENT_TYPE_OPTIONS = "X-Content-Type-Options"
X_XSS_PROTECTION = "X-XSS-Protection"

NOSNIFF = "nosniff"
XSS_BLOCK = "1; mode=block"
DEFAULT_POLICY = "default-src 'self';"

CONFIG_SECTION = "headerguard.security-headers"

_INTEGER_RE = re.compile(r"[+-]?\d+")
_URI_ILLEGAL_RE = re.compile(r"[\s<>\"{}|\\^`\x00-\x1f\x7f]|%(?![0-9A-Fa-f]{2})")
_HEADER_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f]")

# hstsMaxAgeSeconds must fit a signed 32-bit integer
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


class XFrameOption(enum.Enum):
    """Values of the X-Frame-Options header; each member's value is its wire token."""

    DENY = "DENY"
    SAMEORIGIN = "SAMEORIGIN"
    ALLOW_FROM = "ALLOW-FROM"

    @classmethod
    def parse(cls, value: str) -> XFrameOption:
        """Match *value* case-insensitively against the wire tokens."""
        for option in cls:
            if option.value.lower() == value.strip().lower():
                return option
        raise ConfigError(
            f"invalid anti-click-jacking option value '{value}'",
            option="antiClickJackingOption",
            value=value,
        )


@dataclass(frozen=True)
class SecurityHeadersConfig:
    """Resolved security header settings.

    Built once at startup and shared read-only by every request.  The HSTS
    and X-Frame-Options header values are composed here, not per request.
    The X-Content-Security-Policy and X-Webkit-CSP headers always carry
    ``csp_value``.
    """

    csp_enabled: bool = True
    csp_value: str = DEFAULT_POLICY
    csp_report_only_enabled: bool = True
    csp_report_only_value: str = DEFAULT_POLICY
    x_content_security_policy_enabled: bool = True
    x_webkit_csp_enabled: bool = True
    hsts_enabled: bool = True
    hsts_max_age_seconds: int = 0
    hsts_include_sub_domains: bool = False
    anti_click_jacking_enabled: bool = True
    anti_click_jacking_option: XFrameOption = XFrameOption.DENY
    anti_click_jacking_uri: str | None = None
    block_content_type_sniffing_enabled: bool = True
    xss_protection_enabled: bool = True

    hsts_header_value: str = field(init=False, repr=False)
    anti_click_jacking_header_value: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Negative max-age is treated as zero.
        if self.hsts_max_age_seconds < 0:
            object.__setattr__(self, "hsts_max_age_seconds", 0)

        hsts = f"max-age={self.hsts_max_age_seconds}"
        if self.hsts_include_sub_domains:
            hsts += ";includeSubDomains"
        object.__setattr__(self, "hsts_header_value", hsts)

        frame = self.anti_click_jacking_option.value
        if self.anti_click_jacking_option is XFrameOption.ALLOW_FROM:
            if not self.anti_click_jacking_uri:
                raise ConfigError(
                    "antiClickJackingUri is required when antiClickJackingOption is ALLOW-FROM",
                    option="antiClickJackingUri",
                    value=self.anti_click_jacking_uri,
                )
            frame += f" {self.anti_click_jacking_uri}"
        object.__setattr__(self, "anti_click_jacking_header_value", frame)


# ---------------------------------------------------------------------------
# Option parsing
# ---------------------------------------------------------------------------

_KEEP_DEFAULT = object()


def _parse_bool(option: str, value: Any) -> Any:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    logger.warning("security_header_option_ignored", option=option, value=value, reason="not a boolean")
    return _KEEP_DEFAULT


def _check_int_range(option: str, number: int, value: Any) -> int:
    if not _INT_MIN <= number <= _INT_MAX:
        raise ConfigError(f"integer value '{value}' for option '{option}' is out of range", option=option, value=value)
    return number


def _check_header_value(option: str, text: str, value: Any) -> str:
    """Reject values that cannot be sent as an HTTP header value."""
    if _HEADER_CONTROL_RE.search(text):
        raise ConfigError(f"control character in value for option '{option}'", option=option, value=value)
    try:
        text.encode("latin-1")
    except UnicodeEncodeError as exc:
        raise ConfigError(
            f"value for option '{option}' is not encodable as an HTTP header: {exc}",
            option=option,
            value=value,
        ) from exc
    return text


def _parse_int(option: str, value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return _check_int_range(option, value, value)
    text = str(value).strip()
    if not _INTEGER_RE.fullmatch(text):
        raise ConfigError(f"invalid integer value '{value}' for option '{option}'", option=option, value=value)
    return _check_int_range(option, int(text), value)


def _parse_str(option: str, value: Any) -> str:
    return _check_header_value(option, str(value), value)


def _parse_option(option: str, value: Any) -> XFrameOption:
    return XFrameOption.parse(str(value))


def _parse_uri(option: str, value: Any) -> str:
    text = _check_header_value(option, str(value), value)
    try:
        urlsplit(text)
    except ValueError as exc:
        raise ConfigError(f"invalid URI '{text}' for option '{option}': {exc}", option=option, value=value) from exc
    if _URI_ILLEGAL_RE.search(text):
        raise ConfigError(f"invalid URI '{text}' for option '{option}'", option=option, value=value)
    return text


# option name -> (config field, parser)
_OPTIONS: dict[str, tuple[str, Callable[[str, Any], Any]]] = {
    "contentSecurityPolicy": ("csp_value", _parse_str),
    "contentSecurityPolicyEnabled": ("csp_enabled", _parse_bool),
    "contentSecurityPolicyReportOnly": ("csp_report_only_value", _parse_str),
    "contentSecurityPolicyReportOnlyEnabled": ("csp_report_only_enabled", _parse_bool),
    "headerXcontentSecurityPolicyEnabled": ("x_content_security_policy_enabled", _parse_bool),
    "headerXwebkitCSPEnabled": ("x_webkit_csp_enabled", _parse_bool),
    "hstsEnabled": ("hsts_enabled", _parse_bool),
    "hstsMaxAgeSeconds": ("hsts_max_age_seconds", _parse_int),
    "hstsIncludeSubDomains": ("hsts_include_sub_domains", _parse_bool),
    "antiClickJackingEnabled": ("anti_click_jacking_enabled", _parse_bool),
    "antiClickJackingOption": ("anti_click_jacking_option", _parse_option),
    "antiClickJackingUri": ("anti_click_jacking_uri", _parse_uri),
    "blockContentTypeSniffingEnabled": ("block_content_type_sniffing_enabled", _parse_bool),
    "xssProtectionEnabled": ("xss_protection_enabled", _parse_bool),
}

OPTION_NAMES: frozenset[str] = frozenset(_OPTIONS)


def resolve_config(options: Mapping[str, Any] | None = None) -> SecurityHeadersConfig:
    """Resolve raw option values into a :class:`SecurityHeadersConfig`.

    Absent options (or ``None`` values) keep their defaults.  An unknown
    option name, a non-integer or out-of-range ``hstsMaxAgeSeconds``, an
    unknown ``antiClickJackingOption``, a malformed ``antiClickJackingUri``
    or a policy or URI that is not a valid header value (control characters,
    non latin-1 text) raise :class:`ConfigError`.  Booleans other than
    ``true``/``false`` are ignored with a warning.
    """
    options = dict(options or {})

    unknown = [name for name in options if name not in _OPTIONS]
    if unknown:
        raise ConfigError(
            f"unknown configuration option '{unknown[0]}'",
            option=unknown[0],
            value=options[unknown[0]],
        )

    kwargs: dict[str, Any] = {}
    for name, raw in options.items():
        if raw is None:
            continue
        field_name, parse = _OPTIONS[name]
        value = parse(name, raw)
        if value is not _KEEP_DEFAULT:
            kwargs[field_name] = value

    config = SecurityHeadersConfig(**kwargs)

    for name, (field_name, _parse) in _OPTIONS.items():
        logger.debug(
            "security_header_option",
            option=name,
            value=getattr(config, field_name),
            source="configured" if field_name in kwargs else "default",
        )
    return config


def load_security_headers_config(config: Config) -> SecurityHeadersConfig:
    """Resolve the ``headerguard.security-headers`` section of *config*.

    Environment overrides (``HEADERGUARD_SECURITY_HEADERS_<OPTION>``) apply
    to options present in the section.
    """
    section = config.get_section(CONFIG_SECTION)
    return resolve_config({name: config.get(f"{CONFIG_SECTION}.{name}") for name in section})


# ---------------------------------------------------------------------------
# Header computation
# ---------------------------------------------------------------------------


def security_headers(config: SecurityHeadersConfig, *, secure: bool) -> dict[str, str]:
    """Return the headers to set on a response, in application order.

    ``Strict-Transport-Security`` is only produced for secure requests.  The
    Report-Only policy depends solely on its own flag.
    """
    headers: dict[str, str] = {}

    if config.csp_enabled:
        headers[CONTENT_SECURITY_POLICY] = config.csp_value
    if config.csp_report_only_enabled:
        headers[CONTENT_SECURITY_POLICY_REPORT_ONLY] = config.csp_report_only_value
    if config.csp_enabled and config.x_content_security_policy_enabled:
        headers[X_CONTENT_SECURITY_POLICY] = config.csp_value
    if config.csp_enabled and config.x_webkit_csp_enabled:
        headers[X_WEBKIT_CSP] = config.csp_value

    if config.hsts_enabled and secure:
        headers[STRICT_TRANSPORT_SECURITY] = config.hsts_header_value
    if config.anti_click_jacking_enabled:
        headers[X_FRAME_OPTIONS] = config.anti_click_jacking_header_value
    if config.block_content_type_sniffing_enabled:
        headers[X_CONTENT_TYPE_OPTIONS] = NOSNIFF
    if config.xss_protection_enabled:
        headers[X_XSS_PROTECTION] = XSS_BLOCK

    return headers


def apply_security_headers(
    headers: MutableMapping[str, str],
    config: SecurityHeadersConfig,
    *,
    secure: bool,
) -> None:
    """Write the security headers into *headers*, replacing existing values.

    *headers* must be case-insensitive (e.g. Starlette ``MutableHeaders``)
    for replacement to cover differently-cased names.
    """
    for name, value in security_headers(config, secure=secure).items():
        headers[name] = value
