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
"""'headerguard headers' — resolve configuration and show the resulting headers."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click
from rich.markup import escape

from headerguard.cli.console import console, print_headers_table
from headerguard.core.config import Config
from headerguard.kernel.exceptions import ConfigError
from headerguard.web.security_headers import load_security_headers_config, security_headers


def load_cli_config(config_path: Path | None, profiles: Sequence[str]) -> Config:
    """Load an explicit config file, or discover headerguard.yaml/.toml in the cwd."""
    if config_path is not None:
        if not config_path.is_file():
            console.print(f"[error]Config file not found:[/error] {config_path}")
            raise SystemExit(1)
        return Config.from_file(config_path, active_profiles=list(profiles))
    return Config.from_sources(Path.cwd(), active_profiles=list(profiles))


@click.command()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: headerguard.yaml in the current directory).",
)
@click.option("--profile", "profiles", multiple=True, help="Active profile overlay (repeatable).")
@click.option("--insecure", is_flag=True, help="Show headers for a plain-HTTP request (no HSTS).")
def headers_command(config_path: Path | None, profiles: tuple[str, ...], insecure: bool) -> None:
    """Print the security headers the configuration produces."""
    config = load_cli_config(config_path, profiles)

    try:
        resolved = load_security_headers_config(config)
    except ConfigError as exc:
        console.print(f"[error]Invalid configuration:[/error] {escape(str(exc))}")
        raise SystemExit(1) from None

    transport = "http" if insecure else "https"
    print_headers_table(security_headers(resolved, secure=not insecure), title=f"Response headers ({transport})")
