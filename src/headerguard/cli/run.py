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
"""'headerguard run' — serve an application behind the security headers filter."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
import uvicorn
from rich.markup import escape

from headerguard.cli.console import console
from headerguard.cli.headers import load_cli_config
from headerguard.core.properties import ServerProperties
from headerguard.kernel.exceptions import ConfigError
from headerguard.logging import configure_logging
from headerguard.web.adapters.starlette.app import create_app


@click.command()
@click.option(
    "--config",
    "config_path",
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Configuration file (default: headerguard.yaml in the current directory).",
)
@click.option("--profile", "profiles", multiple=True, help="Active profile overlay (repeatable).")
@click.option("--app", "app_path", default=None, help="Application import path (e.g. 'myapp.main:app').")
@click.option("--host", default=None, help="Bind address (default: headerguard.server.host).")
@click.option("--port", default=None, type=int, help="Port number (default: headerguard.server.port).")
@click.option("--reload", "use_reload", is_flag=True, help="Enable auto-reload (requires --app).")
def run_command(
    config_path: Path | None,
    profiles: tuple[str, ...],
    app_path: str | None,
    host: str | None,
    port: int | None,
    use_reload: bool,
) -> None:
    """Start a uvicorn server.

    Without ``--app`` a bare application is served whose every response
    carries the configured security headers.
    """
    config = load_cli_config(config_path, profiles)
    configure_logging(config)
    server = config.bind(ServerProperties)

    app: Any
    if app_path is not None:
        app = app_path
    else:
        if use_reload:
            console.print("[error]--reload requires --app.[/error]")
            raise SystemExit(1)
        try:
            app = create_app(config)
        except ConfigError as exc:
            console.print(f"[error]Invalid configuration:[/error] {escape(str(exc))}")
            raise SystemExit(1) from None

    uvicorn.run(
        app,
        host=host or server.host,
        port=port or server.port,
        log_level=server.log_level,
        reload=(use_reload or server.reload) and isinstance(app, str),
    )
