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
"""Tests for configuration loading and binding."""

from dataclasses import dataclass
from pathlib import Path

import pytest

from headerguard.core.config import Config, config_properties
from headerguard.core.properties import ServerProperties


class TestConfig:
    def test_load_from_dict(self):
        config = Config({"app": {"name": "test-service", "port": 8080}})
        assert config.get("app.name") == "test-service"
        assert config.get("app.port") == 8080

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_false_value_is_returned(self):
        config = Config({"headerguard": {"security-headers": {"hstsEnabled": False}}})
        assert config.get("headerguard.security-headers.hstsEnabled") is False

    def test_load_from_yaml_file(self, tmp_path: Path):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("headerguard:\n  security-headers:\n    hstsMaxAgeSeconds: 60\n")
        config = Config.from_file(config_file)
        assert config.get("headerguard.security-headers.hstsMaxAgeSeconds") == 60
        assert str(config_file) in config.loaded_sources

    def test_load_from_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "custom.toml"
        config_file.write_text('[headerguard.security-headers]\nantiClickJackingOption = "SAMEORIGIN"\n')
        config = Config.from_file(config_file)
        assert config.get("headerguard.security-headers.antiClickJackingOption") == "SAMEORIGIN"

    def test_packaged_defaults_loaded(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "missing.yaml")
        assert config.get("headerguard.server.port") == 8000
        assert config.get("headerguard.logging.format") == "console"

    def test_profile_overlay(self, tmp_path: Path):
        (tmp_path / "app.yaml").write_text("headerguard:\n  server:\n    port: 9000\n")
        (tmp_path / "app-prod.yaml").write_text("headerguard:\n  server:\n    port: 443\n")
        config = Config.from_file(tmp_path / "app.yaml", active_profiles=["prod"])
        assert config.get("headerguard.server.port") == 443

    def test_from_sources_discovers_files(self, tmp_path: Path):
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "headerguard.yaml").write_text(
            "headerguard:\n  security-headers:\n    hstsMaxAgeSeconds: 1\n    hstsEnabled: true\n"
        )
        (tmp_path / "headerguard.yaml").write_text("headerguard:\n  security-headers:\n    hstsMaxAgeSeconds: 2\n")
        config = Config.from_sources(tmp_path)
        assert config.get_section("headerguard.security-headers") == {"hstsMaxAgeSeconds": 2, "hstsEnabled": True}
        assert len(config.loaded_sources) == 3

    def test_env_var_override(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HEADERGUARD_APP_NAME", "env-service")
        config = Config({"headerguard": {"app": {"name": "file-service"}}})
        assert config.get("headerguard.app.name") == "env-service"

    def test_env_key(self):
        assert Config.env_key("headerguard.security-headers.hstsEnabled") == "HEADERGUARD_SECURITY_HEADERS_HSTSENABLED"

    def test_placeholder_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CSP_POLICY", "default-src 'none'")
        config = Config({"csp": "${CSP_POLICY}"})
        assert config.get("csp") == "default-src 'none'"

    def test_placeholder_default(self):
        config = Config({"uri": "${FRAME_ORIGIN_THAT_IS_UNSET:https://example.com}"})
        assert config.get("uri") == "https://example.com"

    def test_placeholder_unresolvable_raises(self):
        config = Config({"uri": "${NOT_SET_ANYWHERE_XYZ}"})
        with pytest.raises(ValueError):
            config.get("uri")

    def test_get_section_missing(self):
        assert Config({}).get_section("headerguard.security-headers") == {}


class TestConfigProperties:
    def test_bind_to_dataclass(self):
        @config_properties(prefix="database")
        @dataclass
        class DatabaseConfig:
            url: str = "sqlite:///test.db"
            pool_size: int = 5

        config = Config({"database": {"url": "postgresql://localhost/mydb", "pool_size": 20}})
        db_config = config.bind(DatabaseConfig)
        assert db_config.url == "postgresql://localhost/mydb"
        assert db_config.pool_size == 20

    def test_bind_uses_defaults(self):
        assert Config({}).bind(ServerProperties) == ServerProperties()

    def test_bind_coerces_env_strings(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("HEADERGUARD_SERVER_PORT", "9090")
        monkeypatch.setenv("HEADERGUARD_SERVER_RELOAD", "true")
        server = Config({"headerguard": {"server": {"port": 8000}}}).bind(ServerProperties)
        assert server.port == 9090
        assert server.reload is True

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            x: int = 1

        with pytest.raises(ValueError):
            Config({}).bind(Plain)
