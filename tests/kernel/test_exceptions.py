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
"""Tests for the headerguard exception hierarchy."""

from __future__ import annotations

import pytest

from headerguard.kernel.exceptions import AlreadyCommittedError, ConfigError, HeaderGuardException


class TestHeaderGuardException:
    def test_message_code_and_context(self):
        exc = HeaderGuardException("boom", code="X_1", context={"a": 1})
        assert str(exc) == "boom"
        assert exc.code == "X_1"
        assert exc.context == {"a": 1}

    def test_context_defaults_to_empty_dict(self):
        assert HeaderGuardException("boom").context == {}


class TestConfigError:
    def test_is_headerguard_exception(self):
        assert issubclass(ConfigError, HeaderGuardException)

    def test_carries_option_and_value(self):
        exc = ConfigError("bad", option="hstsMaxAgeSeconds", value="abc")
        assert exc.code == "CONFIG_ERROR"
        assert exc.option == "hstsMaxAgeSeconds"
        assert exc.context == {"option": "hstsMaxAgeSeconds", "value": "abc"}

    def test_without_option(self):
        exc = ConfigError("bad")
        assert exc.option is None
        assert exc.context == {}


class TestAlreadyCommittedError:
    def test_catchable_as_base(self):
        with pytest.raises(HeaderGuardException):
            raise AlreadyCommittedError("committed", path="/x")

    def test_code_and_path(self):
        exc = AlreadyCommittedError("committed", path="/x")
        assert exc.code == "RESPONSE_COMMITTED"
        assert exc.context == {"path": "/x"}
