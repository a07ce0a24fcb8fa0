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
"""Tests for Config and ClientProperties binding."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import httpx
import pytest

from perigee import exchange
from perigee.config import ClientProperties, Config, config_properties


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch):
    for name in (
        "PERIGEE_CLIENT_TIMEOUT",
        "PERIGEE_CLIENT_FOLLOW_REDIRECTS",
        "PERIGEE_CLIENT_DUMP_REQUEST_JSON",
        "PERIGEE_CLIENT_USER_AGENT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(exchange, "_properties", None)


class TestConfig:
    def test_dot_notation_get(self):
        config = Config({"perigee": {"client": {"timeout": 5}}})
        assert config.get("perigee.client.timeout") == 5

    def test_missing_key_returns_default(self):
        assert Config({}).get("perigee.client.timeout", 30) == 30

    def test_env_var_overrides(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PERIGEE_CLIENT_TIMEOUT", "12")
        config = Config({"perigee": {"client": {"timeout": 5}}})
        assert config.get("perigee.client.timeout") == "12"

    def test_get_section(self):
        config = Config({"perigee": {"logging": {"level": {"root": "DEBUG"}}}})
        assert config.get_section("perigee.logging.level") == {"root": "DEBUG"}
        assert config.get_section("perigee.missing") == {}

    def test_from_yaml_file(self, tmp_path: Path):
        path = tmp_path / "perigee.yaml"
        path.write_text("perigee:\n  client:\n    timeout: 3.5\n")
        config = Config.from_file(path)
        assert config.get("perigee.client.timeout") == 3.5

    def test_from_toml_file(self, tmp_path: Path):
        path = tmp_path / "perigee.toml"
        path.write_text('[perigee.client]\nuser_agent = "svc/1.0"\n')
        config = Config.from_file(path)
        assert config.get("perigee.client.user_agent") == "svc/1.0"

    def test_file_overrides_defaults(self, tmp_path: Path):
        path = tmp_path / "perigee.yaml"
        path.write_text("perigee:\n  client:\n    timeout: 3\n")
        defaults = {"perigee": {"client": {"timeout": 30, "follow_redirects": True}}}
        config = Config.from_file(path, defaults=defaults)
        assert config.get("perigee.client.timeout") == 3
        assert config.get("perigee.client.follow_redirects") is True

    def test_missing_file_yields_defaults(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "absent.yaml", defaults={"a": 1})
        assert config.to_dict() == {"a": 1}


class TestBind:
    def test_defaults(self):
        props = Config({}).bind(ClientProperties)
        assert props == ClientProperties()
        assert props.timeout == 30.0
        assert props.dump_request_json is False

    def test_kebab_case_keys(self):
        config = Config({"perigee": {"client": {"dump-request-json": True, "follow-redirects": True}}})
        props = config.bind(ClientProperties)
        assert props.dump_request_json is True
        assert props.follow_redirects is True

    def test_env_strings_are_coerced(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PERIGEE_CLIENT_TIMEOUT", "2.5")
        monkeypatch.setenv("PERIGEE_CLIENT_DUMP_REQUEST_JSON", "yes")
        props = Config({}).bind(ClientProperties)
        assert props.timeout == 2.5
        assert props.dump_request_json is True

    def test_undecorated_class_rejected(self):
        @dataclass
        class Plain:
            value: int = 0

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_custom_prefix(self):
        @config_properties(prefix="myapp.remote")
        @dataclass
        class RemoteProperties:
            retries: int = 0

        props = Config({"myapp": {"remote": {"retries": "4"}}}).bind(RemoteProperties)
        assert props.retries == 4


class TestClientProperties:
    def test_default_client_kwargs(self):
        kwargs = exchange.default_client_kwargs(ClientProperties(timeout=5.0, user_agent="svc/1.0"))
        assert kwargs == {
            "timeout": 5.0,
            "follow_redirects": False,
            "headers": {"User-Agent": "svc/1.0"},
        }

    def test_default_client_kwargs_build_a_client(self):
        with httpx.Client(**exchange.default_client_kwargs(ClientProperties(timeout=5.0))) as client:
            assert client.timeout.connect == 5.0

    def test_properties_from_environment(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PERIGEE_CLIENT_FOLLOW_REDIRECTS", "true")
        assert exchange.client_properties().follow_redirects is True

    def test_configure_binds_properties(self):
        perigee_logger = logging.getLogger("perigee")
        handler = None
        try:
            exchange.configure(Config({"perigee": {"client": {"timeout": 9}}}))
            assert exchange.client_properties().timeout == 9.0
            handler = perigee_logger.handlers[-1]
        finally:
            if handler is not None:
                perigee_logger.removeHandler(handler)
            perigee_logger.propagate = True
            perigee_logger.setLevel(logging.NOTSET)

    def test_configured_dump_default(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ):
        caplog.set_level(logging.DEBUG, logger="perigee")
        monkeypatch.setattr(exchange, "_properties", ClientProperties(dump_request_json=True))
        exchange.encode_body({"a": 1}, "POST", "http://example.com")
        assert [r.msg for r in caplog.records] == ["perigee.request.body"]
