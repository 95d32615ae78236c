"""Unit tests - INI configuration loading."""

import httpx
import pytest

from postmark_mail import ConfigError, PostmarkClient
from postmark_mail.config import REGISTRY, load_config, parse_value, resolve_entry, serialize_value


def _write(tmp_path, text: str) -> str:
    path = tmp_path / "postmark.ini"
    path.write_text(text)
    return str(path)


class TestParseValue:
    def test_bool_values(self) -> None:
        entry = resolve_entry("postmark.secure")
        assert parse_value(entry, "yes") is True
        assert parse_value(entry, "Off") is False

    def test_bad_bool(self) -> None:
        with pytest.raises(ConfigError):
            parse_value(resolve_entry("postmark.secure"), "maybe")

    def test_bad_int(self) -> None:
        with pytest.raises(ConfigError):
            parse_value(resolve_entry("postmark.timeout"), "soon")

    def test_serialize_round_trip_defaults(self) -> None:
        for entry in REGISTRY:
            raw = serialize_value(entry, entry.default)
            assert parse_value(entry, raw) == entry.default


class TestLoadConfig:
    def test_defaults_applied(self, tmp_path) -> None:
        values = load_config(_write(tmp_path, "[postmark]\napi_key = server-token\n"))
        assert values["postmark.api_key"] == "server-token"
        assert values["postmark.secure"] is True
        assert values["postmark.host"] == "api.postmarkapp.com"
        assert values["postmark.timeout"] == 30

    def test_overrides(self, tmp_path) -> None:
        ini = _write(
            tmp_path,
            "[postmark]\nAPI_KEY = t\nSECURE = false\nHOST = localhost:9000\nTIMEOUT = 5\n",
        )
        values = load_config(ini)
        assert values["postmark.secure"] is False
        assert values["postmark.host"] == "localhost:9000"
        assert values["postmark.timeout"] == 5

    def test_missing_api_key(self, tmp_path) -> None:
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "[postmark]\nhost = example.com\n"))

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError):
            load_config(str(tmp_path / "nope.ini"))

    def test_percent_in_token_is_literal(self, tmp_path) -> None:
        values = load_config(_write(tmp_path, "[postmark]\napi_key = ab%cd\n"))
        assert values["postmark.api_key"] == "ab%cd"

    def test_malformed_file(self, tmp_path) -> None:
        with pytest.raises(ConfigError):
            load_config(_write(tmp_path, "api_key = no section header\n"))

    def test_unknown_key_is_ignored(self, tmp_path, caplog: pytest.LogCaptureFixture) -> None:
        values = load_config(_write(tmp_path, "[postmark]\napi_key = t\ncolour = blue\n"))
        assert values["postmark.api_key"] == "t"
        assert "colour" in caplog.text


class TestClientFromConfig:
    def test_builds_client(self, tmp_path, recording_backend) -> None:
        ini = _write(tmp_path, "[postmark]\napi_key = t\nsecure = no\nhost = mock.local\n")
        backend = recording_backend(httpx.Response(200, json={"ErrorCode": 0, "Message": "OK"}))

        client = PostmarkClient.from_config(ini, backend=backend)

        assert client.api_key == "t"
        assert client.timeout == 30.0
        assert client.endpoint("email") == "http://mock.local/email"
