"""Tests for environment-driven codec settings."""

import pytest

from hlsplaylist import config, decode
from hlsplaylist.config import Settings, get_settings
from hlsplaylist.core.decoder import Decoder
from hlsplaylist.core.errors import UnexpectedTagError

DATA = "#EXTM3U\n#EXT-X-TARGETDURATION:10\n#EXT-X-UNKNOWN\n#EXTINF:10,\na.ts\n"


@pytest.fixture
def fresh_settings(monkeypatch):
    """Drop the cached settings so the next get_settings() reads the environment."""
    monkeypatch.setattr(config, "_settings", None)
    monkeypatch.delenv("HLS_STRICT", raising=False)
    monkeypatch.delenv("HLS_DEFAULT_VERSION", raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, fresh_settings):
        settings = Settings()
        assert settings.strict is True
        assert settings.default_version == 1

    def test_env_prefix(self, fresh_settings):
        fresh_settings.setenv("HLS_STRICT", "false")
        fresh_settings.setenv("HLS_DEFAULT_VERSION", "3")
        settings = Settings()
        assert settings.strict is False
        assert settings.default_version == 3

    def test_get_settings_is_cached(self, fresh_settings):
        assert get_settings() is get_settings()


class TestDecoderSettings:
    def test_strict_by_default(self, fresh_settings):
        with pytest.raises(UnexpectedTagError):
            decode(DATA)

    def test_lenient_from_env(self, fresh_settings):
        fresh_settings.setenv("HLS_STRICT", "0")
        assert Decoder().strict is False
        assert len(decode(DATA).segments) == 1

    def test_argument_overrides_env(self, fresh_settings):
        fresh_settings.setenv("HLS_STRICT", "0")
        with pytest.raises(UnexpectedTagError):
            decode(DATA, strict=True)

    def test_default_version_from_env(self, fresh_settings):
        fresh_settings.setenv("HLS_DEFAULT_VERSION", "3")
        playlist = decode("#EXTM3U\n#EXT-X-TARGETDURATION:10\n#EXTINF:9.5,\na.ts\n")
        assert playlist.version == 3
        assert playlist.segments[0].duration == 9.5
