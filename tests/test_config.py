import pytest
from pydantic import ValidationError

from iptv_catalog.config import CustomSettings


def test_defaults():
    config = CustomSettings(_env_file=None)

    assert config.playlist_source == "https://iptv-org.github.io/iptv/index.m3u"
    assert config.sync_max_channels == 1000
    assert config.catalog_backend == "memory"
    assert config.sync_cron is None


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("SYNC_MAX_CHANNELS", "250")
    monkeypatch.setenv("CATALOG_BACKEND", "sqlite")
    monkeypatch.setenv("DATABASE_PATH", ":memory:")
    monkeypatch.setenv("SYNC_CRON", "0 4 * * *")

    config = CustomSettings(_env_file=None)

    assert config.sync_max_channels == 250
    assert config.catalog_backend == "sqlite"
    assert config.sync_cron == "0 4 * * *"


def test_blank_cron_disables_schedule():
    assert CustomSettings(_env_file=None, sync_cron="  ").sync_cron is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"sync_cron": "every day"},
        {"sync_max_channels": 0},
        {"playlist_fetch_timeout_sec": 0},
        {"playlist_parse_timeout_sec": -1},
        {"playlist_source": "ftp://playlists.example/index.m3u"},
        {"playlist_source": "  "},
        {"catalog_backend": "postgres"},
        {"log_level": "chatty"},
    ],
)
def test_rejects_invalid_settings(overrides):
    with pytest.raises(ValidationError):
        CustomSettings(_env_file=None, **overrides)


def test_accepts_local_playlist_source(tmp_path):
    source = str(tmp_path / "index.m3u")

    assert CustomSettings(_env_file=None, playlist_source=source).playlist_source == source
