"""Tests for the configuration loader."""

import pytest

from config import ConfigLoader


@pytest.fixture
def loader(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return ConfigLoader()


def test_default_when_unset(loader, monkeypatch):
    monkeypatch.delenv("TWITCH_CLIENT_ID", raising=False)

    assert loader.get("TWITCH_CLIENT_ID", "") == ""


@pytest.mark.parametrize(
    "raw,default,expected",
    [
        ("4000", 3000, 4000),
        ("not-a-port", 3000, 3000),
        ("2.5", 30.0, 2.5),
        ("yes", False, True),
        ("0", True, False),
        ("abc123", "", "abc123"),
    ],
)
def test_env_value_coerced_by_default_type(loader, monkeypatch, raw, default, expected):
    monkeypatch.setenv("SOME_SETTING", raw)

    assert loader.get("SOME_SETTING", default) == expected


def test_env_file_loaded(tmp_path, monkeypatch):
    # set then delete so monkeypatch removes whatever load_dotenv adds
    monkeypatch.setenv("TWITCH_CLIENT_ID", "placeholder")
    monkeypatch.delenv("TWITCH_CLIENT_ID")
    env_file = tmp_path / "custom.env"
    env_file.write_text("TWITCH_CLIENT_ID=from-dotenv\n")

    loader = ConfigLoader(env_path=str(env_file))

    assert loader.get("TWITCH_CLIENT_ID", "") == "from-dotenv"


def test_environment_beats_env_file(tmp_path, monkeypatch):
    monkeypatch.setenv("TWITCH_CLIENT_ID", "from-environment")
    env_file = tmp_path / ".env"
    env_file.write_text("TWITCH_CLIENT_ID=from-dotenv\n")

    loader = ConfigLoader(env_path=str(env_file))

    assert loader.get("TWITCH_CLIENT_ID", "") == "from-environment"
