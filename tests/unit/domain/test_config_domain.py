from __future__ import annotations

"""
Unit tests for the Config Domain.

Verifies:
1. Default configuration generation.
2. Resilience against corrupted config files.
3. Persistence (Save/Load) without touching real user data.
"""

import json
import os
from unittest.mock import patch

import pytest

from fuzzypath.domain.config import (
    get_config_file,
    get_default_config,
    load_config,
    save_config,
)
from fuzzypath.domain.constants import CURRENT_CONFIG_VERSION


@pytest.fixture
def mock_user_data_dir(tmp_path):
    """
    Fixture to mock the user data directory.
    Prevents tests from reading/writing to the real OS user folder.
    """
    config_dir = tmp_path / "FuzzyPath"
    config_dir.mkdir()

    with patch("fuzzypath.domain.config.get_user_data_dir", return_value=str(config_dir)):
        yield config_dir


def test_default_config_values() -> None:
    cfg = get_default_config()

    assert cfg["start_path"] == os.getcwd()
    assert cfg["max_results"] == 6
    assert cfg["branching_cap"] == 6
    assert cfg["timeout"] == 0.0
    assert cfg["log_level"] == "WARNING"


def test_config_file_lives_in_user_data_dir(mock_user_data_dir) -> None:
    assert get_config_file() == str(mock_user_data_dir / "config.json")


def test_load_fresh_state_returns_defaults(mock_user_data_dir) -> None:
    """If no config file exists, it should return the defaults."""
    assert load_config() == get_default_config()


def test_load_corrupted_file_returns_defaults(mock_user_data_dir) -> None:
    """If JSON is malformed, it should fall back to defaults safely."""
    (mock_user_data_dir / "config.json").write_text("{ incomplete json ", encoding="utf-8")

    assert load_config() == get_default_config()


def test_load_unexpected_layout_returns_defaults(mock_user_data_dir) -> None:
    """A flat dict without the 'settings' envelope is ignored."""
    (mock_user_data_dir / "config.json").write_text(json.dumps({"max_results": 2}), encoding="utf-8")

    assert load_config()["max_results"] == 6


def test_save_and_load_round_trip(mock_user_data_dir) -> None:
    """Saved settings come back merged over the defaults."""
    cfg = get_default_config()
    cfg.update({"max_results": 3, "sort_results": True, "log_level": "DEBUG"})

    assert save_config(cfg) is True

    data = json.loads((mock_user_data_dir / "config.json").read_text(encoding="utf-8"))
    assert data["version"] == CURRENT_CONFIG_VERSION
    assert data["settings"]["max_results"] == 3

    loaded = load_config()
    assert loaded["max_results"] == 3
    assert loaded["sort_results"] is True
    assert loaded["log_level"] == "DEBUG"


def test_start_path_is_never_persisted(mock_user_data_dir, tmp_path) -> None:
    """Relative queries always start where the command runs."""
    cfg = get_default_config()
    cfg["start_path"] = str(tmp_path)
    save_config(cfg)

    data = json.loads((mock_user_data_dir / "config.json").read_text(encoding="utf-8"))
    assert "start_path" not in data["settings"]

    # Even a hand-edited file cannot pin the start directory
    data["settings"]["start_path"] = str(tmp_path)
    (mock_user_data_dir / "config.json").write_text(json.dumps(data), encoding="utf-8")
    assert load_config()["start_path"] == os.getcwd()


def test_unknown_keys_are_dropped(mock_user_data_dir) -> None:
    payload = {"version": CURRENT_CONFIG_VERSION, "settings": {"colour": "blue", "branching_cap": 2}}
    (mock_user_data_dir / "config.json").write_text(json.dumps(payload), encoding="utf-8")

    loaded = load_config()

    assert "colour" not in loaded
    assert loaded["branching_cap"] == 2


def test_save_failure_returns_false(mock_user_data_dir) -> None:
    with patch("fuzzypath.domain.config.open", side_effect=OSError("disk full"), create=True):
        assert save_config(get_default_config()) is False
