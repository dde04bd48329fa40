# Copyright 2025 Ben Mensi
# SPDX-License-Identifier: Apache-2.0

"""Tests for config.py module."""

import logging
from pathlib import Path

import pytest

from empty_inside.config import BuildConfig, build_config, load_config
from empty_inside.errors import ConfigError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run every test from an empty directory with no config env vars."""
    monkeypatch.delenv("EMPTY_INSIDE_CONFIG", raising=False)
    monkeypatch.delenv("SOURCE_DATE_EPOCH", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_config_file(self):
        assert load_config() == {}

    def test_default_file_in_cwd(self, clean_env):
        (clean_env / "empty-inside.yml").write_text("commit_hash: abc123\n")
        assert load_config() == {"commit_hash": "abc123"}

    def test_env_var(self, clean_env, monkeypatch):
        path = clean_env / "custom.yml"
        path.write_text("release_version: '2.0'\n")
        monkeypatch.setenv("EMPTY_INSIDE_CONFIG", str(path))
        assert load_config() == {"release_version": "2.0"}

    def test_explicit_path_missing(self, clean_env):
        with pytest.raises(FileNotFoundError, match="Config file not found"):
            load_config(str(clean_env / "nope.yml"))

    def test_empty_file(self, clean_env):
        path = clean_env / "empty.yml"
        path.write_text("")
        assert load_config(str(path)) == {}

    def test_not_a_mapping(self, clean_env):
        path = clean_env / "list.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(str(path))

    def test_invalid_yaml(self, clean_env):
        path = clean_env / "bad.yml"
        path.write_text("commit_hash: [unclosed\n")
        with pytest.raises(ConfigError, match="invalid YAML"):
            load_config(str(path))

    def test_unknown_keys_warn(self, clean_env, caplog):
        path = clean_env / "extra.yml"
        path.write_text("commit_hash: abc\nflavour: mint\n")
        with caplog.at_level(logging.WARNING):
            config = load_config(str(path))
        assert config["flavour"] == "mint"
        assert "flavour" in caplog.text


class TestBuildConfig:
    """Tests for build_config."""

    def test_defaults(self):
        assert build_config() == BuildConfig()
        config = build_config()
        assert config.release_version == "stub-version"
        assert config.commit_hash == "deadbeef"
        assert config.uncommitted_changes is False
        assert config.mtime is None
        assert config.output_dir is None

    def test_file_values(self):
        config = build_config({
            "output_dir": "out",
            "release_version": "1.0",
            "commit_hash": 1234,
            "uncommitted_changes": True,
            "mtime": "0",
        })
        assert config.output_dir == Path("out")
        assert config.release_version == "1.0"
        assert config.commit_hash == "1234"
        assert config.uncommitted_changes is True
        assert config.mtime == 0

    def test_overrides_win(self):
        config = build_config({"commit_hash": "file", "mtime": 1}, commit_hash="flag", mtime=2)
        assert config.commit_hash == "flag"
        assert config.mtime == 2

    def test_none_overrides_ignored(self):
        config = build_config({"commit_hash": "file"}, commit_hash=None)
        assert config.commit_hash == "file"

    def test_unknown_override(self):
        with pytest.raises(ConfigError, match="unknown config option"):
            build_config(flavour="mint")

    def test_source_date_epoch(self, monkeypatch):
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "1700000000")
        assert build_config().mtime == 1700000000

    def test_explicit_mtime_beats_source_date_epoch(self, monkeypatch):
        monkeypatch.setenv("SOURCE_DATE_EPOCH", "1700000000")
        assert build_config(mtime=5).mtime == 5

    def test_bad_mtime(self):
        with pytest.raises(ConfigError, match="mtime"):
            build_config({"mtime": "yesterday"})
