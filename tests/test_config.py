"""Tests for config.py - configuration loader and settings validation."""

import pytest
from pathlib import Path
from unittest.mock import patch
import yaml

from taskol import config
from taskol.config import ConfigError, SyncSettings, resolve_settings


def write_config(home: Path, data) -> Path:
    cfg_path = home / ".taskol" / "config.yaml"
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(yaml.dump(data, allow_unicode=True), encoding="utf-8")
    return cfg_path


def test_defaults():
    defaults = config._defaults()

    assert defaults['format'] == ':tdate:_:pabb:_:tname:'
    assert defaults['ignores'] == '!#@'
    assert defaults['target'] is None
    assert defaults['link'] is None
    assert defaults['backend'] in ('shortcut', 'symlink')


def test_get_config_no_file():
    cfg = config.get_config()
    assert cfg == config._defaults()


def test_get_config_partial_override(isolated_home):
    write_config(isolated_home, {'format': ':pname:_:tname:'})

    cfg = config.get_config()

    assert cfg['format'] == ':pname:_:tname:'
    assert cfg['ignores'] == '!#@'


def test_get_config_is_cached(isolated_home):
    write_config(isolated_home, {'ignores': '#'})
    first = config.get_config()

    write_config(isolated_home, {'ignores': '!'})
    assert config.get_config() is first
    assert config.get_config()['ignores'] == '#'


def test_get_config_malformed_yaml_falls_back(isolated_home):
    cfg_path = isolated_home / ".taskol" / "config.yaml"
    cfg_path.parent.mkdir(parents=True)
    cfg_path.write_text("format: [unclosed\n")

    assert config.get_config() == config._defaults()


def test_get_config_non_dict_yaml_ignored(isolated_home):
    cfg_path = isolated_home / ".taskol" / "config.yaml"
    cfg_path.parent.mkdir(parents=True)
    cfg_path.write_text("- just\n- a list\n")

    assert config.get_config() == config._defaults()


class TestResolveSettings:

    def test_cli_values(self, work_tree, link_dir):
        settings = resolve_settings(
            target=str(work_tree),
            link=str(link_dir),
            link_format=':pabb:',
            ignores='#',
            backend='symlink',
        )

        assert settings == SyncSettings(
            target_dir=work_tree,
            link_dir=link_dir,
            link_format=':pabb:',
            ignores='#',
            backend='symlink',
        )

    def test_defaults_fill_in(self, work_tree, link_dir):
        settings = resolve_settings(target=str(work_tree), link=str(link_dir))

        assert settings.link_format == ':tdate:_:pabb:_:tname:'
        assert settings.ignores == '!#@'
        assert settings.backend == config.default_backend_name()

    def test_config_file_values(self, isolated_home, work_tree, link_dir):
        write_config(isolated_home, {
            'target': str(work_tree),
            'link': str(link_dir),
            'format': ':tdate-: :tname:',
        })

        settings = resolve_settings()

        assert settings.target_dir == work_tree
        assert settings.link_dir == link_dir
        assert settings.link_format == ':tdate-: :tname:'

    def test_cli_overrides_config_file(self, isolated_home, work_tree, link_dir):
        write_config(isolated_home, {'format': ':pname:'})

        settings = resolve_settings(target=str(work_tree), link=str(link_dir), link_format=':pabb:')

        assert settings.link_format == ':pabb:'

    def test_empty_ignores_allowed(self, work_tree, link_dir):
        settings = resolve_settings(target=str(work_tree), link=str(link_dir), ignores='')
        assert settings.ignores == ''

    def test_missing_target(self, link_dir):
        with pytest.raises(ConfigError, match="--target"):
            resolve_settings(link=str(link_dir))

    def test_missing_link(self, work_tree):
        with pytest.raises(ConfigError, match="--link"):
            resolve_settings(target=str(work_tree))

    def test_empty_format(self, work_tree, link_dir):
        with pytest.raises(ConfigError, match="--format"):
            resolve_settings(target=str(work_tree), link=str(link_dir), link_format='')

    def test_target_must_exist(self, tmp_path, link_dir):
        with pytest.raises(ConfigError, match="does not exist"):
            resolve_settings(target=str(tmp_path / "missing"), link=str(link_dir))

    def test_link_must_not_be_a_file(self, work_tree, tmp_path):
        not_a_dir = tmp_path / "links.txt"
        not_a_dir.write_text("")

        with pytest.raises(ConfigError, match="not a directory"):
            resolve_settings(target=str(work_tree), link=str(not_a_dir))

    def test_missing_link_dir_is_accepted(self, work_tree, tmp_path):
        settings = resolve_settings(target=str(work_tree), link=str(tmp_path / "new-links"))
        assert settings.link_dir == tmp_path / "new-links"

    def test_validation_touches_nothing(self, work_tree, tmp_path):
        with pytest.raises(ConfigError):
            resolve_settings(target=str(work_tree), link=str(tmp_path / "new-links"), link_format='')
        assert not (tmp_path / "new-links").exists()
