"""test_config.py - Unit tests for option resolution.

Covers:
    - show accepts a name, a mapping, or a list of either
    - Per-tag trace/output/format override the defaults
    - No tags resolves to None
    - env reads settings from the environment; unset means disabled
    - settings accepts JSON text or a JSON file path (contents are parsed)
    - Malformed or invalid settings raise ConfigError
    - exec_enabled cannot be turned on from settings
"""

import json

import pytest

from debugcomments.config import (
    Config,
    ConfigError,
    TagDescriptor,
    load_settings,
    resolve_config,
)


# ---------------------------------------------------------------------------
# show / defaults
# ---------------------------------------------------------------------------


class TestShow:
    def test_single_name(self):
        config = resolve_config(show="dbg")
        assert config == Config(tags=(TagDescriptor("dbg", format="data"),))

    def test_list_keeps_order(self):
        config = resolve_config(show=["b", "a", "c"])
        assert [t.name for t in config.tags] == ["b", "a", "c"]

    def test_mapping_options(self):
        config = resolve_config(
            show=[{"tag": "net", "trace": 2, "output": "net.log", "format": "YAML"}],
            output="all.log",
            format="json",
        )
        assert config.tags == (
            TagDescriptor("net", trace_depth=2, output_target="net.log", format="yaml"),
        )
        assert config.output == "all.log"
        assert config.format == "json"

    def test_defaults_apply_to_tags(self):
        config = resolve_config(show=["dbg", {"tag": "io"}], output="d.log", format="JSON")
        for tag in config.tags:
            assert tag.output_target == "d.log"
            assert tag.format == "json"
            assert tag.trace_depth == 0

    @pytest.mark.parametrize("show", [None, "", []])
    def test_nothing_to_show_resolves_to_none(self, show):
        assert resolve_config(show=show) is None

    def test_exec_enabled_flag(self):
        assert resolve_config(show="dbg", exec_enabled=True).exec_enabled is True
        assert resolve_config(show="dbg").exec_enabled is False

    @pytest.mark.parametrize(
        "entry",
        [
            {"trace": 1},
            {"tag": ""},
            {"tag": "x", "trace": -1},
            {"tag": "x", "trace": "2"},
            {"tag": "x", "trace": True},
            42,
            "   ",
        ],
    )
    def test_invalid_tag_entries_raise(self, entry):
        with pytest.raises(ConfigError):
            resolve_config(show=[entry])


# ---------------------------------------------------------------------------
# settings / env
# ---------------------------------------------------------------------------


class TestSettings:
    def test_json_text_overrides_call_site(self):
        config = resolve_config(
            show="dbg",
            output="old.log",
            settings='{"show": ["net"], "output": "new.log", "format": "yaml"}',
        )
        assert [t.name for t in config.tags] == ["net"]
        assert config.output == "new.log"
        assert config.tags[0].format == "yaml"

    def test_json_file_contents_are_parsed(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"show": [{"tag": "dbg", "trace": 1}]}))
        config = resolve_config(settings=str(path))
        assert config.tags == (TagDescriptor("dbg", trace_depth=1, format="data"),)

    def test_missing_keys_keep_call_site_values(self):
        config = resolve_config(show="dbg", settings='{"output": "x.log"}')
        assert [t.name for t in config.tags] == ["dbg"]
        assert config.output == "x.log"

    def test_exec_is_not_read_from_settings(self):
        config = resolve_config(settings='{"show": "dbg", "exec": 1}')
        assert config.exec_enabled is False

    def test_unreadable_file_raises(self, tmp_path):
        with pytest.raises(ConfigError):
            resolve_config(settings=str(tmp_path / "missing.json"))

    def test_malformed_json_raises(self):
        with pytest.raises(ConfigError):
            resolve_config(settings="{not json")

    def test_non_object_file_raises(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError):
            load_settings(str(path))

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestEnv:
    def test_unset_env_disables(self):
        assert resolve_config(show="dbg", env="MYDEBUG", environ={}) is None

    def test_empty_env_disables(self):
        assert resolve_config(show="dbg", env="MYDEBUG", environ={"MYDEBUG": ""}) is None

    def test_env_value_is_settings(self):
        environ = {"MYDEBUG": '{"show": ["a", "b"]}'}
        config = resolve_config(env="MYDEBUG", environ=environ)
        assert [t.name for t in config.tags] == ["a", "b"]

    def test_env_reads_os_environ_by_default(self, monkeypatch):
        monkeypatch.setenv("DEBUGCOMMENTS_TEST", '{"show": "dbg"}')
        config = resolve_config(env="DEBUGCOMMENTS_TEST")
        assert config.tags[0].name == "dbg"

    def test_env_with_settings_file_path(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text('{"show": "io", "format": "json"}')
        config = resolve_config(env="MYDEBUG", environ={"MYDEBUG": str(path)})
        assert config.tags == (TagDescriptor("io", format="json"),)
