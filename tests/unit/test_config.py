#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_config.py
"""Unit tests for configuration discovery, loading and options building."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from down2html.config import (
    discover_config_file,
    find_config_in_parents,
    load_config_file,
    options_from_config,
)
from down2html.exceptions import ConfigError
from down2html.options import HtmlRendererOptions, MarkdownParserOptions


@pytest.mark.unit
class TestConfigDiscovery:
    """Test configuration file discovery."""

    def test_find_in_start_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".down2html.toml"
        config_file.write_text("[html]\nstandalone = false\n")
        assert find_config_in_parents(tmp_path) == config_file.resolve()

    def test_find_in_parent(self, tmp_path: Path) -> None:
        config_file = tmp_path / ".down2html.json"
        config_file.write_text("{}")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_in_parents(nested) == config_file.resolve()

    def test_toml_preferred_over_yaml(self, tmp_path: Path) -> None:
        (tmp_path / ".down2html.yaml").write_text("html: {}\n")
        (tmp_path / ".down2html.toml").write_text("")
        assert find_config_in_parents(tmp_path).name == ".down2html.toml"

    def test_pyproject_with_section(self, tmp_path: Path) -> None:
        pyproject = tmp_path / "pyproject.toml"
        pyproject.write_text("[tool.down2html.html]\nindent = '  '\n")
        assert find_config_in_parents(tmp_path) == pyproject.resolve()

    def test_pyproject_without_section_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[project]\nname = 'x'\n")
        with patch("down2html.config.Path.home", return_value=tmp_path / "nohome"):
            assert discover_config_file(tmp_path) is None

    def test_malformed_pyproject_is_skipped(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.down2html\n")
        assert find_config_in_parents(tmp_path) is None

    def test_discover_falls_back_to_home(self, tmp_path: Path) -> None:
        home = tmp_path / "home"
        home.mkdir()
        config_file = home / ".down2html.yml"
        config_file.write_text("markdown: {}\n")
        work = tmp_path / "work"
        work.mkdir()
        with patch("down2html.config.Path.home", return_value=home):
            assert discover_config_file(work) == config_file


@pytest.mark.unit
class TestLoadConfigFile:
    """Test loading configuration files in each format."""

    def test_load_toml(self, tmp_path: Path) -> None:
        path = tmp_path / ".down2html.toml"
        path.write_text("[markdown]\nmax_nesting_depth = 8\n")
        assert load_config_file(path) == {"markdown": {"max_nesting_depth": 8}}

    def test_load_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump({"html": {"indent": "  "}}))
        assert load_config_file(path) == {"html": {"indent": "  "}}

    def test_load_json(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"html": {"standalone": False}}))
        assert load_config_file(str(path)) == {"html": {"standalone": False}}

    def test_load_pyproject_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.down2html.markdown]\nstrip_header_space = false\n")
        assert load_config_file(path) == {"markdown": {"strip_header_space": False}}

    def test_empty_yaml_is_empty_config(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="does not exist") as exc_info:
            load_config_file(tmp_path / "nope.toml")
        assert exc_info.value.config_path == str(tmp_path / "nope.toml")

    def test_directory_is_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not a file"):
            load_config_file(tmp_path)

    def test_unsupported_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.ini"
        path.write_text("[html]\n")
        with pytest.raises(ConfigError, match="Unsupported config file format"):
            load_config_file(path)

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[html\n")
        with pytest.raises(ConfigError, match="Invalid configuration file") as exc_info:
            load_config_file(path)
        assert exc_info.value.original_error is not None

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{")
        with pytest.raises(ConfigError):
            load_config_file(path)

    def test_non_mapping_root(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping at root level"):
            load_config_file(path)

    def test_pyproject_section_must_be_table(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool]\ndown2html = 3\n")
        with pytest.raises(ConfigError, match="must be a table"):
            load_config_file(path)


@pytest.mark.unit
class TestOptionsFromConfig:
    """Test building options objects from configuration mappings."""

    def test_empty_config_gives_defaults(self) -> None:
        assert options_from_config({}) == (MarkdownParserOptions(), HtmlRendererOptions())

    def test_values_are_applied(self) -> None:
        parser_options, renderer_options = options_from_config(
            {"markdown": {"max_nesting_depth": 4}, "html": {"indent": "  ", "standalone": False}}
        )
        assert parser_options.max_nesting_depth == 4
        assert renderer_options.indent == "  "
        assert renderer_options.standalone is False
        assert renderer_options.newline == "\r\n"

    def test_unknown_section(self) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration section"):
            options_from_config({"pdf": {}})

    def test_unknown_key(self) -> None:
        with pytest.raises(ConfigError, match="Unknown key\\(s\\) in section 'html': escape"):
            options_from_config({"html": {"escape": True}})

    def test_section_must_be_mapping(self) -> None:
        with pytest.raises(ConfigError, match="must be a table"):
            options_from_config({"html": ["indent"]})

    def test_wrong_value_type(self) -> None:
        with pytest.raises(ConfigError, match="'markdown.max_nesting_depth' must be int"):
            options_from_config({"markdown": {"max_nesting_depth": "deep"}})

    def test_bool_is_not_an_int(self) -> None:
        with pytest.raises(ConfigError, match="must be int, got bool"):
            options_from_config({"markdown": {"max_nesting_depth": True}})

    def test_out_of_range_value(self) -> None:
        with pytest.raises(ConfigError, match="max_nesting_depth must be positive"):
            options_from_config({"markdown": {"max_nesting_depth": 0}})
