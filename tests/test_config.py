"""Tests for goswagtags.toml loading."""

from pathlib import Path

import pytest

from goswagtags.config import ConfigError, ToolConfig, find_config_file, load_config, parse_config


def test_defaults_without_file(tmp_path) -> None:
    config = load_config(tmp_path)

    assert config == ToolConfig()
    assert config.file_mode == 0o644
    assert config.exclude_dirs == ("vendor",)


def test_section_values() -> None:
    config = parse_config(
        {
            "goswagtags": {
                "in_place": True,
                "file_mode": "0600",
                "exclude_dirs": ["vendor", "third_party"],
                "max_empty_lines": 2,
            }
        }
    )

    assert config.in_place
    assert config.file_mode == 0o600
    assert config.exclude_dirs == ("vendor", "third_party")
    assert config.max_empty_lines == 2
    assert config.prune_stale


def test_top_level_keys_are_accepted() -> None:
    assert parse_config({"compound_names": True}).compound_names


@pytest.mark.parametrize(
    "section",
    [
        {"in_place": "yes"},
        {"file_mode": "rw-r--r--"},
        {"file_mode": 0o17777},
        {"exclude_dirs": 3},
        {"max_empty_lines": -1},
    ],
)
def test_invalid_values(section) -> None:
    with pytest.raises(ConfigError):
        parse_config({"goswagtags": section})


def test_hidden_config_file_is_found(tmp_path) -> None:
    (tmp_path / ".goswagtags.toml").write_text("[goswagtags]\nprune_stale = false\n")

    assert find_config_file(tmp_path) == tmp_path / ".goswagtags.toml"
    assert not load_config(tmp_path).prune_stale


def test_explicit_file_must_exist(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path, Path(tmp_path / "missing.toml"))


def test_invalid_toml(tmp_path) -> None:
    path = tmp_path / "goswagtags.toml"
    path.write_text("[goswagtags\n")

    with pytest.raises(ConfigError) as excinfo:
        load_config(tmp_path)

    assert "Invalid TOML" in str(excinfo.value)


def test_gofmt_settings() -> None:
    config = parse_config({"goswagtags": {"gofmt": True, "gofmt_command": "gofmt -s"}})

    assert config.gofmt
    assert config.gofmt_command == "gofmt -s"
    assert not ToolConfig().gofmt

    with pytest.raises(ConfigError):
        parse_config({"goswagtags": {"gofmt_command": ""}})
