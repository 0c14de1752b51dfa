import logging

import pytest
import yaml

import main as cli
from dungeon import GeneratorConfig
from main import (
    CONFIG_FILE,
    EXIT_GENERATION_FAILED,
    EXIT_NOT_CONNECTED,
    EXIT_OK,
    build_parser,
    load_yaml_config,
    main,
    resolve_settings,
)
from utils.logging_utils import parse_log_level


def test_load_default_config():
    config = load_yaml_config(CONFIG_FILE, "Main")
    assert "map_width" in config
    assert config["generation"]["room_attempts"] == 60


def test_missing_config_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_yaml_config(tmp_path / "nope.yaml", "Main")


def test_empty_config_is_empty_dict(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert load_yaml_config(path, "Main") == {}


def test_broken_yaml_is_reraised(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("map_width: [1, 2\n")
    with pytest.raises(yaml.YAMLError):
        load_yaml_config(path, "Main")


def test_cli_flags_override_config():
    config = {"map_width": 80, "map_height": 40, "dungeon_seed": 5, "generation": {"room_attempts": 12}}
    args = build_parser().parse_args(["--width", "30", "--seed", "9"])
    settings = resolve_settings(config, args)
    assert settings.width == 30
    assert settings.height == 40
    assert settings.seed == 9
    assert settings.generation == GeneratorConfig(room_attempts=12)


def test_parse_log_level():
    assert parse_log_level("debug") == logging.DEBUG
    assert parse_log_level(None) == logging.INFO
    assert parse_log_level("bogus", default=logging.WARNING) == logging.WARNING


def test_main_prints_level(tmp_path, capsys):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"map_width": 30, "map_height": 20, "dungeon_seed": 4}))
    code = main(["--config", str(path), "--log-level", "WARNING"])
    lines = capsys.readouterr().out.splitlines()
    footer = next(i for i, line in enumerate(lines) if line.startswith("Start:"))
    rows = lines[footer - 20 : footer]
    assert all(len(row) == 30 for row in rows)
    assert "@" in "".join(rows)
    assert code in (EXIT_OK, EXIT_NOT_CONNECTED)


def test_main_reports_generation_failure(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"map_width": 3, "map_height": 3, "dungeon_seed": 1}))
    assert main(["--config", str(path), "--log-level", "ERROR"]) == EXIT_GENERATION_FAILED


class LowerBoundRNG:
    def __init__(self, seed=None):
        self.initial_seed = seed

    def get_randrange(self, start, stop):
        return start


class ScriptedRNG:
    def __init__(self, values):
        self.values = list(values)

    def get_randrange(self, start, stop):
        value = self.values.pop(0)
        assert start <= value < stop
        return value


def _write_config(tmp_path, data):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(data))
    return path


def test_main_exit_ok_when_corridor_is_dug(tmp_path, monkeypatch):
    path = _write_config(
        tmp_path,
        {"map_width": 20, "map_height": 20, "dungeon_seed": 1, "generation": {"room_attempts": 3}},
    )
    monkeypatch.setattr(cli, "GameRNG", LowerBoundRNG)
    assert main(["--config", str(path), "--log-level", "ERROR"]) == EXIT_OK


def test_main_exit_not_connected_when_search_fails(tmp_path, monkeypatch):
    path = _write_config(
        tmp_path,
        {"map_width": 7, "map_height": 7, "dungeon_seed": 1, "generation": {"room_attempts": 1}},
    )
    # One 5x5 room; the corridor ends are on opposite walls with no open cell between.
    draws = [5, 5, 0, 0, 0, 2, 0, 13, 0, 0]
    monkeypatch.setattr(cli, "GameRNG", lambda seed=None: ScriptedRNG(draws))
    assert main(["--config", str(path), "--log-level", "ERROR"]) == EXIT_NOT_CONNECTED


def test_non_mapping_config_is_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- map_width\n- map_height\n")
    with pytest.raises(ValueError):
        load_yaml_config(path, "Main")
    assert main(["--config", str(path), "--log-level", "ERROR"]) == EXIT_GENERATION_FAILED


def test_bad_generation_value_fails_cleanly(tmp_path):
    path = _write_config(tmp_path, {"map_width": 20, "map_height": 20, "generation": {"connections": 1.5}})
    assert main(["--config", str(path), "--log-level", "ERROR"]) == EXIT_GENERATION_FAILED
