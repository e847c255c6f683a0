import logging

import pytest
import yaml

from spongify.utils import (
    Colors,
    DEFAULT_CONFIG,
    load_config,
    merge_dicts,
    setup_logging,
    validate_config,
)


def test_defaults_without_file():
    config = load_config()
    assert config == DEFAULT_CONFIG
    assert config is not DEFAULT_CONFIG


def test_defaults_are_not_mutated(isolated_cwd):
    (isolated_cwd / "spongify.yaml").write_text("style: random\n", encoding="utf-8")
    assert load_config()["style"] == "random"
    assert DEFAULT_CONFIG["style"] == "alternating"


def test_explicit_path_merges_over_defaults(tmp_path):
    path = tmp_path / "conf.yaml"
    path.write_text("reset_per_line: false\nseed: 9\n", encoding="utf-8")
    config = load_config(str(path))
    assert config["reset_per_line"] is False
    assert config["seed"] == 9
    assert config["style"] == "alternating"


def test_missing_explicit_path_warns(tmp_path, caplog, monkeypatch):
    monkeypatch.setattr(logging.getLogger("spongify"), "propagate", True)
    with caplog.at_level(logging.WARNING):
        config = load_config(str(tmp_path / "nope.yaml"))
    assert config == DEFAULT_CONFIG
    assert "not found" in caplog.text


def test_malformed_yaml_falls_back(isolated_cwd):
    (isolated_cwd / "spongify.yaml").write_text("style: [unclosed\n", encoding="utf-8")
    assert load_config() == DEFAULT_CONFIG


def test_non_mapping_yaml_is_ignored(isolated_cwd):
    (isolated_cwd / "spongify.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    assert load_config() == DEFAULT_CONFIG


def test_merge_dicts_nested():
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    merge_dicts(base, {"a": {"c": 5}, "e": 6})
    assert base == {"a": {"b": 1, "c": 5}, "d": 3, "e": 6}


def test_setup_logging_levels():
    logger = setup_logging(verbose=0)
    assert [h.level for h in logger.handlers] == [logging.WARNING]
    logger = setup_logging(verbose=1)
    assert [h.level for h in logger.handlers] == [logging.INFO]
    logger = setup_logging(verbose=2)
    assert [h.level for h in logger.handlers] == [logging.DEBUG]


def test_setup_logging_quiet():
    logger = setup_logging(quiet=True)
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0], logging.NullHandler)


def test_setup_logging_file(tmp_path):
    log_file = tmp_path / "debug.log"
    logger = setup_logging(log_file=str(log_file), quiet=True)
    logger.debug("written to file")
    for handler in logger.handlers:
        handler.flush()
    assert "written to file" in log_file.read_text()
    assert "DEBUG" in log_file.read_text()


@pytest.mark.parametrize("key, value", [
    ("style", None),
    ("style", "   "),
    ("style", 12),
    ("reset_per_line", "no"),
    ("clipboard_separator", 5),
    ("encoding", "bogus"),
    ("encoding", 8),
    ("seed", [1, 2]),
    ("seed", True),
    ("advance", "sideways"),
    ("advance", ["all"]),
])
def test_invalid_values_fall_back_to_defaults(isolated_cwd, key, value):
    (isolated_cwd / "spongify.yaml").write_text(yaml.safe_dump({key: value}), encoding="utf-8")
    assert load_config()[key] == DEFAULT_CONFIG[key]


def test_valid_values_are_kept(isolated_cwd):
    values = {
        "style": "lIkE tHiS",
        "reset_per_line": False,
        "clipboard_separator": "\n",
        "encoding": "latin-1",
        "seed": 7,
        "advance": "all",
    }
    (isolated_cwd / "spongify.yaml").write_text(yaml.safe_dump(values), encoding="utf-8")
    assert load_config() == values


def test_validate_config_fills_missing_keys():
    assert validate_config({"seed": 3}) == dict(DEFAULT_CONFIG, seed=3)


def test_colors_disable(monkeypatch):
    monkeypatch.setattr(Colors, "CYAN", "\033[36m")
    monkeypatch.setattr(Colors, "RESET", "\033[0m")
    Colors.disable()
    assert Colors.CYAN == ""
    assert Colors.RESET == ""
