import json

import pytest

from wasrun.config import (
    RunConfig,
    config_from_dict,
    load_config_from_file,
    parse_number,
)
from wasrun.errors import ConfigError


def test_defaults():
    cfg = RunConfig()
    assert cfg.wasm_path == "add.wasm"
    assert cfg.export == "add"
    assert cfg.args == [5, 6]


@pytest.mark.parametrize("text, expected", [
    ("5", 5),
    ("-3", -3),
    ("0x10", 16),
    ("010", 10),
    ("2.5", 2.5),
    ("1e3", 1000.0),
])
def test_parse_number(text, expected):
    value = parse_number(text)
    assert value == expected
    assert type(value) is type(expected)


def test_parse_number_rejects_text():
    with pytest.raises(ConfigError):
        parse_number("five")


def test_flat_config():
    cfg = config_from_dict({"wasm": "x.wasm", "export": "mul", "args": [2, "3"]})
    assert cfg == RunConfig("x.wasm", "mul", [2, 3])


def test_nested_config_wins_over_flat():
    cfg = config_from_dict({
        "wasm": "flat.wasm",
        "module": {"path": "nested.wasm"},
        "call": {"export": "sub", "args": [9, 4]},
    })
    assert cfg.wasm_path == "nested.wasm"
    assert cfg.export == "sub"
    assert cfg.args == [9, 4]


def test_missing_keys_use_defaults():
    assert config_from_dict({}) == RunConfig()


@pytest.mark.parametrize("bad", [
    {"args": 5},
    {"args": [True, 1]},
    {"args": [None]},
    {"export": ""},
    {"wasm": 3},
    [],
])
def test_bad_config(bad):
    with pytest.raises(ConfigError):
        config_from_dict(bad)


def test_load_config_from_file(tmp_path):
    path = tmp_path / "run.json"
    path.write_text(json.dumps({"export": "add", "args": [-3, 7]}))
    assert load_config_from_file(str(path)).args == [-3, 7]


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "run.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError):
        load_config_from_file(str(path))


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config_from_file(str(tmp_path / "missing.json"))


def test_override_keeps_unset_fields():
    cfg = RunConfig("a.wasm", "add", [1, 2]).override(export="sub")
    assert cfg == RunConfig("a.wasm", "sub", [1, 2])
