"""
config.py

Run settings for the CLI. A JSON file may supply any of them, either flat:

    {"wasm": "add.wasm", "export": "add", "args": [5, 6]}

or nested:

    {"module": {"path": "add.wasm"}, "call": {"export": "add", "args": [5, 6]}}

Missing keys fall back to the defaults below.
"""

import json
from dataclasses import dataclass, field, replace
from typing import List, Optional, Union

from .errors import ConfigError

DEFAULT_WASM = "add.wasm"
DEFAULT_EXPORT = "add"
DEFAULT_ARGS = [5, 6]

Number = Union[int, float]


@dataclass
class RunConfig:
    wasm_path: str = DEFAULT_WASM
    export: str = DEFAULT_EXPORT
    args: List[Number] = field(default_factory=lambda: list(DEFAULT_ARGS))

    def override(self, wasm_path: Optional[str] = None, export: Optional[str] = None,
                 args: Optional[List[Number]] = None) -> "RunConfig":
        return replace(
            self,
            wasm_path=wasm_path if wasm_path is not None else self.wasm_path,
            export=export if export is not None else self.export,
            args=list(args) if args is not None else list(self.args),
        )


def parse_number(text: str) -> Number:
    """'5' -> 5, '010' -> 10, '2.5' -> 2.5, '0x10' -> 16."""
    s = text.strip()
    for base in (0, 10):
        try:
            return int(s, base)
        except ValueError:
            pass
    try:
        return float(s)
    except ValueError:
        raise ConfigError(f"not a number: {text!r}") from None


def _number(v) -> Number:
    if isinstance(v, bool):
        raise ConfigError(f"not a number: {v!r}")
    if isinstance(v, (int, float)):
        return v
    if isinstance(v, str):
        return parse_number(v)
    raise ConfigError(f"not a number: {v!r}")


def config_from_dict(j: dict) -> RunConfig:
    if not isinstance(j, dict):
        raise ConfigError("config must be a JSON object")

    # Simple nested lookup with defaults, tolerating missing keys
    def g(*ks, default=None):
        d = j
        for k in ks:
            d = d.get(k, {}) if isinstance(d, dict) else {}
        return d if d not in ({}, None) else default

    wasm_path = g("module", "path", default=j.get("wasm", DEFAULT_WASM))
    export = g("call", "export", default=j.get("export", DEFAULT_EXPORT))
    args = g("call", "args", default=j.get("args", DEFAULT_ARGS))

    if not isinstance(wasm_path, str) or not wasm_path:
        raise ConfigError(f"module path must be a non-empty string, got {wasm_path!r}")
    if not isinstance(export, str) or not export:
        raise ConfigError(f"export name must be a non-empty string, got {export!r}")
    if not isinstance(args, list):
        raise ConfigError(f"args must be a list, got {args!r}")

    return RunConfig(wasm_path=wasm_path, export=export, args=[_number(a) for a in args])


def load_config_from_file(path: str) -> RunConfig:
    try:
        with open(path, "r", encoding="utf-8") as f:
            j = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {path!r}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"bad JSON in {path!r}: {e}") from e
    return config_from_dict(j)
