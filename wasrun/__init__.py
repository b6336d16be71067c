from .errors import (
    ConfigError,
    ExportCallError,
    ExportNotFoundError,
    ModuleLoadError,
    WasRunError,
)
from .runtime import ExportInfo, ModuleInstance, instantiate, load, read_module_bytes, run

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "ExportCallError",
    "ExportInfo",
    "ExportNotFoundError",
    "ModuleInstance",
    "ModuleLoadError",
    "WasRunError",
    "instantiate",
    "load",
    "read_module_bytes",
    "run",
]
