"""
runtime.py

Read a .wasm file, instantiate it with wasmtime and call one of its exports.

    inst = load("add.wasm")
    inst.call("add", 5, 6)   # -> 11

Every step runs to completion before the next one starts. Failures are raised
as WasRunError subclasses with the underlying wasmtime/OS error chained.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Union

from wasmtime import (
    Engine,
    Func,
    FuncType,
    GlobalType,
    Instance,
    MemoryType,
    Module,
    Store,
    TableType,
    Trap,
    WasmtimeError,
)

from .errors import ExportCallError, ExportNotFoundError, ModuleLoadError

log = logging.getLogger(__name__)

FLOAT_TYPES = ("f32", "f64")
INT_TYPES = ("i32", "i64")

# signed and unsigned forms are both accepted
INT_RANGES = {
    "i32": (-2**31, 2**32),
    "i64": (-2**63, 2**64),
}


@dataclass
class ExportInfo:
    name: str
    kind: str
    params: List[str] = field(default_factory=list)
    results: List[str] = field(default_factory=list)

    @property
    def signature(self) -> str:
        if self.kind != "func":
            return ""
        return f"({', '.join(self.params)}) -> ({', '.join(self.results)})"


def _kind_of(ty) -> str:
    if isinstance(ty, FuncType):
        return "func"
    if isinstance(ty, MemoryType):
        return "memory"
    if isinstance(ty, GlobalType):
        return "global"
    if isinstance(ty, TableType):
        return "table"
    return type(ty).__name__


def read_module_bytes(path: str) -> bytes:
    """Read the whole module file into memory."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise ModuleLoadError(f"cannot read module file {path!r}: {e}") from e
    log.debug("read %d bytes from %s", len(data), path)
    return data


class ModuleInstance:
    """An instantiated module together with the store that owns it."""

    def __init__(self, store: Store, module: Module, instance: Instance):
        self.store = store
        self.module = module
        self.instance = instance
        self._exports = instance.exports(store)

    @property
    def exports(self) -> List[str]:
        return [e.name for e in self.module.exports]

    def describe(self) -> List[ExportInfo]:
        out = []
        for e in self.module.exports:
            ty = e.type
            info = ExportInfo(name=e.name, kind=_kind_of(ty))
            if isinstance(ty, FuncType):
                info.params = [str(p) for p in ty.params]
                info.results = [str(r) for r in ty.results]
            out.append(info)
        return out

    def get_export(self, name: str):
        try:
            return self._exports[name]
        except KeyError:
            raise ExportNotFoundError(name, self.exports) from None

    def get_function(self, name: str) -> Func:
        item = self.get_export(name)
        if not isinstance(item, Func):
            raise ExportCallError(f"export {name!r} is a {type(item).__name__}, not a function")
        return item

    def call(self, name: str, *args) -> Any:
        """
        Call export `name` with `args`.

        Arguments are coerced to the declared parameter types, so `call("f", 1, 2)`
        works for an (f64, f64) export too. Returns a single value, a list for
        multi-value results, or None when the function returns nothing.
        """
        func = self.get_function(name)
        ty = func.type(self.store)
        params = [str(p) for p in ty.params]
        if len(args) != len(params):
            raise ExportCallError(
                f"export {name!r} takes {len(params)} argument(s), got {len(args)}"
            )
        values = [coerce(a, p) for a, p in zip(args, params)]

        log.info("calling %s(%s)", name, ", ".join(repr(v) for v in values))
        try:
            result = func(self.store, *values)
        except Trap as e:
            raise ExportCallError(f"export {name!r} trapped: {e}") from e
        except WasmtimeError as e:
            raise ExportCallError(f"export {name!r} failed: {e}") from e
        log.debug("%s returned %r", name, result)
        return result


def coerce(value: Union[int, float], valtype: str) -> Union[int, float]:
    if valtype in FLOAT_TYPES:
        return float(value)
    if valtype in INT_TYPES:
        if isinstance(value, float):
            if not value.is_integer():
                raise ExportCallError(f"cannot pass non-integer {value!r} as {valtype}")
            value = int(value)
        lo, hi = INT_RANGES[valtype]
        if not lo <= value < hi:
            raise ExportCallError(f"{value} is out of range for {valtype}")
        return value
    raise ExportCallError(f"unsupported parameter type {valtype}")


def instantiate(wasm_bytes: bytes, engine: Optional[Engine] = None) -> ModuleInstance:
    """Compile `wasm_bytes` and instantiate it with no imports."""
    engine = engine or Engine()
    try:
        module = Module(engine, wasm_bytes)
    except WasmtimeError as e:
        raise ModuleLoadError(f"invalid module: {e}") from e

    store = Store(engine)
    try:
        instance = Instance(store, module, [])
    except (WasmtimeError, Trap) as e:
        raise ModuleLoadError(f"cannot instantiate module: {e}") from e
    log.debug("instantiated module with exports %s", [e.name for e in module.exports])
    return ModuleInstance(store, module, instance)


def load(path: str) -> ModuleInstance:
    return instantiate(read_module_bytes(path))


def run(path: str, export: str = "add", args: Sequence[Union[int, float]] = (5, 6)) -> Any:
    """Read, instantiate and call in one go; the CLI prints what this returns."""
    inst = load(path)
    return inst.call(export, *args)


def export_table(infos: List[ExportInfo]) -> List[Dict[str, str]]:
    return [{"name": i.name, "kind": i.kind, "signature": i.signature} for i in infos]
