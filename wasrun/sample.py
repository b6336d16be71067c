"""
Reference modules for trying wasrun out and for the tests.

ADD_WASM exports `add: (i32, i32) -> i32`.
DEMO_WAT exports add, subtract and multiply with the same signature.
"""

from wasmtime import wat2wasm

# Signature: (param i32 i32) (result i32), body: local.get 0, local.get 1, i32.add
ADD_WASM = (
    b'\x00\x61\x73\x6d\x01\x00\x00\x00'       # magic + version 1
    b'\x01\x07\x01\x60\x02\x7f\x7f\x01\x7f'   # type 0: (i32, i32) -> i32
    b'\x03\x02\x01\x00'                       # func 0 is type 0
    b'\x07\x07\x01\x03\x61\x64\x64\x00\x00'   # export "add" -> func 0
    b'\x0a\x09\x01\x07\x00\x20\x00\x20\x01\x6a\x0b'
)

DEMO_WAT = """
(module
  (func (export "add") (param i32 i32) (result i32)
    local.get 0
    local.get 1
    i32.add)
  (func (export "subtract") (param i32 i32) (result i32)
    local.get 0
    local.get 1
    i32.sub)
  (func (export "multiply") (param i32 i32) (result i32)
    local.get 0
    local.get 1
    i32.mul))
"""


def demo_wasm() -> bytes:
    return bytes(wat2wasm(DEMO_WAT))


def write_sample(path: str, demo: bool = False) -> int:
    data = demo_wasm() if demo else ADD_WASM
    with open(path, 'wb') as f:
        f.write(data)
    return len(data)
