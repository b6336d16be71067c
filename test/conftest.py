import pytest
from wasmtime import wat2wasm

from wasrun.sample import ADD_WASM, demo_wasm

MIXED_WAT = """
(module
  (memory (export "mem") 1)
  (global (export "answer") i32 (i32.const 42))
  (func (export "fadd") (param f64 f64) (result f64)
    local.get 0
    local.get 1
    f64.add)
  (func (export "div") (param i32 i32) (result i32)
    local.get 0
    local.get 1
    i32.div_s)
  (func (export "boom") (param i32 i32) (result i32)
    unreachable)
  (func (export "nothing")))
"""


@pytest.fixture
def add_wasm(tmp_path):
    path = tmp_path / "add.wasm"
    path.write_bytes(ADD_WASM)
    return str(path)


@pytest.fixture
def demo_path(tmp_path):
    path = tmp_path / "demo.wasm"
    path.write_bytes(demo_wasm())
    return str(path)


@pytest.fixture
def mixed_bytes():
    return bytes(wat2wasm(MIXED_WAT))
