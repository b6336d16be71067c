#!/usr/bin/env python3
# Load a WebAssembly module, call one export, print the result.
#
# Deps: pip install wasmtime tabulate
#
# Usage:
#   wasrun                                  # ./add.wasm, add(5, 6) -> 11
#   wasrun --wasm demo.wasm --export multiply --args 6 7
#   wasrun --config run.json --json
#   wasrun --wasm demo.wasm --list-exports
#   wasrun --write-sample add.wasm [--demo]
#
# Only the result goes to STDOUT; logs and errors go to STDERR.

import argparse
import json
import logging
import sys
from typing import List, Optional

from tabulate import tabulate

from . import __version__
from .config import RunConfig, load_config_from_file, parse_number
from .errors import WasRunError
from .runtime import export_table, load
from .sample import write_sample

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="wasrun", description="Call an export of a WebAssembly module")
    ap.add_argument("--config", help="JSON run file (wasm / export / args)")
    ap.add_argument("--wasm", help="Path to the .wasm file (default: add.wasm)")
    ap.add_argument("--export", help="Export to call (default: add)")
    ap.add_argument("--args", nargs="*", metavar="N", help="Numeric arguments (default: 5 6)")

    ap.add_argument("--list-exports", action="store_true", help="Print the module's exports and exit")
    ap.add_argument("--json", action="store_true", help="Print the call as a JSON object")

    ap.add_argument("--write-sample", metavar="PATH", help="Write the sample add module to PATH and exit")
    ap.add_argument("--demo", action="store_true",
                    help="With --write-sample, write the add/subtract/multiply module instead")

    ap.add_argument("-v", "--verbose", action="count", default=0)
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return ap


def setup_logging(verbosity: int):
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger(__package__).setLevel(level)


def resolve_config(args) -> RunConfig:
    cfg = load_config_from_file(args.config) if args.config else RunConfig()
    call_args = [parse_number(a) for a in args.args] if args.args is not None else None
    return cfg.override(wasm_path=args.wasm, export=args.export, args=call_args)


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    setup_logging(args.verbose)

    if args.demo and not args.write_sample:
        ap.error("--demo only applies to --write-sample")

    try:
        if args.write_sample:
            n = write_sample(args.write_sample, demo=args.demo)
            log.info("wrote %d bytes to %s", n, args.write_sample)
            return 0

        cfg = resolve_config(args)
        log.debug("run config: %s", cfg)
        inst = load(cfg.wasm_path)

        if args.list_exports:
            print(tabulate(export_table(inst.describe()), headers="keys", tablefmt="github"))
            return 0

        result = inst.call(cfg.export, *cfg.args)
    except WasRunError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"export": cfg.export, "args": cfg.args, "result": result}))
    else:
        print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
