# Copyright 2025 Ant Group Co., Ltd.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Command-line interface for vecpf.

Examples:
    # Format a vector of four unsigned words
    python -m vecpf.cli format "%vlu" u32:4294967295,0,39,2147483647

    # Raw bytes, hexadecimal lanes, explicit byte order
    python -m vecpf.cli --byteorder little format "%#vhx" \
        hex:000102030405060708090a0b0c0d0e0f

    # A character vector
    python -m vecpf.cli format "[%vc]" "str:this space is fo"

    # Show which conversions and modifiers are handled
    python -m vecpf.cli table
"""

import argparse
import sys
from typing import Any

from vecpf.config import VALID_BYTEORDERS, VALID_LOG_LEVELS, VecpfConfig, load_config
from vecpf.core.dispatch import iter_entries
from vecpf.core.install import VectorPrintfHandle, install
from vecpf.core.lanes import VECTOR_WIDTH_BYTES, LaneType, pack_lanes
from vecpf.core.modifiers import MODIFIER_TOKENS
from vecpf.errors import VecpfError
from vecpf.logging_config import get_logger, setup_logging
from vecpf.printf.runtime import PrintfRuntime

logger = get_logger(__name__)


def _parse_number(text: str) -> int | float:
    try:
        return int(text, 0)
    except ValueError:
        return float(text)


def parse_argument(text: str, byteorder: str = "=") -> Any:
    """Convert one command-line argument into a printf argument.

    ``hex:``, ``str:`` and ``<lane>:`` prefixes build a 16-byte vector value;
    anything else becomes an int, a float or is left as a string.
    """
    prefix, sep, body = text.partition(":")
    if sep:
        if prefix == "hex":
            try:
                data = bytes.fromhex(body)
            except ValueError as e:
                raise ValueError(f"invalid hex vector {body!r}: {e}") from e
            if len(data) != VECTOR_WIDTH_BYTES:
                raise ValueError(
                    f"hex vector must be {VECTOR_WIDTH_BYTES} bytes, got {len(data)}"
                )
            return data
        if prefix == "str":
            data = body.encode("latin-1")
            if len(data) != VECTOR_WIDTH_BYTES:
                raise ValueError(
                    f"str vector must be {VECTOR_WIDTH_BYTES} characters, "
                    f"got {len(data)}"
                )
            return data
        if prefix in {t.short_name for t in LaneType}:
            lane_type = LaneType.from_name(prefix)
            parse = float if lane_type.is_float else (lambda s: int(s, 0))
            values = [parse(item.strip()) for item in body.split(",")]
            return pack_lanes(lane_type, values, byteorder)

    try:
        return _parse_number(text)
    except ValueError:
        return text


def _make_handle(config: VecpfConfig) -> VectorPrintfHandle:
    return install(PrintfRuntime(name="vecpf-cli"), config)


def cmd_format(args: argparse.Namespace, config: VecpfConfig) -> None:
    handle = _make_handle(config)
    values = [parse_argument(a, config.numpy_byteorder) for a in args.args]
    logger.debug("format %r with %d argument(s)", args.format, len(values))
    text = handle.sprintf(args.format, *values)
    sys.stdout.write(text)
    if not args.no_newline:
        sys.stdout.write("\n")


def cmd_table(args: argparse.Namespace, config: VecpfConfig) -> None:
    print("modifiers:")
    for token, modifier in MODIFIER_TOKENS:
        print(f"  {token:<4} {modifier.name.lower()}")
    print()
    print(f"{'conv':<6}{'modifier':<10}{'lanes':<7}{'type':<6}suffix")
    for entry in iter_entries():
        print(
            f"{entry.conversion:<6}{entry.modifier.name.lower():<10}"
            f"{entry.lane_count:<7}{entry.lane_type.short_name:<6}{entry.suffix}"
        )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="vecpf",
        description="Format SIMD vector values with printf directives",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", help="Path to a YAML config file")
    parser.add_argument(
        "--byteorder",
        choices=VALID_BYTEORDERS,
        default=None,
        help="Byte order used to read vector lanes (default: native)",
    )
    parser.add_argument(
        "--log-level",
        choices=VALID_LOG_LEVELS,
        type=str.upper,
        default=None,
        help="Enable logging at this level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'format' subcommand
    format_parser = subparsers.add_parser("format", help="Render a format string")
    format_parser.add_argument("format", help="printf format string, e.g. '%%vld'")
    format_parser.add_argument(
        "args",
        nargs="*",
        default=[],
        help="Arguments: hex:<32 hex digits>, <lane>:<v1,v2,...>, str:<16 chars>, "
        "or a plain number/string",
    )
    format_parser.add_argument(
        "-n", "--no-newline", action="store_true", help="Do not append a newline"
    )

    # 'table' subcommand
    subparsers.add_parser("table", help="List the vector dispatch table")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config(
            args.config, byteorder=args.byteorder, log_level=args.log_level
        )
        if config.log_level is not None:
            setup_logging(level=config.log_level, force=True)

        if args.command == "format":
            cmd_format(args, config)
        elif args.command == "table":
            cmd_table(args, config)
    except (VecpfError, ValueError) as e:
        print(f"vecpf: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
