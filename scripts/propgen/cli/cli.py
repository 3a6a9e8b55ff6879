#!/usr/bin/env python3
"""
Property Generator CLI

Generates LLDB-style property tables from TableGen JSON dumps or YAML
definition files.

Usage:
    propgen --gen-lldb-property-defs Properties.json -o Properties.inc
    propgen --gen-lldb-property-enum-defs Properties.yaml -o PropertiesEnum.inc

Options:
    --format {auto,json,yaml}   Input format (default: from file suffix)
    --config PATH               Generator settings YAML (prefixes, descriptions)
    --write-if-changed          Leave OUTPUT untouched when its contents match
    --check-only                Fail if OUTPUT is missing or stale (for CI)
"""

import argparse
import logging
import sys
from pathlib import Path

# Allow running as script or module
_HERE = Path(__file__).parent
sys.path.insert(0, str(_HERE.parent.parent))  # scripts/

from propgen.engine.config import load_generator_config
from propgen.engine.emitter import Action, generate
from propgen.engine.models import PropgenError
from propgen.engine.records import FORMAT_AUTO, FORMATS, load_records

STDOUT = "-"


def _status(args: argparse.Namespace, message: str) -> None:
    if not args.quiet:
        print(message, file=sys.stderr)


def _matches(path: Path, content: str) -> bool:
    # Byte comparison so an undecodable file simply counts as different
    return path.read_bytes() == content.encode("utf-8")


def write_output(path: Path, content: str, *, if_changed: bool = False) -> bool:
    """Write generated content; return False when an unchanged file was kept."""
    if if_changed and path.exists() and _matches(path, content):
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return True


def check_output(path: Path, content: str) -> list[str]:
    """Compare generated content against a committed file."""
    if not path.exists():
        return [f"{path} does not exist"]
    if not _matches(path, content):
        return [f"Generated output differs from {path}"]
    return []


def run(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    output = args.output or STDOUT

    if args.check_only and output == STDOUT:
        print("ERROR: --check-only needs an output file (-o)", file=sys.stderr)
        return 1

    try:
        config = load_generator_config(args.config)

        _status(args, f"[1/2] Loading records from {input_path}...")
        store = load_records(input_path, args.format)

        _status(args, f"[2/2] Running {args.action.value}...")
        content = generate(store, args.action, config, source=input_path.name)
    except PropgenError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.check_only:
        errors = check_output(Path(output), content)
        if errors:
            for error in errors:
                print(f"  ERROR: {error}", file=sys.stderr)
            print(f"  Run: propgen --{args.action.value} {input_path} -o {output}", file=sys.stderr)
            return 1
        _status(args, f"  OK: {output} is up to date")
        return 0

    if output == STDOUT:
        sys.stdout.write(content)
        return 0

    if write_output(Path(output), content, if_changed=args.write_if_changed):
        _status(args, f"  Wrote {output}")
    else:
        _status(args, f"  Unchanged {output}")
    return 0


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="propgen",
        description="Generate property enum cases and PropertyDefinition tables",
    )

    actions = parser.add_mutually_exclusive_group(required=True)
    actions.add_argument(
        "--gen-lldb-property-defs",
        dest="action",
        action="store_const",
        const=Action.PROPERTY_DEFS,
        help="Generate PropertyDefinition tables",
    )
    actions.add_argument(
        "--gen-lldb-property-enum-defs",
        dest="action",
        action="store_const",
        const=Action.PROPERTY_ENUM_DEFS,
        help="Generate property enumerator cases",
    )

    parser.add_argument("input", help="TableGen JSON dump or YAML definitions file")
    parser.add_argument(
        "-o", "--output",
        metavar="PATH",
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "--format",
        choices=FORMATS,
        default=FORMAT_AUTO,
        help="Input format (default: inferred from the file suffix)",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        help="Generator settings YAML (default: LLDB settings)",
    )
    parser.add_argument(
        "--write-if-changed",
        action="store_true",
        help="Do not rewrite the output file when its contents are unchanged",
    )
    parser.add_argument(
        "--check-only",
        action="store_true",
        help="Check that the output file matches the generated text (for CI)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress progress messages")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run(args))


if __name__ == "__main__":
    main()
