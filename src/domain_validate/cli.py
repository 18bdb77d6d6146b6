from __future__ import annotations

import argparse
import json
import re
import sys
from pathlib import Path
from typing import Iterable, Iterator

from .options import ValidatorOptions
from .tld import TldTable, load_tld_table
from .validator import DomainValidator
from .version import get_version

_SCHEMA_VERSION = 1


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="domain-validate")
    parser.add_argument("--version", action="version", version=get_version())

    sub = parser.add_subparsers(dest="cmd", required=True)
    for kind, help_text in (
        ("domain", "Check domain names (label rules plus a known TLD)"),
        ("hostname", "Check hostnames (label rules only, single labels allowed)"),
        ("label", "Check single domain labels"),
    ):
        p_check = sub.add_parser(kind, help=help_text)
        p_check.add_argument("values", nargs="+", help="Values to check (a single '-' reads stdin)")
        p_check.add_argument(
            "--allow-underscore",
            action="store_true",
            help="Accept '_' anywhere in a label",
        )
        p_check.add_argument(
            "--allow-single-label",
            action="store_true",
            help="Accept domains made of one label (the label must still be a TLD)",
        )
        p_check.add_argument(
            "--private-tld",
            action="append",
            default=None,
            help="Extra TLD accepted in addition to the built-in table (repeatable)",
        )
        p_check.add_argument(
            "--private-tld-pattern",
            default=None,
            help="Regular expression searched against the final label; a match is accepted as a TLD",
        )
        p_check.add_argument(
            "--tld-file",
            default=None,
            help="Replacement TLD table (one TLD per line; '#' comments allowed)",
        )
        p_check.add_argument("--json", action="store_true", help="Write one JSON record per input")
        p_check.add_argument(
            "--only-valid",
            action="store_true",
            help="Only write records for valid inputs (used with --json)",
        )
        p_check.add_argument(
            "--summary-json",
            action="store_true",
            help="Print check summary as JSON to stderr",
        )
        p_check.set_defaults(func=_run_check, kind=kind)

    p_tlds = sub.add_parser("tlds", help="List the active TLD table")
    p_tlds.add_argument("--tld-file", default=None, help="Replacement TLD table to list")
    p_tlds.add_argument(
        "--summary-json",
        action="store_true",
        help="Print table summary as JSON to stderr",
    )
    p_tlds.set_defaults(func=_run_tlds)

    args = parser.parse_args(argv)
    return int(args.func(args))


def _run_check(args: argparse.Namespace) -> int:
    if args.private_tld and args.private_tld_pattern:
        print("error: --private-tld and --private-tld-pattern cannot both be set", file=sys.stderr)
        return 2

    private_tld: frozenset[str] | re.Pattern[str] | None = None
    if args.private_tld:
        private_tld = frozenset(str(name).strip().strip(".").lower() for name in args.private_tld)
    elif args.private_tld_pattern:
        try:
            private_tld = re.compile(str(args.private_tld_pattern))
        except re.error as e:
            print(f"error: invalid --private-tld-pattern: {e}", file=sys.stderr)
            return 2

    try:
        table = _load_table(args.tld_file)
    except FileNotFoundError as e:
        print(f"error: file not found: {e.filename}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    validator = DomainValidator(
        ValidatorOptions(
            allow_underscore=bool(args.allow_underscore),
            allow_single_label=bool(args.allow_single_label),
            private_tld=private_tld,
        ),
        tld_table=table,
    )
    check = {
        "domain": validator.is_domain,
        "hostname": validator.is_hostname,
        "label": validator.is_domain_label,
    }[args.kind]

    values: Iterable[str]
    if args.values == ["-"]:
        values = _read_values(sys.stdin)
    else:
        values = args.values

    total = 0
    valid = 0
    for value in values:
        total += 1
        result = check(value)
        if result is not None:
            valid += 1
        if args.json:
            if args.only_valid and result is None:
                continue
            sys.stdout.write(
                json.dumps({"input": value, "valid": result is not None, "value": result}) + "\n"
            )
        elif result is not None:
            sys.stdout.write(result + "\n")

    invalid = total - valid
    if args.summary_json:
        sys.stderr.write(
            json.dumps(
                {
                    "kind": "check_summary",
                    "schema_version": _SCHEMA_VERSION,
                    "check": args.kind,
                    "total": total,
                    "valid": valid,
                    "invalid": invalid,
                }
            )
            + "\n"
        )
    else:
        print(
            "checked"
            f" kind={args.kind}"
            f" total={total}"
            f" valid={valid}"
            f" invalid={invalid}",
            file=sys.stderr,
        )
    return 1 if invalid else 0


def _run_tlds(args: argparse.Namespace) -> int:
    try:
        table = load_tld_table(None if args.tld_file is None else Path(str(args.tld_file)))
    except FileNotFoundError as e:
        print(f"error: file not found: {e.filename}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    for tld in sorted(table.tlds):
        sys.stdout.write(tld + "\n")

    if args.summary_json:
        sys.stderr.write(
            json.dumps(
                {
                    "kind": "tlds_summary",
                    "schema_version": _SCHEMA_VERSION,
                    "version": table.version,
                    "count": len(table),
                }
            )
            + "\n"
        )
    else:
        print(f"tlds version={table.version} count={len(table)}", file=sys.stderr)
    return 0


def _load_table(tld_file: str | None) -> TldTable | None:
    if tld_file is None:
        return None
    return load_tld_table(Path(tld_file))


def _read_values(stream: Iterable[str]) -> Iterator[str]:
    for raw in stream:
        value = raw.rstrip("\r\n")
        if not value:
            continue
        yield value


if __name__ == "__main__":
    raise SystemExit(main())
