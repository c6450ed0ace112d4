from __future__ import annotations
import argparse, json, logging, re
from .engine.engine import Engine
from .errors import MalformedLineError, ValidationError
from .schema.fwf_schema_importer import load_fwf_spec
from .schema.ranges import ranges_to_widths
from .schema.scanner import scan
from .types import DEFAULT_BLANK, AutoLayout
from . import __version__

_RANGE_RE = re.compile(r"^(\d+)[-:](\d+)$")


def parse_range(token: str) -> tuple[int, int]:
    """Parse ``LO-HI`` (or ``LO:HI``) into a 1-based inclusive pair."""
    match = _RANGE_RE.match(token.strip())
    if not match:
        raise argparse.ArgumentTypeError(f"invalid range '{token}', expected LO-HI")
    return int(match.group(1)), int(match.group(2))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser("fwfio")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    scan_cmd = sub.add_parser("scan", help="Infer column ranges from whitespace alignment")
    scan_cmd.add_argument("source")
    scan_cmd.add_argument("--blank", default=DEFAULT_BLANK, help="Characters treated as blank")
    scan_cmd.add_argument("--skip", type=int, default=0)
    scan_cmd.add_argument("--max-rows", type=int, default=0)
    scan_cmd.add_argument("--keep-blank-lines", action="store_true")
    scan_cmd.add_argument("--widths", action="store_true", help="Print the width vector as JSON instead")

    convert = sub.add_parser("convert", help="Read a fixed-width file and write Parquet or re-aligned FWF")
    convert.add_argument("source")
    convert.add_argument("--dest", required=True)
    convert.add_argument("--output-kind", choices=["parquet", "fwf"], default="parquet")
    layout = convert.add_mutually_exclusive_group(required=True)
    layout.add_argument("--widths", nargs="+", type=int)
    layout.add_argument("--ranges", nargs="+", type=parse_range)
    layout.add_argument("--auto", action="store_true")
    layout.add_argument("--fwf-spec", help="Path to JSON with x-fwf fields")
    convert.add_argument("--blank", default=DEFAULT_BLANK, help="Blank characters for --auto")
    convert.add_argument("--no-header", action="store_true")
    convert.add_argument("--skip", type=int, default=0)
    convert.add_argument("--max-rows", type=int, default=0)
    convert.add_argument("--keep-blank-lines", action="store_true")
    convert.add_argument("--error-policy", choices=["fail", "warn", "ignore"], default="warn")
    convert.add_argument("--pre", nargs="*", default=[], help="Preprocessors by name")
    convert.add_argument("--na", default="", help="Missing-value marker for impute and fwf output")
    convert.add_argument("--separator-width", type=int, default=1)
    convert.add_argument("--encoding-priority", nargs="*", default=["utf-8-sig", "utf-8", "latin-1"])
    return p


def main(argv: list[str] | None = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.cmd == "scan":
        ranges = scan(args.source, args.blank, skip=args.skip, max_rows=args.max_rows,
                      skip_blank=not args.keep_blank_lines)
        if args.widths:
            print(json.dumps(ranges_to_widths(ranges)[0]))
        else:
            for lo, hi in ranges:
                print(f"{lo}-{hi}")
        return

    if args.cmd == "convert":
        if args.widths:
            layout = args.widths
        elif args.ranges:
            layout = args.ranges
        elif args.fwf_spec:
            layout = load_fwf_spec(args.fwf_spec)
        else:
            layout = AutoLayout(blank=args.blank)
        if args.output_kind == "fwf":
            output_opts = dict(separator_width=args.separator_width, na_string=args.na)
        else:
            output_opts = dict(table_name=args.source)
        eng = Engine(
            input_kind="fwf",
            output_kind=args.output_kind,
            preprocessors=args.pre,
            output_opts=output_opts,
            na=args.na,
            layout=layout,
            header=not args.no_header,
            skip=args.skip,
            max_rows=args.max_rows,
            skip_blank=not args.keep_blank_lines,
            error_policy=args.error_policy,
            encoding_priority=args.encoding_priority,
        )
        try:
            eng.run(args.source, args.dest)
        except (ValidationError, MalformedLineError) as exc:
            p.error(str(exc))
