"""CLI entrypoints for includecost commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import REPORT_FORMATS, ConfigError
from .engine import DirectiveError
from .logging import configure_logging
from .orchestrator import AnalysisOutcome, Orchestrator
from .report import SortKey, parse_sort_key
from .scanner import ScanError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    _add_verbose_option(parser, suppress_default=True)
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Directory holding the sources and headers (defaults to current directory).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to an .includecost.yml file (defaults to the one in PATH).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Abort on include directives that are neither <...> nor \"...\".",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )


def _sort_key(value: str) -> SortKey:
    try:
        return parse_sort_key(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="includecost",
        description="Measure how much code each C/C++ header drags into the build.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Resolve the include graph and print per-file cost metrics.",
    )
    _add_common_options(analyze_parser)
    analyze_parser.add_argument(
        "--sort",
        type=_sort_key,
        default=None,
        metavar="KEY",
        help="Order rows by: " + ", ".join(key.value for key in SortKey) + ".",
    )
    direction = analyze_parser.add_mutually_exclusive_group()
    direction.add_argument(
        "--ascending",
        dest="descending",
        action="store_false",
        default=None,
        help="Sort smallest first.",
    )
    direction.add_argument(
        "--descending",
        dest="descending",
        action="store_true",
        default=None,
        help="Sort largest first.",
    )
    analyze_parser.add_argument(
        "--format",
        choices=REPORT_FORMATS,
        default=None,
        help="Report format (defaults to the configured one, tsv otherwise).",
    )
    analyze_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the report to a file instead of stdout.",
    )
    analyze_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Ignore and do not update the parse cache.",
    )

    check_parser = subparsers.add_parser(
        "check",
        help="Only verify that the include graph has no cycles.",
    )
    _add_common_options(check_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for includecost commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    orchestrator = Orchestrator()
    use_cache = False if getattr(args, "no_cache", False) else None
    if args.command == "check":
        use_cache = False

    try:
        outcome = orchestrator.run_analyze(
            args.path,
            config_path=args.config,
            use_cache=use_cache,
            strict=args.strict,
        )
    except (FileNotFoundError, NotADirectoryError, ScanError) as exc:
        parser.exit(1, f"{exc}\n")
    except (ConfigError, DirectiveError) as exc:
        parser.exit(1, f"includecost {args.command} failed: {exc}\n")

    if args.command == "analyze":
        _emit_report(parser, orchestrator, outcome, args)
    elif args.command == "check":
        if outcome.result.ok:
            print("OK: no circular includes")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")

    if not outcome.result.ok:
        parser.exit(1, f"Circular dependency detected: {outcome.result.describe_cycle()}\n")


def _emit_report(
    parser: argparse.ArgumentParser,
    orchestrator: Orchestrator,
    outcome: AnalysisOutcome,
    args: argparse.Namespace,
) -> None:
    report = orchestrator.render(
        outcome,
        fmt=args.format,
        key=args.sort,
        descending=args.descending,
    )
    if args.output is None:
        sys.stdout.write(report)
        return
    try:
        args.output.write_text(report, encoding="utf-8")
    except OSError as exc:
        parser.exit(1, f"Failed to write report: {exc}\n")
    print(f"Report written to {_relativize(args.output)}")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
