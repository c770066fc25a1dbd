"""CLI entrypoints for projdigest commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigError, ScanConfiguration, apply_overrides, load_config
from .history import PathHistory
from .logging import configure_logging
from .scanner import ProjectScanner, resolve_root


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


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="projdigest",
        description="Produce a bounded-size digest of a project tree.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug-level log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan a project directory and print its digest.",
    )
    _add_verbose_option(scan_parser, suppress_default=True)
    scan_parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Project root (defaults to the most recent scan, then the current directory).",
    )
    scan_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the digest to this file instead of stdout.",
    )
    scan_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Read settings from this file instead of <root>/.projdigest.yml.",
    )
    tree_group = scan_parser.add_mutually_exclusive_group()
    tree_group.add_argument(
        "--full-tree",
        dest="tree",
        action="store_const",
        const="full",
        help="List every directory and file instead of the collapsed summary.",
    )
    tree_group.add_argument(
        "--no-tree",
        dest="tree",
        action="store_const",
        const="none",
        help="Omit the directory structure section.",
    )
    signature_group = scan_parser.add_mutually_exclusive_group()
    signature_group.add_argument(
        "--no-signatures",
        dest="signatures",
        action="store_const",
        const="off",
        help="Show source files verbatim (line-capped) instead of signatures.",
    )
    signature_group.add_argument(
        "--pattern-signatures",
        dest="signatures",
        action="store_const",
        const="pattern",
        help="Extract signatures with line patterns instead of a syntax tree.",
    )
    scan_parser.add_argument(
        "--full-export",
        action="store_true",
        help="Include every in-scope file with raw content and the full tree.",
    )
    scan_parser.add_argument(
        "--all-files",
        action="store_true",
        help="Keep discovery order instead of ranking files by signal.",
    )
    scan_parser.add_argument("--max-files", type=int, default=None, help="Global file cap.")
    scan_parser.add_argument("--max-lines", type=int, default=None, help="Line cap per file.")
    scan_parser.add_argument("--max-bytes", type=int, default=None, help="Byte cap per file.")
    scan_parser.add_argument(
        "--no-history",
        action="store_true",
        help="Do not record this root in the recent-paths history.",
    )

    history_parser = subparsers.add_parser(
        "history",
        help="List recently scanned project roots.",
    )
    _add_verbose_option(history_parser, suppress_default=True)
    history_parser.add_argument(
        "--clear",
        action="store_true",
        help="Forget all recorded roots.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def build_configuration(args: argparse.Namespace, root: Path) -> ScanConfiguration:
    """Combine preset, config file and CLI flags into one configuration."""
    base = ScanConfiguration.full_export() if args.full_export else ScanConfiguration()
    if args.config is not None and not args.config.exists():
        raise ConfigError(f"Config file not found: {args.config}")
    config_source = args.config if args.config is not None else root
    config = load_config(config_source, base)
    return apply_overrides(
        config,
        tree=args.tree,
        signatures=args.signatures,
        max_files=args.max_files,
        max_lines=args.max_lines,
        max_bytes=args.max_bytes,
        high_signal=False if args.all_files else None,
    )


def _run_scan(parser: argparse.ArgumentParser, args: argparse.Namespace, history: PathHistory) -> None:
    requested: Optional[str] = args.path or history.most_recent() or "."
    try:
        root = resolve_root(requested)
        config = build_configuration(args, root)
        result = ProjectScanner(config).scan(root)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except ConfigError as exc:
        parser.exit(1, f"Invalid configuration: {exc}\n")

    if not args.no_history:
        history.add(str(root))

    if args.output is not None:
        try:
            args.output.write_text(result.text, encoding="utf-8")
        except OSError as exc:
            parser.exit(1, f"Failed to write {args.output}: {exc}\n")
        print(f"Digest written to {_relativize(args.output)} ({len(result.selected)} files)")
    else:
        sys.stdout.write(result.text)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for projdigest commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)
    history = PathHistory()

    if args.command == "scan":
        _run_scan(parser, args, history)
    elif args.command == "history":
        if args.clear:
            history.clear()
            print("History cleared")
            return
        for entry in history.load():
            print(entry)
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
