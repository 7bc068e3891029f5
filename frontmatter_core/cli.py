"""CLI entrypoints for frontmatter commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import ConfigError, ScanConfig, load_config
from .logging import configure_logging
from .output import BUILD_FILENAME, read_build, write_scan_outputs
from .parsers import DocumentDecodeError
from .scanner import Scanner
from .validators import validate_build

EXIT_FAILURE = 1
EXIT_INVALID = 2


def _add_common_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    default: object = argparse.SUPPRESS if suppress_default else None
    flag_default: object = argparse.SUPPRESS if suppress_default else False
    parser.add_argument(
        "--root",
        default=default,
        help="Project root (defaults to the current directory).",
    )
    parser.add_argument(
        "--out",
        default=default,
        help="Output directory (defaults to <root>/.frontmatter or out_dir from .frontmatter.yml).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=flag_default,
        help="Log every parsed file.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=flag_default,
        help="Only log warnings and errors.",
    )


def _add_scan_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--verify-components",
        action="store_true",
        help="Report page component references that do not resolve to a file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="frontmatter",
        description="Scan a project's pages, components and datasets into a versioned IR.",
    )
    _add_common_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    scan_parser = subparsers.add_parser(
        "scan",
        help="Scan the project and write manifest.json and build.json.",
    )
    _add_common_options(scan_parser, suppress_default=True)
    _add_scan_options(scan_parser)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate a previously written build.json.",
    )
    _add_common_options(validate_parser, suppress_default=True)

    export_parser = subparsers.add_parser(
        "export",
        help="Alias of scan.",
    )
    _add_common_options(export_parser, suppress_default=True)
    _add_scan_options(export_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for frontmatter commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))

    root = Path(args.root or ".").expanduser().resolve()
    try:
        config = load_config(root)
    except ConfigError as exc:
        parser.exit(EXIT_FAILURE, f"{exc}\n")
    out_dir = Path(args.out).expanduser().resolve() if args.out else config.resolve_out_dir()

    if args.command in {"scan", "export"}:
        _run_scan(parser, args, root, out_dir, config)
    elif args.command == "validate":
        _run_validate(parser, out_dir)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(EXIT_FAILURE, "Unknown command\n")


def _run_scan(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    root: Path,
    out_dir: Path,
    config: ScanConfig,
) -> None:
    verify = True if getattr(args, "verify_components", False) else None
    scanner = Scanner(config=config, verify_components=verify)
    try:
        result = scanner.scan(root, out_dir=out_dir, verbose=bool(args.verbose))
        written = write_scan_outputs(result, out_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(EXIT_FAILURE, f"{exc}\n")
    except (DocumentDecodeError, UnicodeDecodeError) as exc:
        parser.exit(EXIT_FAILURE, f"frontmatter {args.command} failed: {exc}\n")
    except OSError as exc:
        parser.exit(
            EXIT_FAILURE,
            f"frontmatter {args.command} failed: {exc}\nRun with --verbose for more details.\n",
        )

    if result.errors:
        lines = [f"Scan completed with {len(result.errors)} error(s); see {written.errors}"]
        lines.extend(f"- {error.message}" for error in result.errors)
        parser.exit(EXIT_INVALID, "\n".join(lines) + "\n")
    print(f"Scan OK. Output: {_relativize(out_dir)}")


def _run_validate(parser: argparse.ArgumentParser, out_dir: Path) -> None:
    try:
        build = read_build(out_dir)
    except FileNotFoundError:
        parser.exit(
            EXIT_INVALID,
            f"{BUILD_FILENAME} not found in {_relativize(out_dir)}. Run: frontmatter scan\n",
        )
    except ValueError as exc:
        parser.exit(EXIT_INVALID, f"{BUILD_FILENAME} is not valid JSON: {exc}\n")

    errors = validate_build(build)
    if errors:
        lines = [f"Invalid build ({len(errors)} error(s))"]
        lines.extend(f"- {message}" for message in errors)
        parser.exit(EXIT_INVALID, "\n".join(lines) + "\n")
    print("Build is valid.")


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
