"""Command-line interface for platformdocs."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

from artifacts.models.artifacts.platforms import dump_entry
from artifacts.write import generate_all_artifacts
from contract.validation import validate_artifacts
from parse.errors import SourceError
from resolve.registry import PlatformRegistry
from resolve.resolver import ResolutionError, resolve_platforms
from rules.casing import format_case_style
from rules.config import ConfigError, load_config
from verify.verify import verify_determinism

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Docs root (default: .)",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="platformdocs")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser("generate", help="Generate artifacts")
    _add_common_paths(generate_parser)
    generate_parser.add_argument(
        "--out-dir",
        default=None,
        help="Output directory for generated artifacts (default: config output dir)",
    )

    validate_parser = subparsers.add_parser("validate", help="Validate artifacts")
    _add_common_paths(validate_parser)
    validate_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    verify_parser = subparsers.add_parser(
        "verify", help="Verify artifacts match the current docs tree"
    )
    _add_common_paths(verify_parser)
    verify_parser.add_argument(
        "--artifacts-dir",
        default=None,
        help="Artifacts directory (default: config output dir)",
    )

    show_parser = subparsers.add_parser(
        "show", help="Print one resolved platform, guide or integration as JSON"
    )
    show_parser.add_argument("key", help="Platform key or alias, or guide key")
    _add_common_paths(show_parser)

    format_parser = subparsers.add_parser(
        "format-option",
        help="Render an SDK option name in a platform's case style",
    )
    format_parser.add_argument("key", help="Platform key or alias, or guide key")
    format_parser.add_argument("option", help="Canonical option name, e.g. before-send")
    _add_common_paths(format_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )


def _resolve_output_dir(out_dir: str | None) -> Path | None:
    if out_dir is None:
        return None
    return Path(out_dir).expanduser().resolve()


def _resolve_artifacts_dir(root: Path, artifacts_dir: str | None) -> Path:
    if artifacts_dir is None:
        config = load_config(root)
        return (root / config.output_dir).resolve()
    return Path(artifacts_dir).expanduser().resolve()


def _handle_generate(root: Path, out_dir: str | None) -> int:
    summary = generate_all_artifacts(root=root, out_dir=_resolve_output_dir(out_dir))
    sys.stdout.write(
        f"{summary['platform_count']} platforms, {summary['guide_count']} guides, "
        f"{summary['integration_count']} integrations\n"
    )
    return 0


def _handle_validate(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    result = validate_artifacts(resolved_artifacts_dir)
    for warning in result.warnings:
        sys.stderr.write(f"{warning.location()}: warning: {warning.message}\n")
    if result.errors:
        for error in result.errors:
            sys.stderr.write(f"{error.location()}: {error.message}\n")
        return 1
    return 0


def _handle_verify(root: Path, artifacts_dir: str | None) -> int:
    resolved_artifacts_dir = _resolve_artifacts_dir(root, artifacts_dir)
    try:
        result = verify_determinism(root=root, artifacts_dir=resolved_artifacts_dir)
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"artifacts-dir: {resolved_artifacts_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2
    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("extra", result.extra),
            ("mismatches", result.mismatches),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _load_registry(root: Path) -> PlatformRegistry:
    return PlatformRegistry(resolve_platforms(root))


def _handle_show(root: Path, key: str) -> int:
    registry = _load_registry(root)
    try:
        entry = registry.lookup(key)
    except KeyError:
        sys.stderr.write(f"error: no platform, guide or integration named '{key}'\n")
        return 1
    payload = orjson.dumps(
        dump_entry(entry), option=orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
    )
    sys.stdout.write(payload.decode("utf-8") + "\n")
    return 0


def _handle_format_option(root: Path, key: str, option: str) -> int:
    registry = _load_registry(root)
    try:
        entry = registry.lookup(key)
    except KeyError:
        sys.stderr.write(f"error: no platform, guide or integration named '{key}'\n")
        return 1
    sys.stdout.write(format_case_style(option, entry.case_style) + "\n")
    return 0


def _dispatch(args: argparse.Namespace, root: Path) -> int:
    if args.command == "generate":
        return _handle_generate(root, args.out_dir)

    if args.command == "validate":
        return _handle_validate(root, args.artifacts_dir)

    if args.command == "verify":
        return _handle_verify(root, args.artifacts_dir)

    if args.command == "show":
        return _handle_show(root, args.key)

    if args.command == "format-option":
        return _handle_format_option(root, args.key, args.option)

    raise AssertionError


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    root = Path(args.root).expanduser().resolve()

    try:
        return _dispatch(args, root)
    except (ConfigError, SourceError, ResolutionError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
