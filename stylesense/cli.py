"""CLI entrypoints for stylesense commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .analyzer import StyleAnalyzer
from .config import CONFIG_FILENAME, ConfigError, load_config
from .extractors import discover_extractors
from .logging import configure_logging
from .report import render_json, render_text
from .sources import SampleLoader
from .stores import ExtractionCache


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


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="PATH",
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write DEBUG logs to this file.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stylesense",
        description="Infer the dominant code style of a repository from a sample of its files.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Sample a repository and report its dominant conventions.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_log_file_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    analyze_parser.add_argument(
        "--language",
        help="Language to analyze (defaults to the most common language found).",
    )
    analyze_parser.add_argument(
        "--feature",
        dest="features",
        action="append",
        metavar="KIND",
        help="Feature kind to analyze; repeat for several (defaults to all).",
    )
    analyze_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format for the style profile.",
    )
    analyze_parser.add_argument(
        "--workers",
        type=int,
        help="Number of extraction threads.",
    )
    analyze_parser.add_argument(
        "--max-files",
        type=int,
        help="Maximum number of files to sample.",
    )
    analyze_parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Do not read or write the extraction cache.",
    )

    features_parser = subparsers.add_parser(
        "features",
        help="List the feature kinds that can be analyzed.",
    )
    _add_verbose_option(features_parser, suppress_default=True)
    _add_log_file_option(features_parser, suppress_default=True)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for stylesense commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "analyze":
        _run_analyze(parser, args)
    elif args.command == "features":
        for kind, extractor in sorted(discover_extractors().items()):
            languages = ", ".join(sorted(extractor.languages)) if extractor.languages else "any"
            domain = ", ".join(sorted(extractor.domain))
            print(f"{kind}: {domain} [{languages}]")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_analyze(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    root = Path(args.path).expanduser()
    if not root.is_dir():
        parser.exit(1, f"Repository path not found: {args.path}\n")
    try:
        config = load_config(root)
        policy = config.policy()
    except ConfigError as exc:
        parser.exit(1, f"Invalid {CONFIG_FILENAME}: {exc}\n")

    kinds = args.features or config.features or None
    try:
        extractors = discover_extractors(kinds, config.extractor_options())
    except (ValueError, TypeError) as exc:
        parser.exit(1, f"{exc}\n")

    sample_set = SampleLoader().load(
        config.root,
        args.language or config.language,
        max_files=args.max_files or config.sampling.max_files,
        max_file_bytes=config.sampling.max_file_bytes,
        exclude_paths=config.sampling.exclude_paths,
    )
    if not len(sample_set):
        parser.exit(1, f"No {sample_set.language} source files found under {root}\n")

    cache = None
    if not args.no_cache:
        cache = ExtractionCache(config.root / ".stylesense" / "cache.json")

    analyzer = StyleAnalyzer(
        extractors,
        policy,
        max_workers=args.workers or config.workers,
        cache=cache,
    )
    profile = analyzer.analyze(sample_set, kinds)

    if args.format == "json":
        print(render_json(profile))
    else:
        print(render_text(profile), end="")


if __name__ == "__main__":
    main(sys.argv[1:])
