#!/usr/bin/env python3
"""
depthwalk: List directory entries recursively, down to a maximum depth

Common usage:
  depthwalk --path 'src/*' --depth 2
  depthwalk --literal-path 'data[2024]' --depth 0
  depthwalk --path . --depth 3 --filter '*.dll' --file

Exactly one of --path (wildcards expanded) or --literal-path (taken verbatim)
is required. Depth 0 lists only the immediate children of each root.
"""

from __future__ import annotations

import argparse
import importlib.metadata
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from depthwalk.config import find_config_file, load_config, merge_cli_with_config
from depthwalk.walker import (
    DEFAULT_NAME_PATTERN,
    MAX_DEPTH,
    MIN_DEPTH,
    LiteralRoot,
    PatternRoot,
    RootNotFoundError,
    RootSpec,
    WalkFilter,
    walk_roots,
)


@dataclass
class Options:
    """Command-line options for the depthwalk tool."""

    paths: list[str]
    literal_paths: list[str]
    depth: int | None
    filter: str
    file: bool
    case_sensitive: bool | None
    verbose: bool
    version: bool

    def root_specs(self) -> list[RootSpec]:
        if self.literal_paths:
            return [LiteralRoot(p) for p in self.literal_paths]
        return [PatternRoot(p) for p in self.paths]


# Flags whose config file value applies unless given on the command line.
_TRACKED_FLAGS = ("depth", "filter", "file", "case_sensitive")


def _depth_arg(value: str) -> int:
    try:
        depth = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}") from None
    if not MIN_DEPTH <= depth <= MAX_DEPTH:
        raise argparse.ArgumentTypeError(
            f"depth must be between {MIN_DEPTH} and {MAX_DEPTH}, got {depth}"
        )
    return depth


def _parse_args(args: list[str] | None = None) -> tuple[Options, set[str]]:
    """
    Parse command-line arguments.

    Returns a tuple of (options, explicit_flags) where `explicit_flags` tracks
    which flags the user explicitly passed (for config merge precedence).
    Tracked flags default to `None` so that presence can be told apart from
    a value equal to the default.
    """
    # Use the module's docstring as the description
    module_doc = __doc__ or ""
    doc_parts = module_doc.split("\n\n")
    description = doc_parts[0]
    epilog = "\n\n".join(doc_parts[1:])

    parser = argparse.ArgumentParser(
        prog="depthwalk",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    roots = parser.add_mutually_exclusive_group()
    roots.add_argument(
        "-p",
        "--path",
        action="append",
        dest="paths",
        default=[],
        metavar="PATTERN",
        help="Root path; wildcards (*, ?, [...]) are expanded and may match several roots. "
        "Can be repeated",
    )
    roots.add_argument(
        "-l",
        "--literal-path",
        action="append",
        dest="literal_paths",
        default=[],
        metavar="PATH",
        help="Root path taken exactly as given, with no wildcard expansion. Can be repeated",
    )
    parser.add_argument(
        "-d",
        "--depth",
        type=_depth_arg,
        default=None,
        metavar="N",
        help=f"Maximum number of directory levels below the root to list "
        f"({MIN_DEPTH}-{MAX_DEPTH}; required unless set in a config file)",
    )
    parser.add_argument(
        "-f",
        "--filter",
        type=str,
        default=None,
        metavar="GLOB",
        help=f"Only output entries whose name matches this glob (default: {DEFAULT_NAME_PATTERN!r})",
    )
    parser.add_argument(
        "--file",
        action="store_true",
        default=None,
        help="Only output files, not directories (directories are still descended into)",
    )
    case = parser.add_mutually_exclusive_group()
    case.add_argument(
        "--case-sensitive",
        action="store_const",
        const=True,
        dest="case_sensitive",
        default=None,
        help="Match --filter case-sensitively (default: follow the host convention)",
    )
    case.add_argument(
        "--ignore-case",
        action="store_const",
        const=False,
        dest="case_sensitive",
        help="Match --filter case-insensitively",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Report skipped subtrees and resolved roots on stderr",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version information and exit",
    )
    opts = parser.parse_args(args)

    if not opts.version and not (opts.paths or opts.literal_paths):
        parser.error("one of the arguments -p/--path -l/--literal-path is required")

    explicit_flags = {name for name in _TRACKED_FLAGS if getattr(opts, name) is not None}

    return (
        Options(
            paths=opts.paths,
            literal_paths=opts.literal_paths,
            depth=opts.depth,
            filter=opts.filter if opts.filter is not None else DEFAULT_NAME_PATTERN,
            file=bool(opts.file),
            case_sensitive=opts.case_sensitive,
            verbose=opts.verbose,
            version=opts.version,
        ),
        explicit_flags,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(args: list[str] | None = None) -> int:
    """
    Main entry point for the depthwalk CLI.

    Args:
        args: Command-line arguments (uses sys.argv if None)

    Returns:
        Exit code (0 for success, 1 if a root was not found, 2 for other errors)
    """
    options, explicit_flags = _parse_args(args)

    # Display version information if requested
    if options.version:
        try:
            version = importlib.metadata.version("depthwalk")
            print(f"v{version}")
        except importlib.metadata.PackageNotFoundError:
            print("unknown (package not installed)")
        return 0

    _configure_logging(options.verbose)

    # Load and merge config file settings
    try:
        config_path = find_config_file(Path.cwd())
        if config_path:
            config = load_config(config_path)
            merge_cli_with_config(options, config, explicit_flags)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if options.depth is None:
        print(
            "Error: --depth is required (or set `depth` in a config file). Use --help for more options.",
            file=sys.stderr,
        )
        return 2

    walk_filter = WalkFilter(
        name_pattern=options.filter,
        entries_only=options.file,
        case_sensitive=options.case_sensitive,
    )

    try:
        for entry in walk_roots(options.root_specs(), options.depth, walk_filter):
            print(entry.path)
    except RootNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError) as e:
        # Listing errors (e.g. permission denied) and malformed glob patterns.
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
