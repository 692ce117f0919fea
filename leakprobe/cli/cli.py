#!/usr/bin/env python3
"""
Command-line options for the leak probe.
"""
import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from leakprobe.config.config_loader import DEFAULT_CONFIG_DIR
from leakprobe.consts.RssSource import RssSource
from leakprobe.consts.WorkloadVariant import WorkloadVariant


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --config-dir and --env options.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the config arguments.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--config-dir",
        type=Path,
        default=DEFAULT_CONFIG_DIR,
        help="Directory holding config.yaml (default: the bundled config_yaml directory)",
    )
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_probe_parser() -> argparse.ArgumentParser:
    ap = build_env_parser("Watch process RSS across repeated buffer I/O and gRPC channel create/close cycles")
    ap.add_argument("--variant", choices=[v.value for v in WorkloadVariant], default=None,
                    help="Buffer workload: read (from a temporary fixture) | write (to a scratch file)")
    ap.add_argument("--iterations", type=int, default=None,
                    help="Number of iterations (default from config: 50)")
    ap.add_argument("--interval", type=float, default=None,
                    help="Pause between iterations in seconds (default from config: 0.1)")
    ap.add_argument("--rss-source", choices=[s.value for s in RssSource], default=None,
                    help="Where RSS is read from: procfs (/proc/self/stat) | psutil")
    ap.add_argument("--summary", action="store_true",
                    help="Print an RSS statistics table after the last iteration")
    ap.add_argument("--out", type=str, default="",
                    help="If set, write the baseline and every sample as JSON to this path")
    ap.add_argument("--log-file", type=Path, default=None,
                    help="Also write debug-level diagnostics to this file")
    ap.add_argument("--verbose", action="store_true",
                    help="Show debug logging")
    return ap


def validate_probe_args(args: argparse.Namespace):
    if not args.config_dir.is_dir():
        print(f"Error: Config directory not found: {args.config_dir}", file=sys.stderr)
        sys.exit(1)

    if args.iterations is not None and args.iterations <= 0:
        print(f"Error: --iterations must be positive, got {args.iterations}", file=sys.stderr)
        sys.exit(1)

    if args.interval is not None and args.interval < 0:
        print(f"Error: --interval must not be negative, got {args.interval}", file=sys.stderr)
        sys.exit(1)


def parse_probe_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    args = build_probe_parser().parse_args(argv)
    validate_probe_args(args)
    return args
