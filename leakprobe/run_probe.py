#!/usr/bin/env python3
"""
Leak probe entry point.

Builds the configured workload, channel factory and sampler, then runs the
measurement loop and prints one RSS line per iteration.

Usage:
    python3 -m leakprobe.run_probe
    python3 -m leakprobe.run_probe --variant write --iterations 20
    python3 -m leakprobe.run_probe --env dev --summary --out probe.json
"""
import argparse
import logging
import sys
from typing import Optional, Sequence

from leakprobe.cli.cli import parse_probe_args
from leakprobe.config.config_loader import ConfigLoader
from leakprobe.config.probe_config import ProbeConfig
from leakprobe.consts.RssSource import RssSource
from leakprobe.consts.WorkloadVariant import WorkloadVariant
from leakprobe.models.probe_result import ProbeResult
from leakprobe.service.channel.grpc_channel_factory import GrpcChannelFactory
from leakprobe.service.driver.probe_driver import ProbeDriver
from leakprobe.service.monitor.rss_sampler import RssSampler
from leakprobe.service.workload.buffer_workload import BufferWorkload
from leakprobe.service.workload.read_workload import ReadWorkload
from leakprobe.service.workload.write_workload import WriteWorkload
from leakprobe.util.log_config import configure_logging, setup_logger

logger = setup_logger(__name__)


def build_workload(config: ProbeConfig) -> BufferWorkload:
    if config.variant == WorkloadVariant.READ:
        return ReadWorkload(config.fixture_path, config.buffer_size)
    elif config.variant == WorkloadVariant.WRITE:
        return WriteWorkload(config.scratch_path, config.buffer_size)

    raise ValueError(f"Unsupported workload variant: {config.variant}")


def build_driver(config: ProbeConfig) -> ProbeDriver:
    return ProbeDriver(
        config=config,
        workload=build_workload(config),
        channel_factory=GrpcChannelFactory(),
        sampler=RssSampler(config.rss_source),
    )


def load_config(args: argparse.Namespace) -> ProbeConfig:
    """Config files first, then any CLI overrides on top."""
    config = ConfigLoader(args.config_dir, env=args.env).config_data

    if args.variant is not None:
        config.variant = WorkloadVariant(args.variant)
    if args.iterations is not None:
        config.iterations = args.iterations
    if args.interval is not None:
        config.sleep_interval = args.interval
    if args.rss_source is not None:
        config.rss_source = RssSource(args.rss_source)

    config.validate()
    return config


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_probe_args(argv)
    if args.verbose or args.log_file:
        configure_logging(logging.DEBUG if args.verbose else None, args.log_file)

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    logger.debug(config)

    result: ProbeResult = build_driver(config).run()

    if args.summary:
        result.print_summary()

    if args.out:
        result.save_to_file(args.out)
        logger.info(f"Results written to {args.out}")


if __name__ == "__main__":
    main()
