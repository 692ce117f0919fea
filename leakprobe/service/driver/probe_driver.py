"""
Probe Driver Module

Runs the fixed-count measurement loop: buffer workload on a worker thread,
one channel create/close, one RSS sample, one report line, a short pause.
The driver reports only totals against the baseline; it does not try to tell
which workload caused any growth.
"""
import os
import sys
import time
from typing import Callable, Optional, TextIO

from leakprobe.config.probe_config import ProbeConfig
from leakprobe.consts.WorkloadVariant import WorkloadVariant
from leakprobe.models.probe_result import ProbeResult, RssSample
from leakprobe.service.channel.channel_factory import ChannelFactory
from leakprobe.service.monitor.rss_sampler import RssSampler
from leakprobe.service.workload.buffer_workload import BufferWorkload
from leakprobe.util.file_utils import create_mock_file, remove_file
from leakprobe.util.log_config import setup_logger

logger = setup_logger(__name__)

SEPARATOR = "-" * 57


def format_iteration_line(iteration: int, total: int, current_rss: float, diff_from_start: float) -> str:
    return (f"Iteration {iteration}/{total}: "
            f"Current RSS: {current_rss:.2f} MB | "
            f"Total increase: +{diff_from_start:.2f} MB")


class ProbeDriver:

    def __init__(self,
                 config: ProbeConfig,
                 workload: BufferWorkload,
                 channel_factory: ChannelFactory,
                 sampler: RssSampler,
                 out: Optional[TextIO] = None,
                 sleep: Callable[[float], None] = time.sleep):
        """
        Args:
            config: Probe settings (iteration count, sizes, paths, pause)
            workload: Buffer workload run once per iteration on a worker thread
            channel_factory: Creates the per-iteration channel handle
            sampler: RSS source
            out: Report stream (default: sys.stdout at call time)
            sleep: Pause function, replaceable for tests
        """
        self.config = config
        self.workload = workload
        self.channel_factory = channel_factory
        self.sampler = sampler
        self.out = out
        self.sleep = sleep

    def _print(self, line: str) -> None:
        stream = self.out or sys.stdout
        print(line, file=stream, flush=True)

    def run(self) -> ProbeResult:
        """
        Run the whole probe: fixture setup (read variant), the measurement
        loop, then fixture teardown. The fixture is removed even when the loop
        is interrupted or a worker raises.
        """
        uses_fixture = self.config.variant == WorkloadVariant.READ
        if uses_fixture:
            create_mock_file(self.config.fixture_path, self.config.fixture_size)

        try:
            return self.measure()
        finally:
            if uses_fixture and not remove_file(self.config.fixture_path):
                logger.warning(f"Could not delete mock file {self.config.fixture_path}")

    def measure(self) -> ProbeResult:
        """Take the baseline, then run exactly config.iterations iterations."""
        total = self.config.iterations
        initial_rss = self.sampler.sample_mb()
        pid = os.getpid()

        self._print(f"PID: {pid}")
        self._print(f"Initial RSS: {initial_rss:.2f} MB")
        self._print(SEPARATOR)

        result = ProbeResult(pid=pid, variant=self.config.variant.value,
                             iterations=total, initial_rss_mb=initial_rss)

        for i in range(total):
            # 1. Buffer workload, joined before anything else happens
            self.workload.run_in_worker(i)

            # 2. Channel created and closed with no traffic
            with self.channel_factory.create(self.config.channel_address(i)):
                pass

            # 3. Sample and report
            current_rss = self.sampler.sample_mb()
            diff_from_start = current_rss - initial_rss
            result.samples.append(RssSample(iteration=i + 1, rss_mb=current_rss, delta_mb=diff_from_start))
            self._print(format_iteration_line(i + 1, total, current_rss, diff_from_start))

            self.sleep(self.config.sleep_interval)

        return result
