"""
RSS Sampler Module

Reports the resident set size of the calling process in whole megabytes.
The procfs source parses /proc/self/stat; the psutil source is for hosts
without procfs. A failed read yields 0 instead of raising.
"""
import os
from pathlib import Path

import psutil

from leakprobe.consts.RssSource import RssSource
from leakprobe.util.log_config import setup_logger

logger = setup_logger(__name__)

PROC_SELF_STAT = Path("/proc/self/stat")

# Position of the resident page count in /proc/<pid>/stat, counting the pid as 0
RSS_FIELD_INDEX = 23


def parse_rss_pages(stat_line: str) -> int:
    """
    Extract the resident page count from one /proc/<pid>/stat line.

    The second field is the command name in parentheses and may itself contain
    spaces or parentheses, so splitting starts after the last ')'.
    """
    close_paren = stat_line.rindex(")")
    # Fields after "pid (comm)" start at index 2 (the state letter)
    rest = stat_line[close_paren + 1:].split()
    return int(rest[RSS_FIELD_INDEX - 2])


def page_size_kb() -> int:
    return os.sysconf("SC_PAGE_SIZE") // 1024


class RssSampler:
    """Samples the current process RSS from the configured source"""

    def __init__(self, source: RssSource = RssSource.PROCFS, stat_path: Path = PROC_SELF_STAT):
        """
        Args:
            source: Where to read RSS from
            stat_path: Process status file for the procfs source
        """
        self.source = source
        self.stat_path = Path(stat_path)

    def sample_mb(self) -> int:
        """Current RSS in whole MB, or 0 if it could not be read."""
        if self.source == RssSource.PSUTIL:
            return self._sample_psutil()
        return self._sample_procfs()

    def _sample_procfs(self) -> int:
        try:
            with open(self.stat_path, "r") as stat_stream:
                stat_line = stat_stream.readline()
            pages = parse_rss_pages(stat_line)
        except (OSError, ValueError, IndexError) as e:
            logger.debug(f"Could not read RSS from {self.stat_path}: {e}")
            return 0

        rss_kb = pages * page_size_kb()
        return rss_kb // 1024

    def _sample_psutil(self) -> int:
        try:
            rss_bytes = psutil.Process(os.getpid()).memory_info().rss
        except (psutil.Error, OSError) as e:
            logger.debug(f"Could not read RSS via psutil: {e}")
            return 0
        return rss_bytes // (1024 * 1024)


if __name__ == "__main__":

    # python3 -m leakprobe.service.monitor.rss_sampler

    logger.info(f"procfs RSS: {RssSampler(RssSource.PROCFS).sample_mb()} MB")
    logger.info(f"psutil RSS: {RssSampler(RssSource.PSUTIL).sample_mb()} MB")
