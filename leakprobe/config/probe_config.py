"""
Probe configuration data class.

Every knob of a probe run lives here and is handed to the driver explicitly.
Defaults reproduce the stock harness: 50 iterations, a 30 MB buffer, a 50 MB
fixture and a 100 ms pause between iterations.
"""

from dataclasses import dataclass, field
from pathlib import Path

from leakprobe.consts.RssSource import RssSource
from leakprobe.consts.WorkloadVariant import WorkloadVariant

MB = 1024 * 1024


@dataclass
class ProbeConfig:

    variant: WorkloadVariant = WorkloadVariant.READ
    iterations: int = 50
    buffer_size: int = 30 * MB
    fixture_size: int = 50 * MB
    sleep_interval: float = 0.1  # seconds
    fixture_path: Path = field(default_factory=lambda: Path("/tmp/tmp_mem_test_file"))
    scratch_path: Path = field(default_factory=lambda: Path("/tmp/test_file.txt"))
    channel_host: str = "localhost"
    base_port: int = 4000
    rss_source: RssSource = RssSource.PROCFS

    def channel_address(self, iteration: int) -> str:
        """Address for the zero-based iteration; the port advances by one each time."""
        return f"{self.channel_host}:{self.base_port + iteration}"

    def validate(self) -> None:
        if self.iterations <= 0:
            raise ValueError(f"iterations must be positive, got {self.iterations}")
        if self.buffer_size <= 0:
            raise ValueError(f"buffer_size must be positive, got {self.buffer_size}")
        if self.fixture_size < 0:
            raise ValueError(f"fixture_size must not be negative, got {self.fixture_size}")
        if self.sleep_interval < 0:
            raise ValueError(f"sleep_interval must not be negative, got {self.sleep_interval}")
        last_port = self.base_port + self.iterations - 1
        if self.base_port < 1 or last_port > 65535:
            raise ValueError(
                f"ports {self.base_port}..{last_port} fall outside 1..65535"
            )
        if not self.channel_host:
            raise ValueError("channel_host must not be empty")

    def __str__(self):
        return (f"ProbeConfig(\n"
                f"  variant={self.variant.value},\n"
                f"  iterations={self.iterations},\n"
                f"  buffer_size={self.buffer_size / MB:.2f} MB,\n"
                f"  fixture_size={self.fixture_size / MB:.2f} MB,\n"
                f"  sleep_interval={self.sleep_interval}s,\n"
                f"  fixture_path={self.fixture_path},\n"
                f"  scratch_path={self.scratch_path},\n"
                f"  channel={self.channel_host}:{self.base_port}+,\n"
                f"  rss_source={self.rss_source.value}\n"
                f")")
