from pathlib import Path

from leakprobe.consts.WorkloadVariant import WorkloadVariant
from leakprobe.service.workload.buffer_workload import BufferWorkload
from leakprobe.util.file_utils import remove_file
from leakprobe.util.log_config import setup_logger

logger = setup_logger(__name__)


class WriteWorkload(BufferWorkload):
    """Writes a zero-filled buffer_size buffer to a scratch file, recreating it every run."""

    variant = WorkloadVariant.WRITE

    def __init__(self, file_path: Path, buffer_size: int) -> None:
        super().__init__(file_path, buffer_size)

    def before_run(self) -> None:
        # Missing file is fine; the write creates it
        remove_file(self.file_path, missing_ok=True)

    def transfer(self) -> int:
        try:
            with open(self.file_path, "wb") as f:
                data_buffer = bytearray(self.buffer_size)
                bytes_written = f.write(data_buffer)
        except OSError as e:
            logger.error(f"Could not write '{self.file_path}': {e.strerror}")
            return 0

        return bytes_written


if __name__ == "__main__":

    # python3 -m leakprobe.service.workload.write_workload

    workload = WriteWorkload(Path("/tmp/test_file.txt"), 4 * 1024 * 1024)
    logger.info(f"Wrote {workload.run_in_worker()} bytes")
