from pathlib import Path

from leakprobe.consts.WorkloadVariant import WorkloadVariant
from leakprobe.service.workload.buffer_workload import BufferWorkload
from leakprobe.util.log_config import setup_logger

logger = setup_logger(__name__)


class ReadWorkload(BufferWorkload):
    """Reads up to buffer_size bytes of an existing file into a temporary buffer."""

    variant = WorkloadVariant.READ

    def __init__(self, file_path: Path, buffer_size: int) -> None:
        super().__init__(file_path, buffer_size)

    def transfer(self) -> int:
        try:
            with open(self.file_path, "rb") as f:
                data_buffer = bytearray(self.buffer_size)
                # A short read is fine when the file is smaller than the buffer
                bytes_read = f.readinto(data_buffer)
        except FileNotFoundError:
            logger.error(f"File '{self.file_path}' not found.")
            return 0
        except OSError as e:
            logger.error(f"Could not read '{self.file_path}': {e.strerror}")
            return 0

        return bytes_read or 0


if __name__ == "__main__":

    # python3 -m leakprobe.service.workload.read_workload

    from leakprobe.util.file_utils import create_mock_file, remove_file

    path = Path("/tmp/tmp_mem_test_file")
    create_mock_file(path, 8 * 1024 * 1024)
    workload = ReadWorkload(path, 4 * 1024 * 1024)
    logger.info(f"Read {workload.run_in_worker()} bytes")
    remove_file(path)
