from abc import ABC, abstractmethod
from pathlib import Path

from leakprobe.consts.WorkloadVariant import WorkloadVariant
from leakprobe.service.task_executor.worker_task import WorkerTask


class BufferWorkload(ABC):
    """Abstract base buffer workload.

    Subclasses implement transfer(), which allocates a buffer of buffer_size
    bytes, moves it to or from file_path, and lets it go when it returns.
    Use super().__init__(...) in subclass constructors.
    """

    variant: WorkloadVariant

    def __init__(self, file_path: Path, buffer_size: int) -> None:
        self.file_path = Path(file_path)
        self.buffer_size = buffer_size

    def run_in_worker(self, iteration: int = 0) -> int:
        """
        Run one transfer on a fresh worker thread and wait for it.

        - Run `before_run()` on the calling thread.
        - Spawn a thread executing `transfer()` and join it, so the buffer is
          released (or demonstrably not) before the caller samples memory.

        Returns:
            Number of bytes transferred
        """
        self.before_run()
        task = WorkerTask(self.transfer, name=f"{self.variant.value}-worker-{iteration}")
        return task.spawn_and_join()

    def before_run(self) -> None:
        pass

    @abstractmethod
    def transfer(self) -> int:
        """
        Perform one bulk transfer and return the byte count.
        I/O failures are logged and reported as 0 bytes, never raised.
        """
        pass
