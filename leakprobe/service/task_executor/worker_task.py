import threading
from typing import Any, Callable, Optional

from leakprobe.util.log_config import setup_logger

logger = setup_logger(__name__)


class WorkerTask:
    """Runs one callable on a dedicated thread and blocks until it finishes.

    Only one worker exists at a time: the caller spawns it and immediately
    joins, with no timeout. A stuck callable stalls the caller.
    """

    def __init__(self, target: Callable[..., Any], *args: Any, name: Optional[str] = None):
        self.target = target
        self.args = args
        self.name = name
        self.result: Any = None
        self.error: Optional[BaseException] = None

    def _run(self) -> None:
        try:
            self.result = self.target(*self.args)
        except Exception as e:
            self.error = e

    def spawn_and_join(self) -> Any:
        """
        Start the thread, wait for it, and return the callable's result.

        Raises:
            Exception: whatever the callable raised, re-raised on the caller's thread
        """
        thread = threading.Thread(target=self._run, name=self.name)
        thread.start()
        thread.join()

        if self.error is not None:
            logger.error(f"Worker {thread.name} failed: {self.error}")
            raise self.error
        return self.result
