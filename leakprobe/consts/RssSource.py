from enum import Enum


class RssSource(Enum):
    PROCFS = "procfs"
    PSUTIL = "psutil"
