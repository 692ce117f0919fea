from enum import Enum


class WorkloadVariant(Enum):
    READ = "read"
    WRITE = "write"
