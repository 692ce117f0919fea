"""
Channel Factory Interface

The probe only needs two capabilities from a network client library: create a
client handle for an address, and close it. Keeping them behind this interface
lets the client library change without touching the driver.
"""
from abc import ABC, abstractmethod


class ChannelHandle(ABC):
    """An opaque client-side connection endpoint that is never used for traffic"""

    def __init__(self, address: str):
        self.address = address

    @abstractmethod
    def close(self) -> None:
        pass

    def __enter__(self) -> "ChannelHandle":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class ChannelFactory(ABC):

    @abstractmethod
    def create(self, address: str) -> ChannelHandle:
        """
        Create an unauthenticated client handle for host:port.
        Must not block or raise when nothing is listening at the address.
        """
        pass
