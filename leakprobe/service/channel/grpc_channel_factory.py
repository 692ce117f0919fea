import grpc

from leakprobe.service.channel.channel_factory import ChannelFactory, ChannelHandle
from leakprobe.util.log_config import setup_logger

logger = setup_logger(__name__)


class GrpcChannelHandle(ChannelHandle):

    def __init__(self, address: str, channel: grpc.Channel):
        super().__init__(address)
        self.channel = channel

    def close(self) -> None:
        if self.channel is not None:
            self.channel.close()
            self.channel = None


class GrpcChannelFactory(ChannelFactory):
    """Creates insecure gRPC channels. Channels connect lazily, so creation never waits on a listener."""

    def create(self, address: str) -> GrpcChannelHandle:
        logger.debug(f"Creating insecure gRPC channel to {address}")
        return GrpcChannelHandle(address, grpc.insecure_channel(address))


if __name__ == "__main__":

    # python3 -m leakprobe.service.channel.grpc_channel_factory

    with GrpcChannelFactory().create("localhost:4000") as handle:
        logger.info(f"Created channel to {handle.address}")
