"""Remote relayer access."""

from .client import RelayerClient

__all__ = ["RelayerClient"]
