"""
Configuration settings - edit values directly here
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Settings:
    """Application settings - configure values below"""

    # ===================
    # Relayer
    # ===================
    relayer_url: str = "ws://localhost:3000/rpc"
    relayer_username: Optional[str] = None
    relayer_password: Optional[str] = None
    request_timeout: float = 30.0

    # ===================
    # Asset buyer
    # ===================
    network_id: int = 1  # 1 = mainnet, 0 = testnet
    order_refresh_interval_ms: int = 10_000
    expiry_buffer_seconds: int = 120

    # ===================
    # Quotes
    # ===================
    slippage_percentage: Decimal = Decimal("0.2")
    should_force_order_refresh: bool = False


# Global settings instance - import this
settings = Settings()
