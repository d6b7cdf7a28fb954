"""Relayer WebSocket client (JSON-RPC 2.0) for order book access."""

import asyncio
import base64
import json
import logging
from typing import Any, Dict, List, Optional

from websockets.asyncio.client import ClientConnection, connect as ws_connect
from websockets.protocol import State

from asset_buyer.constants import DEFAULT_REQUEST_TIMEOUT, MAX_MESSAGE_SIZE
from asset_buyer.errors import RelayerConnectionError, RelayerQueryError

logger = logging.getLogger(__name__)


class RelayerClient:
    """
    Async client for a relayer's JSON-RPC WebSocket API.

    Requests on one connection are serialized: each request waits for its own
    response before the next is sent.
    """

    def __init__(
        self,
        url: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.url = url
        self.username = username
        self.password = password
        self.timeout = timeout
        self._ws: Optional[ClientConnection] = None
        self._request_id = 0
        self._lock = asyncio.Lock()

    def _get_headers(self) -> Dict[str, str]:
        if self.username and self.password:
            encoded = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
            return {"Authorization": f"Basic {encoded}"}
        return {}

    async def connect(self) -> bool:
        """Connect to the relayer. Returns True on success."""
        try:
            connect_kwargs = {"max_size": MAX_MESSAGE_SIZE}
            headers = self._get_headers()
            if headers:
                connect_kwargs["additional_headers"] = headers
            self._ws = await ws_connect(self.url, **connect_kwargs)
            logger.info(f"Connected to relayer at {self.url}")
            return True
        except ConnectionRefusedError:
            logger.error(f"Connection refused. Is the relayer running at {self.url}?")
            return False
        except Exception as e:
            logger.error(f"Failed to connect to relayer: {e}")
            return False

    async def disconnect(self):
        if self._ws:
            await self._ws.close()
            self._ws = None
            logger.info("Disconnected from relayer")

    @property
    def is_connected(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

    async def __aenter__(self):
        if not await self.connect():
            raise RelayerConnectionError(f"Failed to connect to {self.url}")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.disconnect()

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def _ensure_connected(self):
        if not self.is_connected and not await self.connect():
            raise RelayerConnectionError(f"Not connected to relayer at {self.url}")

    async def _drop_connection(self):
        """Close and forget the socket; the next request reconnects."""
        ws, self._ws = self._ws, None
        if ws is not None:
            try:
                await ws.close()
            except Exception as e:
                logger.debug(f"Error closing relayer connection: {e}")

    async def _send_request(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Send JSON-RPC request and wait for its response."""
        request_id = self._next_request_id()
        request = {"jsonrpc": "2.0", "method": method, "id": request_id}
        if params:
            request["params"] = params

        # connect and exchange under one lock: one socket, one reply per request
        async with self._lock:
            await self._ensure_connected()
            try:
                await self._ws.send(json.dumps(request))
                response = json.loads(await asyncio.wait_for(self._ws.recv(), timeout=self.timeout))
            except asyncio.TimeoutError:
                await self._drop_connection()
                raise RelayerQueryError(f"Request timed out after {self.timeout}s: {method}")
            except Exception as e:
                await self._drop_connection()
                raise RelayerQueryError(f"Request failed: {e}") from e

            if response.get("id") not in (None, request_id):
                await self._drop_connection()
                raise RelayerQueryError(f"Response id {response.get('id')} does not match request {request_id}")

        if "result" in response:
            return response["result"]
        if "error" in response:
            err = response["error"]
            raise RelayerQueryError(f"Relayer error: {err.get('message', err) if isinstance(err, dict) else err}")
        raise RelayerQueryError(f"Malformed response to {method}")

    async def get_orderbook(self, base_asset_data: str, quote_asset_data: str, network_id: int) -> Dict[str, Any]:
        """Order book for base/quote; asks are sorted best price first."""
        result = await self._send_request("getOrderbook", {
            "baseAssetData": base_asset_data,
            "quoteAssetData": quote_asset_data,
            "networkId": network_id,
        })
        return result if isinstance(result, dict) else {}

    async def get_asset_pairs(self, asset_data_a: str, network_id: int, per_page: int) -> List[Dict[str, Any]]:
        result = await self._send_request("getAssetPairs", {
            "assetDataA": asset_data_a,
            "networkId": network_id,
            "perPage": per_page,
        })
        return result.get("records", []) if isinstance(result, dict) else []

    async def get_orders_and_traders_info(
        self, orders: List[Dict[str, Any]], taker_addresses: List[str],
    ) -> List[Dict[str, Any]]:
        result = await self._send_request("getOrdersAndTradersInfo", {
            "orders": orders,
            "takerAddresses": taker_addresses,
        })
        return result if isinstance(result, list) else []

    async def health_check(self) -> Dict[str, Any]:
        try:
            await self._send_request("ping")
            return {"status": "healthy", "connected": True}
        except Exception as e:
            return {"status": "unhealthy", "connected": self.is_connected, "error": str(e)}
