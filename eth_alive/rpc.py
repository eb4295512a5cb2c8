"""Async JSON-RPC block height client."""

from __future__ import annotations

import asyncio
import logging
import re

import httpx

from .errors import RpcError, RpcProtocolError, RpcUnreachable
from .models.heights import HeightResult

logger = logging.getLogger(__name__)

BLOCK_NUMBER_PAYLOAD = {
    "jsonrpc": "2.0",
    "method": "eth_blockNumber",
    "params": [],
    "id": 1,
}

_HEX_RE = re.compile(r"0[xX][0-9a-fA-F]+")
_DEC_RE = re.compile(r"[0-9]+")


def parse_block_number(value: object, url: str = "") -> int:
    """Parse an `eth_blockNumber` result into a non-negative integer.

    Args:
        value: The JSON `result` field, usually a hex string like "0x10a".
            Decimal strings and JSON integers are accepted as well.
        url: Endpoint the value came from, used in error messages.

    Returns:
        The block height.

    Raises:
        RpcProtocolError: If the value is not a non-negative block number.

    Example:
        >>> parse_block_number("0x10a")
        266
    """
    if isinstance(value, bool):
        raise RpcProtocolError(url, f"unexpected result {value!r}")
    if isinstance(value, int):
        height = value
    elif isinstance(value, str):
        text = value.strip()
        if _HEX_RE.fullmatch(text):
            height = int(text[2:], 16)
        elif _DEC_RE.fullmatch(text):
            height = int(text, 10)
        else:
            raise RpcProtocolError(url, f"unparseable result {value!r}")
    else:
        raise RpcProtocolError(url, f"unexpected result {value!r}")
    if height < 0:
        raise RpcProtocolError(url, f"negative block number {height}")
    return height


class RpcHeightClient:
    """Queries the current block number of a JSON-RPC endpoint."""

    def __init__(self, timeout: float, client: httpx.AsyncClient | None = None):
        self.timeout = timeout
        self._client = client

    async def _post(self, client: httpx.AsyncClient, url: str) -> httpx.Response:
        return await client.post(url, json=BLOCK_NUMBER_PAYLOAD)

    async def _request(self, url: str) -> httpx.Response:
        if self._client is not None:
            return await self._post(self._client, url)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._post(client, url)

    async def fetch_block_number(self, url: str) -> int:
        """Perform a single `eth_blockNumber` call. No retries."""
        try:
            resp = await asyncio.wait_for(self._request(url), timeout=self.timeout)
        except asyncio.TimeoutError:
            raise RpcUnreachable(url, f"timed out after {self.timeout:g}s") from None
        except httpx.TimeoutException as exc:
            raise RpcUnreachable(url, f"timed out: {exc!r}") from exc
        except httpx.DecodingError as exc:
            raise RpcProtocolError(url, f"undecodable response body: {exc}") from exc
        except httpx.HTTPError as exc:
            raise RpcUnreachable(url, str(exc) or exc.__class__.__name__) from exc

        if not resp.is_success:
            snippet = resp.text[:200].replace("\n", " ")
            raise RpcProtocolError(url, f"HTTP {resp.status_code}: {snippet}")

        try:
            body = resp.json()
        except ValueError:
            raise RpcProtocolError(url, "response is not valid JSON") from None
        if not isinstance(body, dict):
            raise RpcProtocolError(url, "response is not a JSON object")
        error = body.get("error")
        if error:
            message = error.get("message") if isinstance(error, dict) else error
            raise RpcProtocolError(url, f"JSON-RPC error: {message}")
        if "result" not in body:
            raise RpcProtocolError(url, "response has no 'result' field")
        return parse_block_number(body["result"], url)

    async def query_height(self, url: str) -> HeightResult:
        """Like `fetch_block_number` but folds RPC failures into the result."""
        try:
            height = await self.fetch_block_number(url)
        except RpcError as exc:
            logger.warning("RPC %s for %s: %s", exc.reason, url, exc.detail)
            return HeightResult.failed(exc.reason, exc.detail)
        logger.debug("Block height %s from %s", height, url)
        return HeightResult.success(height)
