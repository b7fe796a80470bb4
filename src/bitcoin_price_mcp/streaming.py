"""Server-sent event stream for tool discovery.

Each connection gets its own EventStream. The discovery payload is pushed
once, then a heartbeat comment every ``heartbeat_seconds`` until the peer
goes away. The heartbeat loop lives inside the generator; closing or
cancelling the generator ends the loop, and the ``finally`` block releases
it exactly once whichever way the stream ends.
"""
import asyncio
import logging
from typing import AsyncIterator

from prometheus_client import Gauge

logger = logging.getLogger(__name__)

HEARTBEAT = ":heartbeat\n\n"

OPEN_STREAMS = Gauge("bitcoin_mcp_open_event_streams", "Currently open SSE connections")


def format_event(data: str) -> str:
    return f"data: {data}\n\n"


class EventStream:
    def __init__(self, discovery_json: str, heartbeat_seconds: float = 30.0) -> None:
        if heartbeat_seconds <= 0:
            raise ValueError("heartbeat_seconds must be positive")
        self._discovery_json = discovery_json
        self._heartbeat_seconds = heartbeat_seconds
        self.heartbeats_sent = 0
        self.closed = False

    async def events(self) -> AsyncIterator[str]:
        OPEN_STREAMS.inc()
        try:
            yield format_event(self._discovery_json)
            while True:
                await asyncio.sleep(self._heartbeat_seconds)
                self.heartbeats_sent += 1
                yield HEARTBEAT
        finally:
            self._close()

    def _close(self) -> None:
        if self.closed:
            return
        self.closed = True
        OPEN_STREAMS.dec()
        logger.info("SSE connection closed after %d heartbeats", self.heartbeats_sent)
