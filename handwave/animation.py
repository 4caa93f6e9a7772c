import json
import logging
from abc import ABC, abstractmethod

import websockets

from handwave.consts import WEBSOCKET_HOST, WEBSOCKET_PORT

log = logging.getLogger(__name__)


def animation_message(name: str, duration: float) -> str:
    """JSON payload asking a client to play an animation."""
    return json.dumps({"event": "animation", "name": name, "duration": duration})


class AnimationSink(ABC):
    """Something that can play a named animation on the host model."""

    @abstractmethod
    def play(self, name: str, duration: float):
        """
        Play an animation.

        Args:
            name: Registered animation identifier, e.g. "waving_arm"
            duration: Seconds to play for
        """


class LogAnimationSink(AnimationSink):
    """Headless sink that only records what would have been played."""

    def __init__(self):
        self.played = []

    def play(self, name: str, duration: float):
        log.info("Playing animation %r for %.1fs", name, duration)
        self.played.append((name, duration))


class WebSocketAnimationSink(AnimationSink):
    """Broadcasts animation requests to every connected WebSocket client."""

    def __init__(self, host: str = WEBSOCKET_HOST, port: int = WEBSOCKET_PORT):
        self.host = host
        self.port = port
        self.clients = set()
        self._server = None

    async def handle_connection(self, websocket):
        log.info("Client connected")
        self.clients.add(websocket)
        try:
            await websocket.wait_closed()
        finally:
            self.clients.discard(websocket)
            log.info("Client disconnected")

    async def start(self):
        """
        Start accepting clients.

        Raises:
            OSError: If the server can't listen on host:port
        """
        self._server = await websockets.serve(self.handle_connection, self.host, self.port)
        log.info("WebSocket server started on ws://%s:%d", self.host, self.port)

    async def close(self):
        if self._server is None:
            return
        self._server.close()
        await self._server.wait_closed()
        self._server = None
        log.info("WebSocket server stopped")

    def play(self, name: str, duration: float):
        log.info("Sending animation %r (%.1fs) to %d client(s)", name, duration, len(self.clients))
        websockets.broadcast(self.clients, animation_message(name, duration))
