from __future__ import annotations

import asyncio
from dataclasses import dataclass
from logging import getLogger

from fastapi import WebSocket

logger = getLogger(__name__)

COURSES_CHANNEL = "courses"
ADMIN_REGISTRATIONS_CHANNEL = "admin:registrations"


@dataclass
class ConnectionInfo:
	websocket: WebSocket
	user_id: str | None = None


class ConnectionManager:
	"""Tracks live subscribers per channel and fans snapshots out to them."""

	def __init__(self) -> None:
		self._connections: dict[str, dict[WebSocket, ConnectionInfo]] = {}
		self._lock = asyncio.Lock()

	async def connect(self, channel: str, connection: ConnectionInfo) -> None:
		await connection.websocket.accept()
		async with self._lock:
			self._connections.setdefault(channel, {})[connection.websocket] = connection

	async def disconnect(self, websocket: WebSocket) -> None:
		async with self._lock:
			for channel, bucket in list(self._connections.items()):
				if websocket in bucket:
					bucket.pop(websocket, None)
					if not bucket:
						self._connections.pop(channel, None)
					break

	def has_subscribers(self, channel: str) -> bool:
		return bool(self._connections.get(channel))

	async def broadcast(self, channel: str, message: dict) -> None:
		async with self._lock:
			targets = list(self._connections.get(channel, {}).keys())
		for ws in targets:
			try:
				await ws.send_json(message)
			except Exception:
				logger.debug("Dropping subscriber of %s after failed send", channel)
				await self.disconnect(ws)

	async def send_personal(self, websocket: WebSocket, message: dict) -> None:
		try:
			await websocket.send_json(message)
		except Exception:
			await self.disconnect(websocket)


ws_manager = ConnectionManager()
