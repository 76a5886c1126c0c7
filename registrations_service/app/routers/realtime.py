from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect

from common import decode_access_token

from ..config import get_settings
from ..database import SessionLocal
from ..realtime import (
	ADMIN_REGISTRATIONS_CHANNEL,
	COURSES_CHANNEL,
	ConnectionInfo,
	courses_snapshot,
	registrations_snapshot,
	ws_manager,
)
from ..security import ROLE_ADMIN
from ..services import RegistrationService

router = APIRouter()


async def _hold_open(websocket: WebSocket) -> None:
	try:
		while True:
			# Clients only listen; anything they send is ignored
			await websocket.receive_text()
	except WebSocketDisconnect:
		pass
	finally:
		await ws_manager.disconnect(websocket)


@router.websocket("/ws/courses")
async def courses_socket(websocket: WebSocket) -> None:
	await ws_manager.connect(COURSES_CHANNEL, ConnectionInfo(websocket=websocket))
	async with SessionLocal() as db:
		snapshot = await courses_snapshot(db)
	await ws_manager.send_personal(websocket, snapshot)
	await _hold_open(websocket)


@router.websocket("/ws/admin/registrations")
async def admin_registrations_socket(
	websocket: WebSocket,
	token: Annotated[str | None, Query()] = None,
) -> None:
	if not token:
		await websocket.close(code=4401)
		return
	settings = get_settings()
	try:
		current_user = decode_access_token(token, settings.jwt_secret, settings.jwt_algorithm)
	except HTTPException:
		await websocket.close(code=4401)
		return
	if current_user.role != ROLE_ADMIN or not current_user.email:
		await websocket.close(code=4403)
		return

	await ws_manager.connect(
		ADMIN_REGISTRATIONS_CHANNEL,
		ConnectionInfo(websocket=websocket, user_id=current_user.id),
	)
	async with SessionLocal() as db:
		snapshot = await registrations_snapshot(RegistrationService(db, settings))
	await ws_manager.send_personal(websocket, snapshot)
	await _hold_open(websocket)
