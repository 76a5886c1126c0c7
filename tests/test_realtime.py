import pytest
from starlette.websockets import WebSocketDisconnect

from conftest import registration_form, screenshot_file


def test_catalog_subscribers_get_snapshots(client, admin_headers, create_course):
	with client.websocket_connect("/ws/courses") as ws:
		first = ws.receive_json()
		assert first == {"type": "courses", "items": []}

		create_course()
		update = ws.receive_json()
		assert update["type"] == "courses"
		assert [item["id"] for item in update["items"]] == ["ucm"]
		assert update["items"][0]["effective_price"] == 1499
		assert "whatsapp_link" not in update["items"][0]

		client.delete("/api/courses/ucm", headers=admin_headers)
		assert ws.receive_json()["items"] == []


def test_admin_feed_requires_token(client):
	with pytest.raises(WebSocketDisconnect) as exc_info:
		with client.websocket_connect("/ws/admin/registrations"):
			pass
	assert exc_info.value.code == 4401

	with pytest.raises(WebSocketDisconnect) as exc_info:
		with client.websocket_connect("/ws/admin/registrations?token=garbage"):
			pass
	assert exc_info.value.code == 4401


def test_admin_feed_refuses_students(client, student_login):
	_, session = student_login()
	with pytest.raises(WebSocketDisconnect) as exc_info:
		with client.websocket_connect(f"/ws/admin/registrations?token={session['access_token']}"):
			pass
	assert exc_info.value.code == 4403


def test_admin_feed_receives_new_registrations(client, admin_headers, create_course, student_login):
	create_course()
	headers, _ = student_login()
	token = admin_headers["Authorization"].split(" ", 1)[1]

	with client.websocket_connect(f"/ws/admin/registrations?token={token}") as ws:
		assert ws.receive_json() == {"type": "registrations", "items": []}

		response = client.post(
			"/api/registrations/ucm",
			data=registration_form(),
			files=screenshot_file(),
			headers=headers,
		)
		assert response.status_code == 201
		created = ws.receive_json()
		assert [item["id"] for item in created["items"]] == [response.json()["id"]]
		assert created["items"][0]["confirmed"] is False

		client.post(f"/api/admin/registrations/{response.json()['id']}/confirm", headers=admin_headers)
		assert ws.receive_json()["items"][0]["confirmed"] is True
