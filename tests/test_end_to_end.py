"""Walk through the whole flow: catalog, registration, approval, status."""
from conftest import registration_form, screenshot_file


def test_registration_flow(client, admin_headers, create_course, student_login):
	create_course(course_code="UCM", base_price=1999, early_bird_price=1499)

	catalog = client.get("/api/courses").json()
	assert catalog[0]["discount_percent"] == 25
	assert catalog[0]["effective_price"] == 1499

	headers, session = student_login("9876543210", redirect_to="/register/ucm")
	assert session["redirect_to"] == "/register/ucm"
	assert session["returning"] is False

	response = client.post(
		"/api/registrations/ucm",
		data=registration_form(payment_option="full"),
		files=screenshot_file(),
		headers=headers,
	)
	assert response.status_code == 201, response.text
	registration = response.json()
	assert registration["amount_paid"] == 1499
	assert registration["payment_status"] == "full_payment_pending"
	assert registration["confirmed"] is False

	status_view = client.get("/api/registrations/me", headers=headers).json()
	assert status_view[0]["status_label"] == "Payment under verification"
	assert status_view[0]["whatsapp_link"] is None

	pending = client.get("/api/admin/registrations?filter=pending", headers=admin_headers).json()
	assert [item["id"] for item in pending] == [registration["id"]]

	confirmed = client.post(f"/api/admin/registrations/{registration['id']}/confirm", headers=admin_headers)
	assert confirmed.status_code == 200

	status_view = client.get("/api/registrations/me", headers=headers).json()
	assert status_view[0]["status_label"] == "Confirmed"
	assert status_view[0]["whatsapp_link"] == "https://chat.whatsapp.com/ucm"
	assert status_view[0]["course_name"] == "Unified Communication Masterclass"

	_, returning = student_login("9876543210")
	assert returning["returning"] is True
	assert returning["redirect_to"] == "/student-home"

	rejected = client.post(
		"/api/courses",
		json={"course_code": "UCM/2", "name": "Second", "base_price": 100},
		headers=admin_headers,
	)
	assert rejected.status_code == 400
	assert [item["id"] for item in client.get("/api/courses").json()] == ["ucm"]
