from conftest import registration_form, screenshot_file

from registrations_service.app.config import get_settings


def _register(client, headers, course_id="ucm", files=None, **form):
	return client.post(
		f"/api/registrations/{course_id}",
		data=registration_form(**form),
		files=screenshot_file() if files is None else files,
		headers=headers,
	)


def test_payment_info_is_public(client):
	response = client.get("/api/registrations/payment-info")
	assert response.status_code == 200
	assert response.json() == {"upi_id": "courses@upi", "seat_lock_amount": 99}


def test_missing_screenshot_is_rejected_before_upload(client, storage, admin_headers, create_course, student_login):
	create_course()
	headers, _ = student_login()
	response = client.post("/api/registrations/ucm", data=registration_form(), headers=headers)
	assert response.status_code == 400
	assert response.json()["detail"] == "Please upload a screenshot of your payment."
	assert storage.objects == {}
	assert client.get("/api/admin/registrations", headers=admin_headers).json() == []


def test_empty_screenshot_counts_as_missing(client, storage, create_course, student_login):
	create_course()
	headers, _ = student_login()
	response = _register(client, headers, files=screenshot_file(content=b""))
	assert response.status_code == 400
	assert storage.objects == {}


def test_full_payment_registration(client, storage, create_course, student_login):
	create_course()
	headers, session = student_login("9876543210")

	response = _register(client, headers)

	assert response.status_code == 201, response.text
	body = response.json()
	assert body["id"] == f"{session['student_id']}_ucm"
	assert body["course_name"] == "Unified Communication Masterclass"
	assert body["payment_option"] == "full"
	assert body["payment_status"] == "full_payment_pending"
	assert body["price_offered"] == 1499
	assert body["amount_paid"] == 1499
	assert body["confirmed"] is False
	assert body["phone"] == "9876543210"

	(object_name,) = storage.objects
	assert object_name.startswith(f"screenshots/{session['student_id']}-")
	assert object_name.endswith(".png")
	assert body["screenshot_url"].endswith(object_name)


def test_seat_lock_registration(client, create_course, student_login):
	create_course()
	headers, _ = student_login()

	response = _register(client, headers, payment_option="seat_lock")

	assert response.status_code == 201, response.text
	body = response.json()
	assert body["payment_status"] == "seat_lock_pending"
	assert body["amount_paid"] == 99
	assert body["price_offered"] == 1499

	mine = client.get("/api/registrations/me", headers=headers).json()
	assert mine[0]["status_label"] == "Seat locked - balance due"
	assert mine[0]["whatsapp_link"] is None


def test_duplicate_registration_conflicts(client, storage, create_course, student_login):
	create_course()
	headers, _ = student_login()
	assert _register(client, headers).status_code == 201

	response = _register(client, headers, payment_option="seat_lock")

	assert response.status_code == 409
	assert len(storage.objects) == 1


def test_unknown_course(client, student_login):
	headers, _ = student_login()
	assert _register(client, headers, course_id="nope").status_code == 404


def test_bundle_refuses_seat_lock(client, storage, student_login):
	headers, _ = student_login()
	response = _register(client, headers, course_id="bundle", payment_option="seat_lock")
	assert response.status_code == 400
	assert storage.objects == {}
	assert client.get("/api/registrations/me", headers=headers).json() == []


def test_bundle_path_uses_bundle_pricing(client, create_course, student_login):
	# a catalog entry named "bundle" does not change how the bundle is sold
	create_course(course_code="bundle", name="Bundle", base_price=9999, early_bird_price=None)
	headers, _ = student_login()
	response = _register(client, headers, course_id="bundle")
	assert response.status_code == 201, response.text
	assert response.json()["price_offered"] == 2499
	assert response.json()["course_name"] == get_settings().bundle_name


def test_seat_lock_needs_price_above_lock_amount(client, storage, create_course, student_login):
	create_course(course_code="CHEAP", name="Cheap Course", base_price=50, early_bird_price=None)
	headers, _ = student_login()

	response = _register(client, headers, course_id="cheap", payment_option="seat_lock")

	assert response.status_code == 400
	assert storage.objects == {}

	response = _register(client, headers, course_id="cheap", payment_option="full")
	assert response.status_code == 201
	assert response.json()["amount_paid"] == 50


def test_non_image_upload_rejected(client, storage, create_course, student_login):
	create_course()
	headers, _ = student_login()
	response = _register(client, headers, files=screenshot_file(b"%PDF-1.4", "application/pdf"))
	assert response.status_code == 400
	assert storage.objects == {}


def test_oversized_upload_rejected(client, monkeypatch, create_course, student_login):
	monkeypatch.setattr(get_settings(), "max_screenshot_bytes", 16)
	create_course()
	headers, _ = student_login()
	assert _register(client, headers).status_code == 400


def test_storage_failure_maps_to_bad_gateway(client, storage, create_course, student_login):
	create_course()
	headers, _ = student_login()
	storage.fail = True

	response = _register(client, headers)

	assert response.status_code == 502
	assert response.json()["detail"] == "Failed to upload screenshot"
	assert client.get("/api/registrations/me", headers=headers).json() == []


def test_invalid_email_fails_validation(client, create_course, student_login):
	create_course()
	headers, _ = student_login()
	assert _register(client, headers, email="not-an-email").status_code == 422


def test_blank_name_fails_validation(client, create_course, student_login):
	create_course()
	headers, _ = student_login()
	assert _register(client, headers, name="   ").status_code == 422


def test_unknown_payment_option_fails_validation(client, create_course, student_login):
	create_course()
	headers, _ = student_login()
	assert _register(client, headers, payment_option="later").status_code == 422


def test_registration_requires_student_session(client, admin_headers, create_course):
	create_course()
	assert _register(client, {}).status_code in (401, 403)
	assert _register(client, admin_headers).status_code == 403


def test_bundle_price_and_registration(client, monkeypatch, admin_headers, student_login):
	monkeypatch.setattr(get_settings(), "bundle_offer_slots", 1)

	price = client.get("/api/registrations/bundle/price").json()
	assert price["course_id"] == "bundle"
	assert price["price"] == 2499
	assert price["base_price"] == 3999
	assert price["discount_percent"] == 38

	first_headers, first = student_login("9000000001")
	response = client.post(
		"/api/registrations/bundle",
		data=registration_form(),
		files=screenshot_file(),
		headers=first_headers,
	)
	assert response.status_code == 201, response.text
	bundle = response.json()
	assert bundle["id"] == f"{first['student_id']}_bundle"
	assert bundle["payment_option"] == "full"
	assert bundle["price_offered"] == bundle["amount_paid"] == 2499

	# pending bundles do not use up the offer
	assert client.get("/api/registrations/bundle/price").json()["price"] == 2499
	confirm = client.post(f"/api/admin/registrations/{bundle['id']}/confirm", headers=admin_headers)
	assert confirm.status_code == 200
	assert client.get("/api/registrations/bundle/price").json()["price"] == 3999

	second_headers, _ = student_login("9000000002")
	response = client.post(
		"/api/registrations/bundle",
		data=registration_form(),
		files=screenshot_file(),
		headers=second_headers,
	)
	assert response.status_code == 201
	assert response.json()["price_offered"] == 3999


def test_bundle_requires_screenshot(client, student_login):
	headers, _ = student_login()
	response = client.post("/api/registrations/bundle", data=registration_form(), headers=headers)
	assert response.status_code == 400
