import pytest


def test_catalog_starts_empty(client):
	response = client.get("/api/courses")
	assert response.status_code == 200
	assert response.json() == []


def test_admin_creates_course_with_resolved_price(client, create_course):
	created = create_course()
	assert created["id"] == "ucm"
	assert created["code"] == "UCM"
	assert created["whatsapp_link"] == "https://chat.whatsapp.com/ucm"

	catalog = client.get("/api/courses").json()
	assert len(catalog) == 1
	course = catalog[0]
	assert course["effective_price"] == 1499
	assert course["discount_percent"] == 25
	assert course["register_path"] == "/register/ucm"
	assert course["highlights"] == ["Live sessions", "Certificate"]
	# the group link is only revealed to confirmed students
	assert "whatsapp_link" not in course


def test_get_single_course(client, create_course):
	create_course(special_offer_price=999)
	response = client.get("/api/courses/ucm")
	assert response.status_code == 200
	assert response.json()["effective_price"] == 999
	assert response.json()["discount_percent"] == 50

	assert client.get("/api/courses/missing").status_code == 404


def test_catalog_is_ordered_by_name(client, create_course):
	create_course(course_code="B1", name="Zeta Networks")
	create_course(course_code="A1", name="Alpha Routing")
	names = [item["name"] for item in client.get("/api/courses").json()]
	assert names == ["Alpha Routing", "Zeta Networks"]


def test_code_with_slash_is_rejected(client, admin_headers):
	response = client.post(
		"/api/courses",
		json={"course_code": "UCM/2", "name": "Broken", "base_price": 100},
		headers=admin_headers,
	)
	assert response.status_code == 400
	assert "/" in response.json()["detail"]
	assert client.get("/api/courses").json() == []


def test_duplicate_code_is_rejected(client, admin_headers, create_course):
	create_course()
	response = client.post(
		"/api/courses",
		json={"course_code": "ucm", "name": "Other", "base_price": 100},
		headers=admin_headers,
	)
	assert response.status_code == 409
	assert client.get("/api/courses/ucm").json()["name"] == "Unified Communication Masterclass"


def test_discounted_price_cannot_exceed_base(client, admin_headers):
	response = client.post(
		"/api/courses",
		json={"course_code": "X", "name": "X", "base_price": 100, "early_bird_price": 150},
		headers=admin_headers,
	)
	assert response.status_code == 400


def test_negative_price_fails_validation(client, admin_headers):
	response = client.post(
		"/api/courses",
		json={"course_code": "X", "name": "X", "base_price": -1},
		headers=admin_headers,
	)
	assert response.status_code == 422


def test_update_merges_fields(client, admin_headers, create_course):
	create_course()
	response = client.patch(
		"/api/courses/ucm",
		json={"name": "UCM Advanced", "special_offer_price": 999},
		headers=admin_headers,
	)
	assert response.status_code == 200, response.text
	body = response.json()
	assert body["name"] == "UCM Advanced"
	assert body["effective_price"] == 999
	assert body["instructor"] == "A. Trainer"
	assert body["early_bird_price"] == 1499


def test_update_checks_prices_against_merged_base(client, admin_headers, create_course):
	create_course()
	response = client.patch("/api/courses/ucm", json={"base_price": 1000}, headers=admin_headers)
	assert response.status_code == 400
	assert client.get("/api/courses/ucm").json()["base_price"] == 1999


def test_course_id_is_immutable(client, admin_headers, create_course):
	create_course()
	response = client.patch("/api/courses/ucm", json={"id": "other"}, headers=admin_headers)
	assert response.status_code == 422
	response = client.patch("/api/courses/ucm", json={"course_code": "other"}, headers=admin_headers)
	assert response.status_code == 422


def test_update_missing_course(client, admin_headers):
	response = client.patch("/api/courses/nope", json={"name": "x"}, headers=admin_headers)
	assert response.status_code == 404


def test_delete_course(client, admin_headers, create_course):
	create_course()
	response = client.delete("/api/courses/ucm", headers=admin_headers)
	assert response.status_code == 204
	assert client.get("/api/courses/ucm").status_code == 404
	assert client.delete("/api/courses/ucm", headers=admin_headers).status_code == 404


def test_bundle_course_points_to_bundle_form(client, create_course):
	create_course(course_code="bundle", name="All Courses Bundle", base_price=3999, early_bird_price=None)
	course = client.get("/api/courses/bundle").json()
	assert course["register_path"] == "/bundle-register"


def test_course_mutations_require_admin(client, student_login):
	body = {"course_code": "X", "name": "X", "base_price": 10}
	response = client.post("/api/courses", json=body)
	assert response.status_code in (401, 403)

	headers, _ = student_login()
	response = client.post("/api/courses", json=body, headers=headers)
	assert response.status_code == 403
	assert client.delete("/api/courses/x", headers=headers).status_code == 403


@pytest.mark.parametrize("code", ["/", "a/b", "UCM/2", "//", "x/"])
def test_any_code_with_slash_is_rejected(client, admin_headers, code):
	response = client.post(
		"/api/courses",
		json={"course_code": code, "name": "Slashed", "base_price": 100},
		headers=admin_headers,
	)
	assert response.status_code == 400
	assert client.get("/api/courses").json() == []
