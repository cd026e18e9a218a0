"""
IGOT Training Tracker
Tests — Office API.

Covers:
    - Admin CRUD + createdBy/createdAt on create
    - Aggregated validation messages (400)
    - Non-admin scoping: list filtered, get other office 403, mutations 403
    - 404 for missing and malformed ids
    - Delete refused while employee records reference the office (409)
    - Authentication required (401)
"""

from igot_tracker.models import db
from igot_tracker.models.employee import Employee
from igot_tracker.models.office import Office


class TestOfficeCreate:
    def test_create_office_as_admin(self, client, admin, admin_headers):
        res = client.post(
            "/api/v1/offices",
            json={"name": "HQ", "location": "City A"},
            headers=admin_headers,
        )
        assert res.status_code == 201
        body = res.get_json()
        assert body["success"] is True
        assert body["data"]["name"] == "HQ"
        assert body["data"]["location"] == "City A"
        assert body["data"]["description"] is None
        assert body["data"]["createdBy"] == admin.id
        assert body["data"]["createdAt"] is not None

    def test_create_office_trims_fields(self, client, admin_headers):
        res = client.post(
            "/api/v1/offices",
            json={"name": "  HQ  ", "location": " City A ", "description": "Head office"},
            headers=admin_headers,
        )
        assert res.status_code == 201
        assert res.get_json()["data"]["name"] == "HQ"
        assert res.get_json()["data"]["location"] == "City A"

    def test_create_office_missing_fields_aggregated(self, client, admin_headers):
        res = client.post("/api/v1/offices", json={}, headers=admin_headers)
        assert res.status_code == 400
        body = res.get_json()
        assert body["success"] is False
        assert body["message"] == "Please add an office name, Please add a location"

    def test_create_office_name_too_long(self, client, admin_headers):
        res = client.post(
            "/api/v1/offices",
            json={"name": "n" * 101, "location": "City A"},
            headers=admin_headers,
        )
        assert res.status_code == 400
        assert res.get_json()["message"] == "Name cannot be more than 100 characters"

    def test_create_office_forbidden_for_member(self, client, member_a_headers):
        res = client.post(
            "/api/v1/offices",
            json={"name": "Rogue", "location": "Nowhere"},
            headers=member_a_headers,
        )
        assert res.status_code == 403
        assert res.get_json() == {"success": False, "message": "Not authorized as an admin"}
        assert Office.query.filter_by(name="Rogue").count() == 0

    def test_create_office_requires_token(self, client):
        res = client.post("/api/v1/offices", json={"name": "HQ", "location": "City A"})
        assert res.status_code == 401
        assert res.get_json()["message"] == "Not authorized, no token"

    def test_create_office_rejects_bad_token(self, client):
        res = client.post(
            "/api/v1/offices",
            json={"name": "HQ", "location": "City A"},
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert res.status_code == 401
        assert res.get_json()["message"] == "Not authorized, token failed"


class TestOfficeRead:
    def test_admin_lists_all_offices(self, client, office_a, office_b, admin_headers):
        res = client.get("/api/v1/offices", headers=admin_headers)
        assert res.status_code == 200
        body = res.get_json()
        assert body["count"] == 2
        assert [o["id"] for o in body["data"]] == [office_a, office_b]

    def test_member_lists_only_own_office(self, client, office_a, office_b, member_a_headers):
        res = client.get("/api/v1/offices", headers=member_a_headers)
        body = res.get_json()
        assert body["count"] == 1
        assert body["data"][0]["id"] == office_a

    def test_member_gets_own_office(self, client, office_a, member_a_headers):
        res = client.get(f"/api/v1/offices/{office_a}", headers=member_a_headers)
        assert res.status_code == 200
        assert res.get_json()["data"]["name"] == "Regional Office A"

    def test_member_cannot_get_other_office(self, client, office_b, member_a_headers):
        res = client.get(f"/api/v1/offices/{office_b}", headers=member_a_headers)
        assert res.status_code == 403
        assert res.get_json()["message"] == "Not authorized to access this office"

    def test_get_missing_office_404(self, client, admin_headers):
        res = client.get("/api/v1/offices/9999", headers=admin_headers)
        assert res.status_code == 404
        assert res.get_json() == {"success": False, "message": "Office not found"}

    def test_get_malformed_id_404(self, client, admin_headers):
        res = client.get("/api/v1/offices/not-an-id", headers=admin_headers)
        assert res.status_code == 404
        assert res.get_json()["message"] == "Office not found"


class TestOfficeUpdate:
    def test_update_merges_fields(self, client, office_a, admin_headers):
        res = client.put(
            f"/api/v1/offices/{office_a}",
            json={"description": "Western region"},
            headers=admin_headers,
        )
        assert res.status_code == 200
        data = res.get_json()["data"]
        assert data["description"] == "Western region"
        assert data["name"] == "Regional Office A"
        assert data["location"] == "Pune"

    def test_update_revalidates(self, client, office_a, admin_headers):
        res = client.put(
            f"/api/v1/offices/{office_a}",
            json={"name": "", "location": ""},
            headers=admin_headers,
        )
        assert res.status_code == 400
        assert res.get_json()["message"] == "Please add an office name, Please add a location"

    def test_update_ignores_non_editable_fields(self, client, office_a, admin, admin_headers):
        res = client.put(
            f"/api/v1/offices/{office_a}",
            json={"createdBy": 12345, "name": "Renamed"},
            headers=admin_headers,
        )
        assert res.status_code == 200
        assert res.get_json()["data"]["name"] == "Renamed"
        assert res.get_json()["data"]["createdBy"] is None

    def test_update_missing_office_404(self, client, admin_headers):
        res = client.put("/api/v1/offices/9999", json={"name": "X"}, headers=admin_headers)
        assert res.status_code == 404

    def test_update_forbidden_for_member(self, client, office_a, member_a_headers):
        res = client.put(
            f"/api/v1/offices/{office_a}", json={"name": "Mine"}, headers=member_a_headers
        )
        assert res.status_code == 403


class TestOfficeDelete:
    def test_delete_office(self, client, office_b, admin_headers):
        res = client.delete(f"/api/v1/offices/{office_b}", headers=admin_headers)
        assert res.status_code == 200
        assert res.get_json() == {"success": True, "data": {}}
        db.session.expire_all()
        assert db.session.get(Office, office_b) is None

    def test_delete_missing_office_404(self, client, admin_headers):
        res = client.delete("/api/v1/offices/9999", headers=admin_headers)
        assert res.status_code == 404

    def test_delete_office_with_employees_refused(self, client, office_a, admin, admin_headers):
        db.session.add(Employee(name="Jo", office_id=office_a, created_by=admin.id))
        db.session.commit()
        res = client.delete(f"/api/v1/offices/{office_a}", headers=admin_headers)
        assert res.status_code == 409
        assert res.get_json()["message"] == "Cannot delete office with 1 employee record(s)"
        db.session.expire_all()
        assert db.session.get(Office, office_a) is not None

    def test_delete_forbidden_for_member(self, client, office_a, member_a_headers):
        res = client.delete(f"/api/v1/offices/{office_a}", headers=member_a_headers)
        assert res.status_code == 403


class TestOfficeIds:
    def test_non_canonical_id_is_not_found(self, client, office_a, admin_headers):
        assert office_a == 1
        for raw in ("0_1", "+1", "01x"):
            res = client.get(f"/api/v1/offices/{raw}", headers=admin_headers)
            assert res.status_code == 404, raw
            assert res.get_json()["message"] == "Office not found"

    def test_id_beyond_key_range_is_not_found(self, client, admin_headers):
        res = client.get("/api/v1/offices/99999999999999999999", headers=admin_headers)
        assert res.status_code == 404
        assert res.get_json() == {"success": False, "message": "Office not found"}
