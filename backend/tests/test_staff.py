"""
Staff master tests.
"""

import pytest

from sales_manage.models import Staff


def _staff_body(**overrides):
    body = {
        "staff_code": "00010",
        "staff_name": "高橋 次郎",
        "email": "takahashi@example.com",
        "department": "営業部",
        "position": "担当",
        "phone_number": "090-1234-5678",
        "is_active": True,
        "created_by": "00001",
    }
    body.update(overrides)
    return body


class TestStaffCreate:

    def test_create(self, client):
        resp = client.post("/api/staff", json=_staff_body())

        assert resp.status_code == 201
        staff = resp.get_json()["staff_member"]
        assert staff["staff_code"] == "00010"
        assert staff["is_active"] is True
        assert staff["created_by"] == "00001"

    def test_duplicate_code(self, client, staff_member, db_session):
        resp = client.post("/api/staff", json=_staff_body(staff_code="00001"))

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Staff code '00001' already exists"}
        assert db_session.query(Staff).count() == 1

    @pytest.mark.parametrize(
        "overrides",
        [
            {"staff_code": ""},
            {"staff_name": None},
            {"is_active": None},
            {"created_by": ""},
            {"created_by": "u" * 17},
            {"email": "no-at-sign"},
            {"phone_number": "12345"},
            {"staff_code": "CODE_WITH_UNDERSCORE"},
            {"staff_code": "12345678901"},
            {"nickname": "unknown field"},
        ],
    )
    def test_invalid_payload(self, client, db_session, overrides):
        resp = client.post("/api/staff", json=_staff_body(**overrides))

        assert resp.status_code == 400
        assert "error" in resp.get_json()
        assert db_session.query(Staff).count() == 0

    def test_blank_optional_fields_stored_as_null(self, client):
        resp = client.post("/api/staff", json=_staff_body(email="", department=""))

        staff = resp.get_json()["staff_member"]
        assert staff["email"] is None
        assert staff["department"] is None


class TestStaffRead:

    def test_list_sorted_by_code(self, client, staff_member):
        client.post("/api/staff", json=_staff_body(staff_code="00000"))

        body = client.get("/api/staff").get_json()

        assert body["count"] == 2
        assert [s["staff_code"] for s in body["staff"]] == ["00000", "00001"]

    def test_get_by_id(self, client, staff_member):
        resp = client.get(f"/api/staff/{staff_member.id}")

        assert resp.status_code == 200
        assert resp.get_json()["staff_member"]["staff_name"] == "山田 太郎"

    def test_get_by_code(self, client, staff_member):
        resp = client.get("/api/staff/code/00001")

        assert resp.status_code == 200
        assert resp.get_json()["staff_member"]["id"] == staff_member.id

    def test_get_missing(self, client):
        assert client.get("/api/staff/999").status_code == 404
        assert client.get("/api/staff/code/ZZZ").status_code == 404


class TestStaffUpdate:

    def test_update(self, client, staff_member):
        body = _staff_body(staff_code="00001", staff_name="山田 太郎 (改)", is_active=False, updated_by="00002")
        body.pop("created_by")

        resp = client.put(f"/api/staff/{staff_member.id}", json=body)

        assert resp.status_code == 200
        staff = resp.get_json()["staff_member"]
        assert staff["staff_name"] == "山田 太郎 (改)"
        assert staff["is_active"] is False
        assert staff["created_by"] == "system"
        assert staff["updated_by"] == "00002"

    def test_update_onto_other_code(self, client, staff_member, db_session):
        other = client.post("/api/staff", json=_staff_body()).get_json()["staff_member"]

        resp = client.put(f"/api/staff/{other['id']}", json=_staff_body(staff_code="00001", updated_by="00001"))

        assert resp.status_code == 400
        db_session.expire_all()
        assert db_session.get(Staff, other["id"]).staff_code == "00010"

    def test_update_requires_updated_by(self, client, staff_member):
        resp = client.put(f"/api/staff/{staff_member.id}", json=_staff_body(staff_code="00001"))
        assert resp.status_code == 400

    def test_update_missing(self, client):
        resp = client.put("/api/staff/999", json=_staff_body(updated_by="00001"))
        assert resp.status_code == 404


class TestStaffDelete:

    def test_delete(self, client, staff_member, db_session):
        resp = client.delete(f"/api/staff/{staff_member.id}")

        assert resp.status_code == 200
        assert db_session.query(Staff).count() == 0

    def test_delete_missing(self, client):
        assert client.delete("/api/staff/999").status_code == 404
