"""
Dropdown list tests.

Verifies:
- A list exists while it has items; ids are listed distinct
- (dropdown_id, dropdown_value) is unique, the same value may repeat across lists
- Whole-list delete removes every item of that list only
"""

import pytest

from sales_manage.models import DropdownItem
from sales_manage.services import dropdown_service
from sales_manage.validation import ConflictError, NotFoundError


def _add(client, dropdown_id, value, user_id="00001"):
    return client.post(
        "/api/dropdown/items",
        json={"dropdown_id": dropdown_id, "dropdown_value": value, "user_id": user_id},
    )


@pytest.fixture
def priority(client):
    """Dropdown 'priority' holding 高, 中, 低."""
    return [_add(client, "priority", value).get_json()["item"] for value in ("高", "中", "低")]


# =============================================================================
# SERVICE
# =============================================================================


class TestDropdownService:

    def test_duplicate_value_in_same_list(self):
        dropdown_service.create_dropdown_item(dropdown_id="priority", dropdown_value="高", created_by="00001")

        with pytest.raises(ConflictError, match="already exists for dropdown 'priority'"):
            dropdown_service.create_dropdown_item(dropdown_id="priority", dropdown_value="高", created_by="00001")

    def test_same_value_in_other_list(self):
        dropdown_service.create_dropdown_item(dropdown_id="priority", dropdown_value="高", created_by="00001")
        item = dropdown_service.create_dropdown_item(dropdown_id="height", dropdown_value="高", created_by="00001")

        assert item.dropdown_id == "height"

    def test_update_onto_existing_value(self):
        dropdown_service.create_dropdown_item(dropdown_id="priority", dropdown_value="高", created_by="00001")
        low = dropdown_service.create_dropdown_item(dropdown_id="priority", dropdown_value="低", created_by="00001")

        with pytest.raises(ConflictError):
            dropdown_service.update_dropdown_item(
                low.id, dropdown_id="priority", dropdown_value="高", updated_by="00001",
            )

    def test_update_to_own_value(self):
        item = dropdown_service.create_dropdown_item(dropdown_id="priority", dropdown_value="高", created_by="00001")

        updated = dropdown_service.update_dropdown_item(
            item.id, dropdown_id="priority", dropdown_value="高", updated_by="00002",
        )

        assert updated.updated_by == "00002"

    def test_delete_unknown_list(self):
        with pytest.raises(NotFoundError):
            dropdown_service.delete_items_for_dropdown("missing")


# =============================================================================
# API
# =============================================================================


class TestDropdownApi:

    def test_priority_list(self, client, priority):
        ids = client.get("/api/dropdown/ids").get_json()
        items = client.get("/api/dropdown/items/priority").get_json()

        assert ids["dropdown_ids"] == ["priority"]
        assert ids["count"] == 1
        assert [i["dropdown_value"] for i in items["items"]] == ["高", "中", "低"]
        assert items["count"] == 3
        assert len({i["id"] for i in items["items"]}) == 3
        assert {i["dropdown_id"] for i in items["items"]} == {"priority"}

    def test_duplicate_rejected(self, client, priority, db_session):
        resp = _add(client, "priority", "高")

        assert resp.status_code == 400
        assert resp.get_json() == {"error": "This value already exists for dropdown 'priority'"}
        assert db_session.query(DropdownItem).count() == 3

    def test_blank_value_rejected(self, client):
        resp = _add(client, "priority", "   ")
        assert resp.status_code == 400

    @pytest.mark.parametrize(
        "dropdown_id,value,error",
        [
            ("d" * 65, "高", "dropdown_id exceeds max length 64"),
            ("priority", "v" * 256, "dropdown_value exceeds max length 255"),
        ],
    )
    def test_overlong_text_rejected(self, client, db_session, dropdown_id, value, error):
        resp = _add(client, dropdown_id, value)

        assert resp.status_code == 400
        assert resp.get_json() == {"error": error}
        assert db_session.query(DropdownItem).count() == 0

    def test_ids_are_distinct_and_sorted(self, client, priority):
        _add(client, "category", "食品")

        body = client.get("/api/dropdown/ids").get_json()

        assert body["dropdown_ids"] == ["category", "priority"]

    def test_list_all_items(self, client, priority):
        _add(client, "category", "食品")

        body = client.get("/api/dropdown/items").get_json()

        assert body["count"] == 4
        assert body["items"][0]["dropdown_id"] == "category"

    def test_unknown_list_is_empty(self, client):
        body = client.get("/api/dropdown/items/unknown").get_json()
        assert body == {"success": True, "items": [], "count": 0}

    def test_update_item(self, client, priority):
        item_id = priority[1]["id"]

        resp = client.put(
            f"/api/dropdown/items/{item_id}",
            json={"dropdown_id": "priority", "dropdown_value": "普通", "user_id": "00002"},
        )

        assert resp.status_code == 200
        item = resp.get_json()["item"]
        assert item["dropdown_value"] == "普通"
        assert item["updated_by"] == "00002"

    def test_update_missing_item(self, client):
        resp = client.put(
            "/api/dropdown/items/12345",
            json={"dropdown_id": "priority", "dropdown_value": "x", "user_id": "00001"},
        )
        assert resp.status_code == 404

    def test_delete_item(self, client, priority):
        resp = client.delete(f"/api/dropdown/items/{priority[0]['id']}")

        assert resp.status_code == 200
        values = [i["dropdown_value"] for i in client.get("/api/dropdown/items/priority").get_json()["items"]]
        assert values == ["中", "低"]

    def test_delete_whole_list(self, client, priority, db_session):
        _add(client, "category", "食品")

        resp = client.delete("/api/dropdown/items/by-id/priority")

        assert resp.status_code == 200
        assert "3 items" in resp.get_json()["message"]
        assert client.get("/api/dropdown/ids").get_json()["dropdown_ids"] == ["category"]
        assert db_session.query(DropdownItem).count() == 1

    def test_delete_unknown_list(self, client):
        resp = client.delete("/api/dropdown/items/by-id/missing")
        assert resp.status_code == 404
