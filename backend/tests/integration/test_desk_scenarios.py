"""End-to-end front desk scenarios (staff and guest through the HTTP API)"""

import pytest
from fastapi.testclient import TestClient


pytestmark = pytest.mark.integration

MAIL = "/api/v1/mail"
LOOKUP = "/api/v1/public/mail"


def _lookup(client: TestClient, room: str, initials: str) -> dict:
    response = client.get(LOOKUP, params={"room_number": room, "initials": initials})
    assert response.status_code == 200
    return response.json()


class TestDeskScenarios:

    def test_package_for_210_kb_is_picked_up(self, staff_client: TestClient, client: TestClient):
        """Staff log a package, the guest sees it waiting, staff hand it over"""
        item = staff_client.post(MAIL, json={"room_number": "210", "initials": "KB", "kind": "package"}).json()

        waiting = _lookup(client, "210", "kb")["items"]
        assert [(i["created_at"], i["status_label"], i["kind_label"]) for i in waiting] == [
            (item["created_at"], "Ready for pickup", "Package"),
        ]

        staff_client.post(f"{MAIL}/{item['id']}/received")

        picked_up = _lookup(client, " 210", "KB ")["items"]
        assert picked_up[0]["status"] == "received"
        assert picked_up[0]["status_label"] == "Picked up"

    def test_default_browse_lists_newest_first(self, staff_client: TestClient):
        """101/AB on day 1 (pending) and 102/CD on day 2 (received)"""
        first = staff_client.post(MAIL, json={"room_number": "101", "initials": "AB"}).json()
        second = staff_client.post(MAIL, json={"room_number": "102", "initials": "CD"}).json()
        staff_client.patch(f"{MAIL}/{first['id']}", json={"created_at": "2024-03-01T09:00:00Z"})
        staff_client.patch(f"{MAIL}/{second['id']}", json={"created_at": "2024-03-02T09:00:00Z", "status": "received"})

        items = staff_client.get(MAIL).json()["items"]

        assert [(i["room_number"], i["initials"], i["status"]) for i in items] == [
            ("102", "CD", "received"),
            ("101", "AB", "pending"),
        ]

    def test_corrected_room_and_initials(self, staff_client: TestClient, client: TestClient):
        """A mislogged item is moved from 101/AB to 105/CD"""
        item = staff_client.post(MAIL, json={"room_number": "101", "initials": "AB"}).json()

        response = staff_client.patch(f"{MAIL}/{item['id']}", json={"room_number": "105", "initials": "cd"})
        assert response.json()["initials"] == "CD"

        assert [i["created_at"] for i in _lookup(client, "105", "cd")["items"]] == [item["created_at"]]

        old = _lookup(client, "101", "AB")
        assert old["items"] == []
        assert old["searched"] is True
