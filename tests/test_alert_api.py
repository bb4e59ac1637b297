"""
Tests for alert listing and acknowledgement endpoints.
"""

from datetime import datetime, timedelta

import pytest

from salon_app.extensions import db
from salon_app.models.alert import Alert


@pytest.fixture
def alerts(app):
    now = datetime.utcnow()
    rows = [
        Alert(type="low_stock", title="Low Stock Alert", message="a", severity="warning", entity_type="inventory_item",
              entity_id=1, created_at=now - timedelta(hours=3)),
        Alert(type="low_stock", title="Low Stock Alert", message="b", severity="error", entity_type="inventory_item",
              entity_id=2, is_read=True, created_at=now - timedelta(hours=2)),
        Alert(type="expiring_soon", title="Item Expiring Soon", message="c", severity="critical",
              entity_type="inventory_item", entity_id=3, created_at=now - timedelta(hours=1)),
    ]
    db.session.add_all(rows)
    db.session.commit()
    return rows


class TestAlertApi:
    def test_list_newest_first(self, client, alerts):
        data = client.get("/api/alerts").get_json()
        assert [a["message"] for a in data] == ["c", "b", "a"]

    def test_filters(self, client, alerts):
        assert [a["message"] for a in client.get("/api/alerts?severity=warning").get_json()] == ["a"]
        assert [a["message"] for a in client.get("/api/alerts?type=low_stock").get_json()] == ["b", "a"]
        assert [a["message"] for a in client.get("/api/alerts?read=unread").get_json()] == ["c", "a"]
        assert [a["message"] for a in client.get("/api/alerts?read=read&type=low_stock").get_json()] == ["b"]

    def test_summary(self, client, alerts):
        data = client.get("/api/alerts/summary").get_json()
        assert data == {"total": 3, "unread": 2, "critical": 1, "warning": 1, "types": ["expiring_soon", "low_stock"]}

    def test_unread_count(self, client, alerts):
        data = client.get("/api/alerts/unread-count").get_json()
        assert data == {"unread_count": 2, "badge": "2"}

    def test_unread_badge_caps_at_99(self, client):
        db.session.add_all([Alert(type="low_stock", title="t", message="m", entity_id=i) for i in range(120)])
        db.session.commit()

        data = client.get("/api/alerts/unread-count").get_json()

        assert data["unread_count"] == 120
        assert data["badge"] == "99+"

    def test_no_badge_when_all_read(self, client):
        assert client.get("/api/alerts/unread-count").get_json() == {"unread_count": 0, "badge": None}

    def test_mark_read(self, client, alerts):
        response = client.put(f"/api/alerts/{alerts[0].id}/read")

        assert response.status_code == 200
        assert db.session.get(Alert, alerts[0].id).is_read is True

    def test_mark_all_read(self, client, alerts):
        response = client.put("/api/alerts/read-all")

        assert response.get_json()["updated"] == 2
        assert Alert.query.filter_by(is_read=False).count() == 0

    def test_delete(self, client, alerts):
        response = client.delete(f"/api/alerts/{alerts[2].id}")

        assert response.status_code == 200
        assert Alert.query.count() == 2

    def test_missing_alert(self, client):
        assert client.put("/api/alerts/999/read").status_code == 404
