"""
Tests for the per-user notification center.
"""

from datetime import datetime, timedelta

from salon_app.extensions import db
from salon_app.models.notification import Notification
from salon_app.notifications import create_notification, notify_users
from salon_app.models.user import User


def add_notification(user, title, read=False, minutes_ago=0):
    notification = Notification(user_id=user.id, type="info", title=title, message=f"{title} body", read=read,
                                created_at=datetime.utcnow() - timedelta(minutes=minutes_ago))
    db.session.add(notification)
    db.session.commit()
    return notification


class TestNotificationHelpers:
    def test_notify_users_skips_inactive(self, app, staff_user):
        inactive = User(username="gone", email="gone@example.com", is_active=False)
        db.session.add(inactive)
        db.session.commit()

        created = notify_users("warning", "Heads up", "Stock is low")
        db.session.commit()

        assert [n.user_id for n in created] == [staff_user.id]

    def test_create_notification_defaults_unread(self, app, staff_user):
        notification = create_notification(staff_user.id, "success", "Saved", "All good")
        db.session.commit()

        assert notification.read is False
        assert notification.to_dict()["timestamp"] is not None


class TestNotificationApi:
    def test_lists_only_own_notifications(self, client, staff_user, admin_user):
        add_notification(staff_user, "older", minutes_ago=10)
        add_notification(staff_user, "newer", read=True)
        add_notification(admin_user, "not mine")

        data = client.get("/api/notifications").get_json()

        assert [n["title"] for n in data["notifications"]] == ["newer", "older"]
        assert data["unread_count"] == 1
        assert data["badge"] == "1"

    def test_badge_caps_at_nine(self, client, staff_user):
        for i in range(12):
            add_notification(staff_user, f"n{i}")

        data = client.get("/api/notifications").get_json()

        assert data["unread_count"] == 12
        assert data["badge"] == "9+"

    def test_create(self, client, staff_user):
        response = client.post("/api/notifications", json={"type": "warning", "title": "Check stock", "message": "Foils low"})

        assert response.status_code == 201
        assert response.get_json()["notification"]["read"] is False
        assert Notification.query.filter_by(user_id=staff_user.id).count() == 1

    def test_create_requires_title_and_message(self, client):
        response = client.post("/api/notifications", json={"type": "info"})

        assert response.status_code == 400
        assert set(response.get_json()["errors"]) == {"title", "message"}

    def test_mark_read_is_idempotent(self, client, staff_user):
        notification = add_notification(staff_user, "hello")

        first = client.put(f"/api/notifications/{notification.id}/read")
        second = client.put(f"/api/notifications/{notification.id}/read")

        assert first.status_code == 200
        assert second.status_code == 200
        assert db.session.get(Notification, notification.id).read is True

    def test_cannot_mark_someone_elses(self, client, admin_user):
        notification = add_notification(admin_user, "private")

        assert client.put(f"/api/notifications/{notification.id}/read").status_code == 404

    def test_clear_all(self, client, staff_user, admin_user):
        add_notification(staff_user, "a")
        add_notification(staff_user, "b")
        add_notification(admin_user, "c")

        response = client.delete("/api/notifications")

        assert response.get_json()["deleted"] == 2
        assert Notification.query.filter_by(user_id=staff_user.id).count() == 0
        assert Notification.query.filter_by(user_id=admin_user.id).count() == 1
