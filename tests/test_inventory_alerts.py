"""
Tests for the inventory alert checker and its deduplication rules.
"""

from datetime import datetime, date, timedelta

import pytest

from salon_app.extensions import db
from salon_app.inventory_alerts import (
    check_expiring_items,
    check_low_stock_items,
    days_until,
    run_inventory_checks,
)
from salon_app.models.alert import Alert
from salon_app.models.inventory import InventoryItem
from salon_app.models.notification import Notification

NOW = datetime(2026, 10, 16, 9, 0, 0)


def add_item(**kwargs):
    defaults = {"name": "Developer 20 Vol", "current_stock": 10, "min_stock_level": 5}
    defaults.update(kwargs)
    item = InventoryItem(**defaults)
    db.session.add(item)
    db.session.commit()
    return item


def alerts_for(item, alert_type):
    return Alert.query.filter_by(entity_id=item.id, type=alert_type).all()


class TestLowStock:
    def test_creates_alert_at_minimum(self, app):
        item = add_item(current_stock=5, min_stock_level=5)

        created = check_low_stock_items(NOW)

        assert len(created) == 1
        alert = alerts_for(item, "low_stock")[0]
        assert alert.title == "Low Stock Alert"
        assert alert.severity == "warning"
        assert alert.entity_type == "inventory_item"
        assert alert.is_read is False
        assert alert.expires_at == NOW + timedelta(days=7)
        assert "Current stock: 5, Minimum: 5" in alert.message

    def test_out_of_stock_is_error(self, app):
        item = add_item(current_stock=0, min_stock_level=3)

        check_low_stock_items(NOW)

        assert alerts_for(item, "low_stock")[0].severity == "error"

    def test_healthy_stock_ignored(self, app):
        add_item(current_stock=6, min_stock_level=5)

        assert check_low_stock_items(NOW) == []
        assert Alert.query.count() == 0

    def test_no_duplicate_while_unread(self, app):
        item = add_item(current_stock=1)

        check_low_stock_items(NOW)
        check_low_stock_items(NOW + timedelta(minutes=5))
        # Still unread long after the cooldown: suppressed
        check_low_stock_items(NOW + timedelta(days=30))

        assert len(alerts_for(item, "low_stock")) == 1

    def test_read_alert_inside_cooldown_suppresses(self, app):
        item = add_item(current_stock=1)
        check_low_stock_items(NOW)
        alerts_for(item, "low_stock")[0].is_read = True
        db.session.commit()

        assert check_low_stock_items(NOW + timedelta(days=4, hours=23)) == []
        assert len(alerts_for(item, "low_stock")) == 1

    def test_read_alert_after_cooldown_allows_new_one(self, app):
        item = add_item(current_stock=1)
        check_low_stock_items(NOW)
        alerts_for(item, "low_stock")[0].is_read = True
        db.session.commit()

        created = check_low_stock_items(NOW + timedelta(days=5, minutes=1))

        assert len(created) == 1
        assert len(alerts_for(item, "low_stock")) == 2

    def test_latest_alert_decides(self, app):
        item = add_item(current_stock=1)
        # Old read alert plus a newer unread one
        db.session.add_all([
            Alert(type="low_stock", title="t", message="m", severity="warning", entity_type="inventory_item",
                  entity_id=item.id, is_read=True, created_at=NOW - timedelta(days=20)),
            Alert(type="low_stock", title="t", message="m", severity="warning", entity_type="inventory_item",
                  entity_id=item.id, is_read=False, created_at=NOW - timedelta(days=1)),
        ])
        db.session.commit()

        assert check_low_stock_items(NOW) == []

    def test_other_alert_type_does_not_suppress(self, app):
        item = add_item(current_stock=1, expiry_date=date(2026, 10, 20))
        db.session.add(Alert(type="expiring_soon", title="t", message="m", severity="error",
                             entity_type="inventory_item", entity_id=item.id, created_at=NOW))
        db.session.commit()

        assert len(check_low_stock_items(NOW)) == 1

    def test_notifies_active_users(self, app, staff_user, admin_user):
        add_item(current_stock=0)
        add_item(name="Foils", current_stock=1)

        check_low_stock_items(NOW)

        notifications = Notification.query.all()
        assert {n.user_id for n in notifications} == {staff_user.id, admin_user.id}
        assert all("2 inventory item(s)" in n.message for n in notifications)


class TestExpiring:
    def test_within_thirty_days(self, app):
        item = add_item(expiry_date=date(2026, 11, 10))

        created = check_expiring_items(NOW)

        assert len(created) == 1
        alert = alerts_for(item, "expiring_soon")[0]
        assert alert.title == "Item Expiring Soon"
        assert alert.severity == "warning"
        assert alert.expires_at == datetime(2026, 11, 10)
        assert "expires in 25 days (2026-11-10)" in alert.message

    def test_within_a_week_is_error(self, app):
        item = add_item(expiry_date=date(2026, 10, 21))

        check_expiring_items(NOW)

        assert alerts_for(item, "expiring_soon")[0].severity == "error"

    def test_already_expired_item_still_alerts(self, app):
        item = add_item(expiry_date=date(2026, 10, 1))

        check_expiring_items(NOW)

        assert alerts_for(item, "expiring_soon")[0].severity == "error"

    def test_far_future_ignored(self, app):
        add_item(expiry_date=date(2027, 1, 1))
        assert check_expiring_items(NOW) == []

    def test_out_of_stock_ignored(self, app):
        add_item(current_stock=0, expiry_date=date(2026, 10, 20))
        assert check_expiring_items(NOW) == []

    def test_no_expiry_date_ignored(self, app):
        add_item()
        assert check_expiring_items(NOW) == []

    def test_no_duplicate_while_unread(self, app):
        item = add_item(expiry_date=date(2026, 10, 30))

        check_expiring_items(NOW)
        check_expiring_items(NOW + timedelta(hours=1))

        assert len(alerts_for(item, "expiring_soon")) == 1


class TestRunInventoryChecks:
    def test_runs_both_checks(self, app):
        add_item(name="Low", current_stock=1)
        add_item(name="Expiring", expiry_date=date(2026, 10, 25))

        result = run_inventory_checks(NOW)

        assert result == {"low_stock": 1, "expiring_soon": 1}

    def test_errors_are_swallowed(self, app, monkeypatch):
        add_item(current_stock=1)

        def boom(*args, **kwargs):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr("salon_app.inventory_alerts.filter_items_needing_alerts", boom)

        assert run_inventory_checks(NOW) == {"low_stock": 0, "expiring_soon": 0}

    def test_check_endpoint(self, client):
        add_item(current_stock=0)

        response = client.post("/api/inventory/check-alerts")

        assert response.status_code == 200
        assert response.get_json()["created"]["low_stock"] == 1


def test_days_until_rounds_up():
    assert days_until(date(2026, 10, 17), NOW) == 1
    assert days_until(date(2026, 10, 16), NOW) == 0
