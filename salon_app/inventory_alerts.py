"""Inventory alert checker.

Looks for low-stock and soon-to-expire inventory items and records an
:class:`Alert` for each one, unless the item already has an unread alert of
the same type or its latest alert is still inside the cooldown window. Both
the periodic scheduler and the change-triggered path call
:func:`run_inventory_checks`, so overlapping runs rely on this check to stay
idempotent.
"""
import logging
import math
from datetime import datetime, timedelta, time

from salon_app.extensions import db
from salon_app.models.alert import Alert
from salon_app.models.inventory import InventoryItem
from salon_app.notifications import notify_users

logger = logging.getLogger(__name__)

ALERT_COOLDOWN = timedelta(days=5)
LOW_STOCK_ALERT_TTL = timedelta(days=7)
EXPIRY_WINDOW_DAYS = 30
EXPIRY_CRITICAL_DAYS = 7
ENTITY_TYPE = "inventory_item"


def latest_alerts_by_entity(alert_type, entity_ids):
    """Most recent alert of ``alert_type`` for each entity id."""
    if not entity_ids:
        return {}
    alerts = Alert.query.filter(
        Alert.type == alert_type,
        Alert.entity_id.in_(entity_ids),
    ).order_by(Alert.created_at.desc(), Alert.id.desc()).all()

    latest = {}
    for alert in alerts:
        latest.setdefault(alert.entity_id, alert)
    return latest


def needs_alert(latest, now):
    if latest is None:
        return True
    if not latest.is_read:
        return False
    return latest.created_at < now - ALERT_COOLDOWN


def filter_items_needing_alerts(items, alert_type, now):
    latest = latest_alerts_by_entity(alert_type, [item.id for item in items])
    return [item for item in items if needs_alert(latest.get(item.id), now)]


def days_until(expiry_date, now):
    delta = datetime.combine(expiry_date, time.min) - now
    return math.ceil(delta.total_seconds() / 86400)


def build_low_stock_alert(item, now):
    return Alert(
        type="low_stock",
        title="Low Stock Alert",
        message=f'Item "{item.name}" is running low. Current stock: {item.current_stock}, Minimum: {item.min_stock_level}',
        severity="error" if item.current_stock == 0 else "warning",
        entity_type=ENTITY_TYPE,
        entity_id=item.id,
        created_at=now,
        expires_at=now + LOW_STOCK_ALERT_TTL,
    )


def build_expiring_alert(item, now):
    remaining = days_until(item.expiry_date, now)
    return Alert(
        type="expiring_soon",
        title="Item Expiring Soon",
        message=f'Item "{item.name}" expires in {remaining} days ({item.expiry_date.isoformat()}). Current stock: {item.current_stock}',
        severity="error" if remaining <= EXPIRY_CRITICAL_DAYS else "warning",
        entity_type=ENTITY_TYPE,
        entity_id=item.id,
        created_at=now,
        expires_at=datetime.combine(item.expiry_date, time.min),
    )


def _record_alerts(alerts, summary_title, summary_message):
    db.session.add_all(alerts)
    notify_users("warning", summary_title, summary_message)
    db.session.commit()


def check_low_stock_items(now=None):
    """Create low-stock alerts for items at or below their minimum level."""
    now = now or datetime.utcnow()
    try:
        low_stock_items = InventoryItem.query.filter(
            InventoryItem.current_stock <= InventoryItem.min_stock_level
        ).all()
        if not low_stock_items:
            return []

        items_needing_alerts = filter_items_needing_alerts(low_stock_items, "low_stock", now)
        if not items_needing_alerts:
            return []

        alerts = [build_low_stock_alert(item, now) for item in items_needing_alerts]
        _record_alerts(
            alerts,
            "Low Stock Alert",
            f"{len(alerts)} inventory item(s) are running low on stock.",
        )
        logger.info("Created %d new low stock alerts", len(alerts))
        return alerts
    except Exception:
        db.session.rollback()
        logger.exception("Error checking low stock items")
        return []


def check_expiring_items(now=None):
    """Create expiry alerts for stocked items expiring within the next 30 days."""
    now = now or datetime.utcnow()
    try:
        horizon = (now + timedelta(days=EXPIRY_WINDOW_DAYS)).date()
        expiring_items = InventoryItem.query.filter(
            InventoryItem.expiry_date.isnot(None),
            InventoryItem.expiry_date <= horizon,
            InventoryItem.current_stock > 0,
        ).all()
        if not expiring_items:
            return []

        items_needing_alerts = filter_items_needing_alerts(expiring_items, "expiring_soon", now)
        if not items_needing_alerts:
            return []

        alerts = [build_expiring_alert(item, now) for item in items_needing_alerts]
        _record_alerts(
            alerts,
            "Item Expiring Soon",
            f"{len(alerts)} inventory item(s) expire within {EXPIRY_WINDOW_DAYS} days.",
        )
        logger.info("Created %d new expiring item alerts", len(alerts))
        return alerts
    except Exception:
        db.session.rollback()
        logger.exception("Error checking expiring items")
        return []


def run_inventory_checks(now=None):
    now = now or datetime.utcnow()
    low_stock = check_low_stock_items(now)
    expiring = check_expiring_items(now)
    return {"low_stock": len(low_stock), "expiring_soon": len(expiring)}
