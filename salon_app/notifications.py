"""Helpers for queueing notifications from request handlers and background jobs."""
from salon_app.extensions import db
from salon_app.models.notification import Notification
from salon_app.models.user import User


def create_notification(user_id, type, title, message):
    """Queue a notification for one user. The caller commits."""
    notification = Notification(user_id=user_id, type=type, title=title, message=message)
    db.session.add(notification)
    return notification


def notify_users(type, title, message):
    """Queue the same notification for every active user. The caller commits."""
    users = User.query.filter_by(is_active=True).all()
    return [create_notification(user.id, type, title, message) for user in users]
