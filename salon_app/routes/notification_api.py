from flask import Blueprint, jsonify, current_app
from flask_login import login_required, current_user
from salon_app.extensions import db
from salon_app.forms import NotificationForm
from salon_app.formatting import badge_label
from salon_app.models.notification import Notification
from salon_app.notifications import create_notification
from .utils import bind_form, validation_error

notification_bp = Blueprint("notification_api", __name__, url_prefix="/api")

BELL_BADGE_CAP = 9


@notification_bp.route("/notifications", methods=["GET"])
@login_required
def get_notifications():
    """List the current user's notifications, newest first, with the unread count."""
    try:
        notifications = Notification.query.filter_by(user_id=current_user.id) \
            .order_by(Notification.created_at.desc(), Notification.id.desc()).all()
        unread_count = sum(1 for n in notifications if not n.read)
        return jsonify({
            "notifications": [n.to_dict() for n in notifications],
            "unread_count": unread_count,
            "badge": badge_label(unread_count, BELL_BADGE_CAP) if unread_count else None,
        })
    except Exception as e:
        current_app.logger.error(f"Error fetching notifications: {e}", exc_info=True)
        return jsonify({"error": "Failed to load notifications"}), 500


@notification_bp.route("/notifications", methods=["POST"])
@login_required
def add_notification():
    form = bind_form(NotificationForm)
    if not form.validate():
        return validation_error(form)
    try:
        notification = create_notification(current_user.id, form.type.data, form.title.data, form.message.data)
        db.session.commit()
        return jsonify({"message": "Notification created", "notification": notification.to_dict()}), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating notification: {e}", exc_info=True)
        return jsonify({"error": "Failed to create notification"}), 500


@notification_bp.route("/notifications/<int:notification_id>/read", methods=["PUT"])
@login_required
def mark_notification_read(notification_id):
    """Mark a specific notification as read."""
    notification = Notification.query.filter_by(id=notification_id, user_id=current_user.id).first_or_404()
    try:
        if not notification.read:
            notification.read = True
            db.session.commit()
        return jsonify({"message": "Notification marked as read", "notification_id": notification.id})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error marking notification {notification_id} as read: {e}", exc_info=True)
        return jsonify({"error": "Failed to mark notification as read"}), 500


@notification_bp.route("/notifications", methods=["DELETE"])
@login_required
def clear_notifications():
    """Delete every notification belonging to the current user."""
    try:
        deleted = Notification.query.filter_by(user_id=current_user.id).delete(synchronize_session=False)
        db.session.commit()
        return jsonify({"message": "All notifications cleared", "deleted": deleted})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error clearing notifications: {e}", exc_info=True)
        return jsonify({"error": "Failed to clear notifications"}), 500
