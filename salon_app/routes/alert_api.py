from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required
from sqlalchemy import func
from salon_app.extensions import db
from salon_app.formatting import badge_label
from salon_app.models.alert import Alert

alert_bp = Blueprint("alert_api", __name__, url_prefix="/api")

NAV_BADGE_CAP = 99


@alert_bp.route("/alerts", methods=["GET"])
@login_required
def get_alerts():
    """List alerts, newest first.

    Optional filters: ``severity``, ``type`` and ``read`` (``read``, ``unread`` or ``all``).
    """
    try:
        query = Alert.query
        severity = request.args.get("severity", "all")
        if severity != "all":
            query = query.filter(Alert.severity == severity)
        alert_type = request.args.get("type", "all")
        if alert_type != "all":
            query = query.filter(Alert.type == alert_type)
        read_status = request.args.get("read", "all")
        if read_status == "read":
            query = query.filter(Alert.is_read.is_(True))
        elif read_status == "unread":
            query = query.filter(Alert.is_read.is_(False))

        alerts = query.order_by(Alert.created_at.desc(), Alert.id.desc()).all()
        return jsonify([a.to_dict() for a in alerts])
    except Exception as e:
        current_app.logger.error(f"Error fetching alerts: {e}", exc_info=True)
        return jsonify({"error": "Failed to load alerts"}), 500


@alert_bp.route("/alerts/summary", methods=["GET"])
@login_required
def get_alert_summary():
    try:
        total = db.session.query(func.count(Alert.id)).scalar()
        unread = db.session.query(func.count(Alert.id)).filter(Alert.is_read.is_(False)).scalar()
        critical = db.session.query(func.count(Alert.id)).filter(Alert.severity == "critical").scalar()
        warning = db.session.query(func.count(Alert.id)).filter(Alert.severity == "warning").scalar()
        types = [row[0] for row in db.session.query(Alert.type).distinct().order_by(Alert.type).all()]
        return jsonify({
            "total": total or 0,
            "unread": unread or 0,
            "critical": critical or 0,
            "warning": warning or 0,
            "types": types,
        })
    except Exception as e:
        current_app.logger.error(f"Error building alert summary: {e}", exc_info=True)
        return jsonify({"error": "Failed to load alerts"}), 500


@alert_bp.route("/alerts/unread-count", methods=["GET"])
@login_required
def get_unread_count():
    try:
        unread = db.session.query(func.count(Alert.id)).filter(Alert.is_read.is_(False)).scalar() or 0
        return jsonify({"unread_count": unread, "badge": badge_label(unread, NAV_BADGE_CAP) if unread else None})
    except Exception as e:
        current_app.logger.error(f"Error fetching unread alerts count: {e}", exc_info=True)
        return jsonify({"error": "Failed to load alerts"}), 500


@alert_bp.route("/alerts/<int:alert_id>/read", methods=["PUT"])
@login_required
def mark_alert_read(alert_id):
    alert = Alert.query.get_or_404(alert_id)
    try:
        if not alert.is_read:
            alert.is_read = True
            db.session.commit()
        return jsonify({"message": "Alert marked as read", "alert_id": alert.id})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error marking alert {alert_id} as read: {e}", exc_info=True)
        return jsonify({"error": "Failed to mark alert as read"}), 500


@alert_bp.route("/alerts/read-all", methods=["PUT"])
@login_required
def mark_all_alerts_read():
    try:
        updated = Alert.query.filter(Alert.is_read.is_(False)).update({"is_read": True}, synchronize_session=False)
        db.session.commit()
        return jsonify({"message": "All alerts marked as read", "updated": updated})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error marking all alerts as read: {e}", exc_info=True)
        return jsonify({"error": "Failed to mark all alerts as read"}), 500


@alert_bp.route("/alerts/<int:alert_id>", methods=["DELETE"])
@login_required
def delete_alert(alert_id):
    alert = Alert.query.get_or_404(alert_id)
    try:
        db.session.delete(alert)
        db.session.commit()
        return jsonify({"message": "Alert deleted"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting alert {alert_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to delete alert"}), 500
