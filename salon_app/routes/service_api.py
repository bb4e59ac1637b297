from datetime import datetime

from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required
from salon_app.extensions import db
from salon_app.earnings import update_worker_earnings
from salon_app.forms import ServiceForm
from salon_app.models.service import Service
from salon_app.models.worker import Worker
from .utils import bind_form, validation_error, current_user_id

service_bp = Blueprint("service_api", __name__, url_prefix="/api")


def _credit_worker(service):
    """Run the commission calculator for a service that just became completed."""
    if service.staff_member_id is None:
        return None
    worker = db.session.get(Worker, service.staff_member_id)
    if worker is None:
        return None
    return update_worker_earnings(worker, service.service_price, service.created_at)


@service_bp.route("/services", methods=["GET"])
@login_required
def get_services():
    try:
        query = Service.query
        staff_member_id = request.args.get("staff_member_id", type=int)
        if staff_member_id is not None:
            query = query.filter_by(staff_member_id=staff_member_id)
        services = query.order_by(Service.date_time.desc(), Service.id.desc()).all()
        return jsonify([s.to_dict() for s in services])
    except Exception as e:
        current_app.logger.error(f"Error fetching services: {e}", exc_info=True)
        return jsonify({"error": "Failed to load services"}), 500


@service_bp.route("/services", methods=["POST"])
@login_required
def add_service():
    """Record a service. A service recorded as completed credits the worker immediately."""
    form = bind_form(ServiceForm)
    if not form.validate():
        return validation_error(form)

    if form.staff_member_id.data is not None and db.session.get(Worker, form.staff_member_id.data) is None:
        return jsonify({"error": f"Worker with ID {form.staff_member_id.data} not found."}), 404

    try:
        now = datetime.utcnow()
        service = Service(
            service_name=form.service_name.data.strip(),
            service_category=form.service_category.data.strip(),
            service_price=form.service_price.data,
            staff_member_id=form.staff_member_id.data,
            customer_name=form.customer_name.data or None,
            status=form.status.data,
            date_time=form.date_time.data or now,
            notes=form.notes.data or None,
            created_by=current_user_id(),
            created_at=now,
        )
        db.session.add(service)
        earnings = _credit_worker(service) if service.is_completed else None
        db.session.commit()
        return jsonify({"message": "Service recorded successfully", "service": service.to_dict(), "earnings": earnings}), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error adding service: {e}", exc_info=True)
        return jsonify({"error": "Failed to save service"}), 500


@service_bp.route("/services/<int:service_id>/complete", methods=["POST"])
@login_required
def complete_service(service_id):
    service = Service.query.get_or_404(service_id)
    if service.is_completed:
        return jsonify({"error": "Service is already completed."}), 409
    if service.status == "cancelled":
        return jsonify({"error": "Cancelled services cannot be completed."}), 409
    try:
        service.status = "completed"
        earnings = _credit_worker(service)
        db.session.commit()
        return jsonify({"message": "Service completed", "service": service.to_dict(), "earnings": earnings})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error completing service {service_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to complete service"}), 500


@service_bp.route("/services/<int:service_id>", methods=["DELETE"])
@login_required
def delete_service(service_id):
    service = Service.query.get_or_404(service_id)
    try:
        db.session.delete(service)
        db.session.commit()
        return jsonify({"message": "Service deleted successfully"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting service {service_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to delete service"}), 500
