from flask import Blueprint, jsonify, current_app
from flask_login import login_required
from salon_app.extensions import db
from salon_app.earnings import (
    DEFAULT_COMMISSION_RATE,
    earnings_this_month,
    recalculate_all_worker_earnings,
    worker_service_history,
)
from salon_app.formatting import format_currency
from salon_app.forms import WorkerForm
from salon_app.models.worker import Worker
from .utils import bind_form, validation_error, current_user_id, role_required

worker_bp = Blueprint("worker_api", __name__, url_prefix="/api")


def _apply_form(worker, form):
    worker.name = form.name.data.strip()
    worker.email = form.email.data or None
    worker.phone = form.phone.data or None
    worker.role = form.role.data.strip()
    worker.salary = form.salary.data or 0.0
    worker.payment_type = form.payment_type.data
    if form.payment_type.data == "commission":
        worker.commission_rate = form.commission_rate.data or DEFAULT_COMMISSION_RATE
    else:
        # Monthly workers don't earn commission
        worker.commission_rate = 0.0
    worker.payment_status = form.payment_status.data
    if form.hire_date.data:
        worker.hire_date = form.hire_date.data


@worker_bp.route("/workers", methods=["GET"])
@login_required
def get_workers():
    try:
        workers = Worker.query.order_by(Worker.created_at.desc(), Worker.id.desc()).all()
        return jsonify([w.to_dict() for w in workers])
    except Exception as e:
        current_app.logger.error(f"Error fetching workers: {e}", exc_info=True)
        return jsonify({"error": "Failed to load workers"}), 500


@worker_bp.route("/workers/<int:worker_id>", methods=["GET"])
@login_required
def get_worker(worker_id):
    worker = Worker.query.get_or_404(worker_id)
    return jsonify(worker.to_dict())


@worker_bp.route("/workers", methods=["POST"])
@login_required
def add_worker():
    form = bind_form(WorkerForm)
    if not form.validate():
        return validation_error(form)
    try:
        worker = Worker(created_by=current_user_id())
        _apply_form(worker, form)
        db.session.add(worker)
        db.session.commit()
        return jsonify({"message": "Worker created successfully", "worker": worker.to_dict()}), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error adding worker: {e}", exc_info=True)
        return jsonify({"error": "Failed to save worker"}), 500


@worker_bp.route("/workers/<int:worker_id>", methods=["PUT"])
@login_required
def update_worker(worker_id):
    worker = Worker.query.get_or_404(worker_id)
    form = bind_form(WorkerForm)
    if not form.validate():
        return validation_error(form)
    try:
        _apply_form(worker, form)
        db.session.commit()
        return jsonify({"message": "Worker updated successfully", "worker": worker.to_dict()})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating worker {worker_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to save worker"}), 500


@worker_bp.route("/workers/<int:worker_id>", methods=["DELETE"])
@login_required
def delete_worker(worker_id):
    worker = Worker.query.get_or_404(worker_id)
    try:
        # Keep the service history; just detach it from the worker
        for service in worker.services:
            service.staff_member_id = None
        db.session.delete(worker)
        db.session.commit()
        return jsonify({"message": "Worker deleted successfully"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting worker {worker_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to delete worker"}), 500


@worker_bp.route("/workers/<int:worker_id>/earnings", methods=["GET"])
@login_required
def get_worker_earnings(worker_id):
    worker = Worker.query.get_or_404(worker_id)
    month_total = earnings_this_month(worker)
    return jsonify({
        "worker_id": worker.id,
        "payment_type": worker.payment_type,
        "commission_rate": worker.commission_rate,
        "total_earnings": worker.total_earnings,
        "total_earnings_display": format_currency(worker.total_earnings),
        "current_month_earnings": month_total,
        "current_month_earnings_display": format_currency(month_total),
        "services_performed": worker.services_performed,
    })


@worker_bp.route("/workers/<int:worker_id>/service-history", methods=["GET"])
@login_required
def get_worker_service_history(worker_id):
    """Completed services with their commission, and the same grouped by day."""
    worker = Worker.query.get_or_404(worker_id)
    try:
        history = worker_service_history(worker)
        for day in history["daily_earnings"]:
            day["earnings_display"] = format_currency(day["earnings"])
        return jsonify({"worker_id": worker.id, **history})
    except Exception as e:
        current_app.logger.error(f"Error fetching service history for worker {worker_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to fetch worker service history"}), 500


@worker_bp.route("/workers/recalculate-earnings", methods=["POST"])
@role_required("admin")
def recalculate_earnings():
    """Rebuild every commission worker's earnings from the full service history."""
    try:
        result = recalculate_all_worker_earnings()
        return jsonify(result)
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error recalculating worker earnings: {e}", exc_info=True)
        return jsonify({"error": "Failed to recalculate worker earnings"}), 500
