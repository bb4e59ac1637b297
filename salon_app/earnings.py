"""Commission accounting for salon workers.

Commission-based workers earn ``price * rate / 100`` for every completed
service. The running counters on :class:`Worker` (``total_earnings``,
``current_month_earnings`` and ``services_performed``) are updated additively
as services complete, and can be rebuilt from the full service history with
:func:`recalculate_all_worker_earnings`.
"""
import logging
from datetime import datetime

from salon_app.extensions import db
from salon_app.models.worker import Worker
from salon_app.models.service import Service

logger = logging.getLogger(__name__)

DEFAULT_COMMISSION_RATE = 6


def calculate_commission(price, rate):
    """Commission for a single service. A missing or zero rate uses the default."""
    rate = rate or DEFAULT_COMMISSION_RATE
    return (price or 0) * rate / 100


def is_same_month(when, now):
    return when.year == now.year and when.month == now.month


def month_key(when):
    return when.strftime("%Y-%m")


def earnings_this_month(worker, now=None):
    """The worker's earnings for this calendar month, or 0 if the stored total belongs to an earlier month."""
    now = now or datetime.utcnow()
    if worker.earnings_month != month_key(now):
        return 0.0
    return worker.current_month_earnings or 0.0


def update_worker_earnings(worker, service_price, service_date=None, now=None):
    """Add one completed service to a worker's running totals.

    The caller owns the transaction; nothing is committed here.
    """
    now = now or datetime.utcnow()
    service_date = service_date or now

    if not worker.is_commission_based:
        return {"success": True, "message": "Worker is on monthly salary - no commission calculated"}

    commission_rate = worker.commission_rate or DEFAULT_COMMISSION_RATE
    commission_amount = calculate_commission(service_price, commission_rate)

    worker.total_earnings = (worker.total_earnings or 0) + commission_amount
    # New month: start the monthly total over
    if worker.earnings_month != month_key(now):
        worker.current_month_earnings = 0.0
        worker.earnings_month = month_key(now)
    worker.services_performed = (worker.services_performed or 0) + 1
    if is_same_month(service_date, now):
        worker.current_month_earnings = (worker.current_month_earnings or 0) + commission_amount

    logger.info("Worker %s earned %.2f commission (%s%% of %s)", worker.id, commission_amount, commission_rate, service_price)
    return {
        "success": True,
        "message": f"Commission calculated: {commission_amount:.2f} ({commission_rate}% of {service_price})",
        "data": {
            "commission_amount": commission_amount,
            "total_earnings": worker.total_earnings,
            "current_month_earnings": worker.current_month_earnings,
            "services_performed": worker.services_performed,
        },
    }


def recalculate_worker_earnings(worker, now=None):
    """Rebuild one worker's counters from their completed services."""
    now = now or datetime.utcnow()
    services = Service.query.filter_by(staff_member_id=worker.id, status="completed").all()

    total_earnings = 0.0
    current_month_earnings = 0.0
    for service in services:
        commission = calculate_commission(service.service_price, worker.commission_rate)
        total_earnings += commission
        if is_same_month(service.created_at, now):
            current_month_earnings += commission

    worker.total_earnings = total_earnings
    worker.current_month_earnings = current_month_earnings
    worker.earnings_month = month_key(now)
    worker.services_performed = len(services)
    return {
        "worker_id": worker.id,
        "success": True,
        "total_earnings": total_earnings,
        "current_month_earnings": current_month_earnings,
        "services_performed": len(services),
    }


def recalculate_all_worker_earnings(now=None):
    """Recompute every commission worker's totals from the service history and commit."""
    workers = Worker.query.filter_by(payment_type="commission").all()
    results = [recalculate_worker_earnings(worker, now=now) for worker in workers]
    db.session.commit()
    logger.info("Recalculated earnings for %d commission workers", len(results))
    return {"success": True, "results": results}


def worker_service_history(worker):
    """Completed services for a worker with the commission each one earned.

    Returns the services newest first, plus the same services grouped into
    per-day totals (also newest first). Salaried workers earn no commission,
    so their amounts are zero.
    """
    services = Service.query.filter_by(staff_member_id=worker.id, status="completed") \
        .order_by(Service.created_at.desc(), Service.id.desc()).all()

    history = []
    daily = {}
    for service in services:
        commission = calculate_commission(service.service_price, worker.commission_rate) if worker.is_commission_based else 0.0
        entry = {
            "id": service.id,
            "service_name": service.service_name,
            "service_price": service.service_price,
            "customer_name": service.customer_name or "Unknown Customer",
            "commission_amount": commission,
            "service_date": service.created_at.isoformat(),
            "status": service.status,
        }
        history.append(entry)

        day = service.created_at.date().isoformat()
        totals = daily.setdefault(day, {"date": day, "earnings": 0.0, "services_count": 0, "services": []})
        totals["earnings"] += commission
        totals["services_count"] += 1
        totals["services"].append(entry)

    daily_earnings = sorted(daily.values(), key=lambda d: d["date"], reverse=True)
    return {"services": history, "daily_earnings": daily_earnings}
