from salon_app.extensions import db
from datetime import datetime, date

PAYMENT_TYPES = ("monthly", "commission")

class Worker(db.Model):
    __tablename__ = "workers"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120))
    phone = db.Column(db.String(20))
    role = db.Column(db.String(50), nullable=False)
    salary = db.Column(db.Float, nullable=False, default=0.0)
    payment_type = db.Column(db.String(20), nullable=False, default="monthly", index=True) # "monthly" (fixed salary) or "commission"
    commission_rate = db.Column(db.Float, default=10.0) # Percentage of each service price
    total_earnings = db.Column(db.Float, nullable=False, default=0.0)
    current_month_earnings = db.Column(db.Float, nullable=False, default=0.0)
    earnings_month = db.Column(db.String(7)) # "YYYY-MM" that current_month_earnings belongs to
    services_performed = db.Column(db.Integer, nullable=False, default=0)
    payment_status = db.Column(db.String(20), nullable=False, default="pending")
    hire_date = db.Column(db.Date, nullable=False, default=date.today)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    services = db.relationship("Service", backref="staff_member", lazy="dynamic")

    @property
    def is_commission_based(self):
        return self.payment_type == "commission"

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role,
            "salary": self.salary,
            "payment_type": self.payment_type,
            "commission_rate": self.commission_rate,
            "total_earnings": self.total_earnings,
            "current_month_earnings": self.current_month_earnings,
            "earnings_month": self.earnings_month,
            "services_performed": self.services_performed,
            "payment_status": self.payment_status,
            "hire_date": self.hire_date.isoformat() if self.hire_date else None,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Worker {self.id}: {self.name} ({self.payment_type})>"
