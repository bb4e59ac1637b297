from salon_app.extensions import db
from datetime import datetime

SERVICE_STATUSES = ("scheduled", "completed", "cancelled")

class Service(db.Model):
    __tablename__ = "services"

    id = db.Column(db.Integer, primary_key=True)
    service_name = db.Column(db.String(100), nullable=False)
    service_category = db.Column(db.String(50), nullable=False)
    service_price = db.Column(db.Float, nullable=False, default=0.0)
    staff_member_id = db.Column(db.Integer, db.ForeignKey("workers.id"), nullable=True, index=True)
    customer_name = db.Column(db.String(100))
    status = db.Column(db.String(20), nullable=False, default="scheduled")
    date_time = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    notes = db.Column(db.Text)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_completed(self):
        return self.status == "completed"

    def to_dict(self):
        return {
            "id": self.id,
            "service_name": self.service_name,
            "service_category": self.service_category,
            "service_price": self.service_price,
            "staff_member_id": self.staff_member_id,
            "customer_name": self.customer_name,
            "status": self.status,
            "date_time": self.date_time.isoformat() if self.date_time else None,
            "notes": self.notes,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Service {self.id} {self.service_name} Status: {self.status}>"
